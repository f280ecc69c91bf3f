# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Tests for CLI commands."""

from __future__ import annotations

import json
from pathlib import Path

from click.testing import CliRunner

from flatcache.cache.store import CacheStore
from flatcache.cli import main
from flatcache.cli.main import cli
from flatcache.logging.port import LoggingPort


def _run(cache_dir: Path, *args: str, input: str | None = None):
    runner = CliRunner()
    return runner.invoke(cli, ["--directory", str(cache_dir), *args], input=input)


class TestCLI:
    def test_help(self):
        result = CliRunner().invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "filesystem key-value cache" in result.output
        for command in ("get", "set", "lock", "unlock", "options", "destroy", "clear"):
            assert command in result.output

    def test_set_then_get(self, cache_dir: Path):
        result = _run(cache_dir, "set", "greeting", "hello")
        assert result.exit_code == 0, result.output
        assert "Stored" in result.output

        result = _run(cache_dir, "get", "greeting")
        assert result.exit_code == 0, result.output
        assert '"hello"' in result.output

    def test_set_json_value(self, cache_dir: Path):
        result = _run(cache_dir, "set", "doc", '{"a": [1, 2]}', "--json")
        assert result.exit_code == 0, result.output
        assert CacheStore(cache_dir).get("doc") == {"a": [1, 2]}

    def test_set_invalid_json(self, cache_dir: Path):
        result = _run(cache_dir, "set", "doc", "{nope", "--json")
        assert result.exit_code != 0
        assert not (cache_dir / "doc").exists()

    def test_get_missing_exits_nonzero(self, cache_dir: Path):
        result = _run(cache_dir, "get", "absent")
        assert result.exit_code == 1
        assert "No valid entry" in result.output

    def test_set_with_ttl_records_expiry(self, cache_dir: Path):
        result = _run(cache_dir, "set", "k", "v", "--ttl", "60")
        assert result.exit_code == 0, result.output
        assert CacheStore(cache_dir).resolve("k").options.expiry != -1

    def test_locked_entry_rejects_set(self, cache_dir: Path):
        _run(cache_dir, "set", "k", "first")
        assert _run(cache_dir, "lock", "k").exit_code == 0

        result = _run(cache_dir, "set", "k", "second")
        assert result.exit_code == 1
        assert "locked" in result.output
        assert CacheStore(cache_dir).get("k") == "first"

        assert _run(cache_dir, "unlock", "k").exit_code == 0
        assert _run(cache_dir, "set", "k", "second").exit_code == 0
        assert CacheStore(cache_dir).get("k") == "second"

    def test_options_table(self, cache_dir: Path):
        _run(cache_dir, "set", "k", "v", "--lock")
        result = _run(cache_dir, "options", "k")
        assert result.exit_code == 0, result.output
        assert "Locked" in result.output
        assert "yes" in result.output
        assert "never" in result.output

    def test_destroy(self, cache_dir: Path):
        _run(cache_dir, "set", "k", "v")
        result = _run(cache_dir, "destroy", "k")
        assert result.exit_code == 0
        assert "Destroyed" in result.output
        assert list(cache_dir.iterdir()) == []

        result = _run(cache_dir, "destroy", "k")
        assert result.exit_code == 0
        assert "Nothing stored" in result.output

    def test_clear_requires_confirmation(self, cache_dir: Path):
        _run(cache_dir, "set", "k", "v")
        result = _run(cache_dir, "clear", input="n\n")
        assert result.exit_code != 0
        assert (cache_dir / "k").exists()

        result = _run(cache_dir, "clear", "--yes")
        assert result.exit_code == 0, result.output
        assert "Removed 2 file(s)" in result.output
        assert list(cache_dir.iterdir()) == []

    def test_prefix_option(self, cache_dir: Path):
        result = _run(cache_dir, "--prefix", "ns", "set", "k", "v")
        assert result.exit_code == 0, result.output
        assert (cache_dir / "ns__k").is_file()

    def test_compact_option(self, cache_dir: Path):
        _run(cache_dir, "--compact", "set", "k", "v")
        assert "\n" not in (cache_dir / "k").read_text(encoding="utf-8")

    def test_config_file(self, tmp_path: Path):
        target = tmp_path / "from-config"
        config_file = tmp_path / "flatcache.yaml"
        config_file.write_text(f"flatcache:\n  cache:\n    directory: {target}\n    prefix: cfg\n")

        result = CliRunner().invoke(cli, ["--config", str(config_file), "set", "k", "v"])
        assert result.exit_code == 0, result.output
        assert (target / "cfg__k").is_file()

    def test_invalid_key_is_reported(self, cache_dir: Path):
        result = _run(cache_dir, "set", "k.opt", "v")
        assert result.exit_code == 1
        assert "Invalid cache key" in result.output

    def test_get_prints_json(self, cache_dir: Path):
        CacheStore(cache_dir).set("k", {"n": 1, "s": "x"})
        result = _run(cache_dir, "get", "k")
        assert json.loads(result.output.strip().splitlines()[-1]) == {"n": 1, "s": "x"}


class RecordingLogging:
    def __init__(self):
        self.configured_with = None
        self.events: list[tuple[str, str, dict]] = []

    def configure(self, config):
        self.configured_with = config

    def get_logger(self, name):
        port = self

        class _Logger:
            def __getattr__(self, level):
                return lambda event, **fields: port.events.append((level, event, fields))

        return _Logger()

    def set_level(self, name, level):
        pass


class TestCLILogging:
    def test_logging_backend_is_configured(self, cache_dir: Path, monkeypatch):
        backend = RecordingLogging()
        assert isinstance(backend, LoggingPort)
        monkeypatch.setattr(main, "create_logging", lambda: backend)

        _run(cache_dir, "set", "k", "v")
        result = _run(cache_dir, "clear", "--yes")
        assert result.exit_code == 0, result.output

        assert backend.configured_with is not None
        cleared = [fields for level, event, fields in backend.events if event == "cache cleared"]
        assert cleared == [{"directory": str(cache_dir), "removed": 2}]

    def test_destroy_is_logged(self, cache_dir: Path, monkeypatch):
        backend = RecordingLogging()
        monkeypatch.setattr(main, "create_logging", lambda: backend)

        _run(cache_dir, "destroy", "k")
        assert ("info", "entry destroyed", {"key": "k", "removed": False}) in backend.events

    def test_missing_config_file_warns(self, cache_dir: Path, tmp_path: Path):
        result = _run(cache_dir, "--config", str(tmp_path / "absent.yaml"), "set", "k", "v")
        assert result.exit_code == 0, result.output
        assert "Config file not found" in result.output
        assert (cache_dir / "k").is_file()
