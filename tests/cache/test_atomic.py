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
"""Tests for the temp-file-then-rename write protocol."""

from pathlib import Path
from types import SimpleNamespace

import pytest

from flatcache.cache import atomic
from flatcache.cache.atomic import atomic_write, remove_file, temp_path_for
from flatcache.cache.exceptions import CacheIOError, CodecError


def _leftovers(directory: Path) -> list[str]:
    return sorted(p.name for p in directory.iterdir() if p.name.endswith(".tmp"))


class TestTempPath:
    def test_temp_path_sits_next_to_target(self, tmp_path: Path):
        tmp = temp_path_for(tmp_path / "report")
        assert tmp.parent == tmp_path
        assert tmp.name.startswith("report.")
        assert tmp.name.endswith(".tmp")

    def test_temp_paths_are_unique(self, tmp_path: Path):
        names = {temp_path_for(tmp_path / "k").name for _ in range(200)}
        assert len(names) == 200


class TestAtomicWrite:
    def test_writes_new_file(self, tmp_path: Path):
        target = tmp_path / "k"
        atomic_write(target, "hello")
        assert target.read_text(encoding="utf-8") == "hello"
        assert _leftovers(tmp_path) == []

    def test_replaces_existing_file(self, tmp_path: Path):
        target = tmp_path / "k"
        atomic_write(target, "old")
        atomic_write(target, "new")
        assert target.read_text(encoding="utf-8") == "new"

    def test_failed_rename_keeps_previous_contents(self, tmp_path: Path, monkeypatch):
        target = tmp_path / "k"
        atomic_write(target, "committed")

        def broken_replace(src, dst):
            raise OSError("disk went away")

        monkeypatch.setattr(atomic.os, "replace", broken_replace)
        with pytest.raises(CacheIOError) as exc_info:
            atomic_write(target, "lost")

        assert target.read_text(encoding="utf-8") == "committed"
        assert _leftovers(tmp_path) == []
        assert exc_info.value.code == "CACHE_IO"
        assert isinstance(exc_info.value.__cause__, OSError)

    def test_collision_on_temp_name_is_an_error(self, tmp_path: Path, monkeypatch):
        monkeypatch.setattr(atomic.uuid, "uuid4", lambda: SimpleNamespace(hex="fixed"))
        foreign = tmp_path / "k.fixed.tmp"
        foreign.write_text("another writer", encoding="utf-8")

        with pytest.raises(CacheIOError):
            atomic_write(tmp_path / "k", "mine")

        # the other writer's temp file is not ours to delete
        assert foreign.read_text(encoding="utf-8") == "another writer"
        assert not (tmp_path / "k").exists()

    def test_missing_directory_is_an_error(self, tmp_path: Path):
        with pytest.raises(CacheIOError):
            atomic_write(tmp_path / "nope" / "k", "x")

    def test_unencodable_text_is_a_codec_error(self, tmp_path: Path):
        with pytest.raises(CodecError):
            atomic_write(tmp_path / "k", "lone \ud800 surrogate")
        assert list(tmp_path.iterdir()) == []

    def test_unexpected_error_discards_temp_file(self, tmp_path: Path, monkeypatch):
        def failing_fsync(fd):
            raise RuntimeError("interrupted")

        monkeypatch.setattr(atomic.os, "fsync", failing_fsync)
        with pytest.raises(RuntimeError):
            atomic_write(tmp_path / "k", "v")
        assert list(tmp_path.iterdir()) == []


class TestRemoveFile:
    def test_removes_existing(self, tmp_path: Path):
        path = tmp_path / "k"
        path.write_text("x")
        assert remove_file(path) is True
        assert not path.exists()

    def test_missing_is_not_an_error(self, tmp_path: Path):
        assert remove_file(tmp_path / "k") is False
