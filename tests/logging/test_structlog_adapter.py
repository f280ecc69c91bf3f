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
"""Tests for StructlogAdapter."""

import logging

from flatcache.core.config import Config
from flatcache.logging.port import LoggingPort
from flatcache.logging.structlog_adapter import StructlogAdapter


class TestStructlogAdapterConformance:
    def test_implements_logging_port(self):
        assert isinstance(StructlogAdapter(), LoggingPort)


class TestStructlogAdapterConfigure:
    def test_configure_with_defaults(self):
        adapter = StructlogAdapter()
        adapter.configure(Config({}))
        assert adapter._root_level == "WARNING"
        assert adapter._format == "console"
        assert logging.getLogger().level == logging.WARNING

    def test_configure_reads_root_level(self):
        adapter = StructlogAdapter()
        adapter.configure(Config({"flatcache": {"logging": {"level": {"root": "debug"}}}}))
        assert adapter._root_level == "DEBUG"
        assert logging.getLogger().level == logging.DEBUG

    def test_configure_reads_format(self):
        adapter = StructlogAdapter()
        adapter.configure(Config({"flatcache": {"logging": {"format": "JSON"}}}))
        assert adapter._format == "json"

    def test_configure_reads_per_module_levels(self):
        adapter = StructlogAdapter()
        config = Config({"flatcache": {"logging": {"level": {"root": "INFO", "flatcache.cache": "DEBUG"}}}})
        adapter.configure(config)
        assert adapter._module_levels == {"flatcache.cache": "DEBUG"}
        assert logging.getLogger("flatcache.cache").level == logging.DEBUG
        logging.getLogger("flatcache.cache").setLevel(logging.NOTSET)

    def test_root_level_from_environment(self, monkeypatch):
        monkeypatch.setenv("FLATCACHE_LOGGING_LEVEL_ROOT", "error")
        adapter = StructlogAdapter()
        adapter.configure(Config({}))
        assert adapter._root_level == "ERROR"

    def test_handler_writes_to_stderr(self):
        adapter = StructlogAdapter()
        adapter.configure(Config({}))
        handlers = logging.getLogger().handlers
        assert len(handlers) == 1
        assert isinstance(handlers[0], logging.StreamHandler)


class TestStructlogAdapterGetLogger:
    def test_get_logger_returns_bound_logger(self):
        adapter = StructlogAdapter()
        adapter.configure(Config({}))
        logger = adapter.get_logger("flatcache.test")
        assert callable(getattr(logger, "info", None))
        assert callable(getattr(logger, "warning", None))


class TestStructlogAdapterSetLevel:
    def test_set_level_updates_module_level(self):
        adapter = StructlogAdapter()
        adapter.set_level("flatcache.example", "DEBUG")
        assert logging.getLogger("flatcache.example").level == logging.DEBUG

    def test_unknown_level_falls_back_to_info(self):
        adapter = StructlogAdapter()
        adapter.set_level("flatcache.example2", "chatty")
        assert logging.getLogger("flatcache.example2").level == logging.INFO
