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
"""Configuration from YAML/TOML files and env vars, with typed binding."""

from __future__ import annotations

import dataclasses
import os
import tomllib
from collections.abc import Callable
from pathlib import Path
from typing import Any, TypeVar, get_type_hints

import yaml  # type: ignore[import-untyped]
from pydantic import BaseModel, ValidationError

T = TypeVar("T")

ENV_PREFIX = "FLATCACHE_"

_CONFIG_PROPERTIES_ATTR = "__flatcache_config_prefix__"


def config_properties(prefix: str) -> Callable[[type[T]], type[T]]:
    """Mark a class as bindable to a configuration prefix.

    Works with both dataclasses and Pydantic BaseModel subclasses.

    Usage:
        @config_properties(prefix="flatcache.cache")
        class CacheProperties(BaseModel):
            directory: str = "tmp"
            pretty_print: bool = True
    """

    def decorator(cls: type[T]) -> type[T]:
        setattr(cls, _CONFIG_PROPERTIES_ATTR, prefix)
        return cls

    return decorator


def _env_key(key: str) -> str:
    """Map a dot-notation key to its environment variable name.

    ``flatcache.cache.directory`` -> ``FLATCACHE_CACHE_DIRECTORY``
    """
    base = key.removeprefix("flatcache.")
    return ENV_PREFIX + base.upper().replace(".", "_").replace("-", "_")


class Config:
    """Hierarchical configuration with dot-notation access and env var overrides.

    Priority (highest wins):
    1. Environment variables (FLATCACHE_SECTION_KEY format)
    2. Configuration dict / file values
    3. Property class defaults
    """

    def __init__(self, data: dict[str, Any] | None = None) -> None:
        self._data: dict[str, Any] = data or {}
        self._loaded_sources: list[str] = []

    @property
    def loaded_sources(self) -> list[str]:
        """List of config file paths that were loaded, in merge order."""
        return list(self._loaded_sources)

    @classmethod
    def from_file(cls, path: str | Path, defaults: dict[str, Any] | None = None) -> Config:
        """Load configuration from a YAML or TOML file.

        A missing file yields a config holding only *defaults*.
        """
        path = Path(path)
        data: dict[str, Any] = dict(defaults or {})
        sources: list[str] = []

        if path.is_file():
            data = cls._deep_merge(data, cls._load_config_data(path))
            sources.append(str(path))

        instance = cls(data)
        instance._loaded_sources = sources
        return instance

    @staticmethod
    def _load_config_data(path: Path) -> dict[str, Any]:
        """Load config data from a YAML or TOML file."""
        if path.suffix == ".toml":
            with open(path, "rb") as f:
                return tomllib.load(f) or {}
        with open(path) as f:
            return yaml.safe_load(f) or {}

    @staticmethod
    def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
        """Recursively merge override into base, with override values winning."""
        merged = dict(base)
        for key, value in override.items():
            if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
                merged[key] = Config._deep_merge(merged[key], value)
            else:
                merged[key] = value
        return merged

    def get(self, key: str, default: Any = None) -> Any:
        """Get a value by dot-notation key, checking env vars first."""
        env_val = os.environ.get(_env_key(key))
        if env_val is not None:
            return env_val

        current: Any = self._data
        for part in key.split("."):
            if isinstance(current, dict):
                current = current.get(part)
                if current is None:
                    return default
            else:
                return default
        return current

    def get_section(self, prefix: str) -> dict[str, Any]:
        """Get all values under a prefix as a dict."""
        current: Any = self._data
        for part in prefix.split("."):
            if isinstance(current, dict):
                current = current.get(part, {})
            else:
                return {}
        return current if isinstance(current, dict) else {}

    def bind(self, config_cls: type[T]) -> T:
        """Bind configuration to a @config_properties dataclass or Pydantic model.

        Each field is looked up through :meth:`get`, so environment
        variables override file values field by field.
        """
        prefix = getattr(config_cls, _CONFIG_PROPERTIES_ATTR, None)
        if prefix is None:
            raise ValueError(f"{config_cls.__name__} is not decorated with @config_properties")

        section = dict(self.get_section(prefix))

        if isinstance(config_cls, type) and issubclass(config_cls, BaseModel):
            for name in config_cls.model_fields:
                value = self.get(f"{prefix}.{name}")
                if value is not None:
                    section[name] = value
            try:
                return config_cls.model_validate(section)  # type: ignore[return-value]
            except ValidationError as exc:
                raise ValueError(
                    f"Configuration validation failed for '{config_cls.__name__}' (prefix='{prefix}'):\n{exc}"
                ) from exc

        hints = get_type_hints(config_cls)
        kwargs: dict[str, Any] = {}
        for field in dataclasses.fields(config_cls):  # type: ignore[arg-type]
            value = self.get(f"{prefix}.{field.name}")
            if value is None:
                continue
            expected_type = hints.get(field.name)
            if expected_type is int and isinstance(value, str):
                value = int(value)
            elif expected_type is float and isinstance(value, str):
                value = float(value)
            elif expected_type is bool and isinstance(value, str):
                value = value.lower() in ("true", "1", "yes")
            kwargs[field.name] = value

        return config_cls(**kwargs)
