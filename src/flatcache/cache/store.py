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
"""CacheStore — entry registry and store-wide configuration."""

from __future__ import annotations

import logging
import os
import threading
import time
from collections.abc import Callable
from pathlib import Path
from typing import Any

from flatcache.cache.adapters.json_codec import JsonCodec
from flatcache.cache.adapters.transformers import IDENTITY, CallableTransformer
from flatcache.cache.atomic import remove_file
from flatcache.cache.entry import TTL, Entry, EntrySettings
from flatcache.cache.exceptions import CacheIOError, InvalidKeyError
from flatcache.cache.ports.outbound import Codec, ValueTransformer
from flatcache.cache.types import (
    DEFAULT_DIRECTORY,
    LONGEST_SUFFIX,
    MAX_NAME_BYTES,
    MISSING,
    OPTIONS_SUFFIX,
    PREFIX_SEPARATOR,
    TMP_SUFFIX,
)
from flatcache.config.properties.cache import CacheProperties
from flatcache.core.config import Config

logger = logging.getLogger(__name__)


class CacheStore:
    """Hands out one :class:`Entry` per key and holds the settings entries are built with.

    Settings may be changed at any time. Each entry captures the directory,
    pretty-print flag, codec, transformer and clock in effect when it is
    first resolved; later changes only affect entries resolved afterwards.
    The registry is keyed by directory and effective key, so switching
    directories never returns an entry bound to the old one.

    Example:
        store = CacheStore("/var/cache/myapp", prefix="v2")
        store.resolve("report").set({"rows": 3}, ttl=60)
        store.resolve("report").get()  # {'rows': 3}
    """

    def __init__(
        self,
        directory: str | os.PathLike[str] = DEFAULT_DIRECTORY,
        prefix: str | None = None,
        pretty_print: bool = True,
        transformer: ValueTransformer | None = None,
        codec: Codec | None = None,
        clock: Callable[[], float] = time.time,
        create_directory: bool = True,
    ) -> None:
        self._registry_lock = threading.Lock()
        self._instances: dict[tuple[Path, str], Entry] = {}
        self._prefix = prefix or None
        self._pretty_print = bool(pretty_print)
        self._transformer: ValueTransformer = transformer or IDENTITY
        self._codec: Codec = codec or JsonCodec()
        self._clock = clock
        self._create_directory = create_directory
        self._directory = self._ensure_directory(Path(directory))

    @classmethod
    def from_properties(cls, properties: CacheProperties, **kwargs: Any) -> CacheStore:
        """Build a store from bound :class:`CacheProperties`."""
        return cls(
            directory=properties.directory,
            prefix=properties.prefix,
            pretty_print=properties.pretty_print,
            create_directory=properties.create_directory,
            **kwargs,
        )

    @classmethod
    def from_config(cls, config: Config, **kwargs: Any) -> CacheStore:
        """Build a store from the ``flatcache.cache`` section of *config*."""
        return cls.from_properties(config.bind(CacheProperties), **kwargs)

    # Configuration

    @property
    def directory(self) -> Path:
        return self._directory

    @property
    def prefix(self) -> str | None:
        return self._prefix

    @property
    def pretty_print(self) -> bool:
        return self._pretty_print

    @property
    def transformer(self) -> ValueTransformer:
        return self._transformer

    def set_directory(self, directory: str | os.PathLike[str]) -> None:
        """Switch directories; the current one stays in effect if creation fails."""
        self._directory = self._ensure_directory(Path(directory))

    def set_prefix(self, prefix: str | None) -> None:
        self._prefix = prefix or None

    def set_pretty(self, pretty_print: bool) -> None:
        self._pretty_print = bool(pretty_print)

    def set_transformer(self, transformer: ValueTransformer | None) -> None:
        self._transformer = transformer or IDENTITY

    def set_before_set(self, fn: Callable[[Any], Any] | None) -> None:
        """Install the hook applied to values before they are encoded."""
        self._transformer = self._callable_transformer().with_before_set(fn)

    def set_before_get(self, fn: Callable[[Any], Any] | None) -> None:
        """Install the hook applied to values after they are decoded."""
        self._transformer = self._callable_transformer().with_before_get(fn)

    def _callable_transformer(self) -> CallableTransformer:
        current = self._transformer
        if isinstance(current, CallableTransformer):
            return current
        # wrap a custom strategy so the other hook keeps working
        return CallableTransformer(before_set=current.before_set, before_get=current.before_get)

    def _ensure_directory(self, directory: Path) -> Path:
        if not self._create_directory:
            return directory
        try:
            directory.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise CacheIOError(
                f"Failed to create cache directory '{directory}': {exc}", path=str(directory)
            ) from exc
        return directory

    # Registry

    def effective_key(self, key: str, use_prefix: bool = True) -> str:
        """Return the on-disk name for *key*, prefixed when a prefix is set.

        Raises:
            InvalidKeyError: *key* cannot be used as a file name.
        """
        _validate_key(key)
        if use_prefix and self._prefix:
            name = f"{self._prefix}{PREFIX_SEPARATOR}{key}"
            _validate_key(name)
            return name
        return key

    def resolve(self, key: str, use_prefix: bool = True) -> Entry:
        """Return the entry for *key*, creating it on first use.

        Repeated calls with the same key, prefix and directory return the
        same object, also across threads.
        """
        name = self.effective_key(key, use_prefix)
        directory = self._directory
        with self._registry_lock:
            entry = self._instances.get((directory, name))
            if entry is None:
                entry = Entry(name, self._settings(directory))
                self._instances[(directory, name)] = entry
                logger.debug("Registered entry '%s' in '%s'", name, directory)
            return entry

    def forget(self, key: str | None = None, use_prefix: bool = True) -> None:
        """Drop registered entries so the next resolve re-reads options from disk.

        With no *key*, every registered entry is dropped.
        """
        with self._registry_lock:
            if key is None:
                self._instances.clear()
                return
            self._instances.pop((self._directory, self.effective_key(key, use_prefix)), None)

    def _settings(self, directory: Path) -> EntrySettings:
        return EntrySettings(
            directory=directory,
            codec=self._codec,
            transformer=self._transformer,
            pretty_print=self._pretty_print,
            clock=self._clock,
        )

    # Convenience

    def get(self, key: str, default: Any = MISSING) -> Any:
        return self.resolve(key).get(default)

    def set(self, key: str, value: Any, ttl: TTL | None = None, lock: bool | None = None) -> Entry:
        return self.resolve(key).set(value, ttl=ttl, lock=lock)

    def destroy(self, key: str) -> bool:
        return self.resolve(key).destroy()

    # Bulk operations

    def clear_all(self) -> int:
        """Delete every regular file directly inside the cache directory.

        Subdirectories and their contents are left alone, and registered
        entries stay registered. Returns the number of files removed.
        """
        try:
            with os.scandir(self._directory) as it:
                files = [Path(item.path) for item in it if item.is_file()]
        except FileNotFoundError:
            return 0
        except OSError as exc:
            raise CacheIOError(
                f"Failed to list cache directory '{self._directory}': {exc}", path=str(self._directory)
            ) from exc

        removed = sum(1 for path in files if remove_file(path))
        logger.info("Cleared %d file(s) from '%s'", removed, self._directory)
        return removed


def _validate_key(key: str) -> None:
    if not isinstance(key, str):
        raise InvalidKeyError(str(key), "keys must be strings")
    if not key:
        raise InvalidKeyError(key, "empty key")
    if key in (".", ".."):
        raise InvalidKeyError(key, "reserved name")
    if "\x00" in key or "/" in key or (os.sep != "/" and os.sep in key):
        raise InvalidKeyError(key, "keys must not contain path separators or NUL")
    if key.endswith((OPTIONS_SUFFIX, TMP_SUFFIX)):
        raise InvalidKeyError(key, f"keys must not end in '{OPTIONS_SUFFIX}' or '{TMP_SUFFIX}'")
    try:
        size = len(os.fsencode(key))
    except UnicodeEncodeError as exc:
        raise InvalidKeyError(key, "not representable as a file name") from exc
    if size + LONGEST_SUFFIX > MAX_NAME_BYTES:
        raise InvalidKeyError(key, f"keys must be at most {MAX_NAME_BYTES - LONGEST_SUFFIX} bytes long")
