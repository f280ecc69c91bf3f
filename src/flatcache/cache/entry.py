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
"""A single cache slot: one value file plus its options file."""

from __future__ import annotations

import logging
import math
import threading
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from datetime import timedelta
from pathlib import Path
from typing import Any

from flatcache.cache.atomic import atomic_write, remove_file
from flatcache.cache.exceptions import CacheIOError, CodecError, CorruptEntryError
from flatcache.cache.options import EntryOptions, MetadataRecord
from flatcache.cache.ports.outbound import Codec, ValueTransformer
from flatcache.cache.types import EMPTY, MISSING, NEVER_EXPIRES, OPTIONS_SUFFIX

logger = logging.getLogger(__name__)

TTL = int | float | timedelta


@dataclass(frozen=True)
class EntrySettings:
    """Store settings captured by an Entry when it is constructed."""

    directory: Path
    codec: Codec
    transformer: ValueTransformer
    pretty_print: bool
    clock: Callable[[], float]


def _ttl_seconds(ttl: TTL) -> int:
    if isinstance(ttl, timedelta):
        seconds = ttl.total_seconds()
    elif isinstance(ttl, bool) or not isinstance(ttl, (int, float)):
        raise TypeError(f"ttl must be seconds or a timedelta, got {type(ttl).__name__}")
    else:
        seconds = float(ttl)
    if seconds < 0 or math.isnan(seconds):
        raise ValueError(f"ttl must not be negative, got {ttl!r}")
    return math.ceil(seconds)


class Entry:
    """One cache slot identified by its effective key.

    The value lives in ``<directory>/<key>`` and the options in
    ``<directory>/<key>.opt``. Options are read from disk when the entry
    is built (or on :meth:`reload`) and mirrored in memory afterwards; the
    lock check in :meth:`set` uses that in-memory copy.

    Entries are normally obtained from :meth:`CacheStore.resolve`, which
    hands out one instance per key.
    """

    def __init__(self, key: str, settings: EntrySettings, load_options: bool = True) -> None:
        self._key = key
        self._settings = settings
        self._options = EntryOptions()
        self._mutex = threading.RLock()
        self._metadata: MetadataRecord | None = None

        if load_options:
            self._metadata = MetadataRecord(
                settings.directory / f"{key}{OPTIONS_SUFFIX}",
                settings.codec,
                pretty=settings.pretty_print,
            )
            if self._metadata.exists():
                self._options = self._metadata.load()

    def __repr__(self) -> str:
        return f"Entry(key={self._key!r}, directory={str(self._settings.directory)!r}, options={self._options!r})"

    @property
    def key(self) -> str:
        return self._key

    @property
    def directory(self) -> Path:
        return self._settings.directory

    @property
    def path(self) -> Path:
        return self._settings.directory / self._key

    @property
    def options_path(self) -> Path | None:
        return self._metadata.path if self._metadata is not None else None

    @property
    def options(self) -> EntryOptions:
        return self._options

    def _now(self) -> int:
        return int(self._settings.clock())

    # Writes

    def set(self, value: Any, ttl: TTL | None = None, lock: bool | None = None) -> Entry:
        """Store *value*, returning the entry for chaining.

        A locked entry ignores the call; use :meth:`try_set` to find out
        whether the write happened.

        Only the options given here change. The one exception is an
        expiry that has already passed: writing without *ttl* then
        resets it to never, so the new value is not born expired. A
        still-pending expiry is kept.

        Args:
            value: Any value the codec supports.
            ttl: Seconds (or a timedelta) until the value expires.
                Omit to keep a pending expiry.
            lock: New lock state to record along with the value.
        """
        self.try_set(value, ttl=ttl, lock=lock)
        return self

    def try_set(self, value: Any, ttl: TTL | None = None, lock: bool | None = None) -> bool:
        """Store *value* like :meth:`set`; return False if the entry was locked."""
        with self._mutex:
            if self._options.lock:
                logger.debug("Skipped write to locked entry '%s'", self._key)
                return False

            now = self._now()
            partial: dict[str, Any] = {}
            if ttl is not None:
                partial["expiry"] = now + _ttl_seconds(ttl)
            elif self._options.is_expired(now):
                # a stale expiry belongs to the value being replaced
                partial["expiry"] = NEVER_EXPIRES
            if lock is not None:
                partial["lock"] = lock
            options = self._options.merged(partial)

            stored = self._settings.transformer.before_set(value)
            text = self._settings.codec.encode(stored, pretty=self._settings.pretty_print)
            atomic_write(self.path, text)
            self._persist(options)

            logger.debug("Stored entry '%s' (expiry=%s, lock=%s)", self._key, options.expiry, options.lock)
            return True

    def lock(self) -> Entry:
        """Mark the entry locked so later writes are skipped."""
        return self.update_options(lock=True)

    def unlock(self) -> Entry:
        return self.update_options(lock=False)

    def update_options(self, partial: Mapping[str, Any] | None = None, **fields: Any) -> Entry:
        """Merge the given option fields into the current options and persist them."""
        with self._mutex:
            self._persist(self._options.merged({**(partial or {}), **fields}))
        return self

    def _persist(self, options: EntryOptions) -> None:
        if self._metadata is not None:
            self._metadata.save(options)
        self._options = options

    def destroy(self) -> bool:
        """Delete the value and options files.

        Missing files are not an error. Returns True if anything was removed.
        """
        with self._mutex:
            removed = remove_file(self.path)
            if self._metadata is not None:
                removed = self._metadata.remove() or removed
            self._options = EntryOptions()
        if removed:
            logger.debug("Destroyed entry '%s'", self._key)
        return removed

    # Reads

    def get(self, default: Any = MISSING) -> Any:
        """Return the stored value.

        Returns *default* (``MISSING`` unless given) when the entry is
        absent or expired, and ``EMPTY`` when the value file exists but
        holds no value.

        Raises:
            CorruptEntryError: the value file cannot be decoded.
        """
        if not self.is_valid():
            return default

        try:
            raw = self.path.read_bytes()
        except FileNotFoundError:
            return default
        except OSError as exc:
            raise CacheIOError(f"Failed to read cache file '{self.path}': {exc}", path=str(self.path)) from exc

        try:
            value = self._settings.codec.decode(raw.decode("utf-8"))
        except (CodecError, UnicodeDecodeError) as exc:
            raise CorruptEntryError(self._key, str(self.path), str(exc)) from exc

        if value is EMPTY:
            return EMPTY
        return self._settings.transformer.before_get(value)

    def is_valid(self) -> bool:
        """True if the value file exists and has not expired."""
        if self._options.is_expired(self._now()):
            return False
        return self.path.is_file()

    def exists(self) -> bool:
        """True if the value file exists, expired or not."""
        return self.path.is_file()

    def reload(self) -> Entry:
        """Re-read options from disk, picking up changes made by other processes."""
        with self._mutex:
            if self._metadata is not None:
                self._options = self._metadata.load()
        return self
