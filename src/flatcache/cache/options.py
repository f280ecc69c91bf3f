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
"""Per-entry options (expiry, lock) and their sidecar ``.opt`` file."""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from flatcache.cache.atomic import atomic_write, remove_file
from flatcache.cache.exceptions import CodecError
from flatcache.cache.ports.outbound import Codec
from flatcache.cache.types import EMPTY, NEVER_EXPIRES

logger = logging.getLogger(__name__)

_FIELDS = frozenset({"expiry", "lock"})


@dataclass(frozen=True)
class EntryOptions:
    """Metadata kept alongside a cached value.

    Attributes:
        expiry: Epoch second after which the value is stale, or -1 for never.
        lock: When set, writes to the entry are skipped.
    """

    expiry: int = NEVER_EXPIRES
    lock: bool = False

    def __post_init__(self) -> None:
        if isinstance(self.expiry, bool) or not isinstance(self.expiry, int):
            raise ValueError(f"expiry must be an int, got {self.expiry!r}")
        if not isinstance(self.lock, bool):
            raise ValueError(f"lock must be a bool, got {self.lock!r}")

    def merged(self, partial: Mapping[str, Any]) -> EntryOptions:
        """Return a copy with only the fields present in *partial* overwritten."""
        unknown = set(partial) - _FIELDS
        if unknown:
            raise ValueError(f"Unknown option(s): {', '.join(sorted(unknown))}")
        return dataclasses.replace(self, **partial)

    def is_expired(self, now: int) -> bool:
        return self.expiry != NEVER_EXPIRES and self.expiry < now

    def to_dict(self) -> dict[str, Any]:
        return {"expiry": self.expiry, "lock": self.lock}

    @classmethod
    def from_dict(cls, data: Any) -> EntryOptions:
        """Build options from a decoded mapping; absent fields take defaults."""
        if not isinstance(data, Mapping):
            raise ValueError(f"options must be a mapping, got {type(data).__name__}")
        return cls().merged({k: v for k, v in data.items() if k in _FIELDS})


class MetadataRecord:
    """The ``<key>.opt`` file holding an entry's options.

    Written with the same atomic protocol as values. A record never has
    options of its own.
    """

    def __init__(self, path: Path, codec: Codec, pretty: bool = True) -> None:
        self._path = path
        self._codec = codec
        self._pretty = pretty

    @property
    def path(self) -> Path:
        return self._path

    def exists(self) -> bool:
        return self._path.is_file()

    def load(self) -> EntryOptions:
        """Read the options, falling back to defaults if the file is absent or unusable."""
        try:
            raw = self._path.read_bytes()
        except FileNotFoundError:
            return EntryOptions()
        except OSError as exc:
            logger.warning("Unreadable options file '%s', using defaults: %s", self._path, exc)
            return EntryOptions()

        # UnicodeDecodeError is a ValueError
        try:
            data = self._codec.decode(raw.decode("utf-8"))
            if data is EMPTY:
                raise CodecError("options document holds no value")
            return EntryOptions.from_dict(data)
        except (CodecError, ValueError) as exc:
            logger.warning("Corrupt options file '%s', using defaults: %s", self._path, exc)
            return EntryOptions()

    def save(self, options: EntryOptions) -> None:
        atomic_write(self._path, self._codec.encode(options.to_dict(), pretty=self._pretty))

    def remove(self) -> bool:
        return remove_file(self._path)
