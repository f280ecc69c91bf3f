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
"""Shared constants and result sentinels for the cache."""

from __future__ import annotations

from typing import Final

OPTIONS_SUFFIX: Final = ".opt"
TMP_SUFFIX: Final = ".tmp"
PREFIX_SEPARATOR: Final = "__"
DEFAULT_DIRECTORY: Final = "tmp"

# Longest file name most filesystems accept, in bytes
MAX_NAME_BYTES: Final = 255
# ".opt" + "." + 32 hex digits + ".tmp" appended to a key by an options write
LONGEST_SUFFIX: Final = len(OPTIONS_SUFFIX) + 1 + 32 + len(TMP_SUFFIX)

NEVER_EXPIRES: Final = -1


class _Sentinel:
    """Falsy singleton marker distinguishable from every stored value."""

    __slots__ = ("_name",)

    def __init__(self, name: str) -> None:
        self._name = name

    def __repr__(self) -> str:
        return self._name

    def __bool__(self) -> bool:
        return False

    def __reduce__(self) -> str:
        return self._name


MISSING: Final = _Sentinel("MISSING")
"""Returned by ``get`` when the entry is absent or expired."""

EMPTY: Final = _Sentinel("EMPTY")
"""Returned by ``get`` when the value file exists but holds no value."""
