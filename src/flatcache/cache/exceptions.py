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
"""Cache exception hierarchy.

Absent, expired and locked entries are not errors: ``get`` returns a
sentinel and ``set`` silently skips. Everything below signals a failure
the caller must see.
"""

from __future__ import annotations


class CacheException(Exception):
    """Base exception for all cache errors.

    Args:
        message: Human-readable error description.
        code: Machine-readable error code (e.g. "CACHE_IO").
        context: Arbitrary key-value pairs for error context and debugging.
    """

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.context: dict = context if context is not None else {}


class CacheIOError(CacheException):
    """Writing, renaming or deleting a cache file failed."""

    def __init__(self, message: str, path: str, context: dict | None = None) -> None:
        super().__init__(message, code="CACHE_IO", context={"path": path, **(context or {})})
        self.path = path


class CodecError(CacheException):
    """A value could not be encoded, or a document could not be decoded."""

    def __init__(self, message: str, context: dict | None = None) -> None:
        super().__init__(message, code="CACHE_CODEC", context=context)


class CorruptEntryError(CodecError):
    """A value file exists but its contents cannot be decoded."""

    def __init__(self, key: str, path: str, reason: str) -> None:
        super().__init__(
            f"Cache entry '{key}' is corrupt: {reason}",
            context={"key": key, "path": path},
        )
        self.code = "CACHE_CORRUPT"
        self.key = key


class InvalidKeyError(CacheException, ValueError):
    """A key cannot be mapped safely onto a file name."""

    def __init__(self, key: str, reason: str) -> None:
        super().__init__(f"Invalid cache key {key!r}: {reason}", code="CACHE_KEY", context={"key": key})
        self.key = key
