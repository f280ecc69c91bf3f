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
"""Built-in value transformer implementations."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any


def _identity(value: Any) -> Any:
    return value


class CallableTransformer:
    """ValueTransformer built from two plain functions.

    Either hook may be omitted, in which case values pass through unchanged.
    """

    __slots__ = ("_before_set", "_before_get")

    def __init__(
        self,
        before_set: Callable[[Any], Any] | None = None,
        before_get: Callable[[Any], Any] | None = None,
    ) -> None:
        self._before_set = before_set or _identity
        self._before_get = before_get or _identity

    def before_set(self, value: Any) -> Any:
        return self._before_set(value)

    def before_get(self, value: Any) -> Any:
        return self._before_get(value)

    def with_before_set(self, fn: Callable[[Any], Any] | None) -> CallableTransformer:
        """Return a copy with the pre-store hook replaced."""
        return CallableTransformer(before_set=fn, before_get=self._before_get)

    def with_before_get(self, fn: Callable[[Any], Any] | None) -> CallableTransformer:
        """Return a copy with the post-load hook replaced."""
        return CallableTransformer(before_set=self._before_set, before_get=fn)


IDENTITY = CallableTransformer()
