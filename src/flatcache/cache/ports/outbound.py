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
"""Outbound ports of the cache: value codec and value transform strategy."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class Codec(Protocol):
    """Turns values into file text and back.

    Implementations must be pure: ``decode(encode(v, pretty))`` equals ``v``
    for every supported value regardless of *pretty*, and neither call may
    touch the filesystem. ``decode`` returns ``EMPTY`` for a document that
    carries no value and raises ``CodecError`` for anything unparseable.
    """

    def encode(self, value: Any, pretty: bool = True) -> str: ...

    def decode(self, text: str) -> Any: ...


@runtime_checkable
class ValueTransformer(Protocol):
    """Hooks applied to values on their way into and out of the cache."""

    def before_set(self, value: Any) -> Any: ...

    def before_get(self, value: Any) -> Any: ...
