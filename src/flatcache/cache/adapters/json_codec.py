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
"""JSON codec for cache files."""

from __future__ import annotations

import json
from typing import Any

from flatcache.cache.exceptions import CodecError
from flatcache.cache.types import EMPTY

FORMAT_VERSION = 1

_SCALARS = (str, int, float, bool, type(None))


class JsonCodec:
    """Codec writing a versioned JSON envelope: ``{"format": 1, "value": ...}``.

    Supported values are ``None``, ``bool``, ``int``, ``float`` (NaN and
    infinities included), ``str``, lists and string-keyed dicts, nested
    arbitrarily. Tuples are accepted and come back as lists. Anything else
    is rejected on encode rather than silently coerced, so whatever is
    written reads back equal.
    """

    def encode(self, value: Any, pretty: bool = True) -> str:
        """Serialize *value*; *pretty* selects indented or single-line output."""
        self._check(value, "$")
        document = {"format": FORMAT_VERSION, "value": value}
        if pretty:
            return json.dumps(document, indent=2, ensure_ascii=False) + "\n"
        return json.dumps(document, separators=(",", ":"), ensure_ascii=False)

    def decode(self, text: str) -> Any:
        """Parse a document produced by :meth:`encode`.

        Returns ``EMPTY`` when the document is blank or has no value.
        """
        if not text.strip():
            return EMPTY
        try:
            document = json.loads(text)
        except json.JSONDecodeError as exc:
            raise CodecError(f"Malformed cache document: {exc}") from exc

        if not isinstance(document, dict) or "format" not in document:
            raise CodecError("Cache document is not a flatcache envelope")
        if document["format"] != FORMAT_VERSION:
            raise CodecError(
                f"Unsupported cache document format {document['format']!r}",
                context={"expected": FORMAT_VERSION},
            )
        if "value" not in document:
            return EMPTY
        return document["value"]

    def _check(self, value: Any, where: str) -> None:
        if isinstance(value, _SCALARS):
            return
        if isinstance(value, (list, tuple)):
            for i, item in enumerate(value):
                self._check(item, f"{where}[{i}]")
            return
        if isinstance(value, dict):
            for key, item in value.items():
                if not isinstance(key, str):
                    raise CodecError(
                        f"Mapping keys must be strings, got {type(key).__name__} at {where}",
                        context={"path": where},
                    )
                self._check(item, f"{where}.{key}")
            return
        raise CodecError(
            f"Cannot encode value of type {type(value).__name__} at {where}",
            context={"path": where},
        )
