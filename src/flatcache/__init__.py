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
"""flatcache — a filesystem-backed key-value cache with atomic writes."""

from flatcache.cache import (
    EMPTY,
    MISSING,
    CacheException,
    CacheStore,
    CallableTransformer,
    Entry,
    EntryOptions,
    JsonCodec,
)
from flatcache.core.config import Config

__version__ = "0.1.0"

__all__ = [
    "EMPTY",
    "MISSING",
    "CacheException",
    "CacheStore",
    "CallableTransformer",
    "Config",
    "Entry",
    "EntryOptions",
    "JsonCodec",
    "__version__",
]
