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
"""Declarative caching decorators."""

from __future__ import annotations

import functools
import inspect
from collections.abc import Callable
from typing import Any, TypeVar

from flatcache.cache.entry import TTL
from flatcache.cache.store import CacheStore
from flatcache.cache.types import EMPTY, MISSING

F = TypeVar("F", bound=Callable[..., Any])


def _resolve_key(func: Callable[..., Any], key: str, args: tuple, kwargs: dict) -> str:
    bound = inspect.signature(func).bind(*args, **kwargs)
    bound.apply_defaults()
    return key.format(**bound.arguments)


def cacheable(store: CacheStore, key: str, ttl: TTL | None = None) -> Callable[[F], F]:
    """Cache the return value, skip execution on cache hit.

    The `key` parameter supports format-string interpolation with function
    argument names. For example, `key="user:{user_id}"` will expand
    `{user_id}` from the function's arguments. A cached ``None`` counts as
    a hit.

    Args:
        store: Cache store to use.
        key: Key template with {param} placeholders.
        ttl: Optional time-to-live for cached entries.
    """

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            entry = store.resolve(_resolve_key(func, key, args, kwargs))
            cached = entry.get()
            if cached is not MISSING and cached is not EMPTY:
                return cached

            result = func(*args, **kwargs)
            entry.set(result, ttl=ttl)
            return result

        return wrapper  # type: ignore[return-value]

    return decorator


def cache_put(store: CacheStore, key: str, ttl: TTL | None = None) -> Callable[[F], F]:
    """Always execute the function and cache the result.

    Unlike :func:`cacheable`, the decorated function is always invoked.
    This is useful for update operations where you want to refresh the
    cached value.

    Args:
        store: Cache store to use.
        key: Key template with {param} placeholders.
        ttl: Optional time-to-live for cached entries.
    """

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            result = func(*args, **kwargs)
            store.resolve(_resolve_key(func, key, args, kwargs)).set(result, ttl=ttl)
            return result

        return wrapper  # type: ignore[return-value]

    return decorator


def cache_evict(store: CacheStore, key: str = "", all_entries: bool = False) -> Callable[[F], F]:
    """Destroy a cache entry (or clear the directory) after the function runs.

    Args:
        store: Cache store to use.
        key: Key template with {param} placeholders. Ignored when *all_entries* is ``True``.
        all_entries: When ``True``, clear the entire cache directory after execution.
    """

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            result = func(*args, **kwargs)
            if all_entries:
                store.clear_all()
            else:
                store.resolve(_resolve_key(func, key, args, kwargs)).destroy()
            return result

        return wrapper  # type: ignore[return-value]

    return decorator
