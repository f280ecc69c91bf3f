"""flatcache cache — file-backed entries with atomic writes, expiry and locks."""

from flatcache.cache.adapters.json_codec import JsonCodec
from flatcache.cache.adapters.transformers import CallableTransformer
from flatcache.cache.decorators import cache_evict, cache_put, cacheable
from flatcache.cache.entry import Entry, EntrySettings
from flatcache.cache.exceptions import (
    CacheException,
    CacheIOError,
    CodecError,
    CorruptEntryError,
    InvalidKeyError,
)
from flatcache.cache.options import EntryOptions, MetadataRecord
from flatcache.cache.ports.outbound import Codec, ValueTransformer
from flatcache.cache.store import CacheStore
from flatcache.cache.types import EMPTY, MISSING, OPTIONS_SUFFIX, TMP_SUFFIX

__all__ = [
    "EMPTY",
    "MISSING",
    "OPTIONS_SUFFIX",
    "TMP_SUFFIX",
    "CacheException",
    "CacheIOError",
    "CacheStore",
    "CallableTransformer",
    "Codec",
    "CodecError",
    "CorruptEntryError",
    "Entry",
    "EntryOptions",
    "EntrySettings",
    "InvalidKeyError",
    "JsonCodec",
    "MetadataRecord",
    "ValueTransformer",
    "cache_evict",
    "cache_put",
    "cacheable",
]
