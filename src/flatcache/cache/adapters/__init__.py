"""Cache adapters — concrete codec and transformer implementations."""

from flatcache.cache.adapters.json_codec import JsonCodec
from flatcache.cache.adapters.transformers import IDENTITY, CallableTransformer

__all__ = ["IDENTITY", "CallableTransformer", "JsonCodec"]
