"""Cache ports — contracts implemented by the adapters."""

from flatcache.cache.ports.outbound import Codec, ValueTransformer

__all__ = ["Codec", "ValueTransformer"]
