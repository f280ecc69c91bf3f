"""flatcache logging — logging port and structlog adapter."""

from flatcache.logging.port import LoggingPort
from flatcache.logging.structlog_adapter import StructlogAdapter

__all__ = ["LoggingPort", "StructlogAdapter"]
