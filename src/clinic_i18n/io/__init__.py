"""I/O layer - Persistent, shared translation cache backends."""

from .cache_gateway import CacheGateway
from .file_cache_gateway import FileCacheGateway
from .gateway_factory import BACKENDS, create_cache_gateway
from .in_memory_cache_gateway import InMemoryCacheGateway
from .sqlite_cache_gateway import SqliteCacheGateway

__all__ = [
    "CacheGateway",
    "InMemoryCacheGateway",
    "FileCacheGateway",
    "SqliteCacheGateway",
    "create_cache_gateway",
    "BACKENDS",
]
