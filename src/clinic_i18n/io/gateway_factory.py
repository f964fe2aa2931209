"""Builds the configured cache gateway."""

import logging
from pathlib import Path

from clinic_i18n.io.cache_gateway import CacheGateway
from clinic_i18n.io.file_cache_gateway import FileCacheGateway
from clinic_i18n.io.in_memory_cache_gateway import InMemoryCacheGateway
from clinic_i18n.io.sqlite_cache_gateway import SqliteCacheGateway

logger = logging.getLogger(__name__)

BACKENDS = ("sqlite", "file", "memory")


def create_cache_gateway(backend: str, path: Path) -> CacheGateway:
    """
    Instantiate a gateway by backend name.

    Args:
        backend: One of "sqlite", "file" or "memory".
        path: Database file (sqlite) or document directory (file). Ignored for memory.

    Raises:
        ValueError: Unknown backend name.
    """
    backend = backend.strip().lower()
    if backend == "sqlite":
        gateway = SqliteCacheGateway(path)
        gateway.ensure_schema()
    elif backend == "file":
        gateway = FileCacheGateway(path)
    elif backend == "memory":
        gateway = InMemoryCacheGateway()
    else:
        raise ValueError(f"Unknown translation cache backend {backend!r}; expected one of {BACKENDS}")

    logger.info("Using %s translation cache gateway (%s)", backend, path)
    return gateway
