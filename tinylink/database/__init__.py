"""Link store layer."""

import logging
from typing import Optional

from .base import LinkStoreBase
from .memory import InMemoryLinkStore
from .models import Link
from .postgres import PostgresLinkStore
from .redis_store import RedisLinkStore


def create_store(config, logger: Optional[logging.Logger] = None) -> LinkStoreBase:
    """Build the store backend named by ``config.store_backend``."""
    backend = config.store_backend

    if backend == "memory":
        return InMemoryLinkStore(logger=logger)
    if backend == "postgres":
        return PostgresLinkStore(
            db_config=config.database_url,
            pool_max_size=config.db_pool_max_size,
            connection_timeout_seconds=config.db_timeout_seconds,
            logger=logger,
        )
    if backend == "redis":
        return RedisLinkStore(
            redis_url=config.redis_url,
            key_prefix=config.redis_key_prefix,
            logger=logger,
        )

    raise ValueError(f"Unknown store backend: {backend}")


__all__ = [
    "LinkStoreBase",
    "InMemoryLinkStore",
    "PostgresLinkStore",
    "RedisLinkStore",
    "Link",
    "create_store",
]
