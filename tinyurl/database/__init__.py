"""Database layer for URL shortener."""

import logging
from typing import Optional

from .base import URLRepository
from .memory import MemoryURLRepository
from .postgres import PostgresURLRepository
from .cache import RedisCache
from .models import URLRecord

__all__ = [
    "URLRepository",
    "MemoryURLRepository",
    "PostgresURLRepository",
    "RedisCache",
    "URLRecord",
    "create_repository",
]


def create_repository(config, logger: Optional[logging.Logger] = None) -> URLRepository:
    """Create the store selected by ``config.database_url``.

    ``memory://`` selects the in-process store; anything else is treated as
    a PostgreSQL connection string.
    """
    if config.database_url.startswith("memory://"):
        return MemoryURLRepository(logger=logger)

    return PostgresURLRepository(
        database_url=config.database_url,
        pool_max_size=config.db_pool_max_size,
        command_timeout_seconds=config.db_command_timeout_seconds,
        create_tables=config.db_create_tables,
        logger=logger,
    )
