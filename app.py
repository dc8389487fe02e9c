#!/usr/bin/env python3
"""
Main entry point for URL shortener service.

Concurrency: requests are served concurrently on one event loop per worker
(FastAPI + asyncpg connection pool + redis.asyncio). Core components hold no
mutable state; click counts are incremented atomically in PostgreSQL.

Usage:
    python app.py

Environment variables (all prefixed with URLSHORTENER_):
    DATABASE_URL - PostgreSQL connection URL, or memory:// for an in-process store
    DB_CREATE_TABLES - Set to true to create the urls table on startup
    DOMAIN - Domain used for short URLs
    PATH_PREFIX - Path prefix for short URLs (default /r/)
    SLUG_LENGTH - Slug length (default 6)
    EXPIRY - Record lifetime, e.g. 168h
    REDIS_URL - Redis connection URL (optional)
    PORT - Port to listen on
    WORKERS - Number of uvicorn worker processes (default 1)
    LOG_LEVEL - Logging level
"""

import signal
import sys
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from config import Config, load_config
from tinyurl.database import create_repository, PostgresURLRepository, RedisCache
from tinyurl.resolver import RedirectResolver
from tinyurl.service import ShortenService
from tinyurl.shortener import CanonicalShortener
from tinyurl.common.logging_config import setup_logging
from web_app import create_app


def build_app(config: Config, logger) -> FastAPI:
    """Wire the store, cache, shortener and services into a FastAPI app."""
    repository = create_repository(config, logger=logger)

    cache = None
    if config.redis_url:
        cache = RedisCache(
            redis_url=config.redis_url,
            ttl_seconds=config.cache_ttl_seconds,
            logger=logger,
        )
    else:
        logger.info("Redis caching disabled")

    shortener = CanonicalShortener(
        domain=config.domain,
        prefix=config.path_prefix,
        slug_length=config.slug_length,
        logger=logger,
    )
    shorten_service = ShortenService(
        repository=repository,
        shortener=shortener,
        expiry=config.expiry,
        cache=cache,
        logger=logger,
    )
    resolver = RedirectResolver(
        repository=repository,
        shortener=shortener,
        cache=cache,
        logger=logger,
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Connect the store and cache on startup, close them on shutdown."""
        logger.info("Starting URL shortener service...")

        if isinstance(repository, PostgresURLRepository):
            logger.info("Connecting to PostgreSQL")
            await repository.connect(
                max_retries=config.db_connect_max_retries,
                retry_interval_seconds=config.db_connect_retry_interval_seconds,
            )
        if cache:
            logger.info(f"Connecting to Redis at {config.redis_url}")
            await cache.connect()

        logger.info("Service started successfully")

        yield

        logger.info("Shutting down URL shortener service...")
        await repository.close()
        if cache:
            await cache.close()
        logger.info("Service stopped")

    return create_app(
        repository=repository,
        cache=cache,
        shorten_service=shorten_service,
        resolver=resolver,
        config=config,
        lifespan=lifespan,
        logger=logger,
    )


def main():
    """Main entry point."""
    config = load_config()

    logger = setup_logging(
        level=config.log_level,
        log_file=config.log_file,
        json_format=config.log_json,
    )

    logger.info("URL Shortener Service")
    logger.info(f"Configuration: {config.model_dump(exclude={'database_url', 'redis_url'})}")

    app = build_app(config, logger)

    uvicorn_config = uvicorn.Config(
        app,
        host=config.host,
        port=config.port,
        workers=config.workers,
        log_level=config.log_level.lower(),
        access_log=True,
    )

    server = uvicorn.Server(uvicorn_config)

    # Setup signal handlers for graceful shutdown
    def handle_signal(signum, frame):
        logger.info(f"Received signal {signum}, initiating graceful shutdown...")
        server.should_exit = True

    signal.signal(signal.SIGINT, handle_signal)
    signal.signal(signal.SIGTERM, handle_signal)

    try:
        logger.info(f"Starting server on {config.host}:{config.port}")
        server.run()
    except Exception as e:
        logger.error(f"Server error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
