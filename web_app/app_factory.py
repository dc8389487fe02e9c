"""FastAPI application factory."""

import logging

from fastapi import FastAPI

from tinyurl.exceptions import URLShortenerError
from tinyurl.common.logging_config import get_logger
from .api import api_router
from .web import web_router, add_redirect_route
from .errors import url_shortener_error_handler
from .middleware.logging import LoggingMiddleware


def create_app(
    repository,
    cache,
    shorten_service,
    resolver,
    config,
    lifespan=None,
    logger: logging.Logger = None,
) -> FastAPI:
    """Create and configure FastAPI application.

    Args:
        repository: URL record store
        cache: Optional record cache
        shorten_service: ShortenService instance
        resolver: RedirectResolver instance
        config: Configuration instance
        lifespan: Optional lifespan context manager (connects/closes the store)
        logger: Optional logger

    Returns:
        Configured FastAPI app
    """
    app = FastAPI(
        title="URL Shortener",
        description="Deterministic URL shortening service",
        version="1.0.0",
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        lifespan=lifespan,
    )

    # Store instances in app state for access in routes
    app.state.repository = repository
    app.state.cache = cache
    app.state.shorten_service = shorten_service
    app.state.resolver = resolver
    app.state.config = config
    app.state.logger = logger or get_logger("web")

    app.add_exception_handler(URLShortenerError, url_shortener_error_handler)
    app.add_middleware(LoggingMiddleware, logger=app.state.logger)

    app.include_router(api_router, prefix="/api", tags=["API"])
    app.include_router(web_router, tags=["Web"])

    # Registered last so a "/" prefix cannot shadow the routes above
    add_redirect_route(app, config.path_prefix)

    return app
