"""Mapping from core errors to HTTP responses."""

import logging

from fastapi import Request, status
from fastapi.responses import JSONResponse

from tinyurl.exceptions import (
    URLShortenerError,
    ValidationError,
    NotFoundError,
    ExpiredError,
)


logger = logging.getLogger("tinyurl.web")


def status_for_error(error: URLShortenerError) -> int:
    """Pick the HTTP status code for a core error."""
    if isinstance(error, ValidationError):
        return status.HTTP_400_BAD_REQUEST
    if isinstance(error, NotFoundError):
        return status.HTTP_404_NOT_FOUND
    if isinstance(error, ExpiredError):
        return status.HTTP_410_GONE
    # GenerationError, PersistenceError
    return status.HTTP_500_INTERNAL_SERVER_ERROR


async def url_shortener_error_handler(request: Request, exc: URLShortenerError) -> JSONResponse:
    """Render a core error as ``{"detail": ...}`` with its mapped status."""
    status_code = status_for_error(exc)

    if status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc!r}", exc_info=exc.__cause__)
        detail = "Internal server error"
    else:
        detail = str(exc)

    return JSONResponse(status_code=status_code, content={"detail": detail})
