"""Request logging middleware."""

import time
import logging
from typing import Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from tinyurl.common.logging_config import get_logger


# Paths logged at DEBUG instead of INFO
QUIET_PATHS = frozenset({"/health"})


class LoggingMiddleware(BaseHTTPMiddleware):
    """Log one line per request with status, duration and redirect target."""

    def __init__(self, app, logger: logging.Logger = None):
        super().__init__(app)
        self.logger = logger or get_logger("web")

    async def dispatch(self, request: Request, call_next: Callable):
        start_time = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start_time) * 1000

        client_ip = request.client.host if request.client else "unknown"
        message = (
            f"{request.method} {request.url.path} from {client_ip} - "
            f"Status: {response.status_code} - Duration: {duration_ms:.2f}ms"
        )
        location = response.headers.get("location")
        if location:
            message += f" -> {location}"

        level = logging.DEBUG if request.url.path in QUIET_PATHS else logging.INFO
        self.logger.log(level, message)

        return response
