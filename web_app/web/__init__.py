"""Public web routes."""

from .routes import router as web_router, add_redirect_route

__all__ = ["web_router", "add_redirect_route"]
