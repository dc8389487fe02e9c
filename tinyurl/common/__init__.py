"""Common utilities for URL shortener."""

from .validators import is_valid_url, truncate_url, MAX_URL_LENGTH
from .url_builder import build_short_url, normalize_path_prefix
from .logging_config import setup_logging, get_logger

__all__ = [
    "is_valid_url",
    "truncate_url",
    "MAX_URL_LENGTH",
    "build_short_url",
    "normalize_path_prefix",
    "setup_logging",
    "get_logger",
]
