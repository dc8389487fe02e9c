"""Validation utilities for URL shortener."""

from urllib.parse import urlsplit
from typing import Tuple


MAX_URL_LENGTH = 2048

ALLOWED_SCHEMES = ("http", "https")


def is_valid_url(url: str) -> Tuple[bool, str]:
    """Validate a submitted URL.

    Length is not checked here; oversized URLs are truncated after
    canonicalization instead of being rejected.

    Args:
        url: The URL to validate

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not url or not isinstance(url, str):
        return False, "URL is required"

    try:
        result = urlsplit(url)
    except ValueError as e:
        return False, f"Invalid URL format: {e}"

    if result.scheme not in ALLOWED_SCHEMES:
        return False, "URL must use http or https protocol"

    if not result.netloc:
        return False, "URL must have a valid domain"

    return True, ""


def truncate_url(url: str, max_length: int = MAX_URL_LENGTH) -> str:
    """Cap a URL at ``max_length`` characters."""
    return url[:max_length]
