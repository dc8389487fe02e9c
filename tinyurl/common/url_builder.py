"""URL building utilities for URL shortener."""


def normalize_path_prefix(path_prefix: str) -> str:
    """Normalize a path prefix to ``/segment/`` form.

    Args:
        path_prefix: Prefix such as ``r``, ``/r`` or ``/r/``

    Returns:
        Prefix with leading and trailing slash (``/`` when empty)
    """
    prefix = path_prefix.strip().strip("/")
    if prefix:
        return f"/{prefix}/"
    return "/"


def build_short_url(
    slug: str,
    base_url: str,
    path_prefix: str = "",
) -> str:
    """Build complete short URL.

    Args:
        slug: The slug
        base_url: Base URL (e.g., http://tiny.io)
        path_prefix: Optional path prefix (e.g., /r/)

    Returns:
        Complete short URL
    """
    base = base_url.rstrip("/")
    prefix = path_prefix.strip("/")

    if prefix:
        return f"{base}/{prefix}/{slug}"
    return f"{base}/{slug}"
