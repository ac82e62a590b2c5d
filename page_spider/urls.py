"""URL resolution and same-origin helpers."""

from __future__ import annotations

from typing import Optional
from urllib.parse import urljoin, urlsplit, urlunsplit


def _host(url: str) -> str:
    return (urlsplit(url).hostname or "").lower()


def resolve_url(value: Optional[str], base_url: str) -> Optional[str]:
    """Resolve ``value`` against ``base_url``; ``None`` for blank or unparsable input."""
    if value is None:
        return None
    candidate = value.strip()
    if not candidate:
        return None
    try:
        resolved = urljoin(base_url, candidate)
        # urljoin does not validate the port; touching it does.
        urlsplit(resolved).port
    except ValueError:
        return None
    return resolved or None


def same_host(url: str, base_url: str) -> bool:
    """Compare hostnames case-insensitively, ignoring scheme and port."""
    host = _host(url)
    return bool(host) and host == _host(base_url)


def normalize_url(value: Optional[str], base_url: str) -> Optional[str]:
    """Turn an attribute value into an absolute same-host URL, or ``None``.

    Absolute values are kept when they point at the base URL's host and
    relative values are resolved against the base URL. Protocol-relative
    values name their own host, so they go through the same host check.
    """
    resolved = resolve_url(value, base_url)
    if resolved is None:
        return None
    if not same_host(resolved, base_url):
        return None
    return resolved


def origin_root(url: str) -> str:
    """Return ``scheme://netloc/`` for ``url``."""
    parts = urlsplit(url)
    return urlunsplit((parts.scheme, parts.netloc, "/", "", ""))
