"""
Redirect Utilities
Base-URL resolution behind reverse proxies and same-origin redirect sanitizing.
"""

import logging
from typing import Optional
from urllib.parse import urlsplit

from starlette.requests import Request

logger = logging.getLogger(__name__)

DEFAULT_PORTS = {"http": 80, "https": 443}


def get_base_url(request: Request) -> str:
    """
    Resolve the public origin of the application.

    Prefers ``x-forwarded-proto`` + ``x-forwarded-host`` (both must be present)
    so the app works behind a reverse proxy, else the request's own origin.
    """
    forwarded_proto = request.headers.get("x-forwarded-proto")
    forwarded_host = request.headers.get("x-forwarded-host")

    if forwarded_proto and forwarded_host:
        return f"{forwarded_proto}://{forwarded_host}"

    return f"{request.url.scheme}://{request.url.netloc}"


def _origin(url: str) -> Optional[tuple[str, str, Optional[int]]]:
    """Return (scheme, host, effective port) or None if not an absolute URL."""
    parts = urlsplit(url)
    if not parts.scheme or not parts.hostname:
        return None

    scheme = parts.scheme.lower()
    port = parts.port  # raises ValueError on a malformed port
    if port is None:
        port = DEFAULT_PORTS.get(scheme)
    return scheme, parts.hostname.lower(), port


def sanitize_redirect(candidate: Optional[str], base_url: str) -> Optional[str]:
    """
    Turn a redirect candidate into a safe same-origin path.

    Args:
        candidate: Raw ``redirect`` query value, referer, or cookie value
        base_url: Application origin from get_base_url()

    Returns:
        The candidate unchanged if it starts with ``/``; the
        path+query+fragment of a same-origin absolute URL; otherwise None
    """
    if not candidate:
        return None

    if candidate.startswith("/"):
        return candidate

    try:
        candidate_origin = _origin(candidate)
        base_origin = _origin(base_url)
    except ValueError:
        return None

    if candidate_origin is None or candidate_origin != base_origin:
        logger.debug("Rejected cross-origin redirect candidate: %s", candidate)
        return None

    parts = urlsplit(candidate)
    path = parts.path or "/"
    if parts.query:
        path = f"{path}?{parts.query}"
    if parts.fragment:
        path = f"{path}#{parts.fragment}"
    return path
