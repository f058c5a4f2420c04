"""
Rate Limiting Utilities
Per-client limits for the OAuth authorize initiators.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address
from starlette.requests import Request

from fretdeck.config import get_settings


def client_address(request: Request) -> str:
    """
    Rate-limit key for a request.

    Behind a reverse proxy (x-forwarded-proto + x-forwarded-host present, the
    same condition get_base_url() trusts) the first x-forwarded-for hop
    identifies the client; otherwise the socket peer address.
    """
    headers = request.headers
    forwarded_for = headers.get("x-forwarded-for")
    if forwarded_for and headers.get("x-forwarded-proto") and headers.get("x-forwarded-host"):
        first_hop = forwarded_for.split(",")[0].strip()
        if first_hop:
            return first_hop
    return get_remote_address(request)


# In-memory storage per process
limiter = Limiter(key_func=client_address)


def oauth_rate_limit() -> str:
    """Limit string for authorize endpoints, read from settings on each request."""
    return get_settings().oauth_rate_limit
