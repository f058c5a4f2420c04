"""
Session Cookie Helpers
Cookie attributes and read/write helpers for OAuth state and session tokens.
"""

from typing import Any, Optional

from starlette.requests import Request
from starlette.responses import Response

from fretdeck.config import Settings
from fretdeck.integrations.oauth.providers import (
    REFRESH_TOKEN_COOKIE_MAX_AGE,
    STATE_COOKIE_MAX_AGE,
    OAuthProvider,
)
from fretdeck.integrations.oauth.schemas import TokenSet


def cookie_options(settings: Settings, max_age: Optional[int] = None) -> dict[str, Any]:
    """
    Build cookie attributes for ``Response.set_cookie``.

    ``secure`` is only set in production so the flow works over plain HTTP
    on localhost.

    Args:
        settings: Application settings
        max_age: Cookie lifetime in seconds (omitted when falsy)

    Returns:
        Keyword arguments for set_cookie/delete_cookie
    """
    options: dict[str, Any] = {
        "httponly": True,
        "samesite": "lax",
        "secure": settings.is_production,
        "path": "/",
    }
    if max_age:
        options["max_age"] = max_age
    return options


def read_cookie(request: Request, name: str) -> Optional[str]:
    """Cookie value, with empty strings treated as absent."""
    return request.cookies.get(name) or None


def set_flow_cookies(
    response: Response,
    provider: OAuthProvider,
    settings: Settings,
    state: str,
    redirect_path: str,
) -> None:
    """Attach the short-lived state and post-login redirect cookies."""
    options = cookie_options(settings, STATE_COOKIE_MAX_AGE)
    response.set_cookie(provider.state_cookie, state, **options)
    response.set_cookie(provider.redirect_cookie, redirect_path, **options)


def clear_flow_cookies(response: Response, provider: OAuthProvider, settings: Settings) -> None:
    options = cookie_options(settings)
    response.delete_cookie(provider.state_cookie, **options)
    response.delete_cookie(provider.redirect_cookie, **options)


def set_session_cookies(
    response: Response,
    provider: OAuthProvider,
    settings: Settings,
    tokens: TokenSet,
) -> None:
    """
    Write session token cookies.

    The access token and expiry live as long as the access token itself;
    the refresh token (when known) is kept for 30 days.
    """
    token_options = cookie_options(settings, tokens.expires_in)
    response.set_cookie(provider.access_token_cookie, tokens.access_token, **token_options)
    response.set_cookie(provider.expires_at_cookie, str(tokens.expires_at_ms), **token_options)

    if tokens.refresh_token:
        response.set_cookie(
            provider.refresh_token_cookie,
            tokens.refresh_token,
            **cookie_options(settings, REFRESH_TOKEN_COOKIE_MAX_AGE),
        )


def clear_session_cookies(response: Response, provider: OAuthProvider, settings: Settings) -> None:
    options = cookie_options(settings)
    for name in provider.session_cookies:
        response.delete_cookie(name, **options)
