"""
OAuth Session Access
Resolves a usable user access token from session cookies, refreshing it
when it is missing or about to expire.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from starlette.requests import Request
from starlette.responses import Response

from fretdeck.config import Settings
from fretdeck.core.errors import AccountNotConnectedError, APIError
from fretdeck.integrations.oauth.client import OAuthClient, now_ms
from fretdeck.integrations.oauth.cookies import read_cookie, set_session_cookies
from fretdeck.integrations.oauth.providers import OAuthProvider
from fretdeck.integrations.oauth.schemas import TokenSet

logger = logging.getLogger(__name__)

# Refresh this long before the recorded expiry
TOKEN_EXPIRY_BUFFER_MS = 60 * 1000


@dataclass
class SessionAccess:
    """A usable access token plus any tokens refreshed to obtain it."""

    provider: OAuthProvider
    access_token: str
    refreshed: Optional[TokenSet] = None

    def apply_to(self, response: Response, settings: Settings) -> Response:
        """Write refreshed tokens (if any) back to the browser."""
        if self.refreshed is not None:
            set_session_cookies(response, self.provider, settings, self.refreshed)
        return response


def has_session(request: Request, provider: OAuthProvider) -> bool:
    """True iff an access or refresh token cookie is present and non-empty."""
    return bool(
        read_cookie(request, provider.access_token_cookie)
        or read_cookie(request, provider.refresh_token_cookie)
    )


def _parse_expires_at(raw: Optional[str]) -> int:
    if not raw:
        return 0
    try:
        return int(float(raw))
    except (ValueError, OverflowError):
        return 0


def token_needs_refresh(access_token: Optional[str], expires_at_raw: Optional[str], now: int) -> bool:
    expires_at = _parse_expires_at(expires_at_raw)
    return not access_token or not expires_at or now >= expires_at - TOKEN_EXPIRY_BUFFER_MS


async def resolve_session(
    request: Request,
    provider: OAuthProvider,
    client: OAuthClient,
) -> SessionAccess:
    """
    Get a valid access token for the current browser session.

    Args:
        request: Incoming request carrying session cookies
        provider: Provider whose cookies to read
        client: Token client used for refresh

    Returns:
        SessionAccess; ``refreshed`` is set when a refresh happened

    Raises:
        AccountNotConnectedError: No refresh token, or refresh failed
    """
    access_token = read_cookie(request, provider.access_token_cookie)
    refresh_token = read_cookie(request, provider.refresh_token_cookie)
    expires_at_raw = read_cookie(request, provider.expires_at_cookie)

    if not token_needs_refresh(access_token, expires_at_raw, now_ms()):
        return SessionAccess(provider=provider, access_token=access_token)

    if not refresh_token:
        raise AccountNotConnectedError(provider.not_connected_message)

    try:
        refreshed = await client.refresh_access_token(refresh_token)
    except APIError as e:
        logger.warning("%s token refresh failed: %s", provider.display_name, e.message)
        raise AccountNotConnectedError("Failed to refresh access token.")

    logger.info("Refreshed %s access token for session", provider.display_name)
    return SessionAccess(provider=provider, access_token=refreshed.access_token, refreshed=refreshed)
