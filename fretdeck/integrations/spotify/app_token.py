"""
Spotify App Token Cache
Caches the client-credentials (app-level) access token used for catalog
search, refreshing it lazily with a single shared in-flight request.
"""

import asyncio
import logging
import time
from typing import Awaitable, Callable, Optional

from fretdeck.core.errors import ProviderNotConfiguredError
from fretdeck.integrations.oauth.client import OAuthClient
from fretdeck.integrations.oauth.schemas import TokenSet

logger = logging.getLogger(__name__)

TokenFetcher = Callable[[], Awaitable[TokenSet]]


class AppTokenCache:
    """
    Owns one app-level access token and its expiry.

    The token is reused until it is within ``expiry_buffer`` seconds of
    expiring. Concurrent callers that find the cache stale share a single
    refresh: the first caller starts it, the rest await the same task.
    A failed refresh is raised to every waiter and leaves the cache empty.
    """

    def __init__(
        self,
        expiry_buffer: float = 60.0,
        clock: Callable[[], float] = time.time,
    ):
        self.expiry_buffer = expiry_buffer
        self._clock = clock
        self._token: Optional[str] = None
        self._expires_at: float = 0.0
        self._inflight: Optional[asyncio.Task] = None
        self._lock = asyncio.Lock()

    def _fresh_token(self) -> Optional[str]:
        if self._token and self._expires_at - self.expiry_buffer > self._clock():
            return self._token
        return None

    async def _refresh(self, fetch: TokenFetcher) -> str:
        started = self._clock()
        token_set = await fetch()
        self._token = token_set.access_token
        self._expires_at = started + token_set.expires_in
        logger.info("Fetched app access token (expires in %ss)", token_set.expires_in)
        return self._token

    async def get_or_refresh(self, fetch: TokenFetcher) -> str:
        """
        Return the cached token, refreshing it via ``fetch`` when stale.

        Args:
            fetch: Coroutine factory that requests a new token

        Returns:
            A usable access token
        """
        token = self._fresh_token()
        if token:
            return token

        async with self._lock:
            # Double-check after acquiring the lock
            token = self._fresh_token()
            if token:
                return token
            if self._inflight is None or self._inflight.done():
                self._inflight = asyncio.ensure_future(self._refresh(fetch))
            task = self._inflight

        try:
            return await asyncio.shield(task)
        finally:
            if task.done() and self._inflight is task:
                self._inflight = None

    def clear(self) -> None:
        """Drop the cached token (the next call refreshes)."""
        self._token = None
        self._expires_at = 0.0


async def fetch_spotify_app_token(client: OAuthClient) -> TokenSet:
    """
    Request a Spotify client-credentials token.

    Raises:
        ProviderNotConfiguredError: Client id/secret missing
        UpstreamAPIError: Token endpoint returned non-2xx
        InvalidUpstreamResponseError: Unusable token body
    """
    if not client.client_id or not client.client_secret:
        raise ProviderNotConfiguredError("Spotify client ID/secret are not configured.")

    return await client.fetch_client_credentials_token(
        failure_message="Failed to fetch Spotify access token.",
        invalid_response_message="Invalid Spotify token response.",
        invalid_payload_message="Invalid Spotify token payload.",
    )
