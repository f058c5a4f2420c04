"""
Spotify Web API Client
Thin httpx wrapper around the Spotify endpoints used by the UI.
"""

import logging
from typing import Any, Optional
from urllib.parse import quote

import httpx

from fretdeck.core.errors import UpstreamAPIError

logger = logging.getLogger(__name__)


class SpotifyClient:
    """
    Spotify Web API client.

    Every call takes the bearer token explicitly: catalog search uses the
    app token, playlist/player calls use the user's session token.
    """

    API_BASE_URL = "https://api.spotify.com/v1"

    def __init__(self, timeout: float = 10.0):
        self.timeout = timeout

    async def _request(
        self,
        method: str,
        path: str,
        access_token: str,
        params: Optional[dict[str, Any]] = None,
    ) -> httpx.Response:
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            response = await client.request(
                method,
                f"{self.API_BASE_URL}{path}",
                headers={"Authorization": f"Bearer {access_token}"},
                params=params,
            )

        if not response.is_success:
            logger.error(
                "Spotify API error: %s %s -> status=%s body=%s",
                method,
                path,
                response.status_code,
                response.text,
            )
            raise UpstreamAPIError(
                "Spotify API error.",
                status_code=response.status_code,
                details=response.text or response.reason_phrase,
            )

        return response

    @staticmethod
    def _json(response: httpx.Response) -> Any:
        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError:
            logger.warning("Spotify returned a non-JSON body for %s", response.request.url)
            return {}

    async def search(
        self,
        access_token: str,
        query: str,
        types: list[str],
        limit: int,
    ) -> Any:
        """
        Search the Spotify catalog.

        Args:
            access_token: App (client-credentials) token
            query: Free-text query
            types: Subset of {"track", "playlist"}
            limit: Results per type

        Returns:
            Raw /v1/search payload
        """
        response = await self._request(
            "GET",
            "/search",
            access_token,
            params={"q": query, "type": ",".join(types), "limit": str(limit)},
        )
        return self._json(response)

    async def get_playlist_tracks(
        self,
        access_token: str,
        playlist_id: str,
        limit: int,
        offset: int,
    ) -> Any:
        response = await self._request(
            "GET",
            f"/playlists/{quote(playlist_id, safe='')}/tracks",
            access_token,
            params={"limit": str(limit), "offset": str(offset)},
        )
        return self._json(response)

    async def get_player_state(self, access_token: str) -> Optional[Any]:
        """
        Get the user's current playback.

        Returns:
            Raw /v1/me/player payload, or None when nothing is playing (204)
        """
        response = await self._request("GET", "/me/player", access_token)
        if response.status_code == 204:
            return None
        return self._json(response)

    async def pause(self, access_token: str, device_id: Optional[str] = None) -> None:
        params = {"device_id": device_id} if device_id else None
        await self._request("PUT", "/me/player/pause", access_token, params=params)
