"""
YouTube Data API Client
Playlist lookups on behalf of the signed-in user.
"""

import logging
from typing import Any, Optional

import httpx

from fretdeck.core.errors import InvalidUpstreamResponseError, UpstreamAPIError
from fretdeck.integrations.youtube.schemas import YouTubePlaylistVideo

logger = logging.getLogger(__name__)

PLAYLIST_ITEMS_PAGE_SIZE = 50


class YouTubeClient:
    """YouTube Data API v3 client (bearer token per call)."""

    API_BASE_URL = "https://www.googleapis.com/youtube/v3"

    def __init__(self, timeout: float = 10.0):
        self.timeout = timeout

    async def _get(self, path: str, access_token: str, params: dict[str, str]) -> Any:
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            response = await client.get(
                f"{self.API_BASE_URL}{path}",
                headers={"Authorization": f"Bearer {access_token}"},
                params=params,
            )

        if not response.is_success:
            logger.error(
                "YouTube API error: GET %s -> status=%s body=%s",
                path,
                response.status_code,
                response.text,
            )
            raise UpstreamAPIError(
                "YouTube API error.",
                status_code=response.status_code,
                details=response.text,
            )

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            raise InvalidUpstreamResponseError("Invalid YouTube API response.", details=response.text)

    async def get_playlist_snippet(self, access_token: str, playlist_id: str) -> Optional[dict]:
        """
        Fetch a playlist's snippet.

        Returns:
            The snippet dict, or None if the playlist is missing or not visible
        """
        data = await self._get(
            "/playlists",
            access_token,
            {"part": "snippet", "id": playlist_id},
        )
        items = data.get("items") if isinstance(data, dict) else None
        if not items or not isinstance(items[0], dict):
            return None
        snippet = items[0].get("snippet")
        return snippet if isinstance(snippet, dict) else {}

    async def get_playlist_videos(self, access_token: str, playlist_id: str) -> list[YouTubePlaylistVideo]:
        """First page (max 50) of playlist items; entries without a video id are skipped."""
        data = await self._get(
            "/playlistItems",
            access_token,
            {
                "part": "snippet",
                "maxResults": str(PLAYLIST_ITEMS_PAGE_SIZE),
                "playlistId": playlist_id,
            },
        )
        items = data.get("items") if isinstance(data, dict) else None
        if not isinstance(items, list):
            return []

        videos = []
        for item in items:
            snippet = item.get("snippet") if isinstance(item, dict) else None
            if not isinstance(snippet, dict):
                continue
            video_id = (snippet.get("resourceId") or {}).get("videoId")
            if not video_id:
                continue
            thumbnails = snippet.get("thumbnails") or {}
            videos.append(
                YouTubePlaylistVideo(
                    id=video_id,
                    title=snippet.get("title") or "Untitled",
                    description=snippet.get("description"),
                    thumbnail_url=(
                        (thumbnails.get("medium") or {}).get("url")
                        or (thumbnails.get("default") or {}).get("url")
                        or ""
                    ),
                )
            )
        return videos
