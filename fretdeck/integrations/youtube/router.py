"""
YouTube Router
Playlist details for the signed-in user's session.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Request, Response, status

from fretdeck.config import Settings, get_settings
from fretdeck.core.errors import APIError, InvalidRequestError, error_response
from fretdeck.integrations.oauth.client import OAuthClient
from fretdeck.integrations.oauth.dependencies import configured_client_dependency
from fretdeck.integrations.oauth.providers import YOUTUBE
from fretdeck.integrations.oauth.schemas import ErrorResponse
from fretdeck.integrations.oauth.session import resolve_session
from fretdeck.integrations.youtube.client import YouTubeClient
from fretdeck.integrations.youtube.schemas import YouTubePlaylistResponse

router = APIRouter(prefix="/api/youtube", tags=["YouTube"])

get_configured_youtube_client = configured_client_dependency(YOUTUBE)


def get_youtube_client(settings: Settings = Depends(get_settings)) -> YouTubeClient:
    return YouTubeClient(timeout=settings.http_timeout_seconds)


@router.get(
    "/playlist",
    response_model=YouTubePlaylistResponse,
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    },
    summary="Get playlist details",
)
async def get_playlist(
    request: Request,
    response: Response,
    playlist_id: Optional[str] = Query(None, alias="playlistId"),
    include_items: str = Query("true", alias="includeItems", description="Pass 'false' to skip videos"),
    settings: Settings = Depends(get_settings),
    oauth_client: OAuthClient = Depends(get_configured_youtube_client),
    api: YouTubeClient = Depends(get_youtube_client),
):
    """
    Fetch a playlist's title/description and, unless includeItems=false,
    its first 50 videos.
    """
    if not playlist_id:
        raise InvalidRequestError("Missing playlistId.")

    session = await resolve_session(request, YOUTUBE, oauth_client)

    try:
        snippet = await api.get_playlist_snippet(session.access_token, playlist_id)
        if snippet is None:
            raise APIError("Playlist not found or not accessible.", status_code=status.HTTP_404_NOT_FOUND)

        videos = []
        if include_items != "false":
            videos = await api.get_playlist_videos(session.access_token, playlist_id)
    except APIError as e:
        return session.apply_to(error_response(e), settings)

    session.apply_to(response, settings)
    return YouTubePlaylistResponse(
        id=playlist_id,
        title=snippet.get("title") or "Untitled",
        description=snippet.get("description"),
        videos=videos,
    )
