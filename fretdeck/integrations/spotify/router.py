"""
Spotify Router
Catalog search (app token) and playlist/player endpoints (user session).
"""

import logging
from typing import Optional

import httpx
from fastapi import APIRouter, Depends, Query, Request, Response

from fretdeck.config import Settings, get_settings
from fretdeck.core.errors import (
    APIError,
    InvalidRequestError,
    ProviderNotConfiguredError,
    UpstreamAPIError,
    error_response,
)
from fretdeck.integrations.oauth.client import OAuthClient
from fretdeck.integrations.oauth.dependencies import (
    configured_client_dependency,
    oauth_client_dependency,
)
from fretdeck.integrations.oauth.providers import SPOTIFY
from fretdeck.integrations.oauth.schemas import ErrorResponse
from fretdeck.integrations.oauth.session import resolve_session
from fretdeck.integrations.spotify.app_token import AppTokenCache, fetch_spotify_app_token
from fretdeck.integrations.spotify.client import SpotifyClient
from fretdeck.integrations.spotify.parsers import (
    parse_player_state,
    parse_playlist_tracks,
    parse_search_results,
)
from fretdeck.integrations.spotify.schemas import (
    OkResponse,
    SpotifyPlayerStateResponse,
    SpotifyPlaylistTracksResponse,
    SpotifySearchResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/spotify", tags=["Spotify"])

SEARCH_TYPES = ("track", "playlist")
SEARCH_FAILED_MESSAGE = "Failed to search Spotify."


# =============================================================================
# Dependencies
# =============================================================================

def get_app_token_cache(request: Request) -> AppTokenCache:
    """The app token cache owned by the running application."""
    return request.app.state.spotify_app_tokens


def get_spotify_client(settings: Settings = Depends(get_settings)) -> SpotifyClient:
    return SpotifyClient(timeout=settings.http_timeout_seconds)


get_spotify_oauth_client = oauth_client_dependency(SPOTIFY)
get_configured_spotify_client = configured_client_dependency(SPOTIFY)


# =============================================================================
# Endpoints
# =============================================================================

@router.get(
    "/search",
    response_model=SpotifySearchResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    summary="Search the Spotify catalog",
)
async def search_spotify(
    q: Optional[str] = Query(None, description="Search query"),
    type_: Optional[str] = Query(None, alias="type", description="Comma-separated: track,playlist"),
    limit: int = Query(12, description="Results per type (clamped to 1..30)"),
    settings: Settings = Depends(get_settings),
    cache: AppTokenCache = Depends(get_app_token_cache),
    oauth_client: OAuthClient = Depends(get_spotify_oauth_client),
    api: SpotifyClient = Depends(get_spotify_client),
) -> SpotifySearchResponse:
    """
    Search tracks and playlists with the app-level token.

    Does not require the user to be logged in to Spotify.
    """
    if not SPOTIFY.get_config(settings).configured:
        raise ProviderNotConfiguredError("Spotify is not configured.")

    if not q or not q.strip():
        raise InvalidRequestError('Missing query parameter "q".')

    limit = min(max(limit, 1), 30)
    requested = [value.strip() for value in (type_ or "").split(",")]
    types = [value for value in requested if value in SEARCH_TYPES] or list(SEARCH_TYPES)

    try:
        access_token = await cache.get_or_refresh(lambda: fetch_spotify_app_token(oauth_client))
    except APIError as e:
        logger.error("Spotify search failed: %s", e.message)
        raise APIError(SEARCH_FAILED_MESSAGE)
    except httpx.HTTPError as e:
        logger.error("Spotify token request failed: %r", e)
        raise APIError(SEARCH_FAILED_MESSAGE)

    try:
        data = await api.search(access_token, q, types, limit)
    except httpx.HTTPError as e:
        logger.error("Spotify search request failed: %r", e)
        raise APIError(SEARCH_FAILED_MESSAGE)

    tracks, playlists = parse_search_results(data)
    return SpotifySearchResponse(tracks=tracks, playlists=playlists)


@router.get(
    "/playlist/tracks",
    response_model=SpotifyPlaylistTracksResponse,
    responses={400: {"model": ErrorResponse}, 401: {"model": ErrorResponse}},
    summary="List tracks of a playlist",
)
async def get_playlist_tracks(
    request: Request,
    response: Response,
    playlist_id: Optional[str] = Query(None, alias="playlistId"),
    limit: int = Query(100, description="Page size (clamped to 1..100)"),
    offset: int = Query(0, description="Page offset"),
    settings: Settings = Depends(get_settings),
    oauth_client: OAuthClient = Depends(get_configured_spotify_client),
    api: SpotifyClient = Depends(get_spotify_client),
):
    if not playlist_id:
        raise InvalidRequestError("playlistId is required.")

    session = await resolve_session(request, SPOTIFY, oauth_client)

    limit = min(max(limit, 1), 100)
    offset = max(offset, 0)

    try:
        data = await api.get_playlist_tracks(session.access_token, playlist_id, limit, offset)
    except UpstreamAPIError as e:
        return session.apply_to(error_response(e), settings)

    session.apply_to(response, settings)
    return SpotifyPlaylistTracksResponse(
        tracks=parse_playlist_tracks(data),
        has_more=bool(data.get("next")) if isinstance(data, dict) else False,
        next_offset=offset + limit,
    )


@router.get(
    "/player/state",
    response_model=SpotifyPlayerStateResponse,
    responses={401: {"model": ErrorResponse}},
    summary="Get current playback state",
)
async def get_player_state(
    request: Request,
    response: Response,
    settings: Settings = Depends(get_settings),
    oauth_client: OAuthClient = Depends(get_configured_spotify_client),
    api: SpotifyClient = Depends(get_spotify_client),
):
    session = await resolve_session(request, SPOTIFY, oauth_client)

    try:
        data = await api.get_player_state(session.access_token)
    except UpstreamAPIError as e:
        return session.apply_to(error_response(e), settings)

    session.apply_to(response, settings)
    state = parse_player_state(data) if data is not None else None
    return SpotifyPlayerStateResponse(state=state)


@router.put(
    "/player/pause",
    response_model=OkResponse,
    responses={401: {"model": ErrorResponse}},
    summary="Pause playback",
)
async def pause_player(
    request: Request,
    response: Response,
    settings: Settings = Depends(get_settings),
    oauth_client: OAuthClient = Depends(get_configured_spotify_client),
    api: SpotifyClient = Depends(get_spotify_client),
):
    """Pause playback, optionally on a specific device (JSON body ``{"deviceId"}``)."""
    session = await resolve_session(request, SPOTIFY, oauth_client)

    # The body is optional and may be empty
    try:
        body = await request.json()
    except ValueError:
        body = {}
    device_id = body.get("deviceId") if isinstance(body, dict) else None
    if not isinstance(device_id, str):
        device_id = None

    try:
        await api.pause(session.access_token, device_id)
    except UpstreamAPIError as e:
        return session.apply_to(error_response(e), settings)

    session.apply_to(response, settings)
    return OkResponse(ok=True)
