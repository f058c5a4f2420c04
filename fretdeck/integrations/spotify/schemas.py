"""
Spotify Schemas
Response models for the Spotify proxy endpoints (camelCase for the UI).
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Serializes field names as camelCase, accepts either form on input."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SpotifyTrack(CamelModel):
    id: str = ""
    uri: str = ""
    name: str = "Untitled"
    artists: list[str] = Field(default_factory=list)
    album: str = ""
    image: str = ""
    preview_url: Optional[str] = None
    external_url: str = ""
    duration_ms: int = 0


class SpotifyPlaylist(CamelModel):
    id: str = ""
    name: str = "Untitled playlist"
    description: str = ""
    owner: str = ""
    image: str = ""
    external_url: str = ""
    track_count: int = 0


class SpotifySearchResponse(CamelModel):
    """Catalog search results."""

    tracks: list[SpotifyTrack] = Field(default_factory=list)
    playlists: list[SpotifyPlaylist] = Field(default_factory=list)


class SpotifyPlaylistTracksResponse(CamelModel):
    """One page of playlist tracks."""

    tracks: list[SpotifyTrack] = Field(default_factory=list)
    has_more: bool = False
    next_offset: int = 0


class SpotifyPlayerState(CamelModel):
    is_playing: bool = False
    progress_ms: int = 0
    duration_ms: int = 0
    track_uri: Optional[str] = None
    track_name: Optional[str] = None
    artists: list[str] = Field(default_factory=list)
    device_id: Optional[str] = None


class SpotifyPlayerStateResponse(CamelModel):
    """Current playback; ``state`` is null when nothing is active."""

    state: Optional[SpotifyPlayerState] = None


class OkResponse(BaseModel):
    ok: bool = True
