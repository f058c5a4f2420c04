"""
YouTube Schemas
Response models for the YouTube playlist endpoint.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class YouTubePlaylistVideo(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    title: str = "Untitled"
    description: Optional[str] = None
    thumbnail_url: str = ""


class YouTubePlaylistResponse(BaseModel):
    """Playlist details with (up to 50) videos."""

    id: str
    title: str = "Untitled"
    description: Optional[str] = None
    videos: list[YouTubePlaylistVideo] = Field(default_factory=list)
