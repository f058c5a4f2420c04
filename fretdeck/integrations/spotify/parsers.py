"""
Spotify Response Parsers
Map raw Spotify Web API objects to the shapes the UI consumes.

Spotify payloads are loosely shaped (null tracks in playlists, missing
images), so every accessor tolerates missing keys.
"""

from typing import Any, Optional

from fretdeck.integrations.spotify.schemas import (
    SpotifyPlayerState,
    SpotifyPlaylist,
    SpotifyTrack,
)


def _dict(value: Any) -> dict:
    return value if isinstance(value, dict) else {}


def _artist_names(artists: Any) -> list[str]:
    if not isinstance(artists, list):
        return []
    return [a["name"] for a in artists if isinstance(a, dict) and a.get("name")]


def _album_image(album: dict) -> str:
    # Prefer the medium (second) image, fall back to the largest
    images = album.get("images")
    if not isinstance(images, list):
        return ""
    for index in (1, 0):
        if len(images) > index:
            url = _dict(images[index]).get("url")
            if url:
                return url
    return ""


def parse_track(item: Any) -> SpotifyTrack:
    item = _dict(item)
    album = _dict(item.get("album"))
    return SpotifyTrack(
        id=item.get("id") or "",
        uri=item.get("uri") or "",
        name=item.get("name") or "Untitled",
        artists=_artist_names(item.get("artists")),
        album=album.get("name") or "",
        image=_album_image(album),
        preview_url=item.get("preview_url") or None,
        external_url=_dict(item.get("external_urls")).get("spotify") or "",
        duration_ms=item.get("duration_ms") or 0,
    )


def parse_playlist(item: Any) -> SpotifyPlaylist:
    item = _dict(item)
    images = item.get("images")
    cover = _dict(images[0]) if isinstance(images, list) and images else {}
    return SpotifyPlaylist(
        id=item.get("id") or "",
        name=item.get("name") or "Untitled playlist",
        description=item.get("description") or "",
        owner=_dict(item.get("owner")).get("display_name") or "",
        image=cover.get("url") or "",
        external_url=_dict(item.get("external_urls")).get("spotify") or "",
        track_count=_dict(item.get("tracks")).get("total") or 0,
    )


def parse_search_results(data: Any) -> tuple[list[SpotifyTrack], list[SpotifyPlaylist]]:
    """
    Parse a /v1/search response.

    Returns:
        (tracks, playlists); Spotify returns null entries for removed
        playlists, which are skipped
    """
    data = _dict(data)
    track_items = _dict(data.get("tracks")).get("items")
    playlist_items = _dict(data.get("playlists")).get("items")

    tracks = [parse_track(item) for item in track_items] if isinstance(track_items, list) else []
    playlists = (
        [parse_playlist(item) for item in playlist_items if item]
        if isinstance(playlist_items, list)
        else []
    )
    return tracks, playlists


def parse_playlist_tracks(data: Any) -> list[SpotifyTrack]:
    """Parse /v1/playlists/{id}/tracks items, dropping entries without id or uri."""
    items = _dict(data).get("items")
    if not isinstance(items, list):
        return []

    tracks = []
    for item in items:
        track = _dict(item).get("track")
        if not track:
            continue
        parsed = parse_track(track)
        if parsed.id and parsed.uri:
            tracks.append(parsed)
    return tracks


def parse_player_state(data: Any) -> Optional[SpotifyPlayerState]:
    if not isinstance(data, dict):
        return None

    item = _dict(data.get("item"))
    return SpotifyPlayerState(
        is_playing=bool(data.get("is_playing")),
        progress_ms=data.get("progress_ms") or 0,
        duration_ms=item.get("duration_ms") or 0,
        track_uri=item.get("uri") or None,
        track_name=item.get("name") or None,
        artists=_artist_names(item.get("artists")),
        device_id=_dict(data.get("device")).get("id") or None,
    )
