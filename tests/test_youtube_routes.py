import time

import httpx
import respx

from fretdeck.config import get_settings
from fretdeck.integrations.oauth.providers import YOUTUBE

from .utils import cookie_header, make_settings, parse_set_cookies

API = "https://www.googleapis.com/youtube/v3"


def _live_session() -> dict[str, str]:
    expires_at = int(time.time() * 1000) + 3600 * 1000
    return cookie_header(yt_access_token="yt-token", yt_token_expires_at=str(expires_at))


def _playlist_item(video_id, title="Lesson", thumbnails=None) -> dict:
    return {
        "snippet": {
            "title": title,
            "description": "Practice along",
            "resourceId": {"kind": "youtube#video", "videoId": video_id},
            "thumbnails": thumbnails or {},
        }
    }


@respx.mock
def test_playlist_with_videos(client):
    playlists_route = respx.get(f"{API}/playlists").mock(
        return_value=httpx.Response(
            200,
            json={"items": [{"snippet": {"title": "Blues Licks", "description": "12 bar"}}]},
        )
    )
    items_route = respx.get(f"{API}/playlistItems").mock(
        return_value=httpx.Response(
            200,
            json={
                "items": [
                    _playlist_item(
                        "v1",
                        "Lick 1",
                        {"medium": {"url": "https://i.ytimg.com/m1"}, "default": {"url": "https://i.ytimg.com/d1"}},
                    ),
                    _playlist_item(None, "Deleted video"),
                    _playlist_item("v2", "Lick 2", {"default": {"url": "https://i.ytimg.com/d2"}}),
                ]
            },
        )
    )

    response = client.get("/api/youtube/playlist", params={"playlistId": "PL123"}, headers=_live_session())

    assert response.status_code == 200
    assert response.json() == {
        "id": "PL123",
        "title": "Blues Licks",
        "description": "12 bar",
        "videos": [
            {
                "id": "v1",
                "title": "Lick 1",
                "description": "Practice along",
                "thumbnailUrl": "https://i.ytimg.com/m1",
            },
            {
                "id": "v2",
                "title": "Lick 2",
                "description": "Practice along",
                "thumbnailUrl": "https://i.ytimg.com/d2",
            },
        ],
    }
    assert playlists_route.calls.last.request.headers["authorization"] == "Bearer yt-token"
    assert playlists_route.calls.last.request.url.params["id"] == "PL123"
    items_params = items_route.calls.last.request.url.params
    assert items_params["playlistId"] == "PL123"
    assert items_params["maxResults"] == "50"


@respx.mock
def test_playlist_without_items(client):
    respx.get(f"{API}/playlists").mock(
        return_value=httpx.Response(200, json={"items": [{"snippet": {"title": "Warmups"}}]})
    )
    items_route = respx.get(f"{API}/playlistItems")

    response = client.get(
        "/api/youtube/playlist",
        params={"playlistId": "PL123", "includeItems": "false"},
        headers=_live_session(),
    )

    assert response.status_code == 200
    assert response.json()["videos"] == []
    assert not items_route.called


@respx.mock
def test_playlist_not_found(client):
    respx.get(f"{API}/playlists").mock(return_value=httpx.Response(200, json={"items": []}))

    response = client.get("/api/youtube/playlist", params={"playlistId": "PLnope"}, headers=_live_session())

    assert response.status_code == 404
    assert response.json() == {"error": "Playlist not found or not accessible."}


@respx.mock
def test_playlist_refreshes_expired_session(client):
    respx.post(YOUTUBE.token_url).mock(
        return_value=httpx.Response(200, json={"access_token": "new-yt-token", "expires_in": 3599})
    )
    playlists_route = respx.get(f"{API}/playlists").mock(
        return_value=httpx.Response(200, json={"items": [{"snippet": {"title": "Chords"}}]})
    )

    response = client.get(
        "/api/youtube/playlist",
        params={"playlistId": "PL1", "includeItems": "false"},
        headers=cookie_header(yt_refresh_token="yt-refresh"),
    )

    assert response.status_code == 200
    assert playlists_route.calls.last.request.headers["authorization"] == "Bearer new-yt-token"
    cookies = parse_set_cookies(response)
    assert cookies["yt_access_token"].value == "new-yt-token"
    assert cookies["yt_access_token"]["max-age"] == "3599"


@respx.mock
def test_playlist_upstream_error(client):
    respx.get(f"{API}/playlists").mock(return_value=httpx.Response(403, text="quotaExceeded"))

    response = client.get("/api/youtube/playlist", params={"playlistId": "PL1"}, headers=_live_session())

    assert response.status_code == 403
    assert response.json() == {"error": "YouTube API error.", "details": "quotaExceeded"}


def test_playlist_requires_id(client):
    response = client.get("/api/youtube/playlist", headers=_live_session())

    assert response.status_code == 400
    assert response.json() == {"error": "Missing playlistId."}


def test_playlist_requires_session(client):
    response = client.get("/api/youtube/playlist", params={"playlistId": "PL1"})

    assert response.status_code == 401
    assert response.json() == {"error": "YouTube account not connected."}


def test_playlist_unconfigured(app, client):
    app.dependency_overrides[get_settings] = lambda: make_settings(youtube_client_id="")

    response = client.get("/api/youtube/playlist", params={"playlistId": "PL1"}, headers=_live_session())

    assert response.status_code == 500
    assert response.json() == {"error": "YouTube OAuth is not configured."}
