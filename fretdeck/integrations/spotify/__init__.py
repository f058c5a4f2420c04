"""
Spotify Integration Package
Catalog search with an app token, playlist/player calls with the user session.
"""

from fretdeck.integrations.spotify.app_token import AppTokenCache
from fretdeck.integrations.spotify.client import SpotifyClient
from fretdeck.integrations.spotify.router import router

__all__ = [
    "router",
    "AppTokenCache",
    "SpotifyClient",
]
