"""
OAuth Integration Package
Generic OAuth 2.0 authorization-code flow driven by provider descriptors.
"""

from fretdeck.integrations.oauth.client import OAuthClient
from fretdeck.integrations.oauth.providers import PROVIDERS, SPOTIFY, YOUTUBE, OAuthProvider
from fretdeck.integrations.oauth.redirects import get_base_url, sanitize_redirect
from fretdeck.integrations.oauth.router import build_oauth_router
from fretdeck.integrations.oauth.session import SessionAccess, resolve_session

__all__ = [
    "OAuthClient",
    "OAuthProvider",
    "PROVIDERS",
    "SPOTIFY",
    "YOUTUBE",
    "SessionAccess",
    "build_oauth_router",
    "get_base_url",
    "resolve_session",
    "sanitize_redirect",
]
