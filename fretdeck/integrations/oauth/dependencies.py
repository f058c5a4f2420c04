"""
OAuth Dependencies
FastAPI dependency factories shared by OAuth and provider API routers.
"""

from typing import Callable

from fastapi import Depends

from fretdeck.config import Settings, get_settings
from fretdeck.core.errors import ProviderNotConfiguredError
from fretdeck.integrations.oauth.client import OAuthClient
from fretdeck.integrations.oauth.providers import OAuthProvider


def oauth_client_dependency(provider: OAuthProvider) -> Callable[..., OAuthClient]:
    """Build a dependency that yields an OAuthClient for ``provider``."""

    def get_oauth_client(settings: Settings = Depends(get_settings)) -> OAuthClient:
        return OAuthClient(
            provider,
            provider.get_config(settings),
            timeout=settings.http_timeout_seconds,
        )

    return get_oauth_client


def configured_client_dependency(provider: OAuthProvider) -> Callable[..., OAuthClient]:
    """
    Like oauth_client_dependency, but rejects the request up front with
    ``<Provider> OAuth is not configured.`` when credentials are missing.
    """
    get_oauth_client = oauth_client_dependency(provider)

    def get_configured_client(
        settings: Settings = Depends(get_settings),
        client: OAuthClient = Depends(get_oauth_client),
    ) -> OAuthClient:
        if not provider.get_config(settings).configured:
            raise ProviderNotConfiguredError(provider.not_configured_message)
        return client

    return get_configured_client
