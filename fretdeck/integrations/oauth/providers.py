"""
OAuth Provider Descriptors
One descriptor per provider; the generic router and session helpers are
built from these instead of duplicating handlers per provider.
"""

from dataclasses import dataclass, field
from urllib.parse import urlencode

from fretdeck.config import Settings
from fretdeck.integrations.oauth.schemas import OAuthConfig

# Shared lifetimes (seconds)
STATE_COOKIE_MAX_AGE = 600
REFRESH_TOKEN_COOKIE_MAX_AGE = 60 * 60 * 24 * 30


@dataclass(frozen=True)
class OAuthProvider:
    """Static description of an OAuth 2.0 authorization-code provider."""

    name: str
    display_name: str
    authorize_url: str
    token_url: str
    scopes: tuple[str, ...]
    cookie_prefix: str
    default_redirect: str
    extra_params: dict[str, str] = field(default_factory=dict)

    # ------------------------------------------------------------------
    # Cookie names
    # ------------------------------------------------------------------

    @property
    def state_cookie(self) -> str:
        return f"{self.cookie_prefix}_oauth_state"

    @property
    def redirect_cookie(self) -> str:
        return f"{self.cookie_prefix}_oauth_redirect"

    @property
    def access_token_cookie(self) -> str:
        return f"{self.cookie_prefix}_access_token"

    @property
    def refresh_token_cookie(self) -> str:
        return f"{self.cookie_prefix}_refresh_token"

    @property
    def expires_at_cookie(self) -> str:
        return f"{self.cookie_prefix}_token_expires_at"

    @property
    def session_cookies(self) -> tuple[str, str, str]:
        return (self.access_token_cookie, self.refresh_token_cookie, self.expires_at_cookie)

    # ------------------------------------------------------------------
    # Paths and messages
    # ------------------------------------------------------------------

    @property
    def callback_path(self) -> str:
        return f"/api/{self.name}/callback"

    @property
    def not_configured_message(self) -> str:
        return f"{self.display_name} OAuth is not configured."

    @property
    def not_connected_message(self) -> str:
        return f"{self.display_name} account not connected."

    def get_config(self, settings: Settings) -> OAuthConfig:
        """
        Read this provider's client credentials from settings.

        Args:
            settings: Application settings (read per request)

        Returns:
            OAuthConfig with ``configured`` true iff id and secret are both set
        """
        client_id = getattr(settings, f"{self.name}_client_id") or None
        client_secret = getattr(settings, f"{self.name}_client_secret") or None
        redirect_uri = getattr(settings, f"{self.name}_redirect_uri") or None
        return OAuthConfig(
            client_id=client_id,
            client_secret=client_secret,
            redirect_uri=redirect_uri,
            configured=bool(client_id and client_secret),
        )

    def resolve_redirect_uri(self, config: OAuthConfig, base_url: str) -> str:
        """Configured override, else the callback route on our own origin."""
        return config.redirect_uri or f"{base_url}{self.callback_path}"

    def authorization_url(self, client_id: str, redirect_uri: str, state: str) -> str:
        """
        Build the provider consent-screen URL.

        Args:
            client_id: OAuth client id
            redirect_uri: Callback URI registered with the provider
            state: CSRF protection token (also stored in a cookie)

        Returns:
            Full authorization URL to redirect the user to
        """
        params = {
            "client_id": client_id,
            "redirect_uri": redirect_uri,
            "response_type": "code",
            "scope": " ".join(self.scopes),
            "state": state,
            **self.extra_params,
        }
        return f"{self.authorize_url}?{urlencode(params)}"


YOUTUBE = OAuthProvider(
    name="youtube",
    display_name="YouTube",
    authorize_url="https://accounts.google.com/o/oauth2/v2/auth",
    token_url="https://oauth2.googleapis.com/token",
    scopes=("https://www.googleapis.com/auth/youtube.readonly",),
    cookie_prefix="yt",
    default_redirect="/settings",
    extra_params={
        "access_type": "offline",
        "prompt": "consent",
        "include_granted_scopes": "true",
    },
)

SPOTIFY = OAuthProvider(
    name="spotify",
    display_name="Spotify",
    authorize_url="https://accounts.spotify.com/authorize",
    token_url="https://accounts.spotify.com/api/token",
    scopes=(
        "playlist-read-private",
        "playlist-read-collaborative",
        "user-read-playback-state",
        "user-read-currently-playing",
        "user-modify-playback-state",
    ),
    cookie_prefix="sp",
    default_redirect="/spotify",
    extra_params={"show_dialog": "false"},
)

PROVIDERS: dict[str, OAuthProvider] = {
    YOUTUBE.name: YOUTUBE,
    SPOTIFY.name: SPOTIFY,
}