"""
OAuth 2.0 Token Client
Handles authorization code exchange, token refresh and client-credentials
grants against a provider's token endpoint.
"""

import base64
import logging
import time
from typing import Any, Optional

import httpx

from fretdeck.core.errors import InvalidUpstreamResponseError, UpstreamAPIError
from fretdeck.integrations.oauth.providers import OAuthProvider
from fretdeck.integrations.oauth.schemas import OAuthConfig, TokenSet

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 10.0


def now_ms() -> int:
    """Current wall-clock time in epoch milliseconds."""
    return int(time.time() * 1000)


class OAuthClient:
    """
    OAuth 2.0 client for one provider.

    Handles:
    - Authorization code exchange
    - Access token refresh
    - Client-credentials (app) tokens

    No retries: any failure is fatal to the current request.
    """

    def __init__(
        self,
        provider: OAuthProvider,
        config: OAuthConfig,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ):
        self.provider = provider
        self.client_id = config.client_id or ""
        self.client_secret = config.client_secret or ""
        self.timeout = timeout

    def _get_auth_header(self) -> str:
        """Generate Basic auth header for client-credentials requests."""
        credentials = f"{self.client_id}:{self.client_secret}"
        encoded = base64.b64encode(credentials.encode()).decode()
        return f"Basic {encoded}"

    async def _post_token_request(
        self,
        data: dict[str, str],
        failure_message: str,
        headers: Optional[dict[str, str]] = None,
    ) -> httpx.Response:
        request_headers = {"Content-Type": "application/x-www-form-urlencoded"}
        if headers:
            request_headers.update(headers)

        async with httpx.AsyncClient(timeout=self.timeout) as client:
            response = await client.post(
                self.provider.token_url,
                headers=request_headers,
                data=data,
            )

        if not response.is_success:
            logger.error(
                "%s token endpoint error (grant=%s): status=%s body=%s",
                self.provider.display_name,
                data.get("grant_type"),
                response.status_code,
                response.text,
            )
            raise UpstreamAPIError(
                failure_message,
                status_code=500,
                details=response.text,
            )

        return response

    async def exchange_code_for_tokens(self, code: str, redirect_uri: str) -> TokenSet:
        """
        Exchange authorization code for access and refresh tokens.

        Args:
            code: Authorization code from the provider callback
            redirect_uri: The same redirect URI sent with the authorize request

        Returns:
            Parsed TokenSet (refresh_token may be absent)

        Raises:
            UpstreamAPIError: If the token endpoint returns non-2xx
            InvalidUpstreamResponseError: If the body is not a usable token payload
        """
        response = await self._post_token_request(
            {
                "code": code,
                "client_id": self.client_id,
                "client_secret": self.client_secret,
                "redirect_uri": redirect_uri,
                "grant_type": "authorization_code",
            },
            failure_message="Failed to exchange OAuth code.",
        )
        return parse_token_response(response)

    async def refresh_access_token(self, refresh_token: str) -> TokenSet:
        """
        Refresh an access token using a refresh token.

        Args:
            refresh_token: Current refresh token from the session cookie

        Returns:
            New TokenSet; refresh_token is only set if the provider rotated it

        Raises:
            UpstreamAPIError: If refresh fails
            InvalidUpstreamResponseError: If the body is not a usable token payload
        """
        response = await self._post_token_request(
            {
                "grant_type": "refresh_token",
                "refresh_token": refresh_token,
                "client_id": self.client_id,
                "client_secret": self.client_secret,
            },
            failure_message="Failed to refresh access token.",
        )
        return parse_token_response(response)

    async def fetch_client_credentials_token(
        self,
        failure_message: str = "Failed to fetch access token.",
        invalid_response_message: str = "Invalid token response.",
        invalid_payload_message: str = "Invalid token payload.",
    ) -> TokenSet:
        """Request an app-level token with the client-credentials grant."""
        response = await self._post_token_request(
            {"grant_type": "client_credentials"},
            failure_message=failure_message,
            headers={"Authorization": self._get_auth_header()},
        )
        return parse_token_response(
            response,
            invalid_response_message=invalid_response_message,
            invalid_payload_message=invalid_payload_message,
        )


def parse_token_response(
    response: httpx.Response,
    invalid_response_message: str = "Invalid token response.",
    invalid_payload_message: str = "Invalid token payload.",
) -> TokenSet:
    """
    Parse a token endpoint response into a TokenSet.

    Raises:
        InvalidUpstreamResponseError: On JSON parse failure, or when
            access_token/expires_in are missing
    """
    try:
        payload: Any = response.json() if response.content else None
    except ValueError:
        raise InvalidUpstreamResponseError(invalid_response_message, details=response.text)

    if not isinstance(payload, dict):
        raise InvalidUpstreamResponseError(invalid_payload_message, details=payload)

    access_token = payload.get("access_token")
    try:
        expires_in = int(payload.get("expires_in") or 0)
    except (TypeError, ValueError):
        expires_in = 0

    if not access_token or expires_in <= 0:
        raise InvalidUpstreamResponseError(invalid_payload_message, details=payload)

    return TokenSet(
        access_token=access_token,
        refresh_token=payload.get("refresh_token") or None,
        expires_in=expires_in,
        expires_at_ms=calculate_expiry_ms(expires_in),
    )


def calculate_expiry_ms(expires_in: int) -> int:
    """
    Calculate token expiry from expires_in seconds.

    Args:
        expires_in: Token lifetime in seconds

    Returns:
        Expiry as epoch milliseconds (the format stored in the expiry cookie)
    """
    return now_ms() + expires_in * 1000
