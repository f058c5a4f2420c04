"""
OAuth Schemas
Request/response models for the OAuth endpoints.
"""

from typing import Any, Optional

from pydantic import BaseModel, Field


# =============================================================================
# Response Models
# =============================================================================

class OAuthStatusResponse(BaseModel):
    """Provider configuration and session status."""

    configured: bool = Field(
        ...,
        description="Whether the server holds client credentials for the provider"
    )
    authorized: bool = Field(
        ...,
        description="Whether the browser session holds an access or refresh token"
    )


class LogoutResponse(BaseModel):
    """Response after clearing session cookies."""

    ok: bool = True


class ErrorResponse(BaseModel):
    """JSON error envelope (documentation only)."""

    error: str
    details: Optional[Any] = None


# =============================================================================
# Internal Models (for service layer)
# =============================================================================

class OAuthConfig(BaseModel):
    """Client credentials for one provider, read per request."""

    client_id: Optional[str] = None
    client_secret: Optional[str] = None
    redirect_uri: Optional[str] = None
    configured: bool = False


class TokenSet(BaseModel):
    """Tokens parsed from a provider token endpoint response."""

    access_token: str
    refresh_token: Optional[str] = None
    expires_in: int
    expires_at_ms: int
