"""
OAuth Router Factory
Authorize, callback, status and logout endpoints for one provider.

Each provider gets its own router built from its OAuthProvider descriptor:

    GET       /api/{provider}/auth      -> 302 to the consent screen
    GET       /api/{provider}/callback  -> 302 back into the app
    GET       /api/{provider}/status    -> {configured, authorized}
    POST|GET  /api/{provider}/logout    -> {ok: true}
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Request, Response, status
from fastapi.responses import RedirectResponse

from fretdeck.auth.audit import log_oauth_event
from fretdeck.auth.rate_limit import client_address, limiter, oauth_rate_limit
from fretdeck.config import Settings, get_settings
from fretdeck.core.errors import OAuthCallbackError, ProviderNotConfiguredError
from fretdeck.integrations.oauth.client import OAuthClient
from fretdeck.integrations.oauth.cookies import (
    clear_flow_cookies,
    clear_session_cookies,
    read_cookie,
    set_flow_cookies,
    set_session_cookies,
)
from fretdeck.integrations.oauth.dependencies import oauth_client_dependency
from fretdeck.integrations.oauth.providers import OAuthProvider
from fretdeck.integrations.oauth.redirects import get_base_url, sanitize_redirect
from fretdeck.integrations.oauth.schemas import ErrorResponse, LogoutResponse, OAuthStatusResponse
from fretdeck.integrations.oauth.session import has_session
from fretdeck.integrations.oauth.state import generate_state, states_match


def build_oauth_router(provider: OAuthProvider) -> APIRouter:
    """
    Build the OAuth router for a provider.

    Args:
        provider: Provider descriptor (URLs, scopes, cookie prefix, default path)

    Returns:
        APIRouter mounted under ``/api/{provider.name}``
    """
    router = APIRouter(
        prefix=f"/api/{provider.name}",
        tags=[f"{provider.display_name} OAuth"],
    )
    get_oauth_client = oauth_client_dependency(provider)

    # =========================================================================
    # Authorize
    # =========================================================================

    async def authorize(
        request: Request,
        redirect: Optional[str] = Query(
            None,
            description="Same-origin path to return to after login",
        ),
        settings: Settings = Depends(get_settings),
    ) -> RedirectResponse:
        """
        Start the authorization-code flow.

        Sets the state and redirect-path cookies and redirects to the
        provider's consent screen.
        """
        config = provider.get_config(settings)
        if not config.configured:
            raise ProviderNotConfiguredError(provider.not_configured_message)

        base_url = get_base_url(request)
        redirect_uri = provider.resolve_redirect_uri(config, base_url)
        state = generate_state()

        # First candidate that sanitizes wins
        redirect_path = (
            sanitize_redirect(redirect, base_url)
            or sanitize_redirect(request.headers.get("referer"), base_url)
            or provider.default_redirect
        )

        response = RedirectResponse(
            provider.authorization_url(config.client_id, redirect_uri, state),
            status_code=status.HTTP_302_FOUND,
        )
        set_flow_cookies(response, provider, settings, state, redirect_path)

        log_oauth_event("authorize", provider.name, ip_address=client_address(request))
        return response

    # slowapi scopes limits by function name
    authorize.__name__ = f"{provider.name}_authorize"
    router.add_api_route(
        "/auth",
        limiter.limit(oauth_rate_limit)(authorize),
        methods=["GET"],
        status_code=status.HTTP_302_FOUND,
        response_class=RedirectResponse,
        responses={500: {"model": ErrorResponse}},
        summary=f"Start {provider.display_name} OAuth flow",
    )

    # =========================================================================
    # Callback
    # =========================================================================

    @router.get(
        "/callback",
        status_code=status.HTTP_302_FOUND,
        response_class=RedirectResponse,
        responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
        summary=f"Handle {provider.display_name} OAuth callback",
    )
    async def callback(
        request: Request,
        code: Optional[str] = Query(None, description="Authorization code"),
        state: Optional[str] = Query(None, description="State token for CSRF validation"),
        error: Optional[str] = Query(None, description="Error reported by the provider"),
        settings: Settings = Depends(get_settings),
        client: OAuthClient = Depends(get_oauth_client),
    ) -> RedirectResponse:
        """
        Complete the flow: validate state, exchange the code, store the
        session cookies and send the user back to where they started.
        """
        config = provider.get_config(settings)
        if not config.configured:
            raise ProviderNotConfiguredError(provider.not_configured_message)

        ip_address = client_address(request)

        if error:
            log_oauth_event("callback", provider.name, ip_address, success=False, details=error)
            raise OAuthCallbackError(error)

        if not code:
            raise OAuthCallbackError("Missing authorization code.")

        if not states_match(state, read_cookie(request, provider.state_cookie)):
            log_oauth_event("callback", provider.name, ip_address, success=False, details="state mismatch")
            raise OAuthCallbackError("Invalid OAuth state.")

        base_url = get_base_url(request)
        tokens = await client.exchange_code_for_tokens(
            code,
            provider.resolve_redirect_uri(config, base_url),
        )

        # Providers may omit the refresh token on re-consent; keep the old one
        if not tokens.refresh_token:
            tokens = tokens.model_copy(
                update={"refresh_token": read_cookie(request, provider.refresh_token_cookie)}
            )

        redirect_path = (
            sanitize_redirect(read_cookie(request, provider.redirect_cookie), base_url)
            or provider.default_redirect
        )

        response = RedirectResponse(f"{base_url}{redirect_path}", status_code=status.HTTP_302_FOUND)
        set_session_cookies(response, provider, settings, tokens)
        clear_flow_cookies(response, provider, settings)

        log_oauth_event("callback", provider.name, ip_address)
        return response

    # =========================================================================
    # Status
    # =========================================================================

    @router.get(
        "/status",
        response_model=OAuthStatusResponse,
        summary=f"Get {provider.display_name} connection status",
    )
    async def get_status(
        request: Request,
        settings: Settings = Depends(get_settings),
    ) -> OAuthStatusResponse:
        """Report whether the server is configured and the session holds tokens."""
        return OAuthStatusResponse(
            configured=provider.get_config(settings).configured,
            authorized=has_session(request, provider),
        )

    # =========================================================================
    # Logout
    # =========================================================================

    async def logout(
        request: Request,
        response: Response,
        settings: Settings = Depends(get_settings),
    ) -> LogoutResponse:
        """Clear session cookies. Idempotent."""
        clear_session_cookies(response, provider, settings)
        log_oauth_event("logout", provider.name, ip_address=client_address(request))
        return LogoutResponse(ok=True)

    # GET is a convenience for browsers hitting the endpoint directly
    router.add_api_route(
        "/logout",
        logout,
        methods=["POST", "GET"],
        response_model=LogoutResponse,
        summary=f"Log out of {provider.display_name}",
    )

    return router
