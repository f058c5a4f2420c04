"""
FretDeck Media API
FastAPI Application Entry Point
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

import uvicorn
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from fretdeck.auth.rate_limit import limiter
from fretdeck.config import get_settings, settings
from fretdeck.core.errors import (
    APIError,
    api_error_handler,
    global_exception_handler,
    validation_error_handler,
)
from fretdeck.integrations.oauth.providers import PROVIDERS
from fretdeck.integrations.oauth.router import build_oauth_router
from fretdeck.integrations.spotify.app_token import AppTokenCache
from fretdeck.integrations.spotify.router import router as spotify_router
from fretdeck.integrations.youtube.router import router as youtube_router

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S"
)

logger = logging.getLogger(__name__)

# Built once: slowapi registers limits per decorated endpoint
OAUTH_ROUTERS = [build_oauth_router(provider) for provider in PROVIDERS.values()]


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """
    Application lifespan handler.
    Logs provider configuration on startup.
    """
    current = get_settings()
    logger.info("Starting %s v%s (%s)", current.app_name, current.app_version, current.environment)
    for provider in PROVIDERS.values():
        logger.info(
            "%s OAuth configured: %s",
            provider.display_name,
            provider.get_config(current).configured,
        )

    yield

    logger.info("%s shutdown complete", current.app_name)


def create_application() -> FastAPI:
    """
    Application factory.
    Creates and configures the FastAPI application.
    """
    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Backend for the FretDeck practice media manager (YouTube + Spotify)",
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        openapi_url="/openapi.json" if settings.debug else None,
        lifespan=lifespan,
    )

    # Process-wide state owned by the app
    app.state.spotify_app_tokens = AppTokenCache()

    # Configure rate limiting
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    # Error envelope
    app.add_exception_handler(APIError, api_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, global_exception_handler)

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Register routers
    register_routers(app)

    return app


def register_routers(app: FastAPI) -> None:
    """
    Register all API routers.
    """
    # Health check endpoint (always available)
    @app.get("/health", tags=["Health"])
    async def health_check():
        """Health check endpoint for monitoring."""
        return {
            "status": "healthy",
            "app": settings.app_name,
            "version": settings.app_version,
            "environment": settings.environment
        }

    # OAuth flows (one router per provider)
    for oauth_router in OAUTH_ROUTERS:
        app.include_router(oauth_router)

    # Provider APIs
    app.include_router(spotify_router)
    app.include_router(youtube_router)


# Create the application instance
app = create_application()


if __name__ == "__main__":
    uvicorn.run(
        "fretdeck.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
