"""
Error Handling Utilities
Exception taxonomy and the JSON error envelope returned to the UI.

Every user-visible failure is rendered as ``{"error": <message>}`` with an
optional ``details`` field and a non-2xx status.
"""

import logging
from typing import Any, Optional

from fastapi import HTTPException, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.requests import Request

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "An unexpected error occurred."
INVALID_PARAMETERS_MESSAGE = "Invalid request parameters."


class APIError(Exception):
    """Base class for errors rendered as JSON error bodies."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        details: Optional[Any] = None,
    ):
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        self.details = details
        super().__init__(self.message)


class ProviderNotConfiguredError(APIError):
    """Server holds no client credentials for a provider."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


class InvalidRequestError(APIError):
    """Missing or unusable request parameters."""

    status_code = status.HTTP_400_BAD_REQUEST


class OAuthCallbackError(APIError):
    """Provider callback failed validation (error param, code, state)."""

    status_code = status.HTTP_400_BAD_REQUEST


class AccountNotConnectedError(APIError):
    """No usable user session for a provider."""

    status_code = status.HTTP_401_UNAUTHORIZED


class UpstreamAPIError(APIError):
    """Provider responded with a non-2xx status."""

    status_code = status.HTTP_502_BAD_GATEWAY


class InvalidUpstreamResponseError(APIError):
    """Provider responded with a body we could not parse or use."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


def error_response(exc: APIError) -> JSONResponse:
    """
    Build the JSON error envelope for an APIError.

    Args:
        exc: The error to render

    Returns:
        JSONResponse with ``error`` and, when present, ``details``
    """
    content: dict[str, Any] = {"error": exc.message}
    if exc.details is not None:
        content["details"] = exc.details
    return JSONResponse(status_code=exc.status_code, content=content)


async def api_error_handler(_request: Request, exc: APIError) -> JSONResponse:
    """Exception handler registered for APIError and its subclasses."""
    if exc.status_code >= 500:
        logger.error("API error [%s]: %s", type(exc).__name__, exc.message)
    else:
        logger.info("API error [%s]: %s", type(exc).__name__, exc.message)
    return error_response(exc)


async def validation_error_handler(_request: Request, exc: RequestValidationError) -> JSONResponse:
    """Render query/body validation failures in the standard error envelope."""
    logger.info("Request validation failed: %s", exc.errors())
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "error": INVALID_PARAMETERS_MESSAGE,
            "details": jsonable_encoder(exc.errors()),
        },
    )


async def global_exception_handler(_request: Request, exc: Exception) -> JSONResponse:
    """
    Global exception handler for FastAPI.

    Catches all unhandled exceptions and returns a sanitized error response.
    Excludes HTTPException (intentional responses) and ValidationError (FastAPI validation).
    """
    # Don't handle HTTPException - those are intentional responses
    if isinstance(exc, HTTPException):
        raise exc

    # RequestValidationError has its own handler
    if isinstance(exc, RequestValidationError):
        raise exc

    logger.error("Unhandled error: %s", str(exc), exc_info=exc)

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": INTERNAL_ERROR_MESSAGE},
    )
