import logging

from fastapi import Request
from fastapi.responses import JSONResponse, RedirectResponse, Response

from shortener.errors import (
    AuthorizationError,
    ExternalProviderError,
    LoginRequiredError,
    NotFoundError,
    StorageError,
    ValidationError,
)

logger = logging.getLogger(__name__)

LOGIN_PAGE = "/login.html"


def create_json_error_response(status_code: int, message: str, error_type: str | None = None) -> JSONResponse:
    """Create JSON error response with optional type for machine parsing."""
    content = {"message": message}
    if error_type:
        content["type"] = error_type
    return JSONResponse(status_code=status_code, content=content)


async def user_error_handler(_: Request, exc: Exception) -> Response:
    """Handle all UserError subclasses with appropriate status codes."""
    if isinstance(exc, LoginRequiredError):
        return RedirectResponse(LOGIN_PAGE, status_code=307)

    if isinstance(exc, AuthorizationError):
        status_code = 403
        error_type = "authorization_error"
    elif isinstance(exc, NotFoundError):
        status_code = 404
        error_type = "not_found"
    elif isinstance(exc, ValidationError):
        status_code = 400
        error_type = "validation_error"
    else:
        # Default for any other UserError subclass
        status_code = 400
        error_type = "bad_request"

    return create_json_error_response(status_code=status_code, message=str(exc), error_type=error_type)


async def service_error_handler(_: Request, exc: Exception) -> Response:
    """Handle store and identity provider failures without exposing their details."""
    if isinstance(exc, ExternalProviderError):
        logger.warning("Identity provider error: %s", exc)
        return create_json_error_response(
            status_code=502, message="The identity provider could not be reached.", error_type="provider_error"
        )
    if isinstance(exc, StorageError):
        logger.error("Storage error: %s", exc)
        return create_json_error_response(status_code=500, message="Storage is unavailable.", error_type="storage_error")
    return await general_exception_handler(_, exc)


async def general_exception_handler(_: Request, exc: Exception) -> Response:
    """Handle unexpected errors (500)."""
    logger.exception("Unexpected error: %s", exc)
    return create_json_error_response(
        status_code=500, message="An unexpected error occurred.", error_type="internal_server_error"
    )
