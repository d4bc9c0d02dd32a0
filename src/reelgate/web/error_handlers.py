import logging

from fastapi import Request
from fastapi.responses import JSONResponse, Response

from reelgate.errors import (
    AccessDeniedError,
    AuthenticationError,
    NotFoundError,
    RangeNotSatisfiableError,
    ValidationError,
)

logger = logging.getLogger(__name__)


def create_json_error_response(
    status_code: int,
    message: str,
    error_type: str | None = None,
    details: str | None = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    """Create JSON error response with optional type for machine parsing."""
    content: dict[str, str | bool] = {"success": False, "message": message}
    if error_type:
        content["type"] = error_type
    if details:
        content["details"] = details
    return JSONResponse(status_code=status_code, content=content, headers=headers)


async def user_error_handler(_: Request, exc: Exception) -> Response:
    """Handle all UserError subclasses with appropriate status codes."""
    details = None
    headers = None
    # Determine the appropriate status code and type based on error
    if isinstance(exc, AuthenticationError):
        status_code = 401
        error_type = "authentication_error"
    elif isinstance(exc, AccessDeniedError):
        status_code = 403
        error_type = "access_denied"
    elif isinstance(exc, NotFoundError):
        status_code = 404
        error_type = "not_found"
        details = exc.details
    elif isinstance(exc, RangeNotSatisfiableError):
        status_code = 416
        error_type = "range_not_satisfiable"
        headers = {"Content-Range": f"bytes */{exc.size}"}
    elif isinstance(exc, ValidationError):
        status_code = 400
        error_type = "validation_error"
    else:
        # Default for any other UserError subclass
        status_code = 400
        error_type = "bad_request"

    return create_json_error_response(
        status_code=status_code, message=str(exc), error_type=error_type, details=details, headers=headers
    )


async def request_validation_handler(_: Request, exc: Exception) -> Response:
    """Report malformed request bodies as 400 instead of FastAPI's default 422."""
    logger.debug("Request validation failed: %s", exc)
    return create_json_error_response(status_code=400, message="Invalid request", error_type="validation_error")


async def general_exception_handler(_: Request, exc: Exception) -> Response:
    """Handle unexpected errors (500)."""
    logger.exception("Unexpected error: %s", exc)
    return create_json_error_response(
        status_code=500, message="An unexpected error occurred.", error_type="internal_server_error"
    )
