"""FastAPI exception handlers for converting ClinicError to HTTP responses.

The ErrorCode-to-HTTP status mapping follows REST conventions:
- 401 Unauthorized: No session
- 403 Forbidden: Not an admin, or the role check failed
- 404 Not Found: Record not in the current collection
- 409 Conflict: Illegal booking status transition
- 422 Unprocessable Entity: Form validation failure
- 502 Bad Gateway: Record Store request failed

Usage:
    from clinic_api.exceptions import register_exception_handlers
    register_exception_handlers(app)
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.status import (
    HTTP_400_BAD_REQUEST,
    HTTP_401_UNAUTHORIZED,
    HTTP_403_FORBIDDEN,
    HTTP_404_NOT_FOUND,
    HTTP_409_CONFLICT,
    HTTP_422_UNPROCESSABLE_ENTITY,
    HTTP_502_BAD_GATEWAY,
)

from clinic.models.errors import ClinicError, ErrorCode, ValidationError

logger = logging.getLogger(__name__)

ERROR_CODE_TO_HTTP_STATUS: dict[ErrorCode, int] = {
    ErrorCode.VALIDATION_FAILED: HTTP_422_UNPROCESSABLE_ENTITY,
    ErrorCode.SUBMISSION_FAILED: HTTP_502_BAD_GATEWAY,
    ErrorCode.AUTH_REQUIRED: HTTP_401_UNAUTHORIZED,
    ErrorCode.NOT_ADMIN: HTTP_403_FORBIDDEN,
    ErrorCode.ROLE_CHECK_FAILED: HTTP_403_FORBIDDEN,
    ErrorCode.REMOTE_REQUEST_FAILED: HTTP_502_BAD_GATEWAY,
    ErrorCode.RECORD_NOT_FOUND: HTTP_404_NOT_FOUND,
    ErrorCode.INVALID_STATUS_TRANSITION: HTTP_409_CONFLICT,
}


def get_http_status_for_error(code: ErrorCode) -> int:
    """Get HTTP status code for an ErrorCode, defaulting to 400."""
    return ERROR_CODE_TO_HTTP_STATUS.get(code, HTTP_400_BAD_REQUEST)


async def clinic_error_handler(request: Request, exc: ClinicError) -> JSONResponse:
    """Convert a ClinicError to a JSON response with a mapped status code."""
    status_code = get_http_status_for_error(exc.code)
    if status_code >= 500:
        logger.warning("%s %s failed: %s", request.method, request.url.path, exc.details)

    return JSONResponse(
        status_code=status_code,
        content=exc.to_error_response().model_dump(mode="json"),
    )


async def request_validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Answer malformed request bodies with the same ErrorResponse as form errors.

    Each error is keyed by the innermost named field of its location, so a
    wrongly typed `fullName` reports under `details.fullName`.
    """
    field_errors: dict[str, str] = {}
    for error in exc.errors():
        names = [str(part) for part in error.get("loc", ()) if isinstance(part, str)]
        field = names[-1] if names else "body"
        field_errors.setdefault(field, str(error.get("msg", "Invalid value")))

    return await clinic_error_handler(request, ValidationError(field_errors))


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with the FastAPI app."""
    app.add_exception_handler(ClinicError, clinic_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(
        RequestValidationError, request_validation_error_handler  # type: ignore[arg-type]
    )
