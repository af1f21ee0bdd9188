"""Standard error codes for the clinic backend.

Every failure surfaced by the intake form, the admin gate or the Record Store
client carries one of these codes so the HTTP layer can map it consistently.
"""

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict


class ErrorCode(str, Enum):
    """Standard error codes."""

    # Intake errors
    VALIDATION_FAILED = "ERR_VALIDATION"
    SUBMISSION_FAILED = "ERR_SUBMISSION"

    # Gate errors
    AUTH_REQUIRED = "ERR_AUTH_001"
    NOT_ADMIN = "ERR_AUTH_002"
    ROLE_CHECK_FAILED = "ERR_AUTH_003"

    # Record Store errors
    REMOTE_REQUEST_FAILED = "ERR_REMOTE_001"
    RECORD_NOT_FOUND = "ERR_REMOTE_002"
    INVALID_STATUS_TRANSITION = "ERR_REMOTE_003"


# Human-readable error messages
ERROR_MESSAGES: dict[ErrorCode, str] = {
    ErrorCode.VALIDATION_FAILED: "Some form fields are invalid",
    ErrorCode.SUBMISSION_FAILED: "Failed to submit. Please try again.",
    ErrorCode.AUTH_REQUIRED: "Sign in required to access the dashboard",
    ErrorCode.NOT_ADMIN: "Admin role required to access the dashboard",
    ErrorCode.ROLE_CHECK_FAILED: "Could not verify admin role",
    ErrorCode.REMOTE_REQUEST_FAILED: "Request to the record store failed",
    ErrorCode.RECORD_NOT_FOUND: "Record not found",
    ErrorCode.INVALID_STATUS_TRANSITION: "Invalid status transition",
}

# Recovery suggestions for clients
ERROR_RECOVERY: dict[ErrorCode, str] = {
    ErrorCode.VALIDATION_FAILED: "Correct the highlighted fields and submit again",
    ErrorCode.SUBMISSION_FAILED: "Submit the form again",
    ErrorCode.AUTH_REQUIRED: "Sign in at the login page",
    ErrorCode.NOT_ADMIN: "Sign in with an admin account",
    ErrorCode.ROLE_CHECK_FAILED: "Sign in again",
    ErrorCode.REMOTE_REQUEST_FAILED: "Repeat the action",
    ErrorCode.RECORD_NOT_FOUND: "Refresh the dashboard",
    ErrorCode.INVALID_STATUS_TRANSITION: "Refresh the dashboard to see the current status",
}


class ErrorResponse(BaseModel):
    """Standard JSON body for error responses."""

    model_config = ConfigDict(strict=True)

    success: bool = False
    error_code: ErrorCode
    message: str
    recovery: str
    details: Optional[dict[str, Any]] = None

    @classmethod
    def from_code(
        cls,
        code: ErrorCode,
        details: Optional[dict[str, Any]] = None,
    ) -> "ErrorResponse":
        """Create an ErrorResponse from an error code.

        Args:
            code: The error code
            details: Optional additional context about the error

        Returns:
            An ErrorResponse with the message and recovery hint for the code.
        """
        return cls(
            error_code=code,
            message=ERROR_MESSAGES[code],
            recovery=ERROR_RECOVERY[code],
            details=details,
        )


class ClinicError(Exception):
    """Base exception for clinic operations.

    Can be caught and converted to an ErrorResponse for HTTP responses.
    """

    def __init__(
        self,
        code: ErrorCode,
        details: Optional[dict[str, Any]] = None,
    ):
        self.code = code
        self.message = ERROR_MESSAGES[code]
        self.recovery = ERROR_RECOVERY[code]
        self.details = details
        super().__init__(self.message)

    def to_error_response(self) -> ErrorResponse:
        """Convert this exception to an ErrorResponse."""
        return ErrorResponse.from_code(self.code, self.details)


class ValidationError(ClinicError):
    """Field-scoped form validation failure. Blocks submission."""

    def __init__(self, field_errors: dict[str, str]):
        self.field_errors = dict(field_errors)
        super().__init__(ErrorCode.VALIDATION_FAILED, details=self.field_errors)


class RemoteRequestError(ClinicError):
    """Non-2xx response or transport failure talking to the Record Store.

    status_code is None when the request never produced a response.
    """

    def __init__(
        self,
        operation: str,
        table: str | None = None,
        status_code: int | None = None,
        reason: str | None = None,
    ):
        self.operation = operation
        self.table = table
        self.status_code = status_code
        self.reason = reason
        details: dict[str, Any] = {"operation": operation}
        if table:
            details["table"] = table
        if status_code is not None:
            details["status_code"] = status_code
        if reason:
            details["reason"] = reason
        super().__init__(ErrorCode.REMOTE_REQUEST_FAILED, details=details)

    @property
    def is_network_error(self) -> bool:
        return self.status_code is None


class SubmissionError(ClinicError):
    """Intake insert failed. Form contents are kept for a retry."""

    def __init__(self, cause: RemoteRequestError):
        self.cause = cause
        super().__init__(ErrorCode.SUBMISSION_FAILED, details=cause.details)


class AuthorizationError(ClinicError):
    """Admin gate refused access. The client must go to redirect_to."""

    def __init__(self, code: ErrorCode, redirect_to: str):
        self.redirect_to = redirect_to
        super().__init__(code, details={"redirect_to": redirect_to})


class InvalidTransitionError(ClinicError):
    """Requested booking status change is not a legal transition."""

    def __init__(self, record_id: str, current: str | None, target: str):
        self.record_id = record_id
        details: dict[str, Any] = {"record_id": record_id, "target": target}
        if current is None:
            super().__init__(ErrorCode.RECORD_NOT_FOUND, details=details)
        else:
            details["current"] = current
            super().__init__(ErrorCode.INVALID_STATUS_TRANSITION, details=details)
