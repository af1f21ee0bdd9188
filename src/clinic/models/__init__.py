"""Pydantic models for clinic intake and admin data entities."""

from .auth import (
    AuthorizationResult,
    Authorized,
    CheckFailed,
    DenialReason,
    Denied,
    Session,
)
from .contact_form import ContactForm, field_errors_from, parse_contact_form
from .enums import (
    BookingStatus,
    DashboardPhase,
    DashboardTab,
    NotificationVariant,
    RecordTable,
    can_transition,
)
from .errors import (
    ERROR_MESSAGES,
    ERROR_RECOVERY,
    AuthorizationError,
    ClinicError,
    ErrorCode,
    ErrorResponse,
    InvalidTransitionError,
    RemoteRequestError,
    SubmissionError,
    ValidationError,
)
from .notification import Notification
from .records import (
    BookingRequest,
    BookingStatusUpdate,
    ContactMessage,
    MessageReadUpdate,
)

__all__ = [
    # Enums
    "BookingStatus",
    "DashboardPhase",
    "DashboardTab",
    "NotificationVariant",
    "RecordTable",
    "can_transition",
    # Records
    "BookingRequest",
    "BookingStatusUpdate",
    "ContactMessage",
    "MessageReadUpdate",
    # Contact form
    "ContactForm",
    "field_errors_from",
    "parse_contact_form",
    # Auth
    "AuthorizationResult",
    "Authorized",
    "CheckFailed",
    "DenialReason",
    "Denied",
    "Session",
    # Notifications
    "Notification",
    # Errors
    "AuthorizationError",
    "ClinicError",
    "ErrorCode",
    "ErrorResponse",
    "ERROR_MESSAGES",
    "ERROR_RECOVERY",
    "InvalidTransitionError",
    "RemoteRequestError",
    "SubmissionError",
    "ValidationError",
]
