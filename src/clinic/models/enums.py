"""Enumeration types for clinic data models."""

from enum import Enum


class BookingStatus(str, Enum):
    """Workflow status of a booking request."""

    PENDING = "pending"
    CONFIRMED = "confirmed"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


# Legal forward transitions; completed and cancelled are terminal
BOOKING_TRANSITIONS: dict[BookingStatus, frozenset[BookingStatus]] = {
    BookingStatus.PENDING: frozenset({BookingStatus.CONFIRMED, BookingStatus.CANCELLED}),
    BookingStatus.CONFIRMED: frozenset({BookingStatus.COMPLETED, BookingStatus.CANCELLED}),
    BookingStatus.COMPLETED: frozenset(),
    BookingStatus.CANCELLED: frozenset(),
}


def can_transition(current: BookingStatus, target: BookingStatus) -> bool:
    """Check whether a booking may move from current to target status."""
    return target in BOOKING_TRANSITIONS[current]


class RecordTable(str, Enum):
    """Record Store tables used by the site."""

    BOOKING_REQUESTS = "booking_requests"
    CONTACT_MESSAGES = "contact_messages"


class DashboardTab(str, Enum):
    """Navigation tabs of the admin dashboard."""

    BOOKINGS = "bookings"
    MESSAGES = "messages"


class DashboardPhase(str, Enum):
    """Coarse phase of the admin workflow."""

    UNAUTHENTICATED = "unauthenticated"
    LOADING = "loading"
    READY = "ready"


class NotificationVariant(str, Enum):
    """Toast styling variant."""

    DEFAULT = "default"
    DESTRUCTIVE = "destructive"
