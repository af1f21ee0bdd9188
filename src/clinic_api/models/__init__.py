"""API request/response models.

Domain models live in clinic.models; this package holds HTTP-layer shapes only.
"""

from clinic_api.models.contact import ContactSubmission, ContactSubmissionResponse
from clinic_api.models.dashboard import BookingRow, DashboardSnapshot, MessageRow

__all__ = [
    "BookingRow",
    "ContactSubmission",
    "ContactSubmissionResponse",
    "DashboardSnapshot",
    "MessageRow",
]
