"""Services for the clinic backend.

- record_store: async REST client for the hosted tables
- auth_gate: session decoding, admin role check, sign-out
- contact_form: visitor intake workflow
- admin_dashboard: admin data workflow
"""

from .admin_dashboard import AdminDashboard, DashboardState, MutationOutcome
from .auth_gate import AuthGate, session_from_token
from .contact_form import (
    ContactFormState,
    ContactFormWorkflow,
    SubmitOutcome,
    maps_url,
    submit_booking_request,
    validate_contact_form,
)
from .record_store import RecordStoreClient, get_record_store, reset_record_store

__all__ = [
    "AdminDashboard",
    "AuthGate",
    "ContactFormState",
    "ContactFormWorkflow",
    "DashboardState",
    "MutationOutcome",
    "RecordStoreClient",
    "SubmitOutcome",
    "get_record_store",
    "maps_url",
    "reset_record_store",
    "session_from_token",
    "submit_booking_request",
    "validate_contact_form",
]
