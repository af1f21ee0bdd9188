"""Contact form workflow: validate visitor input and submit a booking request.

The workflow owns an explicit ContactFormState. Transitions:
- update_field: set a value, clear that field's error
- submit: validate everything, then insert once into booking_requests

A submission in flight blocks further submits until it settles, which is what
keeps repeated clicks from creating duplicate bookings.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field

from clinic.i18n import normalize_language, translate
from clinic.models.contact_form import FORM_FIELDS, ContactForm, parse_contact_form
from clinic.models.enums import RecordTable
from clinic.models.errors import RemoteRequestError, SubmissionError, ValidationError
from clinic.models.notification import Notification
from clinic.services.record_store import RecordStoreClient
from clinic.utils.logging import get_logger

logger = get_logger(__name__)

# Clinic location shown on the "View Clinic Location" card
CLINIC_LATITUDE = 24.7136
CLINIC_LONGITUDE = 46.6753


def maps_url(lat: float = CLINIC_LATITUDE, lng: float = CLINIC_LONGITUDE) -> str:
    """Google Maps link for the clinic location."""
    return f"https://www.google.com/maps?q={lat},{lng}"


class SubmitOutcome(str, Enum):
    """Result of a submit call."""

    SUBMITTED = "submitted"
    INVALID = "invalid"
    FAILED = "failed"
    IGNORED = "ignored"


def _empty_values() -> dict[str, str]:
    return {field: "" for field in FORM_FIELDS}


class ContactFormState(BaseModel):
    """Everything the form renders: values, per-field errors, busy flag, toasts."""

    values: dict[str, str] = Field(default_factory=_empty_values)
    errors: dict[str, str] = Field(default_factory=dict)
    is_submitting: bool = False
    notifications: list[Notification] = Field(default_factory=list)


def validate_contact_form(values: dict[str, Any]) -> ContactForm:
    """Validate all fields at once.

    Raises:
        ValidationError: With one message per invalid field
    """
    form, errors = parse_contact_form(values)
    if form is None:
        raise ValidationError(errors)
    return form


async def submit_booking_request(record_store: RecordStoreClient, form: ContactForm) -> None:
    """Insert a validated form into booking_requests.

    Raises:
        SubmissionError: On any HTTP or network failure
    """
    try:
        await record_store.insert(RecordTable.BOOKING_REQUESTS.value, form.to_insert_row())
    except RemoteRequestError as e:
        raise SubmissionError(e) from e


class ContactFormWorkflow:
    """Stateful contact form bound to a Record Store client."""

    def __init__(
        self,
        record_store: RecordStoreClient,
        state: ContactFormState | None = None,
    ) -> None:
        self._record_store = record_store
        self.state = state or ContactFormState()
        self.last_error: SubmissionError | None = None

    def update_field(self, name: str, value: str) -> None:
        """Set a field value and clear any error shown for it."""
        if name not in FORM_FIELDS:
            raise KeyError(f"Unknown form field: {name}")
        self.state.values[name] = value
        self.state.errors.pop(name, None)

    def validate(self) -> dict[str, str]:
        """Run validation without submitting.

        Returns:
            Field errors (empty when the form is valid)
        """
        _, errors = parse_contact_form(self.state.values)
        return errors

    def reset(self) -> None:
        self.state.values = _empty_values()
        self.state.errors = {}

    async def submit(self, language: str | None = None) -> SubmitOutcome:
        """Validate and submit the form.

        Args:
            language: Language for the notification text ("en" or "ar")

        Returns:
            SubmitOutcome describing what happened
        """
        if self.state.is_submitting:
            logger.info("Submit ignored: a submission is already in flight")
            return SubmitOutcome.IGNORED

        lang = normalize_language(language)
        self.state.errors = {}

        try:
            form = validate_contact_form(self.state.values)
        except ValidationError as e:
            self.state.errors = e.field_errors
            logger.info("Contact form rejected: %s", ", ".join(sorted(e.field_errors)))
            return SubmitOutcome.INVALID

        self.state.is_submitting = True
        try:
            await submit_booking_request(self._record_store, form)
        except SubmissionError as e:
            self.last_error = e
            logger.warning("Booking request submission failed: %s", e.details)
            self.state.notifications.append(
                Notification.error(
                    translate("contact.toast.errorTitle", lang),
                    translate("contact.toast.errorDescription", lang),
                )
            )
            return SubmitOutcome.FAILED
        finally:
            self.state.is_submitting = False

        self.state.notifications.append(
            Notification.success(
                translate("contact.toast.successTitle", lang),
                translate("contact.toast.successDescription", lang),
            )
        )
        self.reset()
        return SubmitOutcome.SUBMITTED
