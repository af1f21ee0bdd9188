"""Unit tests for clinic data models.

Covers booking status transitions, Record Store row parsing, contact form
validation messages and the authorization result sum type.
"""

from datetime import datetime, timezone

import pytest
from pydantic import TypeAdapter

from clinic.models import (
    AuthorizationResult,
    Authorized,
    BookingRequest,
    BookingStatus,
    CheckFailed,
    ContactMessage,
    DenialReason,
    Denied,
    can_transition,
    parse_contact_form,
)
from clinic.models.errors import (
    ErrorCode,
    InvalidTransitionError,
    RemoteRequestError,
    SubmissionError,
    ValidationError,
)


class TestBookingTransitions:
    """Tests for the booking status state machine."""

    @pytest.mark.parametrize(
        "current,target",
        [
            (BookingStatus.PENDING, BookingStatus.CONFIRMED),
            (BookingStatus.CONFIRMED, BookingStatus.COMPLETED),
            (BookingStatus.PENDING, BookingStatus.CANCELLED),
            (BookingStatus.CONFIRMED, BookingStatus.CANCELLED),
        ],
    )
    def test_legal_transitions(self, current: BookingStatus, target: BookingStatus) -> None:
        assert can_transition(current, target)

    @pytest.mark.parametrize(
        "current,target",
        [
            (BookingStatus.PENDING, BookingStatus.COMPLETED),
            (BookingStatus.CONFIRMED, BookingStatus.PENDING),
            (BookingStatus.COMPLETED, BookingStatus.CANCELLED),
            (BookingStatus.CANCELLED, BookingStatus.CONFIRMED),
            (BookingStatus.PENDING, BookingStatus.PENDING),
        ],
    )
    def test_illegal_transitions(self, current: BookingStatus, target: BookingStatus) -> None:
        assert not can_transition(current, target)


class TestRecordParsing:
    """Tests for parsing Record Store rows."""

    def test_booking_row_parses_iso_timestamp_and_status(self) -> None:
        booking = BookingRequest.model_validate(
            {
                "id": "b-1",
                "full_name": "Omar Haddad",
                "mobile": "0501234567",
                "address": "Riyadh",
                "message": None,
                "status": "confirmed",
                "created_at": "2026-10-19T15:04:00+00:00",
            }
        )

        assert booking.status == BookingStatus.CONFIRMED
        assert booking.created_at == datetime(2026, 10, 19, 15, 4, tzinfo=timezone.utc)
        assert not booking.is_pending

    def test_message_defaults_to_unread(self) -> None:
        message = ContactMessage.model_validate(
            {
                "id": "m-1",
                "full_name": "Layla Nasser",
                "mobile": "0559876543",
                "address": "Riyadh",
                "created_at": "2026-10-19T15:04:00Z",
            }
        )

        assert message.is_read is False
        assert message.message is None

    def test_records_are_immutable(self) -> None:
        booking = BookingRequest(
            id="b-1",
            full_name="Omar",
            mobile="0501234567",
            address="Riyadh",
            created_at=datetime.now(timezone.utc),
        )

        with pytest.raises(Exception):
            booking.id = "b-2"  # type: ignore[misc]


class TestContactFormValidation:
    """Tests for contact form field rules and messages."""

    def test_valid_form_has_no_errors(self, valid_form_values: dict[str, str]) -> None:
        form, errors = parse_contact_form(valid_form_values)

        assert errors == {}
        assert form is not None
        assert form.full_name == "Omar Haddad"

    def test_short_name_uses_name_message(self, valid_form_values: dict[str, str]) -> None:
        form, errors = parse_contact_form({**valid_form_values, "fullName": "A"})

        assert form is None
        assert errors == {"fullName": "Name must be at least 2 characters"}

    def test_long_name_reports_max_length(self, valid_form_values: dict[str, str]) -> None:
        _, errors = parse_contact_form({**valid_form_values, "fullName": "A" * 101})

        assert errors == {"fullName": "Must be at most 100 characters"}

    def test_name_is_trimmed_before_length_check(self, valid_form_values: dict[str, str]) -> None:
        _, errors = parse_contact_form({**valid_form_values, "fullName": "   A   "})

        assert "fullName" in errors

    def test_every_invalid_field_reported_once(self) -> None:
        _, errors = parse_contact_form(
            {"fullName": "", "mobile": "123", "address": " ", "message": "x" * 1001}
        )

        assert errors == {
            "fullName": "Name must be at least 2 characters",
            "mobile": "Please enter a valid phone number",
            "address": "Please enter your address",
            "message": "Must be at most 1000 characters",
        }

    def test_single_character_address_rejected(self) -> None:
        """An address of one character is below the 2-character minimum."""
        _, errors = parse_contact_form(
            {"fullName": "Al", "mobile": "12345678", "address": "X", "message": ""}
        )

        assert errors == {"address": "Please enter your address"}

    def test_missing_fields_reported(self) -> None:
        _, errors = parse_contact_form({})

        assert set(errors) == {"fullName", "mobile", "address"}

    def test_mobile_bounds(self, valid_form_values: dict[str, str]) -> None:
        _, ok = parse_contact_form({**valid_form_values, "mobile": "12345678"})
        _, too_long = parse_contact_form({**valid_form_values, "mobile": "1" * 21})

        assert ok == {}
        assert too_long == {"mobile": "Must be at most 20 characters"}

    def test_empty_message_normalized_to_null(self) -> None:
        form, _ = parse_contact_form(
            {"fullName": "Al", "mobile": "12345678", "address": "XY", "message": ""}
        )

        assert form is not None
        assert form.to_insert_row() == {
            "full_name": "Al",
            "mobile": "12345678",
            "address": "XY",
            "message": None,
        }

    def test_insert_row_uses_trimmed_values(self) -> None:
        form, _ = parse_contact_form(
            {"fullName": "  Omar  ", "mobile": " 0501234567 ", "address": " Riyadh ", "message": "  hi "}
        )

        assert form is not None
        assert form.to_insert_row() == {
            "full_name": "Omar",
            "mobile": "0501234567",
            "address": "Riyadh",
            "message": "hi",
        }


class TestAuthorizationResult:
    """Tests for the discriminated authorization result."""

    def test_discriminator_selects_variant(self) -> None:
        adapter: TypeAdapter[AuthorizationResult] = TypeAdapter(AuthorizationResult)

        assert isinstance(adapter.validate_python({"kind": "authorized", "user_id": "u"}), Authorized)
        assert isinstance(
            adapter.validate_python({"kind": "denied", "reason": "not_admin"}), Denied
        )
        assert isinstance(
            adapter.validate_python({"kind": "check_failed", "error": "timeout"}), CheckFailed
        )

    def test_denied_carries_reason(self) -> None:
        assert Denied(reason=DenialReason.NO_SESSION).reason == DenialReason.NO_SESSION


class TestErrors:
    """Tests for the error taxonomy."""

    def test_validation_error_exposes_field_errors(self) -> None:
        error = ValidationError({"fullName": "Name must be at least 2 characters"})

        response = error.to_error_response()
        assert response.error_code == ErrorCode.VALIDATION_FAILED
        assert response.details == {"fullName": "Name must be at least 2 characters"}

    def test_remote_error_without_status_is_network_error(self) -> None:
        assert RemoteRequestError("select", table="booking_requests").is_network_error
        assert not RemoteRequestError("select", status_code=500).is_network_error

    def test_submission_error_wraps_cause(self) -> None:
        cause = RemoteRequestError("insert", table="booking_requests", status_code=503)
        error = SubmissionError(cause)

        assert error.cause is cause
        assert error.details == {"operation": "insert", "table": "booking_requests", "status_code": 503}

    def test_invalid_transition_for_missing_record_is_not_found(self) -> None:
        assert InvalidTransitionError("b-1", None, "confirmed").code == ErrorCode.RECORD_NOT_FOUND
        assert (
            InvalidTransitionError("b-1", "completed", "confirmed").code
            == ErrorCode.INVALID_STATUS_TRANSITION
        )
