"""Contact form input model and its validation messages.

Form fields are addressed by their form names (fullName, mobile, address,
message); Record Store columns are snake_case. Values are trimmed before the
length checks run.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

FORM_FIELDS: tuple[str, ...] = ("fullName", "mobile", "address", "message")

FULL_NAME_MIN, FULL_NAME_MAX = 2, 100
MOBILE_MIN, MOBILE_MAX = 8, 20
ADDRESS_MIN, ADDRESS_MAX = 2, 200
MESSAGE_MAX = 1000

# Messages for the too-short case of each field
MIN_LENGTH_MESSAGES: dict[str, str] = {
    "fullName": "Name must be at least 2 characters",
    "mobile": "Please enter a valid phone number",
    "address": "Please enter your address",
}


class ContactForm(BaseModel):
    """Visitor-submitted booking request, as typed into the form."""

    model_config = ConfigDict(
        str_strip_whitespace=True,
        populate_by_name=True,
        extra="ignore",
    )

    full_name: str = Field(
        ..., alias="fullName", min_length=FULL_NAME_MIN, max_length=FULL_NAME_MAX
    )
    mobile: str = Field(..., min_length=MOBILE_MIN, max_length=MOBILE_MAX)
    address: str = Field(..., min_length=ADDRESS_MIN, max_length=ADDRESS_MAX)
    message: str | None = Field(default=None, max_length=MESSAGE_MAX)

    def to_insert_row(self) -> dict[str, str | None]:
        """Build the booking_requests insert body.

        An empty message is stored as null.
        """
        return {
            "full_name": self.full_name,
            "mobile": self.mobile,
            "address": self.address,
            "message": self.message or None,
        }


def _error_message(field: str, error: dict[str, Any]) -> str:
    error_type = error.get("type", "")
    if error_type == "string_too_short" and field in MIN_LENGTH_MESSAGES:
        return MIN_LENGTH_MESSAGES[field]
    if error_type == "string_too_long":
        max_length = error.get("ctx", {}).get("max_length")
        return f"Must be at most {max_length} characters"
    if error_type == "missing":
        return MIN_LENGTH_MESSAGES.get(field, "This field is required")
    return str(error.get("msg", "Invalid value"))


def field_errors_from(exc: PydanticValidationError) -> dict[str, str]:
    """Collapse pydantic errors into one human-readable message per form field.

    Args:
        exc: Validation error raised by ContactForm

    Returns:
        Mapping of form field name to the first error message for it
    """
    errors: dict[str, str] = {}
    for error in exc.errors():
        loc = error.get("loc", ())
        if not loc:
            continue
        field = str(loc[0])
        errors.setdefault(field, _error_message(field, error))
    return errors


def parse_contact_form(values: dict[str, Any]) -> tuple[ContactForm | None, dict[str, str]]:
    """Validate raw form values.

    Returns:
        (form, {}) when valid, (None, field_errors) otherwise
    """
    try:
        return ContactForm.model_validate(values), {}
    except PydanticValidationError as exc:
        return None, field_errors_from(exc)
