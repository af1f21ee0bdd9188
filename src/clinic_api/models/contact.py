"""Contact intake request/response models."""

from pydantic import BaseModel, ConfigDict, Field

from clinic.models.notification import Notification


class ContactSubmission(BaseModel):
    """Raw form values. Lengths are checked by the contact workflow, not here,
    so the client gets one message per form field."""

    model_config = ConfigDict(extra="ignore")

    fullName: str = ""
    mobile: str = ""
    address: str = ""
    message: str | None = ""

    def to_form_values(self) -> dict[str, str]:
        return {
            "fullName": self.fullName,
            "mobile": self.mobile,
            "address": self.address,
            "message": self.message or "",
        }


class ContactSubmissionResponse(BaseModel):
    """Acknowledgement of a stored booking request."""

    success: bool = True
    notification: Notification
    maps_url: str = Field(..., description="Clinic location link")
