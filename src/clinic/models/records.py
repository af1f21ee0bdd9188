"""Record Store row models for booking requests and contact messages.

Rows arrive as snake_case JSON from the Record Store REST interface, so these
models are lax (ISO timestamps and enum values are coerced from strings).
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from .enums import BookingStatus


class IntakeRecord(BaseModel):
    """Fields shared by every visitor submission."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Server-assigned record identifier")
    full_name: str = Field(..., description="Visitor full name")
    mobile: str = Field(..., description="Visitor mobile number")
    address: str = Field(..., description="Visitor address")
    message: str | None = Field(default=None, description="Optional free text")
    created_at: datetime = Field(..., description="Server creation timestamp")


class BookingRequest(IntakeRecord):
    """A visitor-submitted appointment inquiry with a workflow status."""

    status: BookingStatus = Field(
        default=BookingStatus.PENDING, description="Workflow status"
    )

    @property
    def is_pending(self) -> bool:
        return self.status == BookingStatus.PENDING


class ContactMessage(IntakeRecord):
    """A visitor-submitted inquiry with a read/unread flag."""

    is_read: bool = Field(default=False, description="Whether an admin has read it")


class BookingStatusUpdate(BaseModel):
    """PATCH body for a booking status change."""

    model_config = ConfigDict(strict=True)

    status: BookingStatus


class MessageReadUpdate(BaseModel):
    """PATCH body for marking a message read. Only the true direction exists."""

    model_config = ConfigDict(strict=True)

    is_read: bool = True
