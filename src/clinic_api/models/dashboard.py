"""Dashboard snapshot returned by every admin endpoint."""

from pydantic import BaseModel, Field

from clinic.models.enums import DashboardPhase, DashboardTab
from clinic.models.notification import Notification
from clinic.models.records import BookingRequest, ContactMessage
from clinic.services.admin_dashboard import AdminDashboard
from clinic.utils.formatting import format_date


class BookingRow(BookingRequest):
    created_display: str


class MessageRow(ContactMessage):
    created_display: str


class DashboardSnapshot(BaseModel):
    """Collections, badge counts and the notifications raised by the action."""

    phase: DashboardPhase
    active_tab: DashboardTab
    bookings: list[BookingRow] = Field(default_factory=list)
    messages: list[MessageRow] = Field(default_factory=list)
    pending_count: int = Field(..., ge=0, description="Bookings still pending")
    unread_count: int = Field(..., ge=0, description="Messages not yet read")
    notifications: list[Notification] = Field(default_factory=list)
    redirect_to: str | None = None

    @classmethod
    def from_dashboard(cls, dashboard: AdminDashboard) -> "DashboardSnapshot":
        state = dashboard.state
        return cls(
            phase=state.phase,
            active_tab=state.active_tab,
            bookings=[
                BookingRow(**b.model_dump(), created_display=format_date(b.created_at))
                for b in state.bookings
            ],
            messages=[
                MessageRow(**m.model_dump(), created_display=format_date(m.created_at))
                for m in state.messages
            ],
            pending_count=state.pending_count,
            unread_count=state.unread_count,
            notifications=list(state.notifications),
            redirect_to=state.redirect_to,
        )
