"""Admin data workflow: gate access, load both collections, apply mutations.

Combined behavior of the dashboard:
    unauthenticated --(session + admin role)--> loading --(fetches settle)--> ready

Every mutation is a targeted PATCH/DELETE by record id. On success the
dashboard re-fetches both collections instead of patching local state, so
the view always shows what the Record Store holds.

Fetches are tagged with a monotonically increasing sequence number; a fetch
that resolves after a newer one was issued is discarded, so a slow stale
response can never overwrite fresher data.
"""

import asyncio
from enum import Enum
from typing import TypeVar

from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from clinic.models.auth import Authorized, AuthorizationResult, DenialReason, Denied, Session
from clinic.models.enums import (
    BookingStatus,
    DashboardPhase,
    DashboardTab,
    RecordTable,
    can_transition,
)
from clinic.models.errors import (
    AuthorizationError,
    ClinicError,
    ErrorCode,
    InvalidTransitionError,
    RemoteRequestError,
)
from clinic.models.notification import Notification
from clinic.models.records import (
    BookingRequest,
    BookingStatusUpdate,
    ContactMessage,
    MessageReadUpdate,
)
from clinic.services.auth_gate import AuthGate, session_from_token
from clinic.services.record_store import RecordStoreClient
from clinic.utils.logging import get_logger, log_record_operation

logger = get_logger(__name__)

RecordT = TypeVar("RecordT", BookingRequest, ContactMessage)

FETCH_FAILED = "Failed to fetch data."


class MutationOutcome(str, Enum):
    """Result of a dashboard mutation."""

    APPLIED = "applied"
    REJECTED = "rejected"  # precondition failed, no request issued
    FAILED = "failed"  # remote request failed
    SKIPPED = "skipped"  # already in the target state, no request issued


class DashboardState(BaseModel):
    """Everything the dashboard renders."""

    phase: DashboardPhase = DashboardPhase.UNAUTHENTICATED
    bookings: list[BookingRequest] = Field(default_factory=list)
    messages: list[ContactMessage] = Field(default_factory=list)
    active_tab: DashboardTab = DashboardTab.BOOKINGS
    is_refreshing: bool = False
    redirect_to: str | None = None
    notifications: list[Notification] = Field(default_factory=list)

    @property
    def pending_count(self) -> int:
        """Badge on the Bookings tab."""
        return sum(1 for b in self.bookings if b.status == BookingStatus.PENDING)

    @property
    def unread_count(self) -> int:
        """Badge on the Messages tab."""
        return sum(1 for m in self.messages if not m.is_read)


class AdminDashboard:
    """Dashboard workflow for one admin session."""

    def __init__(
        self,
        record_store: RecordStoreClient,
        auth_gate: AuthGate,
        access_token: str | None,
        state: DashboardState | None = None,
    ) -> None:
        """Initialize the workflow.

        Args:
            record_store: Record Store client
            auth_gate: Gate used for the role check and sign-out
            access_token: Bearer token of the admin session (None if absent)
            state: Optional initial state
        """
        self._record_store = record_store
        self._gate = auth_gate
        self._access_token = access_token
        self._session: Session | None = None
        self._fetch_seq = 0
        self.state = state or DashboardState()
        self.last_error: ClinicError | None = None

    @property
    def login_path(self) -> str:
        return self._gate.settings.login_path

    @property
    def is_authorized(self) -> bool:
        return self._session is not None

    # Gate

    async def enter(self) -> AuthorizationResult:
        """Check the session and admin role, then load both collections.

        Returns:
            The gate's AuthorizationResult. Anything but Authorized leaves the
            dashboard unauthenticated with redirect_to set and no data fetched.
        """
        session = session_from_token(self._access_token)
        if session is None:
            logger.info("Dashboard entry without a session, redirecting to login")
            self._redirect_to_login()
            return Denied(reason=DenialReason.NO_SESSION)

        result = await self._gate.check_admin(session)
        if not isinstance(result, Authorized):
            logger.warning("Dashboard entry refused for user %s: %s", session.user_id, result.kind)
            await self._gate.sign_out(session)
            self._redirect_to_login()
            return result

        self._session = session
        self.state.redirect_to = None
        self.state.phase = DashboardPhase.LOADING
        await self.refresh()
        return result

    def require_authorized(self) -> Session:
        """Return the session, or raise if enter() has not authorized it.

        Raises:
            AuthorizationError: When the gate has not passed
        """
        if self._session is None:
            raise AuthorizationError(ErrorCode.AUTH_REQUIRED, self.login_path)
        return self._session

    async def logout(self) -> None:
        """Sign out and redirect to login. No confirmation step."""
        session = self._session or session_from_token(self._access_token)
        if session is not None:
            await self._gate.sign_out(session)
        self._session = None
        self.state.bookings = []
        self.state.messages = []
        self._redirect_to_login()

    def _redirect_to_login(self) -> None:
        self.state.phase = DashboardPhase.UNAUTHENTICATED
        self.state.redirect_to = self.login_path

    # View

    def select_tab(self, tab: DashboardTab) -> None:
        self.state.active_tab = tab

    def _notify(self, notification: Notification) -> None:
        self.state.notifications.append(notification)

    def find_booking(self, record_id: str) -> BookingRequest | None:
        return next((b for b in self.state.bookings if b.id == record_id), None)

    def find_message(self, record_id: str) -> ContactMessage | None:
        return next((m for m in self.state.messages if m.id == record_id), None)

    # Fetch

    async def _fetch_collection(
        self,
        table: RecordTable,
        model: type[RecordT],
        session: Session,
    ) -> list[RecordT]:
        rows = await self._record_store.select(table.value, session.access_token)
        try:
            return [model.model_validate(row) for row in rows]
        except PydanticValidationError as e:
            raise RemoteRequestError(
                "select", table=table.value, reason=f"invalid row: {e.error_count()} errors"
            ) from e

    async def refresh(self) -> bool:
        """Re-fetch both collections, newest first.

        A collection whose request got a non-2xx response keeps its previous
        contents while the other one is still applied. A network failure or an
        undecodable payload on either request surfaces one generic notification
        and leaves both collections unchanged.

        Returns:
            True if this fetch was applied, False if it was superseded by a
            newer fetch or failed as a whole
        """
        session = self.require_authorized()
        self._fetch_seq += 1
        seq = self._fetch_seq
        self.state.is_refreshing = True

        bookings, messages = await asyncio.gather(
            self._fetch_collection(RecordTable.BOOKING_REQUESTS, BookingRequest, session),
            self._fetch_collection(RecordTable.CONTACT_MESSAGES, ContactMessage, session),
            return_exceptions=True,
        )

        if seq != self._fetch_seq:
            logger.info("Discarding stale fetch #%d (latest is #%d)", seq, self._fetch_seq)
            return False

        self.state.is_refreshing = False
        self.state.phase = DashboardPhase.READY

        for outcome in (bookings, messages):
            if isinstance(outcome, BaseException) and not isinstance(outcome, RemoteRequestError):
                raise outcome

        if any(
            isinstance(outcome, RemoteRequestError) and outcome.is_network_error
            for outcome in (bookings, messages)
        ):
            self._notify(Notification.error("Error", FETCH_FAILED))
            return False

        if isinstance(bookings, list):
            self.state.bookings = bookings
        if isinstance(messages, list):
            self.state.messages = messages

        log_record_operation(
            logger,
            "fetch",
            bookings=len(self.state.bookings),
            messages=len(self.state.messages),
            seq=seq,
        )
        return True

    # Booking mutations

    async def confirm_booking(self, record_id: str) -> MutationOutcome:
        """pending → confirmed."""
        return await self._transition_booking(record_id, BookingStatus.CONFIRMED)

    async def complete_booking(self, record_id: str) -> MutationOutcome:
        """confirmed → completed."""
        return await self._transition_booking(record_id, BookingStatus.COMPLETED)

    async def cancel_booking(self, record_id: str) -> MutationOutcome:
        """pending or confirmed → cancelled."""
        return await self._transition_booking(record_id, BookingStatus.CANCELLED)

    async def _transition_booking(
        self, record_id: str, target: BookingStatus
    ) -> MutationOutcome:
        session = self.require_authorized()
        booking = self.find_booking(record_id)

        if booking is None or not can_transition(booking.status, target):
            self.last_error = InvalidTransitionError(
                record_id,
                booking.status.value if booking else None,
                target.value,
            )
            logger.info(
                "Rejected status change of booking %s to %s (current: %s)",
                record_id,
                target.value,
                booking.status.value if booking else "missing",
            )
            self._notify(Notification.error("Error", "Invalid status transition."))
            return MutationOutcome.REJECTED

        try:
            await self._record_store.update(
                RecordTable.BOOKING_REQUESTS.value,
                record_id,
                BookingStatusUpdate(status=target).model_dump(mode="json"),
                session.access_token,
            )
        except RemoteRequestError as e:
            self.last_error = e
            self._notify(Notification.error("Error", "Failed to update status."))
            return MutationOutcome.FAILED

        self._notify(Notification.success("Success", "Booking status updated."))
        await self.refresh()
        return MutationOutcome.APPLIED

    async def delete_booking(self, record_id: str) -> MutationOutcome:
        return await self._delete(
            RecordTable.BOOKING_REQUESTS, record_id, "Booking deleted successfully."
        )

    # Message mutations

    async def mark_message_read(self, record_id: str) -> MutationOutcome:
        """false → true. Already-read messages are left alone.

        Failures are only logged; the collections are re-fetched either way.
        """
        session = self.require_authorized()
        message = self.find_message(record_id)
        if message is not None and message.is_read:
            return MutationOutcome.SKIPPED

        outcome = MutationOutcome.APPLIED
        try:
            await self._record_store.update(
                RecordTable.CONTACT_MESSAGES.value,
                record_id,
                MessageReadUpdate().model_dump(),
                session.access_token,
            )
        except RemoteRequestError as e:
            self.last_error = e
            logger.warning("Marking message %s read failed: %s", record_id, e.details)
            outcome = MutationOutcome.FAILED

        await self.refresh()
        return outcome

    async def delete_message(self, record_id: str) -> MutationOutcome:
        return await self._delete(
            RecordTable.CONTACT_MESSAGES, record_id, "Message deleted successfully."
        )

    async def _delete(
        self, table: RecordTable, record_id: str, success_text: str
    ) -> MutationOutcome:
        session = self.require_authorized()
        try:
            await self._record_store.delete(table.value, record_id, session.access_token)
        except RemoteRequestError as e:
            self.last_error = e
            self._notify(Notification.error("Error", "Failed to delete."))
            return MutationOutcome.FAILED

        self._notify(Notification.success("Deleted", success_text))
        await self.refresh()
        return MutationOutcome.APPLIED
