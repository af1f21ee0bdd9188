"""Admin dashboard endpoints.

Every endpoint runs the gate first (bearer session + has_role admin). A failed
gate never fetches data: it answers 401/403 with `details.redirect_to`.
After the gate, each endpoint performs its one action and returns the
dashboard snapshot as re-fetched from the Record Store.
"""

from fastapi import APIRouter, Depends, Query

from clinic.models.auth import Authorized, CheckFailed, DenialReason, Denied
from clinic.models.enums import DashboardTab
from clinic.models.errors import AuthorizationError, ErrorCode
from clinic.services.admin_dashboard import AdminDashboard, MutationOutcome
from clinic_api.dependencies import get_admin_dashboard
from clinic_api.models.dashboard import DashboardSnapshot

router = APIRouter(prefix="/admin", tags=["admin"])

GATE_RESPONSES: dict[int | str, dict[str, str]] = {
    401: {"description": "No active session"},
    403: {"description": "Session lacks the admin role, or the role check failed"},
}


async def _enter(dashboard: AdminDashboard) -> AdminDashboard:
    """Run the gate; raise AuthorizationError unless Authorized."""
    result = await dashboard.enter()
    if isinstance(result, Authorized):
        return dashboard

    if isinstance(result, Denied) and result.reason == DenialReason.NO_SESSION:
        code = ErrorCode.AUTH_REQUIRED
    elif isinstance(result, CheckFailed):
        code = ErrorCode.ROLE_CHECK_FAILED
    else:
        code = ErrorCode.NOT_ADMIN
    raise AuthorizationError(code, dashboard.login_path)


def _snapshot(dashboard: AdminDashboard, outcome: MutationOutcome) -> DashboardSnapshot:
    if outcome in (MutationOutcome.REJECTED, MutationOutcome.FAILED) and dashboard.last_error:
        raise dashboard.last_error
    return DashboardSnapshot.from_dashboard(dashboard)


@router.get(
    "/dashboard",
    summary="Load the dashboard",
    response_model=DashboardSnapshot,
    responses=GATE_RESPONSES,
)
async def get_dashboard(
    tab: DashboardTab = Query(default=DashboardTab.BOOKINGS),
    dashboard: AdminDashboard = Depends(get_admin_dashboard),
) -> DashboardSnapshot:
    await _enter(dashboard)
    dashboard.select_tab(tab)
    return DashboardSnapshot.from_dashboard(dashboard)


@router.post(
    "/bookings/{record_id}/confirm",
    summary="Confirm a pending booking",
    response_model=DashboardSnapshot,
    responses={**GATE_RESPONSES, 409: {"description": "Booking is not pending"}},
)
async def confirm_booking(
    record_id: str,
    dashboard: AdminDashboard = Depends(get_admin_dashboard),
) -> DashboardSnapshot:
    await _enter(dashboard)
    return _snapshot(dashboard, await dashboard.confirm_booking(record_id))


@router.post(
    "/bookings/{record_id}/complete",
    summary="Complete a confirmed booking",
    response_model=DashboardSnapshot,
    responses={**GATE_RESPONSES, 409: {"description": "Booking is not confirmed"}},
)
async def complete_booking(
    record_id: str,
    dashboard: AdminDashboard = Depends(get_admin_dashboard),
) -> DashboardSnapshot:
    await _enter(dashboard)
    return _snapshot(dashboard, await dashboard.complete_booking(record_id))


@router.post(
    "/bookings/{record_id}/cancel",
    summary="Cancel a pending or confirmed booking",
    response_model=DashboardSnapshot,
    responses={**GATE_RESPONSES, 409: {"description": "Booking is already closed"}},
)
async def cancel_booking(
    record_id: str,
    dashboard: AdminDashboard = Depends(get_admin_dashboard),
) -> DashboardSnapshot:
    await _enter(dashboard)
    return _snapshot(dashboard, await dashboard.cancel_booking(record_id))


@router.delete(
    "/bookings/{record_id}",
    summary="Delete a booking",
    response_model=DashboardSnapshot,
    responses=GATE_RESPONSES,
)
async def delete_booking(
    record_id: str,
    dashboard: AdminDashboard = Depends(get_admin_dashboard),
) -> DashboardSnapshot:
    await _enter(dashboard)
    return _snapshot(dashboard, await dashboard.delete_booking(record_id))


@router.post(
    "/messages/{record_id}/read",
    summary="Mark a message read",
    description="Idempotent. A failed update is not reported; the snapshot is re-fetched either way.",
    response_model=DashboardSnapshot,
    responses=GATE_RESPONSES,
)
async def mark_message_read(
    record_id: str,
    dashboard: AdminDashboard = Depends(get_admin_dashboard),
) -> DashboardSnapshot:
    await _enter(dashboard)
    await dashboard.mark_message_read(record_id)
    dashboard.select_tab(DashboardTab.MESSAGES)
    return DashboardSnapshot.from_dashboard(dashboard)


@router.delete(
    "/messages/{record_id}",
    summary="Delete a message",
    response_model=DashboardSnapshot,
    responses=GATE_RESPONSES,
)
async def delete_message(
    record_id: str,
    dashboard: AdminDashboard = Depends(get_admin_dashboard),
) -> DashboardSnapshot:
    await _enter(dashboard)
    dashboard.select_tab(DashboardTab.MESSAGES)
    return _snapshot(dashboard, await dashboard.delete_message(record_id))


@router.post(
    "/logout",
    summary="Sign out",
    response_model=DashboardSnapshot,
)
async def logout(
    dashboard: AdminDashboard = Depends(get_admin_dashboard),
) -> DashboardSnapshot:
    await dashboard.logout()
    return DashboardSnapshot.from_dashboard(dashboard)
