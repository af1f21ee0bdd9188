"""Admin gate over the hosted auth service.

The gate consumes three collaborator operations and implements none of them:
1. Session retrieval: the admin's bearer JWT is the session (sub + exp claims)
2. Role check: the `has_role(_user_id, _role)` remote procedure
3. Sign-out: `POST /auth/v1/logout`

The role check outcome is an AuthorizationResult, so "no session", "not an
admin" and "the check itself failed" stay distinguishable to callers even
though the dashboard treats the last two the same way.
"""

from datetime import datetime, timezone
from typing import Optional

import httpx

from clinic.config import ClinicSettings
from clinic.models.auth import (
    AuthorizationResult,
    Authorized,
    CheckFailed,
    DenialReason,
    Denied,
    Session,
)
from clinic.models.errors import RemoteRequestError
from clinic.services.record_store import RecordStoreClient
from clinic.utils.jwt import decode_jwt_payload
from clinic.utils.logging import get_logger

logger = get_logger(__name__)

HAS_ROLE_FUNCTION = "has_role"


def session_from_token(access_token: str | None) -> Session | None:
    """Build a Session from a bearer JWT.

    Args:
        access_token: Raw JWT (without the "Bearer " prefix)

    Returns:
        Session, or None when the token is missing, undecodable, has no
        subject, has an unusable exp claim, or is already expired
    """
    payload = decode_jwt_payload(access_token)
    if not payload or not access_token:
        return None

    sub = payload.get("sub")
    if not sub:
        return None

    expires_at: Optional[datetime] = None
    exp = payload.get("exp")
    if exp is not None:
        if isinstance(exp, bool) or not isinstance(exp, (int, float)):
            logger.warning("Rejected token with non-numeric exp claim")
            return None
        try:
            expires_at = datetime.fromtimestamp(exp, tz=timezone.utc)
        except (OverflowError, OSError, ValueError) as e:
            logger.warning("Rejected token with unusable exp claim: %s", type(e).__name__)
            return None

    session = Session(access_token=access_token, user_id=str(sub), expires_at=expires_at)
    if session.is_expired:
        logger.info("Session token expired for user %s", session.user_id)
        return None
    return session


class AuthGate:
    """Session and admin-role checks for the dashboard."""

    def __init__(
        self,
        settings: ClinicSettings,
        record_store: RecordStoreClient,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the gate.

        Args:
            settings: Endpoint, key and admin role configuration
            record_store: Client used for the has_role RPC
            transport: Optional transport override for the auth endpoints
        """
        self.settings = settings
        self._record_store = record_store
        self._auth_client = httpx.AsyncClient(
            base_url=settings.auth_url,
            timeout=settings.request_timeout,
            transport=transport,
        )

    async def check_admin(self, session: Session) -> AuthorizationResult:
        """Ask the auth collaborator whether the session's user is an admin.

        Returns:
            Authorized when has_role returns true, Denied(not_admin) for
            false/null, CheckFailed when the call errors
        """
        try:
            is_admin = await self._record_store.rpc(
                HAS_ROLE_FUNCTION,
                {"_user_id": session.user_id, "_role": self.settings.admin_role},
                access_token=session.access_token,
            )
        except RemoteRequestError as e:
            logger.warning(
                "Role check failed for user %s: %s", session.user_id, e.details
            )
            return CheckFailed(error=str(e.details or e.message))

        if is_admin is True:
            return Authorized(user_id=session.user_id)

        logger.info("User %s does not hold role %s", session.user_id, self.settings.admin_role)
        return Denied(reason=DenialReason.NOT_ADMIN)

    async def authorize(self, access_token: str | None) -> AuthorizationResult:
        """Run the full gate for a bearer token."""
        session = session_from_token(access_token)
        if session is None:
            return Denied(reason=DenialReason.NO_SESSION)
        return await self.check_admin(session)

    async def sign_out(self, session: Session) -> bool:
        """Terminate the session with the auth service.

        Sign-out never blocks the redirect that follows it, so failures are
        logged and reported through the return value.

        Returns:
            True if the auth service acknowledged the sign-out
        """
        try:
            response = await self._auth_client.post(
                "/logout",
                headers={
                    "apikey": self.settings.supabase_key,
                    "Authorization": f"Bearer {session.access_token}",
                },
            )
        except httpx.HTTPError as e:
            logger.warning("Sign-out request failed for user %s: %s", session.user_id, e)
            return False

        if not response.is_success:
            logger.warning(
                "Sign-out rejected for user %s: HTTP %d",
                session.user_id,
                response.status_code,
            )
            return False

        logger.info("Signed out user %s", session.user_id)
        return True

    async def aclose(self) -> None:
        await self._auth_client.aclose()
