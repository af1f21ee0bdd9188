"""Session and authorization models for the admin gate.

This module defines:
- Session: a signed-in admin session derived from the bearer JWT
- AuthorizationResult: sum type of the role check outcome
  (Authorized | Denied | CheckFailed)
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


class Session(BaseModel):
    """An active auth session. In-memory only, never persisted."""

    model_config = ConfigDict(strict=True, frozen=True)

    access_token: str = Field(..., description="Bearer token issued by the auth service")
    user_id: str = Field(..., description="Subject claim of the token")
    expires_at: datetime | None = Field(default=None, description="Token expiry (UTC)")

    @property
    def is_expired(self) -> bool:
        if self.expires_at is None:
            return False
        return datetime.now(timezone.utc) >= self.expires_at


class DenialReason(str, Enum):
    """Why the gate refused access."""

    NO_SESSION = "no_session"
    NOT_ADMIN = "not_admin"


class Authorized(BaseModel):
    """Session holds the admin role."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["authorized"] = "authorized"
    user_id: str


class Denied(BaseModel):
    """No session, or the role check answered false."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["denied"] = "denied"
    reason: DenialReason


class CheckFailed(BaseModel):
    """The role check itself errored; treated as a denial by the gate."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["check_failed"] = "check_failed"
    error: str


AuthorizationResult = Annotated[
    Union[Authorized, Denied, CheckFailed],
    Field(discriminator="kind"),
]
