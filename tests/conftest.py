"""Pytest configuration and fixtures for the clinic backend tests.

This module provides reusable fixtures for testing:
- An in-memory fake of the hosted Record Store and auth endpoints,
  served through httpx.MockTransport
- Bearer token helpers for admin and non-admin sessions
- Sample booking and message rows
"""

import base64
import json
import uuid
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Generator
from urllib.parse import parse_qs

import httpx
import pytest

from clinic.config import ClinicSettings
from clinic.services.auth_gate import AuthGate
from clinic.services.record_store import RecordStoreClient

ADMIN_USER_ID = "8f2d4c1e-admin"
VISITOR_USER_ID = "1a2b3c4d-visitor"


# === Record Store fake ===


class FakeSupabase:
    """In-memory stand-in for the hosted REST and auth endpoints.

    Every request is recorded in `requests`. Failures are injected per
    (method, resource) via `fail_with`, where resource is a table name,
    "rpc/has_role" or "logout".
    """

    def __init__(self) -> None:
        self.tables: dict[str, list[dict[str, Any]]] = {
            "booking_requests": [],
            "contact_messages": [],
        }
        self.requests: list[httpx.Request] = []
        self.admins: set[str] = {ADMIN_USER_ID}
        self.failures: dict[tuple[str, str], int | Exception] = {}
        self._clock = datetime(2026, 10, 1, 9, 0, tzinfo=timezone.utc)

    # -- setup helpers --

    def fail_with(self, method: str, resource: str, failure: int | Exception) -> None:
        self.failures[(method, resource)] = failure

    def clear_failures(self) -> None:
        self.failures.clear()

    def _next_timestamp(self) -> str:
        self._clock += timedelta(minutes=1)
        return self._clock.isoformat()

    def add_booking(self, status: str = "pending", **fields: Any) -> dict[str, Any]:
        row = {
            "id": str(uuid.uuid4()),
            "full_name": "Omar Haddad",
            "mobile": "0501234567",
            "address": "King Fahd Road, Riyadh",
            "message": None,
            "status": status,
            "created_at": self._next_timestamp(),
        }
        row.update(fields)
        self.tables["booking_requests"].append(row)
        return row

    def add_message(self, is_read: bool = False, **fields: Any) -> dict[str, Any]:
        row = {
            "id": str(uuid.uuid4()),
            "full_name": "Layla Nasser",
            "mobile": "0559876543",
            "address": "Olaya Street, Riyadh",
            "message": "Do you accept insurance?",
            "is_read": is_read,
            "created_at": self._next_timestamp(),
        }
        row.update(fields)
        self.tables["contact_messages"].append(row)
        return row

    # -- request inspection --

    def requests_for(self, method: str, resource: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.method == method and _resource(r) == resource]

    def row(self, table: str, record_id: str) -> dict[str, Any] | None:
        return next((r for r in self.tables[table] if r["id"] == record_id), None)

    # -- transport handler --

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        resource = _resource(request)

        failure = self.failures.get((request.method, resource))
        if isinstance(failure, Exception):
            raise failure
        if isinstance(failure, int):
            return httpx.Response(failure, json={"message": "injected failure"})

        if resource == "logout":
            return httpx.Response(204)
        if resource == "rpc/has_role":
            body = json.loads(request.content)
            return httpx.Response(200, json=body["_user_id"] in self.admins)
        if resource not in self.tables:
            return httpx.Response(404, json={"message": f"relation {resource} does not exist"})

        rows = self.tables[resource]
        query = parse_qs(request.url.query.decode())
        target_id = query.get("id", [""])[0].removeprefix("eq.")

        if request.method == "POST":
            row = json.loads(request.content)
            row.setdefault("id", str(uuid.uuid4()))
            row.setdefault("created_at", self._next_timestamp())
            if resource == "booking_requests":
                row.setdefault("status", "pending")
            else:
                row.setdefault("is_read", False)
            rows.append(row)
            return httpx.Response(201)

        if request.method == "GET":
            ordered = sorted(rows, key=lambda r: r["created_at"], reverse=True)
            return httpx.Response(200, json=ordered)

        if request.method == "PATCH":
            patch = json.loads(request.content)
            for row in rows:
                if row["id"] == target_id:
                    row.update(patch)
            return httpx.Response(204)

        if request.method == "DELETE":
            self.tables[resource] = [r for r in rows if r["id"] != target_id]
            return httpx.Response(204)

        return httpx.Response(405)


def _resource(request: httpx.Request) -> str:
    path = request.url.path
    for prefix in ("/rest/v1/", "/auth/v1/"):
        if path.startswith(prefix):
            return path[len(prefix):]
    return path


# === Token helpers ===


def _b64(data: dict[str, Any]) -> str:
    raw = json.dumps(data).encode()
    return base64.urlsafe_b64encode(raw).decode().rstrip("=")


def build_token(sub: str | None, expires_in: timedelta = timedelta(hours=1)) -> str:
    """Unsigned JWT with sub and exp claims."""
    payload: dict[str, Any] = {
        "exp": int((datetime.now(timezone.utc) + expires_in).timestamp()),
        "role": "authenticated",
    }
    if sub is not None:
        payload["sub"] = sub
    return token_from_claims(payload)


def token_from_claims(payload: dict[str, Any]) -> str:
    """Unsigned JWT carrying exactly the given claims."""
    return f"{_b64({'alg': 'HS256', 'typ': 'JWT'})}.{_b64(payload)}.signature"


# === Fixtures ===


@pytest.fixture(autouse=True)
def reset_service_singletons() -> Generator[None, None, None]:
    """Reset cached services before and after each test."""
    from clinic_api.dependencies import reset_services

    reset_services()
    yield
    reset_services()


@pytest.fixture
def settings() -> ClinicSettings:
    return ClinicSettings(
        supabase_url="https://clinic-project.supabase.test",
        supabase_key="anon-publishable-key",
        request_timeout=5.0,
    )


@pytest.fixture
def fake_supabase() -> FakeSupabase:
    return FakeSupabase()


@pytest.fixture
def transport(fake_supabase: FakeSupabase) -> httpx.MockTransport:
    return httpx.MockTransport(fake_supabase.handler)


@pytest.fixture
def record_store(settings: ClinicSettings, transport: httpx.MockTransport) -> RecordStoreClient:
    return RecordStoreClient(settings, transport=transport)


@pytest.fixture
def auth_gate(
    settings: ClinicSettings,
    record_store: RecordStoreClient,
    transport: httpx.MockTransport,
) -> AuthGate:
    return AuthGate(settings, record_store, transport=transport)


@pytest.fixture
def make_token() -> Callable[..., str]:
    """Factory for unsigned bearer tokens."""
    return build_token


@pytest.fixture
def make_claims_token() -> Callable[[dict[str, Any]], str]:
    """Factory for unsigned tokens with arbitrary claims."""
    return token_from_claims


@pytest.fixture
def admin_token() -> str:
    return build_token(ADMIN_USER_ID)


@pytest.fixture
def visitor_token() -> str:
    return build_token(VISITOR_USER_ID)


@pytest.fixture
def valid_form_values() -> dict[str, str]:
    return {
        "fullName": "Omar Haddad",
        "mobile": "0501234567",
        "address": "King Fahd Road, Riyadh",
        "message": "I would like a consultation next week.",
    }


@pytest.fixture
def admin_user_id() -> str:
    return ADMIN_USER_ID


@pytest.fixture
def visitor_user_id() -> str:
    return VISITOR_USER_ID
