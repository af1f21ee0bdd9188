"""Unit tests for the public contact intake endpoint.

The Record Store is the in-memory fake from conftest, injected through
app.dependency_overrides.
"""

from typing import Generator

import httpx
import pytest
from fastapi.testclient import TestClient

from clinic.services.record_store import RecordStoreClient


@pytest.fixture
def client(record_store: RecordStoreClient) -> Generator[TestClient, None, None]:
    from clinic_api.dependencies import get_record_store_client
    from clinic_api.main import app

    app.dependency_overrides[get_record_store_client] = lambda: record_store
    with TestClient(app) as client:
        yield client
    app.dependency_overrides.clear()


class TestSubmitContactForm:
    """Tests for POST /api/contact."""

    def test_valid_submission_is_stored_pending(
        self, client: TestClient, fake_supabase, valid_form_values: dict[str, str]
    ) -> None:
        # Given/When: a valid form is posted
        response = client.post("/api/contact", json=valid_form_values)

        # Then: 201 with the success toast and the row stored as pending
        assert response.status_code == 201
        data = response.json()
        assert data["success"] is True
        assert data["notification"]["title"] == "Message Sent!"
        assert data["maps_url"].endswith("24.7136,46.6753")
        [row] = fake_supabase.tables["booking_requests"]
        assert row["full_name"] == "Omar Haddad"
        assert row["status"] == "pending"

    def test_arabic_notification(
        self, client: TestClient, valid_form_values: dict[str, str]
    ) -> None:
        response = client.post("/api/contact?lang=ar", json=valid_form_values)

        assert response.status_code == 201
        assert response.json()["notification"]["description"] == "سنتواصل معك قريباً"

    def test_unsupported_language_falls_back_to_english(
        self, client: TestClient, valid_form_values: dict[str, str]
    ) -> None:
        response = client.post("/api/contact?lang=fr", json=valid_form_values)

        assert response.json()["notification"]["title"] == "Message Sent!"

    def test_invalid_fields_return_422_per_field(
        self, client: TestClient, fake_supabase
    ) -> None:
        response = client.post(
            "/api/contact",
            json={"fullName": "A", "mobile": "123", "address": "Riyadh"},
        )

        assert response.status_code == 422
        data = response.json()
        assert data["error_code"] == "ERR_VALIDATION"
        assert data["details"] == {
            "fullName": "Name must be at least 2 characters",
            "mobile": "Please enter a valid phone number",
        }
        assert fake_supabase.requests == []

    def test_store_rejection_returns_502(
        self, client: TestClient, fake_supabase, valid_form_values: dict[str, str]
    ) -> None:
        fake_supabase.fail_with("POST", "booking_requests", 500)

        response = client.post("/api/contact", json=valid_form_values)

        assert response.status_code == 502
        data = response.json()
        assert data["details"]["status_code"] == 500
        assert data["details"]["table"] == "booking_requests"

    def test_network_failure_returns_502(
        self, client: TestClient, fake_supabase, valid_form_values: dict[str, str]
    ) -> None:
        fake_supabase.fail_with("POST", "booking_requests", httpx.ConnectError("refused"))

        response = client.post("/api/contact", json=valid_form_values)

        assert response.status_code == 502
        assert "status_code" not in response.json()["details"]

    def test_wrongly_typed_fields_return_error_response(
        self, client: TestClient, fake_supabase
    ) -> None:
        # Given/When: fields arrive as a number and a null
        response = client.post(
            "/api/contact",
            json={"fullName": 123, "mobile": None, "address": "Riyadh"},
        )

        # Then: the same ErrorResponse shape as form validation, keyed by field
        assert response.status_code == 422
        data = response.json()
        assert data["error_code"] == "ERR_VALIDATION"
        assert set(data) == {"success", "error_code", "message", "recovery", "details"}
        assert set(data["details"]) == {"fullName", "mobile"}
        assert fake_supabase.requests == []

    def test_non_object_body_reports_under_body(self, client: TestClient) -> None:
        response = client.post("/api/contact", json=["not", "a", "form"])

        assert response.status_code == 422
        data = response.json()
        assert data["error_code"] == "ERR_VALIDATION"
        assert "body" in data["details"]
