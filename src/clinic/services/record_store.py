"""Record Store REST client for table-per-resource operations.

The hosted backend exposes every table at `{url}/rest/v1/<table>` with
PostgREST-style filters (`id=eq.<id>`, `order=created_at.desc`). Public
inserts carry only the apikey header; admin calls also carry the session's
bearer token so row-level security can check the admin role.
"""

from typing import Any

import httpx

from clinic.config import ClinicSettings
from clinic.models.errors import RemoteRequestError
from clinic.utils.logging import get_logger, log_record_operation

logger = get_logger(__name__)

# Module-level singleton for connection reuse
_record_store_instance: "RecordStoreClient | None" = None


def get_record_store(settings: ClinicSettings | None = None) -> "RecordStoreClient":
    """Get or create the singleton Record Store client.

    Args:
        settings: Settings to use. Only used on first call.

    Returns:
        Shared RecordStoreClient instance
    """
    global _record_store_instance
    if _record_store_instance is None:
        _record_store_instance = RecordStoreClient(settings or ClinicSettings.from_env())
    return _record_store_instance


def reset_record_store() -> None:
    """Reset the singleton instance (for testing only)."""
    global _record_store_instance
    _record_store_instance = None


async def close_record_store() -> None:
    """Close the singleton's connection pool and drop the instance."""
    global _record_store_instance
    if _record_store_instance is not None:
        await _record_store_instance.aclose()
    _record_store_instance = None


class RecordStoreClient:
    """Async client for insert/select/patch/delete/rpc against the Record Store."""

    def __init__(
        self,
        settings: ClinicSettings,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            settings: Endpoint and key configuration
            transport: Optional transport override (tests use httpx.MockTransport)
        """
        self.settings = settings
        self._client = httpx.AsyncClient(
            base_url=settings.rest_url,
            timeout=settings.request_timeout,
            transport=transport,
        )

    def _headers(
        self,
        access_token: str | None = None,
        *,
        json_body: bool = False,
        minimal: bool = False,
    ) -> dict[str, str]:
        headers = {"apikey": self.settings.supabase_key}
        if access_token:
            headers["Authorization"] = f"Bearer {access_token}"
        if json_body:
            headers["Content-Type"] = "application/json"
        if minimal:
            headers["Prefer"] = "return=minimal"
        return headers

    async def _send(
        self,
        method: str,
        path: str,
        *,
        operation: str,
        table: str | None,
        headers: dict[str, str],
        params: dict[str, str] | None = None,
        json: Any = None,
    ) -> httpx.Response:
        """Send one request; raise RemoteRequestError on transport failure or non-2xx."""
        try:
            response = await self._client.request(
                method, path, headers=headers, params=params, json=json
            )
        except httpx.HTTPError as e:
            log_record_operation(
                logger, operation, table=table, error=f"{type(e).__name__}: {e}"
            )
            raise RemoteRequestError(
                operation, table=table, reason=type(e).__name__
            ) from e

        if not response.is_success:
            log_record_operation(
                logger,
                operation,
                table=table,
                error=f"HTTP {response.status_code}",
            )
            raise RemoteRequestError(
                operation,
                table=table,
                status_code=response.status_code,
                reason=response.reason_phrase or None,
            )
        return response

    # Generic table operations

    async def insert(
        self,
        table: str,
        row: dict[str, Any],
        access_token: str | None = None,
    ) -> None:
        """Insert a single row.

        Args:
            table: Table name
            row: Column values
            access_token: Optional session token (public inserts omit it)

        Raises:
            RemoteRequestError: On non-2xx or transport failure
        """
        await self._send(
            "POST",
            f"/{table}",
            operation="insert",
            table=table,
            headers=self._headers(access_token, json_body=True, minimal=True),
            json=row,
        )
        log_record_operation(logger, "insert", table=table)

    async def select(
        self,
        table: str,
        access_token: str,
        order: str = "created_at.desc",
    ) -> list[dict[str, Any]]:
        """Select all columns of all rows, ordered.

        Args:
            table: Table name
            access_token: Session token
            order: PostgREST order expression (newest first by default)

        Returns:
            List of row dicts

        Raises:
            RemoteRequestError: On non-2xx, transport failure or a non-list body
        """
        response = await self._send(
            "GET",
            f"/{table}",
            operation="select",
            table=table,
            headers=self._headers(access_token),
            params={"select": "*", "order": order},
        )
        try:
            rows = response.json()
        except ValueError as e:
            raise RemoteRequestError("select", table=table, reason="invalid JSON") from e
        if not isinstance(rows, list):
            raise RemoteRequestError("select", table=table, reason="expected a list")
        return rows

    async def update(
        self,
        table: str,
        record_id: str,
        patch: dict[str, Any],
        access_token: str,
    ) -> None:
        """Patch the row identified by id. Last writer wins.

        Raises:
            RemoteRequestError: On non-2xx or transport failure
        """
        await self._send(
            "PATCH",
            f"/{table}",
            operation="update",
            table=table,
            headers=self._headers(access_token, json_body=True, minimal=True),
            params={"id": f"eq.{record_id}"},
            json=patch,
        )
        log_record_operation(
            logger, "update", table=table, record_id=record_id, fields=",".join(patch)
        )

    async def delete(
        self,
        table: str,
        record_id: str,
        access_token: str,
    ) -> None:
        """Delete the row identified by id.

        Raises:
            RemoteRequestError: On non-2xx or transport failure
        """
        await self._send(
            "DELETE",
            f"/{table}",
            operation="delete",
            table=table,
            headers=self._headers(access_token),
            params={"id": f"eq.{record_id}"},
        )
        log_record_operation(logger, "delete", table=table, record_id=record_id)

    async def rpc(
        self,
        function: str,
        params: dict[str, Any],
        access_token: str | None = None,
    ) -> Any:
        """Call a remote procedure and return its decoded JSON result.

        Raises:
            RemoteRequestError: On non-2xx, transport failure or invalid JSON
        """
        response = await self._send(
            "POST",
            f"/rpc/{function}",
            operation=f"rpc:{function}",
            table=None,
            headers=self._headers(access_token, json_body=True),
            json=params,
        )
        try:
            return response.json()
        except ValueError as e:
            raise RemoteRequestError(f"rpc:{function}", reason="invalid JSON") from e

    async def aclose(self) -> None:
        """Close the underlying HTTP connection pool."""
        await self._client.aclose()
