"""FastAPI dependency providers for shared services.

Services are lazily instantiated and cached with @lru_cache so every request
shares one HTTP connection pool per collaborator.

Service Dependency Graph:
    ClinicSettings (from environment)
        └── RecordStoreClient (singleton via get_record_store)
                └── AuthGate

Shutdown:
    close_services() closes both HTTP clients; the app lifespan calls it.

Testing:
    Use app.dependency_overrides, and reset_services() to clear cached
    instances between tests.
"""

from functools import lru_cache

from fastapi import Depends, Header

from clinic.config import ClinicSettings
from clinic.services.admin_dashboard import AdminDashboard
from clinic.services.auth_gate import AuthGate
from clinic.services.record_store import RecordStoreClient, get_record_store
from clinic.utils.jwt import strip_bearer


@lru_cache
def get_settings() -> ClinicSettings:
    """Get cached settings read from the environment."""
    return ClinicSettings.from_env()


@lru_cache
def get_record_store_client() -> RecordStoreClient:
    """Get cached RecordStoreClient configured from settings."""
    return get_record_store(get_settings())


@lru_cache
def get_auth_gate() -> AuthGate:
    """Get cached AuthGate sharing the Record Store client."""
    return AuthGate(get_settings(), get_record_store_client())


def get_access_token(authorization: str | None = Header(default=None)) -> str | None:
    """Bearer token from the Authorization header, if any."""
    return strip_bearer(authorization)


def get_admin_dashboard(
    access_token: str | None = Depends(get_access_token),
    record_store: RecordStoreClient = Depends(get_record_store_client),
    auth_gate: AuthGate = Depends(get_auth_gate),
) -> AdminDashboard:
    """A fresh dashboard workflow for the caller's session."""
    return AdminDashboard(record_store, auth_gate, access_token)


def reset_services() -> None:
    """Clear all cached service instances without closing them.

    Use close_services() where an event loop is available.

    Example:
        @pytest.fixture(autouse=True)
        def reset_state():
            yield
            reset_services()
    """
    from clinic.services.record_store import reset_record_store

    get_settings.cache_clear()
    get_record_store_client.cache_clear()
    get_auth_gate.cache_clear()

    reset_record_store()


async def close_services() -> None:
    """Close the cached HTTP clients, then clear the caches.

    Called from the application lifespan on shutdown.
    """
    from clinic.services.record_store import close_record_store

    if get_auth_gate.cache_info().currsize:
        await get_auth_gate().aclose()
    await close_record_store()
    reset_services()
