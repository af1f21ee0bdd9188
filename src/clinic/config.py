"""Runtime configuration read from environment variables."""

import os

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_CORS_ORIGINS = ("http://localhost:5173", "http://127.0.0.1:5173")


class ClinicSettings(BaseModel):
    """Endpoints and keys for the hosted Record Store and auth service."""

    model_config = ConfigDict(frozen=True)

    supabase_url: str = Field(
        default="http://localhost:54321",
        description="Base URL of the hosted backend (REST at /rest/v1, auth at /auth/v1)",
    )
    supabase_key: str = Field(default="", description="Publishable API key sent as apikey")
    request_timeout: float = Field(default=10.0, gt=0, description="HTTP timeout in seconds")
    admin_role: str = Field(default="admin", description="Role passed to has_role")
    login_path: str = Field(default="/admin/login", description="Redirect target for the gate")
    cors_origins: tuple[str, ...] = Field(default=DEFAULT_CORS_ORIGINS)
    log_level: str = Field(default="INFO")

    @property
    def rest_url(self) -> str:
        return f"{self.supabase_url.rstrip('/')}/rest/v1"

    @property
    def auth_url(self) -> str:
        return f"{self.supabase_url.rstrip('/')}/auth/v1"

    @classmethod
    def from_env(cls) -> "ClinicSettings":
        """Build settings from CLINIC_* environment variables."""
        origins = os.getenv("CLINIC_CORS_ORIGINS")
        return cls(
            supabase_url=os.getenv("CLINIC_SUPABASE_URL", "http://localhost:54321"),
            supabase_key=os.getenv("CLINIC_SUPABASE_KEY", ""),
            request_timeout=float(os.getenv("CLINIC_REQUEST_TIMEOUT", "10")),
            admin_role=os.getenv("CLINIC_ADMIN_ROLE", "admin"),
            login_path=os.getenv("CLINIC_LOGIN_PATH", "/admin/login"),
            cors_origins=(
                tuple(o.strip() for o in origins.split(",") if o.strip())
                if origins
                else DEFAULT_CORS_ORIGINS
            ),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
        )
