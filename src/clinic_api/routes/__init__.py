"""API routes package.

- health: Health check endpoints
- contact: Public booking request intake
- admin: Gated dashboard load and record mutations

All routers are registered in main.py with /api prefix.
"""

from clinic_api.routes.admin import router as admin_router
from clinic_api.routes.contact import router as contact_router
from clinic_api.routes.health import router as health_router

__all__ = [
    "admin_router",
    "contact_router",
    "health_router",
]
