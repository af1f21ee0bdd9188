"""Health check endpoint."""

from typing import Any

from fastapi import APIRouter

from clinic import __version__

router = APIRouter(tags=["health"])


@router.get("/health", summary="Service health")
async def health() -> dict[str, Any]:
    return {"status": "healthy", "version": __version__}
