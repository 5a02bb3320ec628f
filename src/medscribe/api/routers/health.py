"""
Health check endpoints.
"""

from datetime import datetime, timezone

from fastapi import APIRouter, Request
from pydantic import BaseModel

from ...core.config import get_settings
from ..schemas.common import ApiResponse
from ..utils.responses import ok

router = APIRouter(prefix="/health", tags=["health"])


class HealthResponse(BaseModel):
    """Health check response schema."""

    status: str
    timestamp: datetime
    version: str
    service: str


@router.get("", response_model=ApiResponse[HealthResponse])
async def health_check(request: Request):
    """
    Health check endpoint.

    Returns the current status of the service.
    """
    settings = get_settings()
    return ok(request, data=HealthResponse(
        status="healthy",
        timestamp=datetime.now(timezone.utc),
        version=settings.app_version,
        service=settings.app_name,
    ), message="OK")


@router.get("/ready", response_model=ApiResponse[dict])
async def readiness_check(request: Request):
    """
    Readiness check endpoint.

    Reports whether the workspace has loaded its documents and whether the
    document store is working or has fallen back to memory.
    """
    settings = get_settings()
    workspace = getattr(request.app.state, "workspace", None)

    checks = {
        "workspace": "ok" if workspace is not None and workspace.loaded else "not_loaded",
        "storage_backend": settings.storage.backend,
    }
    if workspace is not None:
        checks["storage"] = "degraded" if workspace.storage_health.degraded else "ok"

    ready = checks["workspace"] == "ok"
    return ok(
        request,
        data={"ready": ready, "checks": checks},
        message="Ready" if ready else "Not ready",
    )
