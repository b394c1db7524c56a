"""Health and info endpoints.

Readiness requires the seeded permission catalog and Admin role, not
just a reachable database.
"""

from typing import Any

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from sqlalchemy.exc import SQLAlchemyError

from gatekeeper import __version__
from gatekeeper.config import settings
from gatekeeper.core.permissions import ALL_PERMISSIONS
from gatekeeper.core.permissions.seed import ADMIN_ROLE
from gatekeeper.modules.roles.repos import PermissionRepo, RoleRepo


router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Liveness response schema."""

    status: str


class ReadinessResponse(BaseModel):
    """Readiness response schema."""

    status: str
    checks: dict[str, str]


@router.get("/health/live", response_model=HealthResponse, summary="Liveness probe")
async def liveness() -> HealthResponse:
    """Return 200 while the process is running."""
    return HealthResponse(status="alive")


@router.get(
    "/health/ready",
    response_model=ReadinessResponse,
    summary="Readiness probe",
    description=(
        "Returns 200 once the database answers, every catalog permission "
        "is seeded and the Admin role exists; 503 otherwise."
    ),
)
async def readiness(
    permission_repo: PermissionRepo,
    role_repo: RoleRepo,
) -> JSONResponse:
    """Report database reachability and seed state."""
    checks: dict[str, str] = {}

    try:
        seeded_keys = await permission_repo.list_keys()
        admin_role = await role_repo.get_by_name(ADMIN_ROLE)
    except SQLAlchemyError as e:
        checks["database"] = type(e).__name__
    else:
        checks["database"] = "ok"

        missing = sorted(str(p) for p in ALL_PERMISSIONS if p not in seeded_keys)
        checks["permission_catalog"] = (
            f"missing: {', '.join(missing)}" if missing else "ok"
        )
        checks["admin_role"] = "ok" if admin_role else "missing"

    ready = all(v == "ok" for v in checks.values())

    return JSONResponse(
        status_code=(
            status.HTTP_200_OK if ready else status.HTTP_503_SERVICE_UNAVAILABLE
        ),
        content={"status": "ready" if ready else "not_ready", "checks": checks},
    )


@router.get("/info", summary="Application info")
async def info() -> dict[str, Any]:
    """Application metadata and the permission catalog it enforces."""
    return {
        "app": settings.app_name,
        "version": __version__,
        "environment": settings.environment,
        "debug": settings.debug,
        "permissions": sorted(str(p) for p in ALL_PERMISSIONS),
    }
