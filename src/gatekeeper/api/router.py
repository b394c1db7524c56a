"""Root API router: health endpoints plus the versioned API."""

from fastapi import APIRouter

from gatekeeper.api.health import router as health_router
from gatekeeper.core.auth.routes import router as auth_router
from gatekeeper.modules import discover_modules


v1_router = APIRouter(prefix="/api/v1")
v1_router.include_router(auth_router)

for module_router in discover_modules():
    v1_router.include_router(module_router)

api_router = APIRouter()
api_router.include_router(health_router)
api_router.include_router(v1_router)
