"""Permission catalog routes."""

from fastapi import APIRouter, Depends

from gatekeeper.core.permissions import Permissions, require_permission
from gatekeeper.modules.roles.repos import PermissionRepo
from gatekeeper.modules.roles.schemas import PermissionResponse


router = APIRouter(prefix="/permissions", tags=["permissions"])


@router.get(
    "",
    response_model=list[PermissionResponse],
    summary="List permissions",
    description="The fixed permission catalog, ordered by key.",
    dependencies=[Depends(require_permission(Permissions.PERMISSIONS_VIEW))],
)
async def list_permissions(repo: PermissionRepo) -> list[PermissionResponse]:
    """List the permission catalog."""
    permissions = await repo.list_all()
    return [PermissionResponse.model_validate(p) for p in permissions]
