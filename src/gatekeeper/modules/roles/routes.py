"""Role management routes."""

from fastapi import APIRouter, Depends, Response, status

from gatekeeper.core.permissions import Permissions, require_permission
from gatekeeper.modules.roles.schemas import (
    PermissionResponse,
    RoleCreate,
    RolePermissionAdd,
    RoleResponse,
    RoleUpdate,
)
from gatekeeper.modules.roles.services import RoleSvc


router = APIRouter(prefix="/roles", tags=["roles"])


# ============================================================
# Role CRUD
# ============================================================


@router.get(
    "",
    response_model=list[RoleResponse],
    summary="List roles",
    description="List all roles with the keys of the permissions they grant.",
    dependencies=[Depends(require_permission(Permissions.ROLES_VIEW))],
)
async def list_roles(service: RoleSvc) -> list[RoleResponse]:
    """List roles."""
    roles = await service.list_roles()
    return [RoleResponse.from_role(r) for r in roles]


@router.get(
    "/{role_id}",
    response_model=RoleResponse,
    summary="Get role by ID",
    dependencies=[Depends(require_permission(Permissions.ROLES_VIEW))],
)
async def get_role(
    role_id: int,
    service: RoleSvc,
) -> RoleResponse:
    """Get role by ID."""
    role = await service.get_role(role_id)
    return RoleResponse.from_role(role)


@router.post(
    "",
    response_model=RoleResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create role",
    dependencies=[Depends(require_permission(Permissions.ROLES_MANAGE))],
)
async def create_role(
    data: RoleCreate,
    service: RoleSvc,
) -> RoleResponse:
    """Create a role."""
    role = await service.create_role(data)
    return RoleResponse.from_role(role)


@router.put(
    "/{role_id}",
    response_model=RoleResponse,
    summary="Update role",
    description="Partially update a role. A present permissionIds list replaces its grants.",
    dependencies=[Depends(require_permission(Permissions.ROLES_MANAGE))],
)
async def update_role(
    role_id: int,
    data: RoleUpdate,
    service: RoleSvc,
) -> RoleResponse:
    """Update role by ID."""
    role = await service.update_role(role_id, data)
    return RoleResponse.from_role(role)


@router.delete(
    "/{role_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Delete role",
    dependencies=[Depends(require_permission(Permissions.ROLES_MANAGE))],
)
async def delete_role(
    role_id: int,
    service: RoleSvc,
) -> Response:
    """Delete role by ID."""
    await service.delete_role(role_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# ============================================================
# Role Permissions
# ============================================================


@router.get(
    "/{role_id}/permissions",
    response_model=list[PermissionResponse],
    summary="List role permissions",
    dependencies=[Depends(require_permission(Permissions.ROLES_VIEW))],
)
async def get_role_permissions(
    role_id: int,
    service: RoleSvc,
) -> list[PermissionResponse]:
    """List the permissions a role grants."""
    permissions = await service.get_role_permissions(role_id)
    return [PermissionResponse.model_validate(p) for p in permissions]


@router.post(
    "/{role_id}/permissions",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Add permission to role",
    dependencies=[Depends(require_permission(Permissions.ROLES_MANAGE))],
)
async def add_role_permission(
    role_id: int,
    data: RolePermissionAdd,
    service: RoleSvc,
) -> Response:
    """Grant one permission to a role."""
    await service.add_permission(role_id, data.permission_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(
    "/{role_id}/permissions/{permission_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Remove permission from role",
    dependencies=[Depends(require_permission(Permissions.ROLES_MANAGE))],
)
async def remove_role_permission(
    role_id: int,
    permission_id: int,
    service: RoleSvc,
) -> Response:
    """Revoke one permission from a role."""
    await service.remove_permission(role_id, permission_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
