"""Role service for business logic."""

from typing import Annotated

import structlog
from fastapi import Depends

from gatekeeper.core.errors import BadRequestError, ConflictError, NotFoundError
from gatekeeper.core.permissions.models import Permission, Role
from gatekeeper.modules.roles.repos import PermissionRepo, RoleRepo
from gatekeeper.modules.roles.schemas import RoleCreate, RoleUpdate


logger = structlog.get_logger()


class RoleService:
    """Service for role management operations.

    Handles role CRUD and the links between roles and permissions.
    Changes apply to tokens issued after the change; tokens already
    in circulation keep the permissions they were minted with.
    """

    def __init__(self, repo: RoleRepo, permission_repo: PermissionRepo) -> None:
        self.repo = repo
        self.permission_repo = permission_repo

    async def list_roles(self) -> list[Role]:
        """List all roles ordered by ID, with their permissions."""
        return await self.repo.list_all()

    async def get_role(self, role_id: int) -> Role:
        """Get a role by ID.

        Raises:
            NotFoundError: If role not found
        """
        role = await self.repo.get_by_id(role_id)
        if not role:
            raise NotFoundError(
                "Role not found",
                resource="role",
                resource_id=str(role_id),
            )
        return role

    async def create_role(self, data: RoleCreate) -> Role:
        """Create a role and grant it the listed permissions.

        Permission IDs that match no permission are ignored.

        Args:
            data: Role creation data

        Returns:
            The created role

        Raises:
            ConflictError: If a role with this exact name exists
        """
        await self._ensure_name_available(data.name)

        permissions = await self.permission_repo.get_by_ids(data.permission_ids)
        role = Role(
            name=data.name,
            description=data.description,
            permissions=permissions,
        )
        role = await self.repo.create(role)

        logger.info(
            "role_created",
            role_id=role.id,
            permissions=[p.key for p in permissions],
        )
        return await self.get_role(role.id)

    async def update_role(self, role_id: int, data: RoleUpdate) -> Role:
        """Apply a partial update to a role.

        Args:
            role_id: The role's ID
            data: Fields to change; ``None`` means unchanged

        Returns:
            The updated role

        Raises:
            NotFoundError: If role not found
            ConflictError: If the new name belongs to another role
        """
        role = await self.get_role(role_id)

        if data.name is not None and data.name != role.name:
            await self._ensure_name_available(data.name)
            role.name = data.name

        if data.description is not None:
            role.description = data.description

        if data.permission_ids is not None:
            role.permissions = await self.permission_repo.get_by_ids(
                data.permission_ids
            )

        await self.repo.update(role)

        logger.info(
            "role_updated",
            role_id=role_id,
            fields=sorted(data.model_fields_set),
        )
        return await self.get_role(role_id)

    async def delete_role(self, role_id: int) -> None:
        """Delete a role.

        Users who held the role stop resolving its permissions.

        Raises:
            NotFoundError: If role not found
        """
        role = await self.get_role(role_id)
        await self.repo.delete(role)
        logger.info("role_deleted", role_id=role_id)

    async def get_role_permissions(self, role_id: int) -> list[Permission]:
        """Get the permissions granted by a role, ordered by key.

        Raises:
            NotFoundError: If role not found
        """
        role = await self.get_role(role_id)
        return list(role.permissions)

    async def add_permission(self, role_id: int, permission_id: int) -> None:
        """Grant a single permission to a role.

        Raises:
            BadRequestError: If the role or permission does not exist,
                or the role already has the permission
        """
        role = await self.repo.get_by_id(role_id)
        permission = await self.permission_repo.get_by_id(permission_id)

        if (
            role is None
            or permission is None
            or await self.repo.has_permission_link(role_id, permission_id)
        ):
            raise BadRequestError(
                "Failed to add permission to role",
                error_code="permission_assignment_failed",
                details={"role_id": role_id, "permission_id": permission_id},
            )

        await self.repo.add_permission_link(role_id, permission_id)
        logger.info(
            "role_permission_added",
            role_id=role_id,
            permission=permission.key,
        )

    async def remove_permission(self, role_id: int, permission_id: int) -> None:
        """Revoke a single permission from a role.

        Raises:
            NotFoundError: If the role does not have the permission
        """
        removed = await self.repo.remove_permission_link(role_id, permission_id)
        if not removed:
            raise NotFoundError(
                "Role permission not found",
                resource="role_permission",
                resource_id=f"{role_id}:{permission_id}",
            )
        logger.info(
            "role_permission_removed",
            role_id=role_id,
            permission_id=permission_id,
        )

    async def _ensure_name_available(self, name: str) -> None:
        if await self.repo.get_by_name(name) is not None:
            raise ConflictError(
                "Role name already exists",
                error_code="role_exists",
                details={"name": name},
            )


# Type alias for dependency injection
RoleSvc = Annotated[RoleService, Depends(RoleService)]
