"""Role and permission repositories for database operations."""

from collections.abc import Sequence
from typing import Annotated

from fastapi import Depends
from sqlalchemy import delete, func, insert, select

from gatekeeper.api.dependencies import DBSession
from gatekeeper.core.permissions.models import Permission, Role, role_permissions


class RoleRepository:
    """Repository for Role database operations."""

    def __init__(self, session: DBSession) -> None:
        self.session = session

    async def create(self, role: Role) -> Role:
        """Create a new role.

        Args:
            role: Role instance to create

        Returns:
            The created role with ID and creation time populated
        """
        self.session.add(role)
        await self.session.flush()
        await self.session.refresh(role)
        return role

    async def get_by_id(self, role_id: int) -> Role | None:
        """Get a role by ID, with its permissions freshly loaded."""
        stmt = (
            select(Role)
            .where(Role.id == role_id)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_name(self, name: str) -> Role | None:
        """Get a role by exact name."""
        stmt = select(Role).where(Role.name == name)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_ids(self, role_ids: Sequence[int]) -> list[Role]:
        """Get the roles whose IDs appear in ``role_ids``.

        Unknown IDs are skipped.

        Args:
            role_ids: Candidate role IDs

        Returns:
            Matching roles ordered by ID
        """
        if not role_ids:
            return []
        stmt = select(Role).where(Role.id.in_(set(role_ids))).order_by(Role.id)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def count(self) -> int:
        """Count all roles."""
        stmt = select(func.count()).select_from(Role)
        result = await self.session.execute(stmt)
        return result.scalar_one()

    async def list_all(self) -> list[Role]:
        """List all roles ordered by ID."""
        stmt = (
            select(Role)
            .order_by(Role.id)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def update(self, role: Role) -> Role:
        """Flush changes to a role."""
        await self.session.flush()
        await self.session.refresh(role)
        return role

    async def delete(self, role: Role) -> None:
        """Delete a role; its user and permission links go with it."""
        await self.session.delete(role)
        await self.session.flush()

    async def has_permission_link(self, role_id: int, permission_id: int) -> bool:
        """Check whether a role already grants a permission."""
        stmt = select(role_permissions.c.role_id).where(
            role_permissions.c.role_id == role_id,
            role_permissions.c.permission_id == permission_id,
        )
        result = await self.session.execute(stmt)
        return result.first() is not None

    async def add_permission_link(self, role_id: int, permission_id: int) -> None:
        """Insert a single role to permission link."""
        await self.session.execute(
            insert(role_permissions).values(
                role_id=role_id,
                permission_id=permission_id,
            )
        )

    async def remove_permission_link(self, role_id: int, permission_id: int) -> bool:
        """Delete a single role to permission link.

        Returns:
            True if a link was removed, False if none existed
        """
        result = await self.session.execute(
            delete(role_permissions).where(
                role_permissions.c.role_id == role_id,
                role_permissions.c.permission_id == permission_id,
            )
        )
        return bool(result.rowcount)


class PermissionRepository:
    """Repository for Permission database operations."""

    def __init__(self, session: DBSession) -> None:
        self.session = session

    async def get_by_id(self, permission_id: int) -> Permission | None:
        """Get a permission by ID."""
        return await self.session.get(Permission, permission_id)

    async def get_by_ids(self, permission_ids: Sequence[int]) -> list[Permission]:
        """Get the permissions whose IDs appear in ``permission_ids``.

        Unknown IDs are skipped.
        """
        if not permission_ids:
            return []
        stmt = (
            select(Permission)
            .where(Permission.id.in_(set(permission_ids)))
            .order_by(Permission.key)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def count(self) -> int:
        """Count all permissions."""
        stmt = select(func.count()).select_from(Permission)
        result = await self.session.execute(stmt)
        return result.scalar_one()

    async def list_keys(self) -> set[str]:
        """Keys of every seeded permission."""
        result = await self.session.execute(select(Permission.key))
        return set(result.scalars().all())

    async def list_all(self) -> list[Permission]:
        """List the catalog ordered by key."""
        stmt = select(Permission).order_by(Permission.key)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def add_all(self, permissions: Sequence[Permission]) -> list[Permission]:
        """Insert several permissions at once."""
        self.session.add_all(permissions)
        await self.session.flush()
        return list(permissions)


# Type aliases for dependency injection
RoleRepo = Annotated[RoleRepository, Depends(RoleRepository)]
PermissionRepo = Annotated[PermissionRepository, Depends(PermissionRepository)]
