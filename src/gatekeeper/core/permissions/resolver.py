"""Permission resolution.

Computes a user's effective permission set: the union of the
permission keys of every role the user holds. There are no deny
rules and no wildcards; a key present in the union is granted.
"""

from dataclasses import dataclass, field

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from gatekeeper.core.permissions.models import (
    Permission,
    Role,
    role_permissions,
    user_roles,
)
from gatekeeper.modules.users.models import User


@dataclass(frozen=True)
class ResolvedUser:
    """An active user together with their roles and effective permissions."""

    id: int
    email: str
    is_active: bool
    roles: list[str] = field(default_factory=list)
    permissions: list[str] = field(default_factory=list)


class PermissionResolver:
    """Service for resolving user permissions.

    Walks user -> user_roles -> role_permissions -> permissions
    and returns deduplicated permission keys.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get_user_roles(self, user_id: int) -> list[Role]:
        """Get all roles assigned to a user.

        Args:
            user_id: The user's ID

        Returns:
            Roles assigned to the user, ordered by ID
        """
        stmt = (
            select(Role)
            .join(user_roles, user_roles.c.role_id == Role.id)
            .where(user_roles.c.user_id == user_id)
            .order_by(Role.id)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_user_permissions(self, user_id: int) -> set[str]:
        """Get the effective permission set for a user.

        A permission shared by several of the user's roles appears once.

        Args:
            user_id: The user's ID

        Returns:
            Set of permission keys
        """
        stmt = (
            select(Permission.key)
            .join(role_permissions, role_permissions.c.permission_id == Permission.id)
            .join(user_roles, user_roles.c.role_id == role_permissions.c.role_id)
            .where(user_roles.c.user_id == user_id)
            .distinct()
        )
        result = await self.session.execute(stmt)
        return set(result.scalars().all())

    async def get_active_user(self, user_id: int) -> User | None:
        """Get a user only if they exist and are active."""
        stmt = select(User).where(User.id == user_id, User.is_active.is_(True))
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def resolve(self, user_id: int) -> ResolvedUser | None:
        """Resolve an active user's roles and permissions.

        Args:
            user_id: The user's ID

        Returns:
            ResolvedUser, or None if the user is unknown or inactive
        """
        user = await self.get_active_user(user_id)
        if user is None:
            return None

        roles = await self.get_user_roles(user.id)
        permissions = await self.get_user_permissions(user.id)

        return ResolvedUser(
            id=user.id,
            email=user.email,
            is_active=user.is_active,
            roles=[role.name for role in roles],
            permissions=sorted(permissions),
        )
