"""Idempotent startup seed for the RBAC graph.

Each step only runs when its table is empty, so the seed can run
on every boot and from ``scripts/seed.py`` without duplicating rows.
"""

from dataclasses import dataclass
from typing import TypedDict

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from gatekeeper.config import settings
from gatekeeper.core.auth.backend import hash_password
from gatekeeper.core.permissions.catalog import ALL_PERMISSIONS, describe
from gatekeeper.core.permissions.models import Permission, Role
from gatekeeper.modules.roles.repos import PermissionRepository, RoleRepository
from gatekeeper.modules.users.models import User
from gatekeeper.modules.users.repos import UserRepository


logger = structlog.get_logger()


class RoleDefinition(TypedDict):
    """A role created on first boot."""

    name: str
    description: str
    all_permissions: bool


ADMIN_ROLE = "Admin"

DEFAULT_ROLES: list[RoleDefinition] = [
    {
        "name": ADMIN_ROLE,
        "description": "Full system access",
        "all_permissions": True,
    },
    {
        "name": "User",
        "description": "Basic user access",
        "all_permissions": False,
    },
]


@dataclass
class SeedResult:
    """What a seed run created."""

    permissions_created: int = 0
    roles_created: int = 0
    admin_created: bool = False

    @property
    def changed(self) -> bool:
        """Whether any row was created."""
        return bool(
            self.permissions_created or self.roles_created or self.admin_created
        )


async def seed_permissions(session: AsyncSession) -> int:
    """Insert the permission catalog if no permissions exist.

    Returns:
        Number of permissions inserted
    """
    repo = PermissionRepository(session)
    if await repo.count() > 0:
        logger.debug("seed_permissions_skipped")
        return 0

    created = await repo.add_all(
        [
            Permission(key=str(key), description=describe(key))
            for key in ALL_PERMISSIONS
        ]
    )
    logger.info("seed_permissions_created", count=len(created))
    return len(created)


async def seed_roles(session: AsyncSession) -> int:
    """Create the default roles if no roles exist.

    Returns:
        Number of roles created
    """
    repo = RoleRepository(session)
    if await repo.count() > 0:
        logger.debug("seed_roles_skipped")
        return 0

    permissions = await PermissionRepository(session).list_all()
    for definition in DEFAULT_ROLES:
        granted = list(permissions) if definition["all_permissions"] else []
        role = Role(
            name=definition["name"],
            description=definition["description"],
            permissions=granted,
        )
        await repo.create(role)
        logger.info(
            "seed_role_created",
            role=definition["name"],
            permission_count=len(granted),
        )

    return len(DEFAULT_ROLES)


async def seed_admin_user(
    session: AsyncSession,
    email: str | None = None,
    password: str | None = None,
) -> bool:
    """Create the admin account if no users exist.

    Args:
        session: Database session
        email: Admin email; defaults to ``settings.admin_email``
        password: Admin password; defaults to ``settings.admin_password``

    Returns:
        True if the admin user was created
    """
    repo = UserRepository(session)
    if await repo.count() > 0:
        logger.debug("seed_admin_skipped")
        return False

    admin_role = await RoleRepository(session).get_by_name(ADMIN_ROLE)
    user = User(
        email=email or settings.admin_email,
        password_hash=hash_password(password or settings.admin_password),
        is_active=True,
        roles=[admin_role] if admin_role else [],
    )
    await repo.create(user)

    if admin_role is None:
        logger.warning("seed_admin_without_role", email=user.email)
    logger.info("seed_admin_created", email=user.email)
    return True


async def seed_database(session: AsyncSession) -> SeedResult:
    """Run every seed step in order and commit.

    Args:
        session: Database session; committed on success

    Returns:
        Summary of the rows created
    """
    result = SeedResult()
    result.permissions_created = await seed_permissions(session)
    result.roles_created = await seed_roles(session)
    result.admin_created = await seed_admin_user(session)
    await session.commit()

    logger.info(
        "seed_complete",
        permissions_created=result.permissions_created,
        roles_created=result.roles_created,
        admin_created=result.admin_created,
    )
    return result
