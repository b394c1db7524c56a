"""Permission system database models.

This module defines the RBAC graph:
- Permission: one grantable capability, identified by a stable key
- Role: a named set of permissions
- user_roles: join table linking users to roles
- role_permissions: join table linking roles to permissions
"""

from typing import TYPE_CHECKING

from sqlalchemy import Column, ForeignKey, Integer, String, Table
from sqlalchemy.orm import Mapped, mapped_column, relationship

from gatekeeper.core.constants import (
    MAX_DESCRIPTION_LENGTH,
    MAX_PERMISSION_KEY_LENGTH,
    MAX_ROLE_NAME_LENGTH,
)
from gatekeeper.core.database.base import Base, CreatedAtMixin, IntIdMixin


if TYPE_CHECKING:
    from gatekeeper.modules.users.models import User


# Junction table for User <-> Role many-to-many relationship
user_roles = Table(
    "user_roles",
    Base.metadata,
    Column(
        "user_id",
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "role_id",
        Integer,
        ForeignKey("roles.id", ondelete="CASCADE"),
        primary_key=True,
        index=True,
    ),
)

# Junction table for Role <-> Permission many-to-many relationship
role_permissions = Table(
    "role_permissions",
    Base.metadata,
    Column(
        "role_id",
        Integer,
        ForeignKey("roles.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "permission_id",
        Integer,
        ForeignKey("permissions.id", ondelete="CASCADE"),
        primary_key=True,
        index=True,
    ),
)


class Permission(Base, IntIdMixin):
    """A single grantable capability.

    Rows are seeded from ``gatekeeper.core.permissions.catalog`` and are
    not mutated by normal operation.

    Attributes:
        key: Stable identifier such as "users.view"
        description: Human-readable description
    """

    __tablename__ = "permissions"

    key: Mapped[str] = mapped_column(
        String(MAX_PERMISSION_KEY_LENGTH),
        nullable=False,
        unique=True,
    )
    description: Mapped[str | None] = mapped_column(
        String(MAX_DESCRIPTION_LENGTH),
        nullable=True,
    )

    roles: Mapped[list["Role"]] = relationship(
        "Role",
        secondary=role_permissions,
        back_populates="permissions",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"<Permission({self.key})>"


class Role(Base, IntIdMixin, CreatedAtMixin):
    """A named set of permissions.

    Attributes:
        name: Unique role name (e.g., "Admin", "Viewer")
        description: Human-readable description of the role
    """

    __tablename__ = "roles"

    name: Mapped[str] = mapped_column(
        String(MAX_ROLE_NAME_LENGTH),
        nullable=False,
        unique=True,
    )
    description: Mapped[str | None] = mapped_column(
        String(MAX_DESCRIPTION_LENGTH),
        nullable=True,
    )

    permissions: Mapped[list["Permission"]] = relationship(
        "Permission",
        secondary=role_permissions,
        back_populates="roles",
        lazy="selectin",
        order_by="Permission.key",
    )
    users: Mapped[list["User"]] = relationship(
        "User",
        secondary=user_roles,
        back_populates="roles",
        passive_deletes=True,
    )

    @property
    def permission_keys(self) -> list[str]:
        """Keys of the permissions granted by this role."""
        return [permission.key for permission in self.permissions]

    def __repr__(self) -> str:
        return f"<Role(id={self.id}, name={self.name})>"
