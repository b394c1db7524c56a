"""Pydantic schemas for role and permission operations."""

from datetime import datetime
from typing import TYPE_CHECKING

from pydantic import Field

from gatekeeper.core.constants import MAX_DESCRIPTION_LENGTH, MAX_ROLE_NAME_LENGTH
from gatekeeper.core.schemas import CamelModel


if TYPE_CHECKING:
    from gatekeeper.core.permissions.models import Role


class PermissionResponse(CamelModel):
    """A catalog entry."""

    id: int
    key: str
    description: str | None = None


class RoleCreate(CamelModel):
    """Schema for creating a role."""

    name: str = Field(..., min_length=1, max_length=MAX_ROLE_NAME_LENGTH)
    description: str | None = Field(None, max_length=MAX_DESCRIPTION_LENGTH)
    permission_ids: list[int] = Field(default_factory=list)


class RoleUpdate(CamelModel):
    """Schema for a partial role update.

    A present ``permissionIds`` list, even an empty one, replaces the
    role's permissions.
    """

    name: str | None = Field(None, min_length=1, max_length=MAX_ROLE_NAME_LENGTH)
    description: str | None = Field(None, max_length=MAX_DESCRIPTION_LENGTH)
    permission_ids: list[int] | None = None


class RolePermissionAdd(CamelModel):
    """Body for linking a single permission to a role."""

    permission_id: int


class RoleResponse(CamelModel):
    """Schema for role response data."""

    id: int
    name: str
    description: str | None = None
    created_at: datetime
    permissions: list[str]

    @classmethod
    def from_role(cls, role: "Role") -> "RoleResponse":
        """Build a response from a Role with its permissions loaded."""
        return cls(
            id=role.id,
            name=role.name,
            description=role.description,
            created_at=role.created_at,
            permissions=role.permission_keys,
        )
