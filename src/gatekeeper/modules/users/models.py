"""User database models."""

from typing import TYPE_CHECKING

from sqlalchemy import Boolean, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from gatekeeper.core.constants import MAX_EMAIL_LENGTH
from gatekeeper.core.database.base import Base, IntIdMixin, TimestampMixin
from gatekeeper.core.permissions.models import user_roles


if TYPE_CHECKING:
    from gatekeeper.core.permissions.models import Role


class User(Base, IntIdMixin, TimestampMixin):
    """An account that can log in to the admin panel.

    Attributes:
        email: Unique email address (exact, case-sensitive match)
        password_hash: Bcrypt hash; the plaintext is never stored
        is_active: Whether the user can log in and resolve permissions
        roles: Roles held by the user
    """

    __tablename__ = "users"

    email: Mapped[str] = mapped_column(
        String(MAX_EMAIL_LENGTH),
        nullable=False,
        unique=True,
    )
    password_hash: Mapped[str] = mapped_column(
        Text,
        nullable=False,
    )
    is_active: Mapped[bool] = mapped_column(
        Boolean,
        default=True,
        nullable=False,
    )

    roles: Mapped[list["Role"]] = relationship(
        "Role",
        secondary=user_roles,
        back_populates="users",
        lazy="selectin",
        order_by="Role.id",
    )

    @property
    def role_names(self) -> list[str]:
        """Names of the roles held by the user."""
        return [role.name for role in self.roles]

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email})>"
