"""Pydantic schemas for user operations."""

import re
from datetime import datetime
from typing import TYPE_CHECKING, Annotated

from email_validator import EmailNotValidError, validate_email
from pydantic import AfterValidator, Field, field_validator

from gatekeeper.core.constants import (
    MAX_EMAIL_LENGTH,
    MAX_PASSWORD_LENGTH,
    MIN_PASSWORD_LENGTH,
    MIN_UPDATE_PASSWORD_LENGTH,
)
from gatekeeper.core.schemas import CamelModel


if TYPE_CHECKING:
    from gatekeeper.modules.users.models import User


# ============================================================
# Email Validation
# ============================================================


def validate_email_format(value: str) -> str:
    """Check that an email address is well formed.

    The address is returned exactly as given. Emails are stored and
    matched case-sensitively, so no normalization is applied.

    Raises:
        ValueError: If the address is not a valid email
    """
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError as e:
        raise ValueError(f"value is not a valid email address: {e}") from e
    return value


EmailAddress = Annotated[
    str,
    Field(max_length=MAX_EMAIL_LENGTH),
    AfterValidator(validate_email_format),
]


# ============================================================
# Password Validation
# ============================================================

# Password complexity rules: (regex pattern, human-readable name)
PASSWORD_COMPLEXITY_RULES: list[tuple[str, str]] = [
    (r"[A-Z]", "uppercase letter"),
    (r"[a-z]", "lowercase letter"),
    (r"\d", "digit"),
    (r"[@$!%*?&#^()_+\-=\[\]{};':\"\\|,.<>/~`]", "special character"),
]


def validate_password_complexity(password: str) -> str:
    """Validate password meets complexity requirements.

    Requirements:
    - At least one uppercase letter
    - At least one lowercase letter
    - At least one digit
    - At least one special character

    Raises:
        ValueError: If password doesn't meet requirements
    """
    missing = [
        name
        for pattern, name in PASSWORD_COMPLEXITY_RULES
        if not re.search(pattern, password)
    ]

    if missing:
        if len(missing) == 1:
            raise ValueError(f"Password must contain at least one {missing[0]}")
        raise ValueError(f"Password must contain at least one: {', '.join(missing)}")

    return password


# ============================================================
# User Schemas
# ============================================================


class UserCreate(CamelModel):
    """Schema for creating a new user."""

    email: EmailAddress
    password: str = Field(
        ..., min_length=MIN_PASSWORD_LENGTH, max_length=MAX_PASSWORD_LENGTH
    )
    is_active: bool = True
    role_ids: list[int] = Field(default_factory=list)

    @field_validator("password")
    @classmethod
    def password_complexity(cls, v: str) -> str:
        """Validate password complexity."""
        return validate_password_complexity(v)


class UserUpdate(CamelModel):
    """Schema for a partial user update.

    Omitted (or null) fields are left unchanged. A present ``roleIds``
    list, even an empty one, replaces the user's roles. An empty
    ``password`` is ignored rather than clearing the password.
    """

    email: EmailAddress | None = None
    password: str | None = Field(None, max_length=MAX_PASSWORD_LENGTH)
    is_active: bool | None = None
    role_ids: list[int] | None = None

    @field_validator("password")
    @classmethod
    def password_length(cls, v: str | None) -> str | None:
        """Require a minimum length only when a new password is supplied."""
        if v and len(v) < MIN_UPDATE_PASSWORD_LENGTH:
            raise ValueError(
                f"Password must be at least {MIN_UPDATE_PASSWORD_LENGTH} characters"
            )
        return v


class UserResponse(CamelModel):
    """Schema for user response data."""

    id: int
    email: str
    is_active: bool
    created_at: datetime
    updated_at: datetime
    roles: list[str]

    @classmethod
    def from_user(cls, user: "User") -> "UserResponse":
        """Build a response from a User with its roles loaded."""
        return cls(
            id=user.id,
            email=user.email,
            is_active=user.is_active,
            created_at=user.created_at,
            updated_at=user.updated_at,
            roles=user.role_names,
        )
