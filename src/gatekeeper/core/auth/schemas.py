"""Authentication schemas for token handling."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from gatekeeper.core.constants import MAX_EMAIL_LENGTH, MAX_PASSWORD_LENGTH
from gatekeeper.core.schemas import CamelModel


class TokenData(BaseModel):
    """Claims extracted from a verified access token.

    Attributes:
        user_id: Subject of the token
        email: Email at issuance time
        permissions: Effective permission keys at issuance time
        exp: Token expiration time
        jti: Unique token ID
    """

    model_config = ConfigDict(frozen=True)

    user_id: int
    email: str
    permissions: frozenset[str] = frozenset()
    exp: datetime
    jti: str | None = None


class LoginRequest(CamelModel):
    """Credentials for password login."""

    email: str = Field(..., min_length=1, max_length=MAX_EMAIL_LENGTH)
    password: str = Field(..., min_length=1, max_length=MAX_PASSWORD_LENGTH)

    @field_validator("email", "password")
    @classmethod
    def not_blank(cls, v: str) -> str:
        """Reject whitespace-only values."""
        if not v.strip():
            raise ValueError("must not be blank")
        return v


class LoginResponse(CamelModel):
    """Issued access token with the identity and permissions it carries."""

    token: str
    user_id: int
    email: str
    permissions: list[str]


class CurrentUserResponse(CamelModel):
    """The authenticated user as currently stored."""

    id: int
    email: str
    is_active: bool
    roles: list[str]
    permissions: list[str]
