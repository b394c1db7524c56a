"""Authentication service for login and the current-user view."""

from dataclasses import dataclass
from typing import Annotated

import structlog
from fastapi import Depends

from gatekeeper.api.dependencies import DBSession
from gatekeeper.core.auth.backend import create_access_token, verify_password
from gatekeeper.core.errors import NotFoundError, UnauthorizedError
from gatekeeper.core.permissions.resolver import PermissionResolver, ResolvedUser
from gatekeeper.modules.users.repos import UserRepository


logger = structlog.get_logger()


@dataclass(frozen=True)
class LoginResult:
    """Outcome of a successful login."""

    token: str
    user_id: int
    email: str
    permissions: list[str]


class AuthService:
    """Service for authentication operations.

    Handles password login and resolving the authenticated user.
    """

    def __init__(self, db: DBSession) -> None:
        self.db = db
        self.user_repo = UserRepository(db)
        self.resolver = PermissionResolver(db)

    async def login(self, email: str, password: str) -> LoginResult:
        """Authenticate with email and password.

        Unknown emails, inactive users and wrong passwords fail the
        same way so callers cannot tell them apart.

        Args:
            email: User's email (exact match)
            password: Plain text password

        Returns:
            LoginResult with a token carrying the user's permissions

        Raises:
            UnauthorizedError: If the credentials are invalid
        """
        user = await self.user_repo.get_active_by_email(email)
        if not user or not verify_password(password, user.password_hash):
            logger.info("login_failed")
            raise UnauthorizedError(
                "Invalid email or password",
                error_code="invalid_credentials",
            )

        permissions = sorted(await self.resolver.get_user_permissions(user.id))
        token = create_access_token(
            user_id=user.id,
            email=user.email,
            permissions=permissions,
        )

        logger.info(
            "login_succeeded",
            user_id=user.id,
            permission_count=len(permissions),
        )

        return LoginResult(
            token=token,
            user_id=user.id,
            email=user.email,
            permissions=permissions,
        )

    async def get_me(self, user_id: int) -> ResolvedUser:
        """Resolve the authenticated user from current database state.

        Raises:
            NotFoundError: If the user was deleted or deactivated
        """
        resolved = await self.resolver.resolve(user_id)
        if resolved is None:
            raise NotFoundError(
                "User not found",
                resource="user",
                resource_id=str(user_id),
            )
        return resolved


# Type alias for dependency injection
AuthSvc = Annotated[AuthService, Depends(AuthService)]
