"""User service for business logic."""

from datetime import UTC, datetime
from typing import Annotated

import structlog
from fastapi import Depends

from gatekeeper.core.auth.backend import hash_password
from gatekeeper.core.errors import ConflictError, NotFoundError
from gatekeeper.modules.roles.repos import RoleRepo
from gatekeeper.modules.users.models import User
from gatekeeper.modules.users.repos import UserRepo
from gatekeeper.modules.users.schemas import UserCreate, UserUpdate


logger = structlog.get_logger()


class UserService:
    """Service for user management operations.

    Contains business logic for user CRUD, password hashing
    and role assignment.
    """

    def __init__(self, repo: UserRepo, role_repo: RoleRepo) -> None:
        self.repo = repo
        self.role_repo = role_repo

    async def list_users(self) -> list[User]:
        """List all users ordered by ID, with their roles."""
        return await self.repo.list_all()

    async def get_user(self, user_id: int) -> User:
        """Get a user by ID.

        Args:
            user_id: The user's ID

        Returns:
            The user

        Raises:
            NotFoundError: If user not found
        """
        user = await self.repo.get_by_id(user_id)
        if not user:
            raise NotFoundError(
                "User not found",
                resource="user",
                resource_id=str(user_id),
            )
        return user

    async def create_user(self, data: UserCreate) -> User:
        """Create a new user.

        Roles are assigned from ``data.role_ids``; IDs that match no
        role are ignored.

        Args:
            data: User creation data

        Returns:
            The created user with roles loaded

        Raises:
            ConflictError: If the email is already registered
        """
        if await self.repo.email_exists(data.email):
            raise ConflictError(
                "Email already exists",
                error_code="email_exists",
                details={"email": data.email},
            )

        roles = await self.role_repo.get_by_ids(data.role_ids)
        user = User(
            email=data.email,
            password_hash=hash_password(data.password),
            is_active=data.is_active,
            roles=roles,
        )
        user = await self.repo.create(user)

        logger.info(
            "user_created",
            user_id=user.id,
            role_ids=[role.id for role in roles],
        )
        return await self.get_user(user.id)

    async def update_user(self, user_id: int, data: UserUpdate) -> User:
        """Apply a partial update to a user.

        Args:
            user_id: The user's ID
            data: Fields to change; ``None`` means unchanged

        Returns:
            The updated user

        Raises:
            NotFoundError: If user not found
            ConflictError: If the new email belongs to another user
        """
        user = await self.get_user(user_id)

        if data.email is not None and data.email != user.email:
            if await self.repo.email_exists(data.email):
                raise ConflictError(
                    "Email already exists",
                    error_code="email_exists",
                    details={"email": data.email},
                )
            user.email = data.email

        if data.is_active is not None:
            user.is_active = data.is_active

        # Empty string leaves the existing hash in place
        if data.password:
            user.password_hash = hash_password(data.password)

        if data.role_ids is not None:
            user.roles = await self.role_repo.get_by_ids(data.role_ids)

        user.updated_at = datetime.now(UTC)
        await self.repo.update(user)

        logger.info(
            "user_updated",
            user_id=user_id,
            fields=sorted(data.model_fields_set),
        )
        return await self.get_user(user_id)

    async def delete_user(self, user_id: int) -> None:
        """Delete a user and their role assignments.

        Raises:
            NotFoundError: If user not found
        """
        user = await self.get_user(user_id)
        await self.repo.delete(user)
        logger.info("user_deleted", user_id=user_id)


# Type alias for dependency injection
UserSvc = Annotated[UserService, Depends(UserService)]
