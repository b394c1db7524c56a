"""User repository for database operations."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy import func, select

from gatekeeper.api.dependencies import DBSession
from gatekeeper.modules.users.models import User


class UserRepository:
    """Repository for User database operations.

    Reads use ``populate_existing`` so role collections reflect the
    join table even when the session already holds the user.
    """

    def __init__(self, session: DBSession) -> None:
        self.session = session

    async def create(self, user: User) -> User:
        """Create a new user.

        Args:
            user: User instance to create

        Returns:
            The created user with ID and timestamps populated
        """
        self.session.add(user)
        await self.session.flush()
        await self.session.refresh(user)
        return user

    async def get_by_id(self, user_id: int) -> User | None:
        """Get a user by ID.

        Args:
            user_id: The user's ID

        Returns:
            User if found, None otherwise
        """
        stmt = (
            select(User)
            .where(User.id == user_id)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> User | None:
        """Get a user by exact email address.

        Args:
            email: The user's email (case-sensitive)

        Returns:
            User if found, None otherwise
        """
        stmt = select(User).where(User.email == email)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_active_by_email(self, email: str) -> User | None:
        """Get an active user by exact email address."""
        stmt = select(User).where(User.email == email, User.is_active.is_(True))
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def email_exists(self, email: str) -> bool:
        """Check whether any user already has this exact email."""
        return await self.get_by_email(email) is not None

    async def count(self) -> int:
        """Count all users."""
        stmt = select(func.count()).select_from(User)
        result = await self.session.execute(stmt)
        return result.scalar_one()

    async def list_all(self) -> list[User]:
        """List all users ordered by ID.

        Returns:
            Users with their roles loaded
        """
        stmt = (
            select(User)
            .order_by(User.id)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def update(self, user: User) -> User:
        """Flush changes to a user.

        Args:
            user: User instance with updated fields

        Returns:
            The updated user
        """
        await self.session.flush()
        await self.session.refresh(user)
        return user

    async def delete(self, user: User) -> None:
        """Delete a user; its user_roles rows go with it.

        Args:
            user: User instance to delete
        """
        await self.session.delete(user)
        await self.session.flush()


# Type alias for dependency injection
UserRepo = Annotated[UserRepository, Depends(UserRepository)]
