"""User factories for tests."""

from uuid import uuid4

from polyfactory.factories.pydantic_factory import ModelFactory

from gatekeeper.modules.users.schemas import UserCreate


# Satisfies the update rules and the create-time complexity rules
DEFAULT_PASSWORD = "Passw0rd!"


class UserCreateFactory(ModelFactory):
    """Factory for creating UserCreate schemas."""

    __model__ = UserCreate

    @classmethod
    def email(cls) -> str:
        """Generate a unique email."""
        return f"user-{uuid4().hex[:8]}@example.com"

    @classmethod
    def password(cls) -> str:
        """A password that satisfies the complexity rules."""
        return "TestPassword123!"

    @classmethod
    def is_active(cls) -> bool:
        """Default to active."""
        return True

    @classmethod
    def role_ids(cls) -> list[int]:
        """No roles unless a test asks for them."""
        return []
