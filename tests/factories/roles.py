"""Role factories for tests."""

from uuid import uuid4

from polyfactory.factories.pydantic_factory import ModelFactory

from gatekeeper.modules.roles.schemas import RoleCreate


class RoleCreateFactory(ModelFactory):
    """Factory for creating RoleCreate schemas."""

    __model__ = RoleCreate

    @classmethod
    def name(cls) -> str:
        """Generate a unique role name."""
        return f"Role {uuid4().hex[:8]}"

    @classmethod
    def description(cls) -> str:
        return "Generated role"

    @classmethod
    def permission_ids(cls) -> list[int]:
        """No permissions unless a test asks for them."""
        return []
