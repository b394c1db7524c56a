"""Test factories for generating test data."""

from tests.factories.roles import RoleCreateFactory
from tests.factories.users import UserCreateFactory


__all__ = ["RoleCreateFactory", "UserCreateFactory"]
