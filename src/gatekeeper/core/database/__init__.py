"""Database layer - session management, base models, and mixins."""

from gatekeeper.core.database.base import Base, IntIdMixin, TimestampMixin
from gatekeeper.core.database.session import (
    async_engine,
    async_session_factory,
    get_db,
)


__all__ = [
    "Base",
    "IntIdMixin",
    "TimestampMixin",
    "async_engine",
    "async_session_factory",
    "get_db",
]
