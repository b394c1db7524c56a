"""Pytest configuration and shared fixtures."""

import os


# Settings are read at import time; point them at an in-memory database
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("ENVIRONMENT", "testing")
os.environ.setdefault("SEED_ON_STARTUP", "false")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-that-is-at-least-32-characters")

from collections.abc import AsyncGenerator, Awaitable, Callable, Iterable  # noqa: E402

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy import select  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool  # noqa: E402

from gatekeeper.config import settings  # noqa: E402
from gatekeeper.core.auth.backend import create_access_token, hash_password  # noqa: E402
from gatekeeper.core.database import Base, get_db  # noqa: E402
from gatekeeper.core.database.session import enable_sqlite_foreign_keys  # noqa: E402
from gatekeeper.core.permissions.models import Permission, Role  # noqa: E402
from gatekeeper.core.permissions.seed import SeedResult, seed_database  # noqa: E402
from gatekeeper.main import create_app  # noqa: E402
from gatekeeper.modules.users.models import User  # noqa: E402
from tests.factories.users import DEFAULT_PASSWORD  # noqa: E402


TEST_DATABASE_URL = "sqlite+aiosqlite://"


@pytest.fixture
async def engine():
    """Create a fresh in-memory database per test."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    enable_sqlite_foreign_keys(engine)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
async def db(engine) -> AsyncGenerator[AsyncSession, None]:
    """Provide a database session shared by the test and the app."""
    session_factory = async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )

    async with session_factory() as session:
        yield session


@pytest.fixture
async def app(db: AsyncSession):
    """Create test application instance."""
    application = create_app()

    # Override database dependency
    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db

    application.dependency_overrides[get_db] = override_get_db

    yield application

    application.dependency_overrides.clear()


@pytest.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    """Provide async HTTP client for API testing."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client


# ============================================================
# RBAC Fixtures
# ============================================================


@pytest.fixture
async def seeded(db: AsyncSession) -> SeedResult:
    """Seed the catalog, default roles and admin user.

    The ASGI transport does not run the lifespan, so tests seed directly.
    """
    return await seed_database(db)


@pytest.fixture
async def admin_headers(seeded: SeedResult, client: AsyncClient) -> dict[str, str]:
    """Authorization headers for the seeded admin, obtained by logging in."""
    response = await client.post(
        "/api/v1/auth/login",
        json={"email": settings.admin_email, "password": settings.admin_password},
    )
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['token']}"}


@pytest.fixture
def headers_for() -> Callable[..., dict[str, str]]:
    """Build authorization headers for an arbitrary set of permission claims."""

    def _headers(
        permissions: Iterable[str] = (),
        user_id: int = 9999,
        email: str = "principal@example.com",
    ) -> dict[str, str]:
        token = create_access_token(
            user_id=user_id,
            email=email,
            permissions=[str(p) for p in permissions],
        )
        return {"Authorization": f"Bearer {token}"}

    return _headers


@pytest.fixture
def make_role(db: AsyncSession) -> Callable[..., Awaitable[Role]]:
    """Create a role granting the given permission keys."""

    async def _make_role(
        name: str,
        keys: Iterable[str] = (),
        description: str | None = None,
    ) -> Role:
        wanted = {str(k) for k in keys}
        permissions: list[Permission] = []
        if wanted:
            result = await db.execute(
                select(Permission).where(Permission.key.in_(wanted))
            )
            permissions = list(result.scalars().all())

        role = Role(name=name, description=description, permissions=permissions)
        db.add(role)
        await db.flush()
        return role

    return _make_role


@pytest.fixture
def make_user(db: AsyncSession) -> Callable[..., Awaitable[User]]:
    """Create a user holding the given roles."""

    async def _make_user(
        email: str,
        password: str = DEFAULT_PASSWORD,
        roles: Iterable[Role] = (),
        is_active: bool = True,
    ) -> User:
        user = User(
            email=email,
            password_hash=hash_password(password),
            is_active=is_active,
            roles=list(roles),
        )
        db.add(user)
        await db.flush()
        return user

    return _make_user
