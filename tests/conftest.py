"""Pytest configuration and fixtures for Rabbit Forms.

DB-backed tests run against an in-memory SQLite database (aiosqlite) with
the ORM metadata created per test; HTTP tests use rabbitforms.main:app with
the session dependencies overridden to that database.
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

from collections.abc import AsyncIterator, Awaitable, Callable  # noqa: E402

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool  # noqa: E402

from rabbitforms.application.dtos.user import UserResult  # noqa: E402
from rabbitforms.domain.enums import UserRole  # noqa: E402
from rabbitforms.infrastructure.persistence import models  # noqa: E402, F401
from rabbitforms.infrastructure.persistence.database import (  # noqa: E402
    Base,
    get_db,
    get_db_transactional,
)
from rabbitforms.infrastructure.persistence.repositories import (  # noqa: E402
    BusinessRepository,
    UserRepository,
)
from rabbitforms.main import app  # noqa: E402

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
async def engine() -> AsyncIterator[AsyncEngine]:
    """Fresh in-memory database with all tables; one shared connection."""
    eng = create_async_engine(TEST_DATABASE_URL, poolclass=StaticPool)
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield eng
    await eng.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind=engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
    )


@pytest.fixture
async def db_session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncIterator[AsyncSession]:
    """Database session for repository/service tests. Rolls back after test."""
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
async def client(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncIterator[AsyncClient]:
    """Async HTTP client against the FastAPI app (ASGI) bound to the test database."""

    async def _get_db() -> AsyncIterator[AsyncSession]:
        async with session_factory() as session:
            yield session

    async def _get_db_transactional() -> AsyncIterator[AsyncSession]:
        async with session_factory() as session:
            async with session.begin():
                yield session

    app.dependency_overrides[get_db] = _get_db
    app.dependency_overrides[get_db_transactional] = _get_db_transactional
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def seed_user(
    session_factory: async_sessionmaker[AsyncSession],
) -> Callable[..., Awaitable[UserResult]]:
    """Insert a committed user directly (bypasses the API, which needs an actor)."""

    async def _seed(
        email: str,
        role: UserRole = UserRole.SUPER_ADMIN,
        business_id: str | None = None,
    ) -> UserResult:
        async with session_factory() as session:
            async with session.begin():
                return await UserRepository(session).create_user(
                    email=email, role=role, business_id=business_id, full_name=None
                )

    return _seed


@pytest.fixture
async def super_admin_headers(seed_user) -> dict[str, str]:
    """Actor header for a freshly seeded super admin."""
    admin = await seed_user("root@example.com")
    return {"X-User-ID": admin.id}


@pytest.fixture
def seed_business(session_factory: async_sessionmaker[AsyncSession]):
    """Insert a committed business directly."""

    async def _seed(slug: str, name: str | None = None):
        async with session_factory() as session:
            async with session.begin():
                return await BusinessRepository(session).create_business(
                    name=name or slug.title(),
                    slug=slug,
                    logo_url=None,
                    custom_domain=None,
                    theme={},
                )

    return _seed
