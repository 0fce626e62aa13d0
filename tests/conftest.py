"""Test configuration and fixtures.

Each test gets its own SQLite database file (aiosqlite) with the full schema.
Request handlers share the test's session through a dependency override, so
tests can inspect everything an endpoint wrote.
"""

from collections.abc import AsyncGenerator
from pathlib import Path

from dotenv import load_dotenv

# Settings are read at import time, so the test environment must load first
load_dotenv(Path(__file__).parent.parent / ".env.test", override=True)

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine  # noqa: E402

from src.config.settings import settings  # noqa: E402
from src.database.base import Base  # noqa: E402
from src.database.dependencies import get_db_session  # noqa: E402
from src.features.auth.dependencies import get_current_user  # noqa: E402
from src.features.auth.hashing import hash_password  # noqa: E402
from src.features.auth.service import SessionManager  # noqa: E402
from src.features.auth.store import RefreshTokenStore  # noqa: E402
from src.features.user.models import User  # noqa: E402
from src.main import app  # noqa: E402


# Database Setup


@pytest_asyncio.fixture
async def db_engine(tmp_path: Path) -> AsyncGenerator[AsyncEngine]:
    """Create an engine on a fresh SQLite file with all tables."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}", echo=False)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_factory(db_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Factory for independent sessions (used by concurrency tests)."""
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def session(session_factory: async_sessionmaker[AsyncSession]) -> AsyncGenerator[AsyncSession]:
    async with session_factory() as async_session:
        yield async_session


# FastAPI Client & Dependency Overrides


@pytest_asyncio.fixture(autouse=True)
async def override_get_db_session(session: AsyncSession):
    """Route every request through the test session."""

    async def _get_test_session():
        yield session

    app.dependency_overrides[get_db_session] = _get_test_session
    yield
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def client() -> AsyncGenerator[AsyncClient]:
    """Unauthenticated async HTTP test client."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


# Test User Factories


@pytest_asyncio.fixture
async def make_user(session: AsyncSession):
    """Factory fixture to create persisted test users.

    Usage:
        user = await make_user()
        user = await make_user(email="me@example.com", password="Secret123!")
    """
    counter = 0

    async def _factory(email=None, nickname=None, password="TestPass123!") -> User:
        nonlocal counter
        counter += 1

        user = User(
            email=email or f"testuser{counter}@example.com",
            nickname=nickname or f"testuser{counter}",
            hashed_password=hash_password(password),
        )
        session.add(user)
        await session.commit()
        return user

    return _factory


@pytest.fixture
def session_manager(session: AsyncSession) -> SessionManager:
    """Session manager over the test session with the configured secret."""
    return SessionManager(RefreshTokenStore(session), secret=settings.secret_key)


@pytest_asyncio.fixture
async def auth_client(client: AsyncClient, make_user):
    """Authenticated client with a regular user.

    Overrides the auth dependency directly; no token is issued.

    Returns:
        tuple: (client, user)

    """
    user = await make_user()

    async def override_get_current_user():
        return user

    app.dependency_overrides[get_current_user] = override_get_current_user

    return client, user
