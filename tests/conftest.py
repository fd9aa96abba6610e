"""Shared fixtures: in-memory database, HTTP client, and authenticated users."""
import os

# Settings are read when the app modules are imported, so the environment must
# be in place first.
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("JWT_SECRET", "test-secret-key-that-is-long-enough")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

from collections.abc import AsyncGenerator, Callable, Coroutine  # noqa: E402
from typing import Any  # noqa: E402

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from api.main import app  # noqa: E402
from core.config import Settings, get_settings  # noqa: E402
from db.session import build_engine, build_session_factory, get_async_session  # noqa: E402
from models import Base  # noqa: E402

TEST_PASSWORD = "correct-horse-battery"

AuthHeaders = dict[str, str]


@pytest.fixture
def settings() -> Settings:
    """Settings used by the app under test."""
    return get_settings()


@pytest.fixture
async def db_engine() -> AsyncGenerator[AsyncEngine]:
    """A fresh in-memory SQLite database with all tables created."""
    # StaticPool keeps a single connection so every session sees the same database
    engine = build_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(db_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory bound to the test database."""
    return build_session_factory(db_engine)


@pytest.fixture
async def db_session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession]:
    """A session for calling service functions directly."""
    async with session_factory() as session:
        yield session


@pytest.fixture
async def client(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncClient]:
    """HTTP client wired to the app with the session dependency overridden."""

    async def override_get_async_session() -> AsyncGenerator[AsyncSession]:
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_async_session] = override_get_async_session
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


SignupFn = Callable[..., Coroutine[Any, Any, AuthHeaders]]


@pytest.fixture
def signup(client: AsyncClient) -> SignupFn:
    """Factory that signs a user up and returns their Authorization header."""

    async def _signup(email: str, password: str = TEST_PASSWORD) -> AuthHeaders:
        response = await client.post(
            "/auth/signup", json={"email": email, "password": password},
        )
        assert response.status_code == 201, response.text
        return {"Authorization": f"Bearer {response.json()['access_token']}"}

    return _signup


@pytest.fixture
async def auth_headers(signup: SignupFn) -> AuthHeaders:
    """Authorization header for a freshly signed-up user."""
    return await signup("makenna@example.com")


@pytest.fixture
async def other_auth_headers(signup: SignupFn) -> AuthHeaders:
    """Authorization header for a second, unrelated user."""
    return await signup("nadia@example.com")
