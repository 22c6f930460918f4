"""
Shared fixtures for the waste calculator test suite.

Tests run against an in-memory SQLite database through aiosqlite; the
application engine is never connected to Postgres.
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("LOG_JSON", "false")
os.environ.setdefault("SECRET_KEY", "test-secret-key-for-tokens")

from typing import AsyncIterator  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from app.api.dependencies.database import get_db  # noqa: E402
from app.core.security import create_access_token  # noqa: E402
from app.db.base import Base  # noqa: E402
from app.main import app  # noqa: E402
from app.schemas.calculation import CostInputs  # noqa: E402
from app.services.wizard_state import DEFAULT_COST_INPUTS  # noqa: E402


@pytest.fixture
def default_inputs() -> CostInputs:
    """The wizard defaults; also the regression fixture for the cost model."""
    return DEFAULT_COST_INPUTS


@pytest.fixture
def make_inputs():
    def factory(**overrides) -> CostInputs:
        return CostInputs.model_validate({**DEFAULT_COST_INPUTS.model_dump(), **overrides})

    return factory


@pytest_asyncio.fixture
async def engine() -> AsyncIterator[AsyncEngine]:
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)


@pytest_asyncio.fixture
async def db_session(session_factory) -> AsyncIterator[AsyncSession]:
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(session_factory) -> AsyncIterator[AsyncClient]:
    """HTTP client bound to the app with the database dependency overridden."""

    async def override_get_db() -> AsyncIterator[AsyncSession]:
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as http_client:
        yield http_client
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers() -> dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token('owner-1')}"}


@pytest.fixture
def other_owner_headers() -> dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token('owner-2')}"}
