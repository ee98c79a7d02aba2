"""
Pytest configuration and fixtures.

Every test runs against a freshly created SQLite schema; the Database
session maker used by the app and the factories points at the same file.
"""
import logging

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine

from carbon_ledger.core.config import ConfigFile, get_config
from carbon_ledger.core.security import create_access_token
from carbon_ledger.create_app import get_app
from carbon_ledger.database import Base
from carbon_ledger.database import schemas  # noqa: F401  registers models
from carbon_ledger.database.base import get_db_url
from carbon_ledger.database.session_manager.db_session import Database
from carbon_ledger.utils.constants import UserRole

logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

FARMER_ID = "farmer-001"
OTHER_FARMER_ID = "farmer-002"
ADMIN_ID = "admin-001"


@pytest.fixture(scope="session")
def test_config():
    """
    Get test configuration.

    Returns configuration with test database settings.
    """
    return get_config(ConfigFile.TEST)


@pytest_asyncio.fixture(scope="function")
async def test_async_engine(test_config):
    """Create async database engine for schema setup and teardown."""
    test_engine = create_async_engine(get_db_url(test_config))

    yield test_engine

    await test_engine.dispose()


@pytest_asyncio.fixture(scope="function", autouse=True)
async def db_cleanup(test_async_engine):
    """
    Clean database before and after each test.

    Drops all tables, recreates them, then drops again after test.
    """
    async with test_async_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)

    yield

    async with test_async_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest_asyncio.fixture(scope="function", autouse=True)
async def initialize_db_session(test_config, db_cleanup):
    """
    Initialize Database singleton for testing.

    The ASGI test transport does not run the app lifespan, so the session
    maker is set up here.
    """
    Database.init(get_db_url(test_config))

    yield

    await Database.dispose()


@pytest_asyncio.fixture(scope="function")
async def test_app(test_config):
    """
    Create FastAPI application with test configuration.

    Returns configured FastAPI app instance for testing.
    """
    app = get_app(ConfigFile.TEST)
    app.state.config = test_config

    yield app


@pytest_asyncio.fixture(scope="function")
async def test_async_client(test_app):
    """
    Create async HTTP client for API testing.

    Uses httpx AsyncClient with ASGITransport for testing FastAPI endpoints.
    """
    transport = ASGITransport(app=test_app)
    async with AsyncClient(
        transport=transport, base_url="http://localhost:8000", follow_redirects=True
    ) as ac:
        yield ac


@pytest_asyncio.fixture(scope="function")
async def test_db_session():
    """
    Provide database session for tests.

    Creates async session using Database context manager.
    """
    async with Database() as session:
        yield session


def _auth_headers(config, owner_id: str, role: str = UserRole.FARMER) -> dict:
    token = create_access_token(
        owner_id, config.jwt_secret, config.jwt_algorithm, role=role
    )
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def farmer_headers(test_config):
    return _auth_headers(test_config, FARMER_ID)


@pytest.fixture
def other_farmer_headers(test_config):
    return _auth_headers(test_config, OTHER_FARMER_ID)


@pytest.fixture
def admin_headers(test_config):
    return _auth_headers(test_config, ADMIN_ID, role=UserRole.ADMIN)
