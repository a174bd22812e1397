"""
Pytest configuration and shared fixtures for backend tests.
"""

import base64
import logging
import sys
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

# Add backend directory to path for imports
backend_dir = Path(__file__).parent.parent
sys.path.insert(0, str(backend_dir))

import pytest
from typing import AsyncGenerator
from unittest.mock import AsyncMock
from uuid import UUID

from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

# Import after path is set
from infrastructure.database.models import Base
from infrastructure.database.connection import get_db
from infrastructure.config import Settings
from core.interfaces.services import EmailService
from core.security import Credentials, PasswordHasher
from api.dependencies import get_service_context
from services.context import ServiceContext
from services.users import ensure_user

# Initialize security services
password_hasher = PasswordHasher()

TEST_BASE_URL = "http://127.0.0.1:8000"
TEST_USERNAME = "publisher"
TEST_PASSWORD = "correct-horse-battery-staple"

# Database URL for testing (in-memory SQLite)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


def basic_auth(username: str, password: str) -> dict:
    """Build an Authorization header for HTTP Basic credentials."""
    encoded = base64.b64encode(f"{username}:{password}".encode()).decode()
    return {"Authorization": f"Basic {encoded}"}


@pytest.fixture
async def db_engine():
    """Create a test database engine."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    # Create all tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    # Drop all tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
async def db_session(db_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session."""
    async_session = async_sessionmaker(
        db_engine, class_=AsyncSession, expire_on_commit=False
    )

    async with async_session() as session:
        yield session
        await session.rollback()


@pytest.fixture
def test_settings() -> Settings:
    """Settings pinned to values the tests rely on."""
    return Settings(
        environment="development",
        base_url=TEST_BASE_URL,
        resend_api_key=None,
        email_sender="newsletter@nadon.io",
    )


@pytest.fixture
def email_client() -> AsyncMock:
    """Email client that records every message instead of sending it."""
    return AsyncMock(spec=EmailService)


@pytest.fixture
def service_context(test_settings: Settings, email_client: AsyncMock):
    """Service context wired to the mock email client."""
    ctx = ServiceContext(
        settings=test_settings,
        email_client=email_client,
        password_hasher=password_hasher,
        blocking_executor=ThreadPoolExecutor(max_workers=2, thread_name_prefix="test-blocking"),
        logger=logging.getLogger("newsletter.tests"),
    )
    yield ctx
    ctx.close()


@pytest.fixture
async def test_user(db_session: AsyncSession, service_context: ServiceContext) -> UUID:
    """Create the operator account used to publish issues."""
    return await ensure_user(service_context, db_session, TEST_USERNAME, TEST_PASSWORD)


@pytest.fixture
def publisher_credentials(test_user: UUID) -> Credentials:
    """Credentials of the stored test user."""
    return Credentials(username=TEST_USERNAME, password=TEST_PASSWORD)


@pytest.fixture
def auth_headers(test_user: UUID) -> dict:
    """Generate Basic authentication headers for the test user."""
    return basic_auth(TEST_USERNAME, TEST_PASSWORD)


@pytest.fixture
async def async_client(
    db_session: AsyncSession,
    service_context: ServiceContext,
) -> AsyncGenerator[AsyncClient, None]:
    """Create an async HTTP client for testing."""
    # Import app here to avoid circular imports
    from main import app

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_service_context] = lambda: service_context

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()
