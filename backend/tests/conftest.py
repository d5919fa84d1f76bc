"""
Pytest configuration and shared fixtures for backend tests.
"""

import sys
from pathlib import Path

# Add backend directory to path for imports
backend_dir = Path(__file__).parent.parent
sys.path.insert(0, str(backend_dir))

import pytest
from datetime import timedelta
from typing import AsyncGenerator
from unittest.mock import AsyncMock
from uuid import uuid4

from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

# Import after path is set
from infrastructure.database.models import Article, Base, User, UserRole
from infrastructure.database.models.base import utcnow
from infrastructure.database.connection import get_db
from api.dependencies import get_payment_processor, token_service
from core.interfaces.services import PaymentIntent, PaymentProcessor


# Database URL for testing (in-memory SQLite)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
async def db_engine():
    """Create a test database engine."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

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
async def test_user(db_session: AsyncSession) -> User:
    """Create a regular reader account."""
    user = User(
        id=str(uuid4()),
        email="reader@example.com",
        name="Test Reader",
        role=UserRole.USER.value,
    )
    db_session.add(user)
    await db_session.commit()
    return user


@pytest.fixture
async def other_user(db_session: AsyncSession) -> User:
    """A second regular account, used for ownership checks."""
    user = User(
        id=str(uuid4()),
        email="other@example.com",
        name="Other Reader",
        role=UserRole.USER.value,
    )
    db_session.add(user)
    await db_session.commit()
    return user


@pytest.fixture
async def admin_user(db_session: AsyncSession) -> User:
    """Create an admin account."""
    user = User(
        id=str(uuid4()),
        email="admin@example.com",
        name="Admin",
        role=UserRole.ADMIN.value,
    )
    db_session.add(user)
    await db_session.commit()
    return user


@pytest.fixture
async def expired_premium_user(db_session: AsyncSession) -> User:
    """A user whose premium grant lapsed an hour ago."""
    now = utcnow()
    user = User(
        id=str(uuid4()),
        email="lapsed@example.com",
        role=UserRole.USER.value,
        is_premium=True,
        premium_taken_at=now - timedelta(days=1),
        premium_expires_at=now - timedelta(hours=1),
        current_plan="premium",
    )
    db_session.add(user)
    await db_session.commit()
    return user


def bearer(email: str) -> dict:
    """Authorization header carrying a fresh token for the email."""
    return {"Authorization": f"Bearer {token_service.create_access_token(email)}"}


@pytest.fixture
def make_headers():
    """Factory for bearer headers of an arbitrary email."""
    return bearer


@pytest.fixture
def auth_headers(test_user: User) -> dict:
    """Generate authentication headers for the test user."""
    return bearer(test_user.email)


@pytest.fixture
def other_headers(other_user: User) -> dict:
    return bearer(other_user.email)


@pytest.fixture
def admin_headers(admin_user: User) -> dict:
    """Generate authentication headers for the admin."""
    return bearer(admin_user.email)


@pytest.fixture
def make_article(db_session: AsyncSession):
    """Factory persisting an article directly, bypassing the API."""

    async def _make(author_email: str, status: str = "pending", views: int = 0, **fields) -> Article:
        article = Article(
            id=str(uuid4()),
            author_email=author_email,
            title=fields.pop("title", "Local council approves new park"),
            status=status,
            views=views,
            **fields,
        )
        db_session.add(article)
        await db_session.commit()
        return article

    return _make


@pytest.fixture
def mock_processor() -> AsyncMock:
    """Payment processor stand-in returning canned intents."""
    processor = AsyncMock(spec=PaymentProcessor)
    processor.create_payment_intent.return_value = PaymentIntent(
        id="pi_test_123",
        client_secret="pi_test_123_secret_abc",
        amount=999,
        currency="usd",
        status="requires_payment_method",
    )
    processor.retrieve_payment_intent.return_value = PaymentIntent(
        id="pi_test_123",
        client_secret=None,
        amount=999,
        currency="usd",
        status="succeeded",
    )
    return processor


@pytest.fixture
async def async_client(
    db_session: AsyncSession,
    mock_processor: AsyncMock,
) -> AsyncGenerator[AsyncClient, None]:
    """Create an async HTTP client for testing."""
    # Import app here to avoid circular imports
    from main import app

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_payment_processor] = lambda: mock_processor

    # Reset rate limiter state between tests to prevent cross-test 429s
    app.state.limiter.reset()

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()
