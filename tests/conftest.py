"""
Shared pytest fixtures for all tests.

This module provides common fixtures for database sessions, mock
repositories, sample entities, an API client and authenticated users.
"""

import os
from typing import AsyncGenerator
from unittest.mock import AsyncMock
from uuid import uuid4

# Ensure test environment before any bilibay import reads the settings
os.environ["ENVIRONMENT"] = "test"
os.environ["JWT_SECRET_KEY"] = "test-secret-key-not-for-production"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["SMTP_USERNAME"] = ""

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from bilibay.domains.ecommerce.domain.entities import Cart, CartItem, Category, Payment, Product  # noqa: E402
from tests.utils import auth_headers, create_order, create_payment, create_product, create_user  # noqa: E402


# ============================================================================
# DATABASE FIXTURES
# ============================================================================


@pytest_asyncio.fixture
async def async_engine():
    """In-memory SQLite engine; every session of one test shares its single connection."""
    from bilibay.models.db import Base

    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def async_session_factory(async_engine) -> async_sessionmaker:
    """Create async session factory."""
    return async_sessionmaker(
        async_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@pytest_asyncio.fixture
async def db_session(async_session_factory) -> AsyncGenerator[AsyncSession, None]:
    """A session for arranging and checking data directly in the database."""
    async with async_session_factory() as session:
        yield session


# ============================================================================
# API CLIENT FIXTURES
# ============================================================================


@pytest.fixture
def fastapi_app(async_session_factory):
    """FastAPI application wired to the test database."""
    from bilibay.database.async_db import get_async_db
    from bilibay.main import app

    async def override_get_async_db() -> AsyncGenerator[AsyncSession, None]:
        async with async_session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_async_db] = override_get_async_db
    yield app
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def api_client(fastapi_app) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client calling the app in-process."""
    transport = ASGITransport(app=fastapi_app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client


# ============================================================================
# USER FIXTURES
# ============================================================================


@pytest_asyncio.fixture
async def buyer(db_session):
    return await create_user(
        db_session,
        "buyer",
        "buyer@example.com",
        default_shipping_address={"street": "1 Rizal Ave", "city": "Manila", "province": "Metro Manila"},
    )


@pytest_asyncio.fixture
async def seller(db_session):
    return await create_user(db_session, "seller", "seller@example.com")


@pytest_asyncio.fixture
async def admin(db_session):
    return await create_user(db_session, "admin", "admin@example.com")


@pytest.fixture
def buyer_headers(buyer) -> dict[str, str]:
    return auth_headers(buyer)


@pytest.fixture
def seller_headers(seller) -> dict[str, str]:
    return auth_headers(seller)


@pytest.fixture
def admin_headers(admin) -> dict[str, str]:
    return auth_headers(admin)


# ============================================================================
# REPOSITORY FIXTURES
# ============================================================================


@pytest.fixture
def mock_product_repository():
    """Create a mock product repository."""
    mock = AsyncMock()
    mock.get_by_id = AsyncMock(return_value=None)
    mock.get_many = AsyncMock(return_value={})
    mock.decrement_stock = AsyncMock(return_value=True)
    mock.restore_stock = AsyncMock(return_value=None)
    return mock


@pytest.fixture
def mock_cart_repository():
    """Create a mock cart repository holding an empty cart."""
    mock = AsyncMock()
    mock.get_or_create = AsyncMock(return_value=Cart(id=uuid4(), user_id=uuid4()))
    mock.clear = AsyncMock(return_value=0)
    return mock


@pytest.fixture
def mock_order_repository():
    """Create a mock order repository; create/update echo the entity back."""
    mock = AsyncMock()
    mock.get_by_id = AsyncMock(return_value=None)
    mock.create = AsyncMock(side_effect=lambda order: order)
    mock.update = AsyncMock(side_effect=lambda order: order)
    return mock


@pytest.fixture
def mock_payment_repository():
    """Create a mock payment repository; create/update echo the entity back."""
    mock = AsyncMock()
    mock.get_by_id = AsyncMock(return_value=None)
    mock.get_by_order_id = AsyncMock(return_value=None)
    mock.create = AsyncMock(side_effect=lambda payment: payment)
    mock.update = AsyncMock(side_effect=lambda payment: payment)
    return mock


@pytest.fixture
def mock_uow():
    """Create a mock unit of work."""
    mock = AsyncMock()
    mock.commit = AsyncMock()
    mock.rollback = AsyncMock()
    return mock


# ============================================================================
# TEST DATA FIXTURES
# ============================================================================


@pytest.fixture
def sample_product() -> Product:
    return create_product()


@pytest.fixture
def sample_category() -> Category:
    return Category(id=uuid4(), name="Home & Living", description="Handwoven goods")


@pytest.fixture
def sample_payment(sample_product) -> Payment:
    return create_payment(create_order([sample_product]))


@pytest.fixture
def cart_with_item(sample_product) -> Cart:
    return Cart(
        id=uuid4(),
        user_id=uuid4(),
        items=[CartItem(product_id=sample_product.id, quantity=2, id=uuid4(), product=sample_product)],
    )
