"""Shared test fixtures and configuration."""
import pytest
import os
from fastapi.testclient import TestClient
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import StaticPool

# Set test environment variables before importing app
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("WHATSAPP_VERIFY_TOKEN", "test-verify-token")

from order_intake.main import app
from order_intake.db.database import get_db
from order_intake.db.models import Base
from order_intake.core.config import Settings
from order_intake.core.dependencies import get_settings


# Test database URL (in-memory SQLite)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

SAMPLE_ORDER_TEXT = (
    "Order Summary - Jane Doe\n"
    "Delivery Date - 2026-02-28\n"
    "Delivery Time - 14:00\n"
    "Location - 12 Oak St\n"
    "Contact - 5551234\n"
    "Items:\n"
    "2 Widget - 10.00\n"
    "1 Gadget - 5.00\n"
    "Total - 25.00"
)


@pytest.fixture
def test_settings():
    """Override settings for testing."""
    return Settings(
        database_url=TEST_DATABASE_URL,
        whatsapp_verify_token="test-verify-token",
        order_message_prefix="Order Summary -",
    )


@pytest.fixture
def order_text():
    """A complete, reconciling order message."""
    return SAMPLE_ORDER_TEXT


@pytest.fixture
def make_webhook_payload():
    """Build a WhatsApp Cloud API notification carrying one message."""
    def _make(body="", message_id="wamid.test-1", message_type="text"):
        message = {"from": "15550001111", "id": message_id, "type": message_type}
        if message_type == "text":
            message["text"] = {"body": body}
        return {
            "object": "whatsapp_business_account",
            "entry": [
                {
                    "id": "1234567890",
                    "changes": [
                        {
                            "field": "messages",
                            "value": {
                                "messaging_product": "whatsapp",
                                "messages": [message],
                            },
                        }
                    ],
                }
            ],
        }
    return _make


@pytest.fixture
async def test_db_engine():
    """Create test database engine."""
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
async def test_db(test_db_engine):
    """Create test database session."""
    async_session = async_sessionmaker(
        test_db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with async_session() as session:
        yield session


@pytest.fixture
def override_get_db(test_db):
    """Override get_db dependency with test database."""
    async def _override_get_db():
        yield test_db
    return _override_get_db


@pytest.fixture
def test_client(test_settings):
    """Create FastAPI test client for endpoints that do not touch the database."""
    app.dependency_overrides[get_settings] = lambda: test_settings

    client = TestClient(app)

    yield client

    app.dependency_overrides.clear()


@pytest.fixture
async def api_client(override_get_db, test_settings):
    """Create async client sharing the test database session."""
    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_settings] = lambda: test_settings

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()
