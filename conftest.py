import pytest
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
import os

from crm.main import app
from crm.db.session import get_db, init_models
from crm.core import redis as redis_module


TEST_DATABASE_URL = os.getenv("TEST_DATABASE_URL", "sqlite+aiosqlite:///:memory:")


@pytest.fixture
async def db_engine():
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    await init_models(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
async def test_client(session_factory):
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


class FakeRedis:
    """In-memory stand-in for the two redis.asyncio calls the idempotency store makes."""

    def __init__(self):
        self.store = {}

    async def get(self, key):
        return self.store.get(key)

    async def set(self, key, value, ex=None):
        self.store[key] = value.encode() if isinstance(value, str) else value


@pytest.fixture
def fake_redis(monkeypatch):
    fake = FakeRedis()
    monkeypatch.setattr(redis_module, "redis", fake)
    yield fake


@pytest.fixture
def valid_customer_data():
    return {
        "name": "Jane Doe",
        "email": "jane@example.com",
        "phone": "555-1234",
        "address": "1 Main St",
        "city": "Austin",
        "state": "TX",
        "zip_code": "73301",
    }


@pytest.fixture
def valid_quote_data():
    return {
        "quote_number": "DPT-123456",
        "status": "draft",
        "dog_name": "Rex",
        "dog_breed": "Beagle",
        "dog_weight": 22.5,
        "departure_city": "Austin",
        "destination_city": "London",
        "travel_date": "2026-11-20",
        "flight_cost": 100,
        "boarding_cost": 50,
        "medical_cost": 25,
        "additional_fees": 0,
        "notes": "Needs a window seat crate",
        "valid_until": "2026-11-01",
    }


@pytest.fixture
def valid_order_data():
    return {
        "order_number": "ORD-000001",
        "status": "pending",
        "pickup_address": "1 Main St",
        "delivery_address": "10 Downing St",
        "pickup_date": "2026-11-20",
        "delivery_date": "2026-11-21",
        "dog_name": "Rex",
        "total_amount": 420.0,
    }


@pytest.fixture
def create_customer_factory(test_client):
    async def _create_customer(name="Test Customer", **kwargs):
        data = {"name": name}
        data.update(kwargs)
        response = await test_client.post("/api/customers", json=data)
        return response.json() if response.status_code == 200 else None

    return _create_customer


@pytest.fixture
def create_quote_factory(test_client, valid_quote_data):
    async def _create_quote(**kwargs):
        data = dict(valid_quote_data)
        data.update(kwargs)
        response = await test_client.post("/api/quotes", json=data)
        return response.json() if response.status_code == 200 else None

    return _create_quote


def pytest_configure(config):
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
    config.addinivalue_line(
        "markers", "crud: marks tests related to CRUD operations"
    )
    config.addinivalue_line(
        "markers", "pricing: marks tests related to quote totals"
    )
    config.addinivalue_line(
        "markers", "promotion: marks tests related to quote promotion"
    )
    config.addinivalue_line(
        "markers", "audit: marks tests related to audit logging"
    )
    config.addinivalue_line(
        "markers", "idempotency: marks tests related to idempotency"
    )
