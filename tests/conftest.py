"""Root conftest — shared test configuration and fixtures.

Invariants:
    - No test talks to a real MongoDB: the store dependency is overridden with
      a CustomerStore over FakeCollection
    - Each test gets a fresh app and a fresh collection
    - ASGITransport does not run the lifespan, so app.state.mongo stays None
"""

import os

# Ensure tests never point at a real deployment
os.environ.setdefault("MONGODB_URI", "mongodb://localhost:27017/customers_test")
os.environ.setdefault("LOG_FORMAT", "text")

import pytest
from httpx import ASGITransport, AsyncClient

from customer_api.config import Settings
from customer_api.infrastructure.customer_store import CustomerStore, get_customer_store
from customer_api.main import create_app
from tests.fake_mongo import FakeCollection


@pytest.fixture
def fake_collection():
    return FakeCollection()


@pytest.fixture
def store(fake_collection):
    return CustomerStore(fake_collection)


@pytest.fixture
def make_client(fake_collection):
    """Build a test client for an app using the given error policy."""
    apps = []

    def _make(error_policy: str = "collapse") -> AsyncClient:
        app = create_app(Settings(error_policy=error_policy))
        app.dependency_overrides[get_customer_store] = (
            lambda: CustomerStore(fake_collection)
        )
        apps.append(app)
        return AsyncClient(
            transport=ASGITransport(app=app), base_url="http://test",
        )

    yield _make
    for app in apps:
        app.dependency_overrides.clear()


@pytest.fixture
async def client(make_client):
    """Client for an app with the default (collapse) error policy."""
    async with make_client() as c:
        yield c


@pytest.fixture
async def http_client(make_client):
    """Client for an app with the status-mapping error policy."""
    async with make_client("http") as c:
        yield c


@pytest.fixture
def ana():
    return {
        "firstName": "Ana",
        "lastName": "Ruiz",
        "email": "ana@x.com",
        "phoneNumber": "123",
    }
