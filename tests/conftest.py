"""
pytest configuration and fixtures

Every test gets its own in-memory repository bundle, so nothing leaks
between tests. Postgres repositories run against the in-process fake in
fake_postgres, so no database server is needed.
"""

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

from fake_postgres import FakePool, FakeServer
from world_property.app import create_app
from world_property.data.seed_listings import seed_listings
from world_property.database.connection import Database
from world_property.repositories import in_memory_repositories, postgres_repositories
from world_property.services.legal_workflow_service import LegalWorkflowService
from world_property.services.offers_service import OffersService

DEVICE_HEADERS = {"x-device-id": "device-test-001"}


@pytest.fixture
def repositories():
    return in_memory_repositories()


@pytest_asyncio.fixture
async def seeded_repositories(repositories):
    await seed_listings(repositories)
    return repositories


@pytest.fixture
def legal_workflow(seeded_repositories):
    return LegalWorkflowService(seeded_repositories)


@pytest.fixture
def offers_service(seeded_repositories, legal_workflow):
    return OffersService(seeded_repositories, legal_workflow=legal_workflow)


@pytest.fixture
def client(repositories):
    """TestClient over an app with seeded in-memory storage"""
    app = create_app(repositories=repositories, seed=True)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def device_headers():
    return dict(DEVICE_HEADERS)


@pytest.fixture
def signed_in_headers(client):
    """Headers for a freshly signed-in user"""
    response = client.post("/api/auth/sign-in", json={"email": "buyer@example.com", "name": "Test Buyer"})
    assert response.status_code == 200, response.text
    return {"x-user-email": "buyer@example.com"}


@pytest.fixture
def open_case(client, device_headers):
    """Create an offer on a seed listing and return the response body"""
    response = client.post(
        "/api/offers",
        json={"listing_id": "lst-london-001", "amount_minor": 70000000, "currency_code": "GBP"},
        headers=device_headers,
    )
    assert response.status_code == 201, response.text
    return response.json()


@pytest.fixture
def fake_server():
    return FakeServer()


@pytest.fixture
def fake_database(fake_server):
    """Database handle whose pool hands out fake connections"""
    database = Database("postgresql://fake/world_property")
    database._pool = FakePool(fake_server)
    return database


@pytest_asyncio.fixture
async def pg_repositories(fake_database):
    """Postgres repositories, except listings which come seeded from memory"""
    repositories = postgres_repositories(fake_database)
    memory = in_memory_repositories()
    await seed_listings(memory)
    repositories.listings = memory.listings
    return repositories
