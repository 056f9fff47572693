import pytest
from fastapi.testclient import TestClient
from mongomock_motor import AsyncMongoMockClient

from main import app, get_service
from service import CoffeeShopService


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def collection():
    return AsyncMongoMockClient()["coffee_shops_test"]["coffee_shop"]


@pytest.fixture
def service(collection):
    return CoffeeShopService(collection)


@pytest.fixture
def client(service):
    app.dependency_overrides[get_service] = lambda: service
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def shop_payload():
    return {
        "name": "Bluebird Café",
        "address": "12 Harbour Street",
        "rating": 4.5,
        "products": [
            {"name": "Flat white", "description": "  Double shot  ", "price": 3.2, "category": "coffee"},
            {"name": "Croissant", "price": 2.5, "category": "food"},
            {"name": "Espresso", "price": 2.0, "category": "coffee"},
        ],
    }
