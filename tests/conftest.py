import pytest
from fastapi.testclient import TestClient

from product_api.config import Settings
from product_api.database.memory import InMemoryProductStore
from product_api.main import create_app


@pytest.fixture
def store():
    return InMemoryProductStore()


@pytest.fixture
def client(store):
    app = create_app(settings=Settings(STORAGE_BACKEND="memory"), store=store)
    with TestClient(app) as c:
        yield c


@pytest.fixture
def make_product(client):
    def _make(**overrides):
        body = {
            "name": "Desk Lamp",
            "description": "Adjustable LED desk lamp",
            "price": 25.0,
            "category": "lighting",
            **overrides,
        }
        r = client.post("/api/products", json=body)
        assert r.status_code == 201, r.text
        return r.json()
    return _make
