import json
import os
import sys
import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from motoparts.app.config import Config
from motoparts.app.factory import create_app
from motoparts.catalog.records import Product
from motoparts.catalog.storage import MemoryStore
from motoparts.catalog.stores import PRODUCTS_KEY, CartStore, ProductStore


class TestConfig(Config):
    TESTING = True
    SECRET_KEY = "test-secret"
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    STORE_BACKEND = "memory"
    CATALOG_SYNC_ENABLED = False


class SqlTestConfig(TestConfig):
    STORE_BACKEND = "sql"


def make_product(pid, **overrides):
    data = {
        "id": pid,
        "name": f"Part {pid}",
        "sku": f"SKU-{pid}",
        "price": 100 * pid,
        "stock": 50,
        "category": "misc",
        "image": "",
        "description": f"Description {pid}",
        "createdAt": "2020-01-01T00:00:00Z",
    }
    data.update(overrides)
    return Product.from_dict(data)


@pytest.fixture()
def app():
    return create_app(TestConfig)


@pytest.fixture()
def client(app):
    with app.test_client() as client:
        yield client


@pytest.fixture()
def sql_app():
    return create_app(SqlTestConfig)


@pytest.fixture()
def store():
    return MemoryStore()


@pytest.fixture()
def product_store(store):
    # seeded catalog
    products = ProductStore(store)
    products.load()
    return products


@pytest.fixture()
def cart(store, product_store):
    return CartStore(store, product_store)


@pytest.fixture()
def stored_products(store):
    """Write a list of products into the store and return a loaded ProductStore."""

    def _write(products):
        store.set(PRODUCTS_KEY, json.dumps([p.to_dict() for p in products]))
        ps = ProductStore(store)
        ps.load()
        return ps

    return _write
