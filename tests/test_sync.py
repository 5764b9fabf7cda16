import json

from motoparts.app.storage import SqlStore, catalog
from motoparts.catalog.stores import PRODUCTS_KEY, ProductStore
from motoparts.catalog.sync import CatalogSyncPoller


def test_poll_picks_up_silent_write(store, product_store):
    calls = []
    poller = CatalogSyncPoller(product_store, interval=0.01, on_change=lambda: calls.append(1))
    data = json.loads(store.get(PRODUCTS_KEY))
    data[1]["name"] = "Open-Face Helmet"
    store._write(PRODUCTS_KEY, json.dumps(data))

    assert poller.poll_once() is True
    assert product_store.get(2).name == "Open-Face Helmet"
    assert poller.poll_once() is False
    assert calls == [1]


def test_poller_start_and_stop(product_store):
    poller = CatalogSyncPoller(product_store, interval=0.01)
    poller.start()
    assert poller.running
    poller.stop(timeout=1)
    assert not poller.running


def test_sql_store_round_trip(sql_app):
    with sql_app.app_context():
        store = SqlStore()
        seen = []
        store.subscribe(lambda k, v: seen.append(k))
        assert store.get("k") is None
        store.set("k", "[1]")
        store.set("k", "[2]")
        assert store.get("k") == "[2]"
        assert seen == ["k", "k"]


def test_sql_backend_seeds_catalog(sql_app):
    with sql_app.app_context():
        assert len(catalog.products.products) == 6
        assert ProductStore(SqlStore(), watch=False).load()[0].sku == "BP-1001"


def test_sql_backend_serves_api(sql_app):
    with sql_app.test_client() as c:
        r = c.get("/api/products?category=safety")
        assert [p["id"] for p in r.json["items"]] == [2, 5]


def test_cli_init_db_and_seed(sql_app):
    runner = sql_app.test_cli_runner()
    result = runner.invoke(args=["init-db"])
    assert "init-db: done" in result.output

    result = runner.invoke(args=["seed"])
    assert "Catalog has 6 products" in result.output
