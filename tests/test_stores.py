import json

import pytest

from conftest import make_product
from motoparts.catalog.errors import ProductNotFound
from motoparts.catalog.storage import MemoryStore
from motoparts.catalog.stores import CART_KEY, PRODUCTS_KEY, CartStore, ProductStore


def test_load_seeds_empty_store(store):
    products = ProductStore(store).load()
    assert len(products) == 6
    assert {p.category for p in products} == {"brakes", "safety", "engine", "accessories"}
    stored = json.loads(store.get(PRODUCTS_KEY))
    assert [p["id"] for p in stored] == [1, 2, 3, 4, 5, 6]
    assert all(p["createdAt"] for p in stored)


def test_load_reads_existing_catalog(stored_products):
    ps = stored_products([make_product(10), make_product(11)])
    assert [p.id for p in ps.products] == [10, 11]


def test_load_malformed_catalog_is_empty_not_reseeded():
    store = MemoryStore({PRODUCTS_KEY: "{not json"})
    assert ProductStore(store).load() == []
    assert store.get(PRODUCTS_KEY) == "{not json"


def test_load_non_array_catalog_is_empty():
    store = MemoryStore({PRODUCTS_KEY: json.dumps({"id": 1})})
    assert ProductStore(store).load() == []


def test_load_skips_records_without_id():
    store = MemoryStore({PRODUCTS_KEY: json.dumps([{"name": "no id"}, {"id": 2, "name": "ok"}])})
    assert [p.id for p in ProductStore(store).load()] == [2]


def test_get_resolves_numeric_strings(product_store):
    assert product_store.get("3").name == "Chain & Sprocket Kit"
    assert product_store.get(999) is None
    assert product_store.get("abc") is None


def test_categories_in_storage_order(product_store):
    assert product_store.categories() == ["brakes", "safety", "engine", "accessories"]


def test_store_write_refreshes_product_list(store, product_store):
    store.set(PRODUCTS_KEY, json.dumps([make_product(42).to_dict()]))
    assert [p.id for p in product_store.products] == [42]


def test_refresh_detects_same_length_edit(store, product_store):
    data = json.loads(store.get(PRODUCTS_KEY))
    data[0]["price"] = 1
    # direct backend write: no notification, as from another process
    store._write(PRODUCTS_KEY, json.dumps(data))
    assert product_store.products[0].price == 1500

    assert product_store.refresh() is True
    assert product_store.products[0].price == 1
    assert product_store.refresh() is False


def test_refresh_ignores_unparseable_update(store, product_store):
    store._write(PRODUCTS_KEY, "[oops")
    assert product_store.refresh() is False
    assert len(product_store.products) == 6


def test_closed_store_stops_following_writes(store, product_store):
    product_store.close()
    store.set(PRODUCTS_KEY, "[]")
    assert len(product_store.products) == 6


# CART-001: missing or malformed cart is empty
def test_cart_get_missing_or_malformed(store, cart):
    assert cart.get() == []
    store.set(CART_KEY, "not json")
    assert cart.get() == []


# CART-002: adding the same product increases quantity
def test_add_same_product_increases_quantity(cart):
    cart.add(3, 2)
    cart.add(3, 3)
    lines = cart.get()
    assert len(lines) == 1
    assert lines[0].qty == 5


# CART-003: id 3 qty 1 then qty 2 gives one line of qty 3
def test_add_product_three_twice(cart):
    cart.add(3, 1)
    cart.add(3, 2)
    assert [l.to_dict() for l in cart.get()] == [
        {"id": 3, "name": "Chain & Sprocket Kit", "price": 2200, "qty": 3}
    ]


# CART-004: unknown product is rejected without writing
def test_add_unknown_product(store, cart):
    with pytest.raises(ProductNotFound):
        cart.add(999, 1)
    assert store.get(CART_KEY) is None


def test_add_rejects_non_positive_quantity(cart):
    with pytest.raises(ValueError):
        cart.add(1, 0)


# CART-005: cart lines keep the price captured at add time
def test_line_snapshot_not_resynced(store, product_store, cart):
    cart.add(4, 1)
    data = json.loads(store.get(PRODUCTS_KEY))
    data[3]["price"] = 5000
    store.set(PRODUCTS_KEY, json.dumps(data))
    cart.add(4, 1)
    line = cart.get()[0]
    assert (line.price, line.qty) == (900, 2)


def test_save_notifies_count_listeners(cart):
    counts = []
    cart.on_count(counts.append)
    cart.add(1, 2)
    cart.add(2, 1)
    assert counts == [2, 3]
    assert cart.count() == 3
    assert cart.total() == 2 * 1500 + 3500


def test_save_writes_through(store, product_store):
    cart = CartStore(store, product_store)
    cart.add(6, 1)
    assert json.loads(store.get(CART_KEY)) == [{"id": 6, "name": "Side Mirrors (Pair)", "price": 1800, "qty": 1}]


def test_store_publishes_to_key_and_wildcard_subscribers():
    store = MemoryStore()
    seen = []
    store.subscribe(lambda k, v: seen.append(("key", k)), key="a")
    unsubscribe = store.subscribe(lambda k, v: seen.append(("any", k)))
    store.set("a", "1")
    store.set("b", "2")
    unsubscribe()
    store.set("b", "3")
    assert seen == [("key", "a"), ("any", "a"), ("any", "b")]
