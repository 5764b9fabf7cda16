from __future__ import annotations

import json
import logging
import threading
from typing import Any, Callable, List, Optional

from motoparts.catalog.errors import ProductNotFound
from motoparts.catalog.records import CartLine, Product, seed_products
from motoparts.catalog.storage import KeyValueStore

logger = logging.getLogger(__name__)

PRODUCTS_KEY = "moto_products"
CART_KEY = "moto_cart"


def _load_array(raw: str) -> List[Any]:
    data = json.loads(raw)
    if not isinstance(data, list):
        raise ValueError(f"expected a JSON array, got {type(data).__name__}")
    return data


def _dump(records) -> str:
    return json.dumps([r.to_dict() for r in records], ensure_ascii=False)


def _as_id(value) -> Optional[int]:
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


class ProductStore:
    """In-memory view of the catalog blob.

    The list is replaced whenever the stored text changes, either through a
    write notification from the store or an explicit `refresh()`.
    """

    def __init__(self, store: KeyValueStore, key: str = PRODUCTS_KEY, watch: bool = True):
        self.store = store
        self.key = key
        self._products: List[Product] = []
        self._raw: Optional[str] = None
        self._lock = threading.RLock()
        self._unsubscribe = store.subscribe(self._on_write, key=key) if watch else None

    def load(self) -> List[Product]:
        with self._lock:
            raw = self.store.get(self.key)
            if not raw:
                seed = seed_products()
                raw = _dump(seed)
                self._products, self._raw = seed, raw
                self.store.set(self.key, raw)
                logger.info("Seeded catalog with %d products", len(seed))
                return list(seed)
            try:
                self._products = self._parse(raw)
            except ValueError:
                logger.warning("Stored catalog under %r is not valid JSON; rendering empty", self.key)
                self._products = []
            self._raw = raw
            return list(self._products)

    def refresh(self) -> bool:
        """Re-read the store; returns True when the in-memory list was replaced."""
        with self._lock:
            raw = self.store.get(self.key)
            if raw == self._raw:
                return False
            try:
                fresh = self._parse(raw) if raw else []
            except ValueError:
                logger.warning("Ignoring unparseable catalog update under %r", self.key)
                return False
            self._products, self._raw = fresh, raw
            logger.info("Catalog refreshed: %d products", len(fresh))
            return True

    def _on_write(self, key: str, value: str) -> None:
        self.refresh()

    def close(self) -> None:
        if self._unsubscribe:
            self._unsubscribe()
            self._unsubscribe = None

    @property
    def products(self) -> List[Product]:
        with self._lock:
            return list(self._products)

    def get(self, product_id) -> Optional[Product]:
        wanted = _as_id(product_id)
        if wanted is None:
            return None
        for p in self.products:
            if p.id == wanted:
                return p
        return None

    def categories(self) -> List[str]:
        seen: List[str] = []
        for p in self.products:
            if p.category and p.category not in seen:
                seen.append(p.category)
        return seen

    @staticmethod
    def _parse(raw: str) -> List[Product]:
        products = []
        for item in _load_array(raw):
            try:
                products.append(Product.from_dict(item))
            except (AttributeError, KeyError, TypeError, ValueError):
                logger.warning("Skipping malformed product record: %r", item)
        return products


class CartStore:
    def __init__(self, store: KeyValueStore, products: ProductStore, key: str = CART_KEY):
        self.store = store
        self.products = products
        self.key = key
        self._count_listeners: List[Callable[[int], None]] = []

    def get(self) -> List[CartLine]:
        raw = self.store.get(self.key)
        if not raw:
            return []
        try:
            items = _load_array(raw)
        except ValueError:
            logger.warning("Stored cart under %r is not valid JSON; treating as empty", self.key)
            return []
        lines = []
        for item in items:
            try:
                lines.append(CartLine.from_dict(item))
            except (AttributeError, KeyError, TypeError, ValueError):
                logger.warning("Skipping malformed cart line: %r", item)
        return lines

    def add(self, product_id, quantity: int = 1) -> CartLine:
        product = self.products.get(product_id)
        if product is None:
            raise ProductNotFound(product_id)
        if quantity <= 0:
            raise ValueError("Quantity must be > 0")

        cart = self.get()
        line = next((item for item in cart if item.id == product.id), None)
        if line:
            line.qty += quantity
        else:
            line = CartLine(id=product.id, name=product.name, price=product.price, qty=quantity)
            cart.append(line)
        self.save(cart)
        return line

    def save(self, cart: List[CartLine]) -> None:
        self.store.set(self.key, _dump(cart))
        count = sum(item.qty for item in cart)
        for listener in list(self._count_listeners):
            listener(count)

    def count(self) -> int:
        return sum(item.qty for item in self.get())

    def total(self) -> int:
        return sum(item.line_total for item in self.get())

    def on_count(self, listener: Callable[[int], None]) -> None:
        self._count_listeners.append(listener)
