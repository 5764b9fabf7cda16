"""Catalog view controller: view state plus the user triggers that mutate it."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from motoparts.catalog import pipeline, views
from motoparts.catalog.errors import ProductNotFound
from motoparts.catalog.stores import CartStore, ProductStore

logger = logging.getLogger(__name__)

PRODUCT_NOT_FOUND_ALERT = "Product not found"
INVALID_EMAIL_ALERT = "Please enter a valid email"

# payload fields that must arrive as text
TEXT_FIELDS = ("category", "query", "sort", "key", "email")


def parse_quantity(value: Any, default: int = 1) -> int:
    """Quantity from user input; anything non-numeric or below 1 becomes `default`."""
    try:
        qty = int(str(value).strip())
    except (TypeError, ValueError):
        return default
    return qty if qty >= 1 else default


def _as_int(value: Any) -> Optional[int]:
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def is_valid_email(value: Optional[str]) -> bool:
    email = (value or "").strip()
    return bool(email) and "@" in email


@dataclass
class ViewState:
    page: int = 1
    page_size: int = pipeline.PAGE_SIZE
    category: str = pipeline.ALL_CATEGORIES
    query: str = ""
    sort: str = pipeline.SortMode.FEATURED.value
    suggestions: List[int] = field(default_factory=list)
    quick_view_id: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]], page_size: int = pipeline.PAGE_SIZE) -> "ViewState":
        data = data or {}
        return cls(
            page=_as_int(data.get("page")) or 1,
            page_size=page_size,
            category=str(data.get("category") or pipeline.ALL_CATEGORIES),
            query=str(data.get("query") or ""),
            sort=pipeline.SortMode.parse(data.get("sort")).value,
            suggestions=[i for i in (_as_int(v) for v in data.get("suggestions") or []) if i is not None],
            quick_view_id=_as_int(data.get("quick_view_id")),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "page": self.page,
            "category": self.category,
            "query": self.query,
            "sort": self.sort,
            "suggestions": list(self.suggestions),
            "quick_view_id": self.quick_view_id,
        }


@dataclass
class Notice:
    """Transient confirmation shown in the title bar."""

    title: str
    duration_ms: int


class ViewController:
    def __init__(
        self,
        products: ProductStore,
        cart: CartStore,
        state: Optional[ViewState] = None,
        settings: Optional[views.RenderSettings] = None,
        autocomplete_limit: int = pipeline.AUTOCOMPLETE_LIMIT,
        notice_ms: int = 900,
    ):
        self.products = products
        self.cart = cart
        self.state = state or ViewState()
        self.settings = settings or views.RenderSettings()
        self.autocomplete_limit = autocomplete_limit
        self.notice_ms = notice_ms

        self.alert: Optional[str] = None
        self.notice: Optional[Notice] = None
        self.cart_count = cart.count()
        self._listeners: List[Callable[[ViewState], None]] = []

        cart.on_count(self._on_cart_count)
        self._clamp()

    # -- state change signal --

    def on_change(self, listener: Callable[[ViewState], None]) -> None:
        self._listeners.append(listener)

    def _changed(self) -> None:
        self._clamp()
        for listener in list(self._listeners):
            listener(self.state)

    def _clamp(self) -> None:
        count = len(self.selection())
        self.state.page = pipeline.clamp_page(self.state.page, pipeline.total_pages(count, self.state.page_size))

    def _on_cart_count(self, count: int) -> None:
        self.cart_count = count

    # -- pipeline --

    def selection(self) -> List:
        s = self.state
        return pipeline.select(self.products.products, s.category, s.query, s.sort)

    def current_page(self) -> pipeline.Page:
        return pipeline.paginate(self.selection(), self.state.page, self.state.page_size)

    def view(self) -> views.CatalogView:
        suggestions = [p for p in (self.products.get(i) for i in self.state.suggestions) if p]
        quick = self.products.get(self.state.quick_view_id) if self.state.quick_view_id is not None else None
        return views.build_view(
            self.current_page(),
            self.settings,
            suggestions=suggestions,
            quick_view=quick,
            cart_count=self.cart_count,
        )

    # -- triggers --

    def select_category(self, category: Optional[str]) -> None:
        self.state.category = (category or "").strip() or pipeline.ALL_CATEGORIES
        self.state.page = 1
        self._changed()

    def search(self, query: Optional[str]) -> None:
        self.state.query = (query or "").strip()
        matches = pipeline.autocomplete(self.products.products, self.state.query, self.autocomplete_limit)
        self.state.suggestions = [p.id for p in matches]
        self.state.page = 1
        self._changed()

    def change_sort(self, mode: Optional[str]) -> None:
        self.state.sort = pipeline.SortMode.parse(mode).value
        self.state.page = 1
        self._changed()

    def go_to_page(self, page: Any) -> None:
        try:
            self.state.page = int(page)
        except (TypeError, ValueError):
            return
        self._changed()

    def add_to_cart(self, product_id: Any, quantity: int = 1) -> bool:
        try:
            line = self.cart.add(product_id, quantity)
        except ProductNotFound:
            logger.info("Add to cart rejected: unknown product %r", product_id)
            self.alert = PRODUCT_NOT_FOUND_ALERT
            return False
        self.notice = Notice(title=f"✓ {line.name} added", duration_ms=self.notice_ms)
        return True

    def open_quick_view(self, product_id: Any) -> None:
        product = self.products.get(product_id)
        if product is None:
            return
        self.state.quick_view_id = product.id
        self._changed()

    def add_from_quick_view(self, quantity: Any = 1) -> None:
        if self.state.quick_view_id is None:
            return
        self.add_to_cart(self.state.quick_view_id, parse_quantity(quantity))
        self.close_quick_view()

    def close_quick_view(self) -> None:
        self.state.quick_view_id = None
        self._changed()

    def dismiss_autocomplete(self) -> None:
        self.state.suggestions = []
        self._changed()

    def outside_click(self, on_backdrop: bool = False) -> None:
        self.state.suggestions = []
        if on_backdrop:
            self.state.quick_view_id = None
        self._changed()

    def key_down(self, key: Optional[str]) -> None:
        if key == "Escape":
            self.dismiss_autocomplete()

    def subscribe_newsletter(self, email: Optional[str]) -> bool:
        email = (email or "").strip()
        if not is_valid_email(email):
            self.alert = INVALID_EMAIL_ALERT
            return False
        logger.info("Newsletter subscription for %s", email)
        self.alert = f"Subscribed: {email}"
        return True

    def dispatch(self, trigger: str, payload: Optional[Dict[str, Any]] = None) -> None:
        """Route a named trigger to its handler. Unknown triggers raise ValueError."""
        payload = payload or {}
        for name in TEXT_FIELDS:
            value = payload.get(name)
            if value is not None and not isinstance(value, str):
                raise ValueError(f"{name} must be a string")
        self.alert = None
        self.notice = None
        handlers: Dict[str, Callable[[], Any]] = {
            "category": lambda: self.select_category(payload.get("category")),
            "search": lambda: self.search(payload.get("query")),
            "sort": lambda: self.change_sort(payload.get("sort")),
            "page": lambda: self.go_to_page(payload.get("page")),
            "add_to_cart": lambda: self.add_to_cart(payload.get("product_id"), parse_quantity(payload.get("quantity", 1))),
            "quick_view": lambda: self.open_quick_view(payload.get("product_id")),
            "quick_view_add": lambda: self.add_from_quick_view(payload.get("quantity", 1)),
            "close_quick_view": self.close_quick_view,
            "outside_click": lambda: self.outside_click(bool(payload.get("backdrop"))),
            "key": lambda: self.key_down(payload.get("key")),
            "subscribe": lambda: self.subscribe_newsletter(payload.get("email")),
        }
        handler = handlers.get(trigger)
        if handler is None:
            raise ValueError(f"Unknown trigger: {trigger!r}")
        handler()
