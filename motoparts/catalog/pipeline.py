"""Pure filter / sort / paginate functions over product lists.

Nothing here touches storage or rendering; callers pass the full product list
and get new lists back.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Iterable, List, Optional, Sequence

from motoparts.catalog.records import Product

PAGE_SIZE = 9
AUTOCOMPLETE_LIMIT = 6
NEW_PRODUCT_DAYS = 30
LOW_STOCK_THRESHOLD = 10

ALL_CATEGORIES = "all"

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


class SortMode(str, Enum):
    FEATURED = "featured"
    NEWEST = "newest"
    PRICE_ASC = "price-asc"
    PRICE_DESC = "price-desc"
    NAME = "name"

    @classmethod
    def parse(cls, value: Optional[str]) -> "SortMode":
        if not isinstance(value, str):
            return cls.FEATURED
        try:
            return cls(value.strip())
        except ValueError:
            return cls.FEATURED


class Badge(str, Enum):
    NEW = "NEW"
    LOW = "Low"


@dataclass
class Page:
    items: List[Product]
    page: int
    total_pages: int
    total_items: int
    page_size: int


def filter_by_category(products: Iterable[Product], category: Optional[str]) -> List[Product]:
    if not category or category == ALL_CATEGORIES:
        return list(products)
    return [p for p in products if p.category == category]


def _matches(value: str, needle: str) -> bool:
    return needle in (value or "").lower()


def filter_by_query(products: Iterable[Product], query: Optional[str]) -> List[Product]:
    q = (query or "").lower()
    if not q:
        return list(products)
    return [
        p for p in products
        if _matches(p.name, q) or _matches(p.sku, q) or _matches(p.description, q)
    ]


def sort_products(products: Iterable[Product], mode) -> List[Product]:
    mode = mode if isinstance(mode, SortMode) else SortMode.parse(mode)
    items = list(products)
    if mode is SortMode.NEWEST:
        items.sort(key=lambda p: p.created or _EPOCH, reverse=True)
    elif mode is SortMode.PRICE_ASC:
        items.sort(key=lambda p: p.price)
    elif mode is SortMode.PRICE_DESC:
        items.sort(key=lambda p: p.price, reverse=True)
    elif mode is SortMode.NAME:
        items.sort(key=lambda p: (p.name or "").casefold())
    return items


def select(products: Sequence[Product], category: Optional[str], query: Optional[str], sort) -> List[Product]:
    """Category filter, then text query, then sort."""
    return sort_products(filter_by_query(filter_by_category(products, category), query), sort)


def total_pages(count: int, page_size: int = PAGE_SIZE) -> int:
    return max(1, math.ceil(count / page_size))


def clamp_page(page, pages: int) -> int:
    try:
        page = int(page)
    except (TypeError, ValueError):
        page = 1
    return min(max(1, page), pages)


def paginate(products: Sequence[Product], page, page_size: int = PAGE_SIZE) -> Page:
    pages = total_pages(len(products), page_size)
    current = clamp_page(page, pages)
    start = (current - 1) * page_size
    return Page(
        items=list(products[start:start + page_size]),
        page=current,
        total_pages=pages,
        total_items=len(products),
        page_size=page_size,
    )


def autocomplete(products: Iterable[Product], query: Optional[str], limit: int = AUTOCOMPLETE_LIMIT) -> List[Product]:
    q = (query or "").lower()
    if not q:
        return []
    matches = [p for p in products if _matches(p.name, q) or _matches(p.sku, q)]
    return matches[:limit]


def is_new(product: Product, now: Optional[datetime] = None, days: int = NEW_PRODUCT_DAYS) -> bool:
    created = product.created
    if created is None:
        return False
    now = now or datetime.now(timezone.utc)
    return now - created <= timedelta(days=days)


def is_low_stock(stock: int, threshold: int = LOW_STOCK_THRESHOLD) -> bool:
    return 0 < stock <= threshold


def badge_for(
    product: Product,
    now: Optional[datetime] = None,
    new_days: int = NEW_PRODUCT_DAYS,
    low_stock: int = LOW_STOCK_THRESHOLD,
) -> Optional[Badge]:
    if is_new(product, now, new_days):
        return Badge.NEW
    if is_low_stock(product.stock, low_stock):
        return Badge.LOW
    return None


def format_price(amount: int, currency: str = "KES") -> str:
    return f"{currency} {int(amount):,}"
