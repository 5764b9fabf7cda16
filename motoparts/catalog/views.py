"""View models for the storefront.

These dataclasses are what the templates (and the JSON view endpoint) render.
They hold display-ready values only; all selection happens in `pipeline`.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from motoparts.catalog import pipeline
from motoparts.catalog.records import PLACEHOLDER_IMAGE, Product


@dataclass
class RenderSettings:
    currency: str = "KES"
    new_days: int = pipeline.NEW_PRODUCT_DAYS
    low_stock: int = pipeline.LOW_STOCK_THRESHOLD


@dataclass
class ProductCard:
    id: int
    name: str
    sku: str
    category: str
    image: str
    price: str
    badge: Optional[str]
    details_url: str


@dataclass
class PageButton:
    number: int
    active: bool


@dataclass
class Suggestion:
    id: int
    name: str
    sku: str
    details_url: str


@dataclass
class QuickView:
    id: int
    name: str
    sku: str
    category: str
    image: str
    price: str
    description: str
    quantity: int
    details_url: str


@dataclass
class CatalogView:
    cards: List[ProductCard]
    pagination: List[PageButton]
    result_count: str
    page: int
    total_pages: int
    suggestions: List[Suggestion] = field(default_factory=list)
    quick_view: Optional[QuickView] = None
    cart_count: int = 0

    @property
    def autocomplete_hidden(self) -> bool:
        return not self.suggestions

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["autocomplete_hidden"] = self.autocomplete_hidden
        return data


def build_card(product: Product, settings: RenderSettings, now: Optional[datetime] = None) -> ProductCard:
    badge = pipeline.badge_for(product, now, settings.new_days, settings.low_stock)
    return ProductCard(
        id=product.id,
        name=product.name,
        sku=product.sku,
        category=product.category,
        image=product.image or PLACEHOLDER_IMAGE,
        price=pipeline.format_price(product.price, settings.currency),
        badge=badge.value if badge else None,
        details_url=product.details_url,
    )


def build_pagination(page: int, total_pages: int) -> List[PageButton]:
    if total_pages <= 1:
        return []
    return [PageButton(number=n, active=(n == page)) for n in range(1, total_pages + 1)]


def build_suggestions(matches: List[Product]) -> List[Suggestion]:
    return [Suggestion(id=p.id, name=p.name, sku=p.sku, details_url=p.details_url) for p in matches]


def build_quick_view(product: Product, settings: RenderSettings) -> QuickView:
    return QuickView(
        id=product.id,
        name=product.name,
        sku=product.sku,
        category=product.category,
        image=product.image or PLACEHOLDER_IMAGE,
        price=pipeline.format_price(product.price, settings.currency),
        description=product.description,
        quantity=1,
        details_url=product.details_url,
    )


def build_view(
    page: pipeline.Page,
    settings: RenderSettings,
    suggestions: Optional[List[Product]] = None,
    quick_view: Optional[Product] = None,
    cart_count: int = 0,
    now: Optional[datetime] = None,
) -> CatalogView:
    return CatalogView(
        cards=[build_card(p, settings, now) for p in page.items],
        pagination=build_pagination(page.page, page.total_pages),
        result_count=f"{page.total_items} parts",
        page=page.page,
        total_pages=page.total_pages,
        suggestions=build_suggestions(suggestions or []),
        quick_view=build_quick_view(quick_view, settings) if quick_view else None,
        cart_count=cart_count,
    )
