from __future__ import annotations

from flask import Blueprint, current_app, request

from motoparts.app.common.errors import abort_json
from motoparts.app.common.storefront import render_settings
from motoparts.app.storage import catalog
from motoparts.catalog import pipeline
from motoparts.catalog.views import build_card, build_suggestions

bp = Blueprint("catalog", __name__)


@bp.get("/products")
def list_products():
    """GET /api/products - One page of the filtered, sorted catalog.

    Query params:
      - q: free text (name, SKU or description)
      - category: tag or "all"
      - sort: featured|newest|price-asc|price-desc|name
      - page: 1-based, clamped into range
    """
    query = (request.args.get("q") or "").strip()
    category = (request.args.get("category") or pipeline.ALL_CATEGORIES).strip()
    sort = pipeline.SortMode.parse(request.args.get("sort"))
    page_size = current_app.config.get("PAGE_SIZE", pipeline.PAGE_SIZE)

    selected = pipeline.select(catalog.products.products, category, query, sort)
    page = pipeline.paginate(selected, request.args.get("page", 1), page_size)
    settings = render_settings()

    return {
        "items": [
            {**p.to_dict(), "badge": build_card(p, settings).badge}
            for p in page.items
        ],
        "paging": {
            "page": page.page,
            "page_size": page.page_size,
            "total_pages": page.total_pages,
            "total": page.total_items,
        },
        "filters": {"q": query, "category": category, "sort": sort.value},
    }, 200


@bp.get("/products/<int:product_id>")
def get_product(product_id: int):
    """GET /api/products/<id> - Retrieve product details."""
    p = catalog.products.get(product_id)
    if not p:
        abort_json(404, "not_found", "Product not found")
    return {**p.to_dict(), "details_url": p.details_url}, 200


@bp.get("/categories")
def list_categories():
    return {"items": catalog.products.categories()}, 200


@bp.get("/autocomplete")
def autocomplete():
    q = (request.args.get("q") or "").strip()
    limit = current_app.config.get("AUTOCOMPLETE_LIMIT", pipeline.AUTOCOMPLETE_LIMIT)
    matches = pipeline.autocomplete(catalog.products.products, q, limit)
    return {
        "query": q,
        "items": [vars(s) for s in build_suggestions(matches)],
        "hidden": not matches,
    }, 200
