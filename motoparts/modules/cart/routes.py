from __future__ import annotations

from flask import Blueprint

from motoparts.app.common.errors import abort_json
from motoparts.app.common.storefront import cart_store
from motoparts.app.common.validation import get_json, require_fields, require_int
from motoparts.catalog.errors import ProductNotFound
from motoparts.catalog.stores import CartStore

bp = Blueprint("cart", __name__)


def _cart_response(cart: CartStore):
    lines = cart.get()
    return {
        "items": [
            {**line.to_dict(), "line_total": line.line_total}
            for line in lines
        ],
        "count": sum(line.qty for line in lines),
        "total": sum(line.line_total for line in lines),
    }


@bp.get("/cart")
def get_cart():
    return _cart_response(cart_store()), 200


@bp.post("/cart/add")
def add_to_cart():
    data = get_json()
    require_fields(data, ["product_id"])

    product_id = require_int(data, "product_id")
    qty = require_int(data, "quantity") if "quantity" in data else 1
    if qty <= 0:
        abort_json(400, "validation_error", "Quantity must be > 0")

    cart = cart_store()
    try:
        cart.add(product_id, qty)
    except ProductNotFound:
        abort_json(404, "not_found", "Product not found")

    return _cart_response(cart), 201
