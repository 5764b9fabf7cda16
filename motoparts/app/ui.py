"""Server-rendered storefront pages."""

from flask import Blueprint, render_template, request

from motoparts.app.common.storefront import build_controller, render_settings
from motoparts.app.storage import catalog
from motoparts.catalog.views import build_quick_view

ui_bp = Blueprint("ui", __name__)


@ui_bp.get("/")
def home():
    controller = build_controller()
    return render_template(
        "pages/catalog.html",
        view=controller.view(),
        state=controller.state,
        categories=catalog.products.categories(),
    )


@ui_bp.get("/product.html")
def product_page():
    product = catalog.products.get(request.args.get("id"))
    if product is None:
        return render_template("pages/not_found.html"), 404
    return render_template("pages/product.html", product=build_quick_view(product, render_settings()))
