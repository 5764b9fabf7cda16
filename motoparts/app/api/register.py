from flask import Flask

from motoparts.modules.catalog.routes import bp as catalog_bp
from motoparts.modules.cart.routes import bp as cart_bp
from motoparts.modules.storefront.routes import bp as storefront_bp


def register_api_blueprints(app: Flask) -> None:
    app.register_blueprint(catalog_bp, url_prefix="/api")
    app.register_blueprint(cart_bp, url_prefix="/api")
    app.register_blueprint(storefront_bp, url_prefix="/api")

    # Root API document
    @app.get("/api")
    def api_index():
        return {
            "name": "MotoParts API",
            "version": "0.1.0",
            "endpoints": {
                "catalog": ["/products", "/products/<id>", "/categories", "/autocomplete"],
                "cart": ["/cart", "/cart/add"],
                "storefront": ["/view/events", "/newsletter"],
            },
        }, 200
