from __future__ import annotations

import logging
from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from motoparts.app.config import Config
from motoparts.app.extensions import db, cors
from motoparts.app.storage import catalog
from motoparts.app.common.errors import ApiError, error_payload
from motoparts.app.common.request_context import current_request_id, echo_request_id, init_request_id
from motoparts.app.api.register import register_api_blueprints
from motoparts.app.cli import cli_bp
from motoparts.app.ui import ui_bp


def create_app(config_object: type[Config] = Config) -> Flask:
    app = Flask(__name__, instance_relative_config=True)
    app.config.from_object(config_object)

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(message)s")

    # Extensions
    db.init_app(app)
    cors.init_app(app, resources={r"/api/*": {"origins": app.config.get("CORS_ORIGINS") or "*"}})
    catalog.init_app(app)

    # Request id
    @app.before_request
    def _before_request():
        init_request_id()

    app.after_request(echo_request_id)

    # Liveness check
    @app.get("/health")
    def health():
        return {"status": "ok"}, 200

    register_api_blueprints(app)
    app.register_blueprint(ui_bp)

    # CLI (flask init-db, flask seed)
    app.register_blueprint(cli_bp)

    # Error handlers
    @app.errorhandler(ApiError)
    def handle_api_error(err: ApiError):
        return jsonify(err.to_dict(current_request_id())), err.status_code

    @app.errorhandler(HTTPException)
    def handle_http_exception(err: HTTPException):
        # Normalize Werkzeug errors into our JSON shape
        payload = error_payload("http_error", err.description, {"name": err.name}, current_request_id())
        return jsonify(payload), err.code or 500

    @app.errorhandler(Exception)
    def handle_unexpected(err: Exception):
        app.logger.exception("Unhandled exception")
        return jsonify(error_payload("internal_error", "Internal server error", None, current_request_id())), 500

    return app
