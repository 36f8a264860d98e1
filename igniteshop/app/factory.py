from __future__ import annotations

import logging
from flask import Flask, g, jsonify, render_template, request
from werkzeug.exceptions import HTTPException

from igniteshop.app.config import Config
from igniteshop.app.extensions import db, migrate, cors
from igniteshop.app.common.errors import ApiError, error_payload
from igniteshop.app.common.request_context import attach_request_id, init_request_id
from igniteshop.app.api.register import register_api_blueprints
from igniteshop.app.cli import cli_bp
from igniteshop.app.ui import ui_bp
from igniteshop.modules.catalog.client import CatalogError, StripeCatalog


def _wants_json() -> bool:
    return request.path.startswith("/api/") or request.path == "/api"


def create_app(config_object: type[Config] = Config, catalog=None) -> Flask:
    app = Flask(__name__, instance_relative_config=True)
    app.config.from_object(config_object)

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(message)s")

    if app.config["PRODUCT_PAGE_VARIANT"] not in ("full", "partial"):
        raise ValueError(f"PRODUCT_PAGE_VARIANT must be 'full' or 'partial', got {app.config['PRODUCT_PAGE_VARIANT']!r}")

    # Extensions
    db.init_app(app)
    migrate.init_app(app, db)
    cors.init_app(app, resources={r"/api/*": {"origins": app.config.get("CORS_ORIGINS") or "*"}})

    # Catalog client (tests pass a fake)
    app.extensions["catalog"] = catalog or StripeCatalog(api_key=app.config["STRIPE_SECRET_KEY"])

    with app.app_context():
        db.create_all()

    # Request id
    @app.before_request
    def _before_request():
        init_request_id()

    app.after_request(attach_request_id)

    @app.get("/health")
    def health():
        return {"status": "ok"}, 200

    register_api_blueprints(app)
    app.register_blueprint(ui_bp)

    # CLI (flask build, flask checkout)
    app.register_blueprint(cli_bp)

    # Error handlers
    @app.errorhandler(ApiError)
    def handle_api_error(err: ApiError):
        return jsonify(err.to_dict(g.get("request_id"))), err.status_code

    @app.errorhandler(CatalogError)
    def handle_catalog_error(err: CatalogError):
        app.logger.warning("catalog unavailable: %s", err)
        if _wants_json():
            payload = error_payload("catalog_unavailable", "Catalog provider unavailable", request_id=g.get("request_id"))
            return jsonify(payload), 502
        return render_template("pages/error.html", status=502, message="Catalog provider unavailable"), 502

    @app.errorhandler(HTTPException)
    def handle_http_exception(err: HTTPException):
        if _wants_json():
            # Normalize Werkzeug errors into our JSON shape
            payload = error_payload("http_error", err.description, {"name": err.name}, g.get("request_id"))
            return jsonify(payload), err.code or 500
        return render_template("pages/error.html", status=err.code, message=err.name), err.code or 500

    @app.errorhandler(Exception)
    def handle_unexpected(err: Exception):
        app.logger.exception("Unhandled exception")
        if _wants_json():
            payload = error_payload("internal_error", "Internal server error", request_id=g.get("request_id"))
            return jsonify(payload), 500
        return render_template("pages/error.html", status=500, message="Internal server error"), 500

    return app
