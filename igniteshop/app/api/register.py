from flask import Flask

from igniteshop.modules.catalog.routes import bp as catalog_bp
from igniteshop.modules.checkout.routes import bp as checkout_bp


def register_api_blueprints(app: Flask) -> None:
    app.register_blueprint(catalog_bp, url_prefix="/api")
    app.register_blueprint(checkout_bp, url_prefix="/api")

    # Root API document
    @app.get("/api")
    def api_index():
        return {
            "name": "Ignite Shop API",
            "version": "0.1.0",
            "endpoints": {
                "catalog": ["/products/<id>"],
                "checkout": ["/checkout"],
            },
        }, 200
