from __future__ import annotations

from flask import Blueprint, current_app

from igniteshop.app.common.errors import abort_json
from igniteshop.app.common.validation import get_json, require_string
from igniteshop.modules.catalog.client import CatalogError, get_catalog

bp = Blueprint("checkout", __name__)


@bp.post("/checkout")
def create_checkout_session():
    """Start a hosted checkout for a single price.

    Request JSON:
      {"priceId": "price_..."}
    Response JSON:
      {"checkoutUrl": "https://checkout.stripe.com/..."}
    """
    data = get_json()
    price_id = require_string(data, "priceId", "Price not found.")

    app_url = current_app.config["APP_URL"]
    success_url = f"{app_url}/success?session_id={{CHECKOUT_SESSION_ID}}"
    cancel_url = f"{app_url}/"

    try:
        checkout_url = get_catalog().create_checkout_session(price_id, success_url, cancel_url)
    except CatalogError as err:
        current_app.logger.warning("checkout session failed for %s: %s", price_id, err)
        abort_json(502, "checkout_failed", "Could not create checkout session")

    current_app.logger.info("checkout session created for %s", price_id)
    return {"checkoutUrl": checkout_url}, 201
