from __future__ import annotations

from flask import Blueprint

from igniteshop.app.common.errors import abort_json
from igniteshop.modules.catalog.pages import page_cache

bp = Blueprint("catalog", __name__)


@bp.get("/products/<product_id>")
def get_product_props(product_id: str):
    """GET /api/products/<id> - Page props for a product, generating them if needed.

    The fallback page polls this before reloading itself.
    """
    cache = page_cache()
    props = cache.lookup(product_id)
    if props is None:
        result = cache.generate(product_id)
        if result.not_found:
            abort_json(404, "not_found", "Product not found", {"product_id": product_id})
        props = result.props

    return {"props": props, "revalidate": cache.revalidate}, 200
