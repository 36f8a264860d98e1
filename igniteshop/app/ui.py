"""Server-rendered pages: product detail, fallback placeholder and checkout success."""

from flask import Blueprint, abort, current_app, redirect, render_template, request, url_for

from igniteshop.modules.catalog.client import get_catalog
from igniteshop.modules.catalog.pages import page_cache, static_paths

ui_bp = Blueprint("ui", __name__)


@ui_bp.get("/")
def home():
    return render_template("pages/home.html", product_ids=static_paths().ids)


@ui_bp.get("/product/<product_id>")
def product_page(product_id: str):
    cache = page_cache()
    props = cache.lookup(product_id)

    if props is None:
        paths = static_paths()
        if product_id not in paths.ids and paths.fallback is True:
            return render_template("pages/loading.html", product_id=product_id)
        if product_id not in paths.ids and not paths.fallback:
            abort(404)

        # Listed but not built yet, or blocking fallback
        result = cache.generate(product_id)
        if result.not_found:
            abort(404)
        props = result.props

    product = props.get("product")
    if not product:
        abort(404)
    return render_template(
        "pages/product.html",
        product=product,
        can_buy=current_app.config["PRODUCT_PAGE_VARIANT"] == "full" and bool(product.get("default_price_id")),
    )


@ui_bp.get("/success")
def checkout_success():
    session_id = (request.args.get("session_id") or "").strip()
    if not session_id:
        return redirect(url_for("ui.home"))

    summary = get_catalog().retrieve_checkout_session(session_id)
    if summary is None:
        abort(404)
    return render_template("pages/success.html", summary=summary)
