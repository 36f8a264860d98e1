from __future__ import annotations

import webbrowser

import click
import requests
from flask import Blueprint, current_app

from igniteshop.app.extensions import db
from igniteshop.modules.catalog.pages import page_cache, static_paths
from igniteshop.modules.checkout.initiator import CheckoutInitiator

cli_bp = Blueprint("cli", __name__, cli_group=None)


@cli_bp.cli.command("init-db")
def init_db() -> None:
    """Create tables."""
    db.create_all()
    click.echo("DB initialized (tables created).")


@cli_bp.cli.command("build")
def build_pages() -> None:
    """Pre-generate the listed product pages.

    Safe to run multiple times; existing pages are regenerated.
    """
    db.create_all()
    ids = static_paths().ids
    built = page_cache().build(ids)
    for pid in ids:
        click.echo(f"{pid}: {'ok' if pid in built else 'not found'}")
    click.echo(f"Built {len(built)}/{len(ids)} pages.")


@cli_bp.cli.command("checkout")
@click.argument("product_id")
@click.option("--base-url", default=None, help="Running server, defaults to APP_URL.")
@click.option("--no-browser", is_flag=True, help="Print the checkout URL instead of opening it.")
def checkout(product_id: str, base_url: str | None, no_browser: bool) -> None:
    """Start a checkout for a product against a running server."""
    base_url = (base_url or current_app.config["APP_URL"]).rstrip("/")
    session = requests.Session()

    r = session.get(f"{base_url}/api/products/{product_id}")
    if r.status_code == 404:
        raise click.ClickException(f"Product {product_id} not found")
    r.raise_for_status()
    product = r.json()["props"]["product"]
    price_id = product.get("default_price_id")
    if not price_id:
        raise click.ClickException("This page variant has no buy action")

    navigate = click.echo if no_browser else webbrowser.open
    initiator = CheckoutInitiator(
        f"{base_url}/api/checkout",
        navigate=navigate,
        notify=lambda msg: click.echo(msg, err=True),
        session=session,
    )
    if not initiator.buy(price_id):
        raise SystemExit(1)
