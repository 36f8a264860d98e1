import pytest

from conftest import AppTestConfig, STATIC_IDS
from igniteshop.app.extensions import db
from igniteshop.app.factory import create_app
from igniteshop.app.models import StaticPage
from igniteshop.modules.catalog.client import CatalogError


@pytest.mark.parametrize("product_id", STATIC_IDS)
def test_listed_product_page_renders(client, catalog, product_id):
    r = client.get(f"/product/{product_id}")

    assert r.status_code == 200
    html = r.get_data(as_text=True)
    product = catalog.products[product_id]
    assert f"<title>{product.name} - Ignite Shop</title>" in html
    assert "R$" in html
    assert product.images[0] in html
    assert "Comprar agora" in html
    assert f'data-price-id="price_{product_id}"' in html


def test_listed_page_served_from_cache(client, catalog):
    client.get(f"/product/{STATIC_IDS[0]}")
    client.get(f"/product/{STATIC_IDS[0]}")
    assert catalog.retrieve_calls == [STATIC_IDS[0]]


def test_unlisted_product_shows_loading_then_resolves(client, catalog):
    catalog.add("prod_extra", name="Camiseta Extra")

    first = client.get("/product/prod_extra")
    assert first.status_code == 200
    assert "Loading..." in first.get_data(as_text=True)
    assert catalog.retrieve_calls == []

    props = client.get("/api/products/prod_extra")
    assert props.status_code == 200
    assert props.json["revalidate"] == 3600
    assert props.json["props"]["product"]["name"] == "Camiseta Extra"
    assert props.json["props"]["product"]["price"].startswith("R$")
    assert props.json["props"]["product"]["image_url"]

    second = client.get("/product/prod_extra")
    html = second.get_data(as_text=True)
    assert "Loading..." not in html
    assert "Camiseta Extra" in html
    assert "Comprar agora" in html


def test_unknown_product_props_404(client):
    r = client.get("/api/products/prod_missing")
    assert r.status_code == 404
    assert r.json["error"]["code"] == "not_found"
    assert db.session.get(StaticPage, "prod_missing") is None


def test_catalog_outage_on_props_endpoint(client, catalog):
    catalog.fail_with = CatalogError("provider down")
    r = client.get("/api/products/prod_extra")
    assert r.status_code == 502
    assert r.json["error"]["code"] == "catalog_unavailable"


def test_catalog_outage_on_unbuilt_page(client, catalog):
    catalog.fail_with = CatalogError("provider down")
    r = client.get(f"/product/{STATIC_IDS[0]}")
    assert r.status_code == 502
    assert b"Catalog provider unavailable" in r.data


def test_listed_product_missing_from_catalog(client, catalog):
    del catalog.products[STATIC_IDS[1]]
    assert client.get(f"/product/{STATIC_IDS[1]}").status_code == 404


class NoFallbackConfig(AppTestConfig):
    STATIC_FALLBACK = False


class BlockingConfig(AppTestConfig):
    STATIC_FALLBACK = "blocking"


@pytest.fixture()
def make_client(catalog):
    apps = []

    def _make(config):
        app = create_app(config, catalog=catalog)
        apps.append(app)
        return app.test_client()

    yield _make
    for app in apps:
        with app.app_context():
            db.drop_all()


def test_no_fallback_returns_404_for_unlisted(make_client, catalog):
    catalog.add("prod_extra")
    c = make_client(NoFallbackConfig)
    assert c.get("/product/prod_extra").status_code == 404
    assert catalog.retrieve_calls == []


def test_blocking_fallback_renders_directly(make_client, catalog):
    catalog.add("prod_extra", name="Camiseta Extra")
    c = make_client(BlockingConfig)
    r = c.get("/product/prod_extra")
    assert r.status_code == 200
    assert "Camiseta Extra" in r.get_data(as_text=True)


def test_partial_variant_has_no_buy_button(partial_app):
    c = partial_app.test_client()
    r = c.get(f"/product/{STATIC_IDS[0]}")
    html = r.get_data(as_text=True)
    assert r.status_code == 200
    assert "R$" in html
    assert "Comprar agora" not in html
    assert "data-price-id" not in html

    props = c.get(f"/api/products/{STATIC_IDS[0]}").json["props"]["product"]
    assert "default_price_id" not in props


def test_invalid_variant_rejected(catalog):
    class BadConfig(AppTestConfig):
        PRODUCT_PAGE_VARIANT = "compact"

    with pytest.raises(ValueError):
        create_app(BadConfig, catalog=catalog)
