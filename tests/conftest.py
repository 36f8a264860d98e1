import os
import sys
import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from igniteshop.app.config import Config
from igniteshop.app.extensions import db
from igniteshop.app.factory import create_app
from igniteshop.modules.catalog.client import CatalogPrice, CatalogProduct

STATIC_IDS = [
    "prod_PL7E05HIrPKQ8m",
    "prod_PL7DAH2D0FYXP0",
    "prod_PL7DvcjE8Txyrr",
    "prod_PL7Cw3OD2m0NKJ",
]


class AppTestConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    STRIPE_SECRET_KEY = "sk_test_fake"
    APP_URL = "http://shop.test"
    STATIC_PRODUCT_IDS = list(STATIC_IDS)
    STATIC_FALLBACK = True
    REVALIDATE_SECONDS = 3600
    PRODUCT_PAGE_VARIANT = "full"
    PRICE_CURRENCY = "BRL"
    PRICE_LOCALE = "pt_BR"


class PartialConfig(AppTestConfig):
    PRODUCT_PAGE_VARIANT = "partial"


class FakeCatalog:
    """In-memory stand-in for StripeCatalog."""

    def __init__(self):
        self.products = {}
        self.sessions = {}
        self.retrieve_calls = []
        self.checkout_calls = []
        self.fail_with = None

    def add(self, product_id, name="Camiseta", unit_amount=7990, images=None, price_id=None):
        price = CatalogPrice(id=price_id or f"price_{product_id}", unit_amount=unit_amount)
        self.products[product_id] = CatalogProduct(
            id=product_id,
            name=name,
            description=f"{name} description",
            images=[f"https://files.stripe.test/{product_id}.png"] if images is None else images,
            default_price=price,
        )
        return self.products[product_id]

    def retrieve_product(self, product_id):
        self.retrieve_calls.append(product_id)
        if self.fail_with:
            raise self.fail_with
        return self.products.get(product_id)

    def create_checkout_session(self, price_id, success_url, cancel_url):
        self.checkout_calls.append((price_id, success_url, cancel_url))
        if self.fail_with:
            raise self.fail_with
        return f"https://checkout.stripe.test/{price_id}"

    def retrieve_checkout_session(self, session_id):
        return self.sessions.get(session_id)


@pytest.fixture()
def catalog():
    fake = FakeCatalog()
    for i, pid in enumerate(STATIC_IDS):
        fake.add(pid, name=f"Camiseta {i}", unit_amount=7990 + i * 1000)
    return fake


@pytest.fixture()
def app(catalog):
    app = create_app(AppTestConfig, catalog=catalog)
    with app.app_context():
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(app):
    with app.test_client() as client:
        yield client


@pytest.fixture()
def partial_app(catalog):
    app = create_app(PartialConfig, catalog=catalog)
    with app.app_context():
        yield app
        db.session.remove()
        db.drop_all()
