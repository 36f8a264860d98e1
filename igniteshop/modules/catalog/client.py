"""Thin typed wrapper around the Stripe catalog and checkout APIs.

Routes never talk to `stripe` directly; they go through the client stored in
``app.extensions["catalog"]`` so tests can inject a fake with the same methods.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Optional

import stripe
from flask import current_app


class CatalogError(Exception):
    """The payments/catalog provider could not answer."""


@dataclass(frozen=True)
class CatalogPrice:
    id: str
    unit_amount: Optional[int] = None


@dataclass(frozen=True)
class CatalogProduct:
    id: str
    name: str
    description: Optional[str] = None
    images: List[str] = field(default_factory=list)
    default_price: Optional[CatalogPrice] = None


@dataclass(frozen=True)
class CheckoutSummary:
    customer_name: Optional[str]
    product_name: Optional[str]
    image_url: Optional[str]


def _field(obj: Any, key: str) -> Any:
    # StripeObject is not a dict on newer SDKs; item access and `in` work on all of them
    if obj is None or key not in obj:
        return None
    return obj[key]


def _price_from_stripe(obj: Any) -> Optional[CatalogPrice]:
    # Unexpanded prices come back as bare ids
    if obj is None:
        return None
    if isinstance(obj, str):
        return CatalogPrice(id=obj)
    return CatalogPrice(id=obj["id"], unit_amount=_field(obj, "unit_amount"))


def _product_from_stripe(obj: Any) -> CatalogProduct:
    return CatalogProduct(
        id=obj["id"],
        name=_field(obj, "name") or "",
        description=_field(obj, "description"),
        images=list(_field(obj, "images") or []),
        default_price=_price_from_stripe(_field(obj, "default_price")),
    )


class StripeCatalog:
    def __init__(self, api_key: str):
        self.api_key = api_key

    def retrieve_product(self, product_id: str) -> Optional[CatalogProduct]:
        """Fetch a product with its default price expanded; None if it does not exist."""
        try:
            obj = stripe.Product.retrieve(product_id, api_key=self.api_key, expand=["default_price"])
        except stripe.InvalidRequestError as err:
            if err.code == "resource_missing":
                return None
            raise CatalogError(str(err)) from err
        except stripe.StripeError as err:
            raise CatalogError(str(err)) from err
        return _product_from_stripe(obj)

    def create_checkout_session(self, price_id: str, success_url: str, cancel_url: str) -> str:
        """Create a one-item payment session and return its hosted URL."""
        try:
            session = stripe.checkout.Session.create(
                api_key=self.api_key,
                mode="payment",
                success_url=success_url,
                cancel_url=cancel_url,
                line_items=[{"price": price_id, "quantity": 1}],
            )
        except stripe.StripeError as err:
            raise CatalogError(str(err)) from err
        return session["url"]

    def retrieve_checkout_session(self, session_id: str) -> Optional[CheckoutSummary]:
        try:
            session = stripe.checkout.Session.retrieve(
                session_id,
                api_key=self.api_key,
                expand=["line_items", "line_items.data.price.product"],
            )
        except stripe.InvalidRequestError as err:
            if err.code == "resource_missing":
                return None
            raise CatalogError(str(err)) from err
        except stripe.StripeError as err:
            raise CatalogError(str(err)) from err

        customer = _field(session, "customer_details")
        items = _field(_field(session, "line_items"), "data") or []
        product = _field(_field(items[0], "price"), "product") if items else None
        images = _field(product, "images") or []
        return CheckoutSummary(
            customer_name=_field(customer, "name"),
            product_name=_field(product, "name"),
            image_url=images[0] if images else None,
        )


def get_catalog():
    return current_app.extensions["catalog"]
