"""Static product page generation.

`get_static_paths` and `get_static_props` are plain functions of their inputs.
`StaticPageCache` stores what they produce in the ``static_pages`` table and
regenerates a page once it is older than the revalidation interval.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import datetime, timedelta
from typing import Any, Callable, Dict, Iterable, List, Optional, Union

from flask import current_app

from igniteshop.app.extensions import db
from igniteshop.app.models import StaticPage
from igniteshop.modules.catalog.client import CatalogError
from igniteshop.modules.catalog.pricing import format_price

VARIANTS = ("full", "partial")

Fallback = Union[bool, str]


@dataclass(frozen=True)
class ProductView:
    id: str
    name: str
    image_url: str
    price: str
    description: Optional[str]
    default_price_id: Optional[str] = None

    def to_props(self, variant: str = "full") -> Dict[str, Any]:
        data = asdict(self)
        if variant == "partial":
            data.pop("default_price_id")
        return data


@dataclass(frozen=True)
class StaticProps:
    props: Dict[str, Any] = field(default_factory=dict)
    revalidate: Optional[int] = None
    not_found: bool = False


@dataclass(frozen=True)
class StaticPaths:
    paths: List[Dict[str, Dict[str, str]]]
    fallback: Fallback = True

    @property
    def ids(self) -> List[str]:
        return [p["params"]["id"] for p in self.paths]


def get_static_paths(product_ids: Iterable[str], fallback: Fallback = True) -> StaticPaths:
    return StaticPaths(paths=[{"params": {"id": pid}} for pid in product_ids], fallback=fallback)


def get_static_props(
    product_id: Optional[str],
    catalog,
    *,
    variant: str = "full",
    currency: str = "BRL",
    locale: str = "pt_BR",
    revalidate: int = 60 * 60 * 1,
) -> StaticProps:
    """Build the page props for one product.

    No identifier yields empty props. A product the catalog does not know
    yields ``not_found``.
    """
    if variant not in VARIANTS:
        raise ValueError(f"unknown page variant: {variant!r}")
    if not product_id:
        return StaticProps()

    product = catalog.retrieve_product(product_id)
    if product is None:
        return StaticProps(not_found=True)

    price = product.default_price
    view = ProductView(
        id=product.id,
        name=product.name,
        image_url=product.images[0] if product.images else "",
        price=format_price(price.unit_amount if price else None, currency, locale),
        description=product.description,
        default_price_id=price.id if price else None,
    )
    return StaticProps(props={"product": view.to_props(variant)}, revalidate=revalidate)


class StaticPageCache:
    def __init__(
        self,
        catalog,
        *,
        variant: str = "full",
        currency: str = "BRL",
        locale: str = "pt_BR",
        revalidate: int = 60 * 60 * 1,
        clock: Callable[[], datetime] = datetime.utcnow,
        logger=None,
    ):
        self.catalog = catalog
        self.variant = variant
        self.currency = currency
        self.locale = locale
        self.revalidate = revalidate
        self.clock = clock
        self.logger = logger

    @classmethod
    def from_app(cls, app=None) -> "StaticPageCache":
        app = app or current_app
        return cls(
            app.extensions["catalog"],
            variant=app.config["PRODUCT_PAGE_VARIANT"],
            currency=app.config["PRICE_CURRENCY"],
            locale=app.config["PRICE_LOCALE"],
            revalidate=app.config["REVALIDATE_SECONDS"],
            logger=app.logger,
        )

    def generate(self, product_id: str) -> StaticProps:
        result = get_static_props(
            product_id,
            self.catalog,
            variant=self.variant,
            currency=self.currency,
            locale=self.locale,
            revalidate=self.revalidate,
        )
        if result.not_found or not result.props:
            return result

        page = db.session.get(StaticPage, product_id)
        if page is None:
            page = StaticPage(product_id=product_id)
            db.session.add(page)
        page.props = result.props
        page.variant = self.variant
        page.generated_at = self.clock()
        db.session.commit()

        if self.logger:
            self.logger.info("generated page for %s", product_id)
        return result

    def is_stale(self, page: StaticPage) -> bool:
        return self.clock() - page.generated_at >= timedelta(seconds=self.revalidate)

    def _for_variant(self, props: Dict[str, Any]) -> Dict[str, Any]:
        # Pages stored under the full variant must not leak the price id
        if self.variant != "partial" or "default_price_id" not in props.get("product", {}):
            return props
        product = {k: v for k, v in props["product"].items() if k != "default_price_id"}
        return {**props, "product": product}

    def lookup(self, product_id: str) -> Optional[Dict[str, Any]]:
        """Return stored props, regenerating them first if they are stale or
        were built for another page variant."""
        page = db.session.get(StaticPage, product_id)
        if page is None:
            return None
        if page.variant == self.variant and not self.is_stale(page):
            return page.props

        try:
            result = self.generate(product_id)
        except CatalogError as err:
            # Keep serving the last good page
            if self.logger:
                self.logger.warning("regeneration failed for %s: %s", product_id, err)
            return self._for_variant(page.props)

        if result.not_found:
            db.session.delete(page)
            db.session.commit()
            return None
        return result.props

    def build(self, product_ids: Iterable[str]) -> List[str]:
        """Pre-generate pages; returns the ids that were found."""
        built = []
        for pid in product_ids:
            if not self.generate(pid).not_found:
                built.append(pid)
        return built


def page_cache() -> StaticPageCache:
    return StaticPageCache.from_app()


def static_paths() -> StaticPaths:
    return get_static_paths(current_app.config["STATIC_PRODUCT_IDS"], current_app.config["STATIC_FALLBACK"])

