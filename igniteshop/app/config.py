import os

from dotenv import load_dotenv

load_dotenv()

DEFAULT_STATIC_PRODUCT_IDS = (
    "prod_PL7E05HIrPKQ8m",
    "prod_PL7DAH2D0FYXP0",
    "prod_PL7DvcjE8Txyrr",
    "prod_PL7Cw3OD2m0NKJ",
)


def _parse_fallback(raw: str) -> bool | str:
    value = raw.strip().lower()
    if value == "blocking":
        return "blocking"
    return value in ("1", "true", "yes")


class Config:
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret")
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", "sqlite:///igniteshop.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    STRIPE_SECRET_KEY = os.getenv("STRIPE_SECRET_KEY", "")

    # Public base URL, used for checkout success/cancel redirects
    APP_URL = os.getenv("APP_URL", "http://localhost:8080").rstrip("/")

    # Pages pre-generated by `flask build`; everything else is generated on demand
    STATIC_PRODUCT_IDS = [
        p.strip()
        for p in os.getenv("STATIC_PRODUCT_IDS", ",".join(DEFAULT_STATIC_PRODUCT_IDS)).split(",")
        if p.strip()
    ]
    STATIC_FALLBACK = _parse_fallback(os.getenv("STATIC_FALLBACK", "true"))
    REVALIDATE_SECONDS = int(os.getenv("REVALIDATE_SECONDS", str(60 * 60 * 1)))

    # full | partial
    PRODUCT_PAGE_VARIANT = os.getenv("PRODUCT_PAGE_VARIANT", "full")

    PRICE_CURRENCY = os.getenv("PRICE_CURRENCY", "BRL")
    PRICE_LOCALE = os.getenv("PRICE_LOCALE", "pt_BR")

    # Comma-separated list
    CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "").split(",") if o.strip()]

    APP_HOST = os.getenv("APP_HOST", "0.0.0.0")
    APP_PORT = int(os.getenv("APP_PORT", "8080"))
