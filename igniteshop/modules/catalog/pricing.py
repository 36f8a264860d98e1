from __future__ import annotations

from decimal import Decimal

from babel.numbers import format_currency


def format_price(unit_amount: int | None, currency: str = "BRL", locale: str = "pt_BR") -> str:
    """Format a minor-unit amount (cents) as localized currency.

    A missing amount is treated as zero.
    """
    cents = unit_amount or 0
    if cents < 0:
        raise ValueError("unit_amount must be non-negative")
    return format_currency(Decimal(cents) / 100, currency, locale=locale)
