"""Display formatting for prices, percentages and money."""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal

_CURRENCY_SYMBOLS = {"USD": "$", "EUR": "€", "GBP": "£", "JPY": "¥"}


def format_number(value: float, decimals: int = 4) -> str:
    """Thousands-separated number with up to ``decimals`` decimal places.

    At least min(2, decimals) decimals are always shown.
    """
    if not math.isfinite(value):
        return "-"
    min_decimals = min(2, decimals) if decimals > 0 else 0
    text = f"{value:,.{decimals}f}"
    if decimals > min_decimals:
        whole, _, frac = text.partition(".")
        frac = frac.rstrip("0")
        if len(frac) < min_decimals:
            frac = frac.ljust(min_decimals, "0")
        text = f"{whole}.{frac}" if frac else whole
    return text


def format_percentage(value: float, decimals: int = 2) -> str:
    """Signed percentage, e.g. ``+1.25%``."""
    if not math.isfinite(value):
        return "-"
    sign = "+" if value >= 0 else ""
    return f"{sign}{value:.{decimals}f}%"


def format_currency(value: float, currency: str = "USD") -> str:
    """Whole-unit money amount, e.g. ``$2,000`` or ``-$20``.

    Halves round away from zero and any negative value keeps its sign,
    so -0.4 renders as ``-$0``.
    """
    if not math.isfinite(value):
        return "-"
    symbol = _CURRENCY_SYMBOLS.get(currency.upper(), f"{currency.upper()} ")
    sign = "-" if value < 0 else ""
    amount = Decimal(abs(value)).to_integral_value(rounding=ROUND_HALF_UP)
    return f"{sign}{symbol}{amount:,.0f}"


def price_color_class(current: float, previous: float) -> str:
    """CSS class name for a price tick: 'positive', 'negative' or ''."""
    if current > previous:
        return "positive"
    if current < previous:
        return "negative"
    return ""
