"""Numeric helpers for charting candles, series and grid levels."""

from __future__ import annotations

import re
from typing import Any, Dict, List, Sequence, Tuple, TypeVar

from ..data.types import Candle, GridLevel

T = TypeVar("T")

_TIMEFRAME_LABELS = {
    "30": "1M", "1M": "1M",
    "90": "3M", "3M": "3M",
    "365": "1Y", "1Y": "1Y",
    "0": "MAX", "MAX": "MAX",
}


def format_candlestick_data(candles: Sequence[Candle]) -> List[Dict[str, Any]]:
    """Chart points ``{x, o, h, l, c, y}``; ``y`` repeats the close for line fallback."""
    return [
        {"x": c.date, "o": c.open, "h": c.high, "l": c.low, "c": c.close, "y": c.close}
        for c in candles
    ]


def format_line_data(values: Sequence[float], labels: Sequence[str]) -> List[Dict[str, Any]]:
    """Chart points ``{x, y}``, falling back to the index when a label is missing."""
    return [
        {"x": labels[i] if i < len(labels) and labels[i] else i, "y": v}
        for i, v in enumerate(values)
    ]


def calculate_price_bounds(
    candles: Sequence[Candle],
    levels: Sequence[GridLevel],
    padding: float = 0.08,
) -> Tuple[float, float]:
    """Y-axis (min, max) covering every candle high/low and level price.

    The span is widened by ``padding`` times the range on each side.
    Returns (0, 100) when there is nothing to bound.
    """
    prices: List[float] = []
    for c in candles:
        prices.extend((c.high, c.low))
    prices.extend(l.price for l in levels)

    if not prices:
        return 0.0, 100.0

    lo, hi = min(prices), max(prices)
    pad = (hi - lo) * padding
    return lo - pad, hi + pad


def filter_by_timeframe(data: Sequence[T], timeframe: str) -> List[T]:
    """Keep the last N points for a timeframe like '30' or '90D'.

    'MAX' and '0' keep everything, as does a timeframe with no digits.
    Labels such as '1M' read their digits literally (last 1 point), so
    translate them to day counts first.
    """
    if timeframe in ("MAX", "0"):
        return list(data)
    digits = re.sub(r"\D", "", timeframe)
    if not digits:
        return list(data)
    days = int(digits)
    return list(data[-days:]) if days > 0 else list(data)


def timeframe_label(timeframe: str) -> str:
    return _TIMEFRAME_LABELS.get(timeframe, timeframe)
