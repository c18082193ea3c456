"""Synthetic daily candles for when no real price history is supplied.

A multiplicative random walk: each day opens at the previous close carried
forward by a small drift in [-1%, +1%], high/low are the open pushed out by
a volatility-scaled amount, and the close lands uniformly between them.
"""

from __future__ import annotations

from datetime import date, timedelta
from typing import Optional

import numpy as np

from .types import Candle


def generate_seed_candles(
    avg_price: float,
    days: int,
    volatility: float,
    seed: Optional[int] = None,
    rng: Optional[np.random.Generator] = None,
    end_date: Optional[date] = None,
) -> list[Candle]:
    """Generate ``days`` daily candles ending on ``end_date`` (default today).

    Args:
        avg_price: Starting price of the walk.
        days: Number of candles.
        volatility: Scales the high/low excursion (1.0 ~ 1% per side).
        seed: Optional RNG seed for reproducibility.
        rng: Optional Generator to draw from; takes precedence over seed.
        end_date: Date of the last candle.

    Returns:
        Candles in chronological order, prices rounded to 4 decimals.
    """
    if days <= 0:
        return []

    rng = rng if rng is not None else np.random.default_rng(seed)
    end = end_date or date.today()
    start = end - timedelta(days=days - 1)

    candles: list[Candle] = []
    price = float(avg_price)

    for i in range(days):
        drift = (rng.random() - 0.5) * 0.02
        amplitude = (0.6 + rng.random() * 0.8) * volatility

        open_ = price
        high = open_ * (1 + 0.01 * amplitude + rng.random() * 0.004)
        low = open_ * (1 - 0.01 * amplitude - rng.random() * 0.004)
        close = low + (high - low) * rng.random()

        candles.append(
            Candle(
                date=(start + timedelta(days=i)).isoformat(),
                open=round(open_, 4),
                high=round(high, 4),
                low=round(low, 4),
                close=round(close, 4),
            )
        )
        price = close * (1 + drift)

    return candles
