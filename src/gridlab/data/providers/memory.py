"""In-memory and synthetic candle providers."""

from __future__ import annotations

from datetime import date
from typing import Iterator, List, Optional, Sequence

from ..seed import generate_seed_candles
from ..types import Candle
from .base import CandleProvider


class ListProvider(CandleProvider):
    """Serve candles from an in-memory sequence."""

    def __init__(self, candles: Sequence[Candle], symbol_name: str = ""):
        self._candles: List[Candle] = list(candles)
        self._symbol = symbol_name

    def __iter__(self) -> Iterator[Candle]:
        return iter(self._candles)

    def symbol(self) -> str:
        return self._symbol

    def __len__(self) -> int:
        return len(self._candles)


class SeedProvider(CandleProvider):
    """Serve a synthetic random-walk series.

    The series is generated once, so repeated iteration yields the same
    candles. ``reset()`` keeps them; build a new provider for a new walk.

    Args:
        avg_price: Starting price of the walk.
        days: Number of daily candles.
        volatility: High/low excursion scale.
        seed: Optional RNG seed.
        symbol_name: Symbol tag.
        end_date: Date of the last candle (default today).
    """

    def __init__(
        self,
        avg_price: float,
        days: int,
        volatility: float,
        seed: Optional[int] = None,
        symbol_name: str = "SEED",
        end_date: Optional[date] = None,
    ):
        self._candles = generate_seed_candles(
            avg_price, days, volatility, seed=seed, end_date=end_date
        )
        self._symbol = symbol_name

    def __iter__(self) -> Iterator[Candle]:
        return iter(self._candles)

    def symbol(self) -> str:
        return self._symbol

    def __len__(self) -> int:
        return len(self._candles)
