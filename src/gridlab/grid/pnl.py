"""Inverse-futures P&L for a long-entry grid.

Contracts have a fixed USD face value but settle in the underlying coin,
so a filled level's P&L is driven by the difference of reciprocal prices:

    pnl_coin = contracts * contract_value * (1 / entry - 1 / price)

and the USD value is ``pnl_coin * price``.
"""

from __future__ import annotations

from typing import Iterable, Sequence

from ..data.types import Candle, GridLevel
from .status import calculate_filled_contracts, is_filled


def calculate_pnl_coin(
    levels: Iterable[GridLevel], price: float, contract_value: float
) -> float:
    """Unrealized P&L in coin for every level filled at price."""
    if price <= 0:
        return 0.0
    pnl = 0.0
    for level in levels:
        if level.price > 0 and is_filled(level, price):
            pnl += level.contracts * contract_value * (1 / level.price - 1 / price)
    return pnl


def calculate_pnl_usd(
    levels: Iterable[GridLevel], price: float, contract_value: float
) -> float:
    return calculate_pnl_coin(levels, price, contract_value) * price


def calculate_capital_series(
    candles: Sequence[Candle],
    levels: Sequence[GridLevel],
    contract_value: float,
) -> list[int]:
    """Filled contract count at each close, used as the capital-deployed curve.

    contract_value is accepted for symmetry with the ROI series; the count
    does not depend on it.
    """
    return [calculate_filled_contracts(levels, c.close) for c in candles]


def calculate_roi_series(
    candles: Sequence[Candle],
    levels: Sequence[GridLevel],
    contract_value: float,
    total_contracts: int,
) -> list[float]:
    """ROI (%) of the grid's notional at each close."""
    denominator = total_contracts * contract_value
    if denominator == 0:
        return [0.0] * len(candles)
    return [
        calculate_pnl_usd(levels, c.close, contract_value) / denominator * 100
        for c in candles
    ]
