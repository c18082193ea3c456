"""Allocation Engine: Translates a grid configuration (range, steps, mode)
into an ordered list of buy levels with contract sizes.

Allocation modes:
  geometric -> weight grows by ``growth_factor`` per level below the top
  atr       -> weight grows with depth below the top, measured in ATR units
               and shaped by ``depth_exponent``

Levels are always returned highest price first. Malformed or extreme
inputs never raise: they allocate to an empty or degenerate grid.
"""

from __future__ import annotations

import logging
import math

import numpy as np

from ..data.types import GridLevel, LevelSide, LevelStatus
from .types import AllocMode, GridConfigurationParams

logger = logging.getLogger(__name__)


def _level_prices(range_low: float, range_high: float, steps: int) -> list[float]:
    """Evenly spaced prices from range_high down to range_low."""
    if steps == 1:
        return [range_high]
    step = (range_high - range_low) / (steps - 1)
    return [range_high - i * step for i in range(steps)]


def _geometric_weights(prices: list[float], growth_factor: float) -> list[float]:
    """Weight multiplies by growth_factor at each level down the grid.

    Overflow yields inf rather than raising.
    """
    exponents = np.arange(len(prices), dtype=float)
    with np.errstate(all="ignore"):
        return np.power(float(growth_factor), exponents).tolist()


def _atr_weights(
    prices: list[float],
    range_high: float,
    atr_percent: float,
    depth_exponent: float,
) -> list[float]:
    """Weight by distance below the top of the range, in ATR units."""
    depth_pct = np.abs((range_high - np.asarray(prices, dtype=float)) / max(1e-9, range_high)) * 100
    with np.errstate(all="ignore"):
        if atr_percent:
            depth_units = np.maximum(0.0, depth_pct / atr_percent)
        else:
            depth_units = np.zeros_like(depth_pct)
        weights = np.power(depth_units, float(depth_exponent))
    if depth_exponent < 0:
        # 0 ** negative has no finite weight; the top level gets none
        weights[depth_units == 0.0] = 0.0
    return weights.tolist()


def _compute_weights(
    prices: list[float], config: GridConfigurationParams
) -> list[float]:
    if config.alloc_mode == AllocMode.GEOMETRIC:
        return _geometric_weights(prices, config.growth_factor)
    return _atr_weights(
        prices, config.range_high, config.atr_percent, config.depth_exponent
    )


def _finite_shares(weights: list[float]) -> list[float]:
    """Turn raw weights into finite shares with the same proportions.

    NaN weights count as zero. When any weight overflowed to infinity the
    infinite levels split the grid evenly and the rest get nothing. A
    finite set whose sum overflows is rescaled by its largest weight.
    """
    arr = np.asarray(weights, dtype=float)
    arr = np.where(np.isnan(arr), 0.0, arr)
    infinite = np.isinf(arr)
    if infinite.any():
        logger.debug("Allocation weights overflowed at %d levels", int(infinite.sum()))
        return np.where(infinite, np.sign(arr), 0.0).tolist()
    shares = arr.tolist()
    if not math.isfinite(sum(shares)):
        shares = (arr / np.abs(arr).max()).tolist()
    return shares


def _floor(value: float) -> int:
    return math.floor(value) if math.isfinite(value) else 0


def _round_half_up(value: float) -> int:
    if not math.isfinite(value):
        return 0
    return int(math.floor(value + 0.5))


def _distribute_integers(exact: list[float], total: int) -> list[int]:
    """Floor every allocation, then hand the leftover out by largest remainder.

    Ties go to the higher index (the lower price) first.
    """
    floored = [_floor(v) for v in exact]
    remaining = math.ceil(total - sum(floored))

    order = sorted(
        range(len(exact)),
        key=lambda i: (exact[i] - floored[i] if math.isfinite(exact[i]) else 0.0, i),
        reverse=True,
    )
    for i in order[:max(0, remaining)]:
        floored[i] += 1
    return floored


def calculate_grid_levels(config: GridConfigurationParams) -> list[GridLevel]:
    """Allocate total_contracts across the grid.

    Returns an empty list when the range is empty, inverted or not finite,
    or when there are no steps or no contracts to allocate.
    """
    if (
        not (math.isfinite(config.range_low) and math.isfinite(config.range_high))
        or not math.isfinite(config.total_contracts)
        or config.range_high <= config.range_low
        or config.grid_steps <= 0
        or config.total_contracts <= 0
    ):
        logger.debug("Degenerate grid config, no levels allocated: %s", config)
        return []

    prices = _level_prices(config.range_low, config.range_high, config.grid_steps)
    weights = _compute_weights(prices, config)
    shares = _finite_shares(weights)

    total_weight = sum(shares) or 1.0
    exact = [config.total_contracts * s / total_weight for s in shares]

    if config.round_to_integers:
        contracts: list[float] = list(_distribute_integers(exact, config.total_contracts))
    else:
        contracts = exact

    return [
        GridLevel(
            level=i + 1,
            price=price,
            contracts=_round_half_up(contracts[i]),
            weight=weights[i],
            status=LevelStatus.ACTIVE,
            filled=False,
            side=LevelSide.BUY,
        )
        for i, price in enumerate(prices)
    ]
