"""Fill evaluation for a long-entry grid.

A level counts as filled once the reference price trades at or below it.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Iterable

from ..data.types import GridLevel, LevelStatus


def is_filled(level: GridLevel, current_price: float) -> bool:
    return current_price <= level.price


def update_grid_level_status(
    levels: Iterable[GridLevel], current_price: float
) -> list[GridLevel]:
    """Return new levels with status/filled recomputed at current_price."""
    updated = []
    for level in levels:
        filled = is_filled(level, current_price)
        updated.append(
            replace(
                level,
                status=LevelStatus.FILLED if filled else LevelStatus.ACTIVE,
                filled=filled,
            )
        )
    return updated


def calculate_filled_contracts(
    levels: Iterable[GridLevel], current_price: float
) -> int:
    """Total contracts across levels filled at current_price."""
    return sum(l.contracts for l in levels if is_filled(l, current_price))
