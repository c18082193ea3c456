"""Core data types used throughout gridlab."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict


class LevelStatus(str, Enum):
    ACTIVE = "active"
    PARTIAL = "partial"  # reserved: no fill logic produces partial fills yet
    FILLED = "filled"


class LevelSide(str, Enum):
    BUY = "buy"
    SELL = "sell"


@dataclass(frozen=True, slots=True)
class Candle:
    """Daily OHLC data unit. ``date`` is an ISO ``YYYY-MM-DD`` string."""
    date: str
    open: float
    high: float
    low: float
    close: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "date": self.date,
            "open": self.open,
            "high": self.high,
            "low": self.low,
            "close": self.close,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Candle":
        return cls(
            date=str(data["date"]),
            open=float(data["open"]),
            high=float(data["high"]),
            low=float(data["low"]),
            close=float(data["close"]),
        )


@dataclass(frozen=True, slots=True)
class GridLevel:
    """A resting buy order on the grid.

    Levels are numbered from 1 at the highest price. ``weight`` is the
    unnormalized allocation weight, not the fraction of total contracts.
    """
    level: int
    price: float
    contracts: int
    weight: float
    status: LevelStatus = LevelStatus.ACTIVE
    filled: bool = False
    side: LevelSide = LevelSide.BUY

    def to_dict(self) -> Dict[str, Any]:
        return {
            "level": self.level,
            "price": self.price,
            "contracts": self.contracts,
            "weight": self.weight,
            "status": self.status.value,
            "filled": self.filled,
            "side": self.side.value,
        }
