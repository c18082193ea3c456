"""Configuration types for grid allocation."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Union


class AllocMode(str, Enum):
    GEOMETRIC = "geometric"
    ATR = "atr"


# camelCase keys used by exported documents and stored records
_FIELD_KEYS = {
    "range_low": "rangeLow",
    "range_high": "rangeHigh",
    "grid_steps": "gridSteps",
    "total_contracts": "totalContracts",
    "alloc_mode": "allocMode",
    "growth_factor": "growthFactor",
    "atr_percent": "atrPercent",
    "depth_exponent": "depthExponent",
    "round_to_integers": "roundToIntegers",
}


@dataclass(frozen=True, slots=True)
class GridConfigurationParams:
    """Inputs to the grid allocator.

    Values are not validated here: a config with an empty range, no steps
    or no contracts simply allocates to an empty grid.
    """

    range_low: float
    range_high: float
    grid_steps: int
    total_contracts: int
    alloc_mode: Union[AllocMode, str] = AllocMode.GEOMETRIC
    growth_factor: float = 1.0  # geometric: weight multiplier per level
    atr_percent: float = 2.5  # atr: price move (%) counted as one depth unit
    depth_exponent: float = 1.0  # atr: curvature applied to depth units
    round_to_integers: bool = True

    def __post_init__(self) -> None:
        if not isinstance(self.alloc_mode, AllocMode):
            object.__setattr__(self, "alloc_mode", AllocMode(self.alloc_mode))

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {}
        for attr, key in _FIELD_KEYS.items():
            value = getattr(self, attr)
            out[key] = value.value if isinstance(value, AllocMode) else value
        return out

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GridConfigurationParams":
        """Build from either snake_case or camelCase keys."""
        kwargs = {}
        for attr, key in _FIELD_KEYS.items():
            if attr in data:
                kwargs[attr] = data[attr]
            elif key in data:
                kwargs[attr] = data[key]
        return cls(**kwargs)
