"""Grid allocation and simulation module for gridlab.

Allocates contracts across a price grid, evaluates which levels are
filled at a given price, and computes inverse-futures P&L and ROI series.
"""

from .allocation import calculate_grid_levels
from .pnl import (
    calculate_capital_series,
    calculate_pnl_coin,
    calculate_pnl_usd,
    calculate_roi_series,
)
from .status import calculate_filled_contracts, update_grid_level_status
from .types import AllocMode, GridConfigurationParams

__all__ = [
    "AllocMode",
    "GridConfigurationParams",
    "calculate_capital_series",
    "calculate_filled_contracts",
    "calculate_grid_levels",
    "calculate_pnl_coin",
    "calculate_pnl_usd",
    "calculate_roi_series",
    "update_grid_level_status",
]
