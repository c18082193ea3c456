"""gridlab: Grid allocation and performance simulation for inverse futures.

Configure a price grid, feed it candles, read back fills, ROI and metrics.
Pure functions over immutable values: no hidden state, no exceptions on
degenerate input.

Quick start:
    from gridlab import GridConfigurationParams, calculate_grid_levels

    params = GridConfigurationParams(
        range_low=10, range_high=15, grid_steps=5, total_contracts=100,
    )
    levels = calculate_grid_levels(params)

Or run a whole session:
    from gridlab import GridLab

    lab = GridLab({'range_low': 10, 'range_high': 15, 'current_price': 12})
    lab.seed_candles(seed=42)
    print(lab.summary())
"""

from .version import __version__

# Data types
from .data.types import Candle, GridLevel, LevelSide, LevelStatus
from .grid.types import AllocMode, GridConfigurationParams

# Grid engine
from .grid.allocation import calculate_grid_levels
from .grid.status import calculate_filled_contracts, update_grid_level_status
from .grid.pnl import (
    calculate_capital_series,
    calculate_pnl_coin,
    calculate_pnl_usd,
    calculate_roi_series,
)

# Candles
from .data.seed import generate_seed_candles
from .data.providers import CandleProvider, CSVProvider, ListProvider, SeedProvider
from .data.validation import (
    CandleValidator,
    DataIssue,
    ValidatedProvider,
    validate_candles,
    validate_dataframe,
)

# Reporting
from .reporting.metrics import PerformanceMetrics, calculate_performance_metrics
from .reporting.export import build_export, default_export_filename, export_state, load_export

# Session and storage
from .engine.lab import GridLab, LabConfig
from .storage.memory import MemStorage

__all__ = [
    "__version__",
    # Data
    "Candle",
    "GridLevel",
    "LevelSide",
    "LevelStatus",
    "AllocMode",
    "GridConfigurationParams",
    # Grid
    "calculate_grid_levels",
    "calculate_filled_contracts",
    "update_grid_level_status",
    "calculate_capital_series",
    "calculate_pnl_coin",
    "calculate_pnl_usd",
    "calculate_roi_series",
    # Candles
    "generate_seed_candles",
    "CandleProvider",
    "CSVProvider",
    "ListProvider",
    "SeedProvider",
    "CandleValidator",
    "DataIssue",
    "ValidatedProvider",
    "validate_candles",
    "validate_dataframe",
    # Reporting
    "PerformanceMetrics",
    "calculate_performance_metrics",
    "build_export",
    "default_export_filename",
    "export_state",
    "load_export",
    # Session
    "GridLab",
    "LabConfig",
    "MemStorage",
]
