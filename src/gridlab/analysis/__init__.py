"""Analysis utilities: chart bounds, timeframe windows and chart data.

Plots are intentionally NOT imported here to avoid requiring matplotlib.
Import them directly: ``from gridlab.analysis.plots import plot_grid_chart``
"""

from .chart import (
    calculate_price_bounds,
    filter_by_timeframe,
    format_candlestick_data,
    format_line_data,
    timeframe_label,
)

__all__ = [
    "calculate_price_bounds",
    "filter_by_timeframe",
    "format_candlestick_data",
    "format_line_data",
    "timeframe_label",
]
