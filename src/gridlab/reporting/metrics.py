"""Grid performance metrics."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Dict, List, Sequence

from ..data.types import Candle, GridLevel, LevelStatus
from ..grid.pnl import calculate_pnl_usd, calculate_roi_series
from ..grid.status import calculate_filled_contracts


@dataclass
class PerformanceMetrics:
    """Snapshot of a grid's simulated performance over a candle series.

    All return figures are percentages of the grid's notional
    (total_contracts * contract_value). ``filled_orders`` counts contracts,
    not levels.
    """
    current_capital: float = 0.0
    total_return: float = 0.0
    daily_roi: float = 0.0
    monthly_roi: float = 0.0
    sharpe_ratio: float = 0.0
    max_drawdown: float = 0.0
    active_grids: int = 0
    filled_orders: int = 0
    grid_efficiency: float = 0.0
    avg_spread: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "currentCapital": self.current_capital,
            "totalReturn": self.total_return,
            "dailyROI": self.daily_roi,
            "monthlyROI": self.monthly_roi,
            "sharpeRatio": self.sharpe_ratio,
            "maxDrawdown": self.max_drawdown,
            "activeGrids": self.active_grids,
            "filledOrders": self.filled_orders,
            "gridEfficiency": self.grid_efficiency,
            "avgSpread": self.avg_spread,
        }

    def summary(self) -> str:
        """Return formatted summary string."""
        lines = [
            f"{'='*60}",
            f"  Grid Performance",
            f"{'='*60}",
            f"  Current Capital:  ${self.current_capital:,.2f}",
            f"  Total Return:     {self.total_return:+.2f}%",
            f"  Daily ROI:        {self.daily_roi:+.4f}%",
            f"  Monthly ROI:      {self.monthly_roi:+.2f}%",
            f"  Sharpe Ratio:     {self.sharpe_ratio:.2f}",
            f"  Max Drawdown:     {self.max_drawdown:.1f}%",
            f"  {'─'*56}",
            f"  Active Grids:     {self.active_grids}",
            f"  Filled Orders:    {self.filled_orders}",
            f"  Grid Efficiency:  {self.grid_efficiency:.1f}%",
            f"  Avg Spread:       {self.avg_spread:.2f}%",
            f"{'='*60}",
        ]
        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"PerformanceMetrics(capital=${self.current_capital:,.2f}, "
            f"return={self.total_return:+.2f}%, sharpe={self.sharpe_ratio:.2f}, "
            f"max_dd={self.max_drawdown:.1f}%)"
        )


def _sharpe_like(roi_series: Sequence[float]) -> float:
    """Mean over population std of step-to-step ROI changes (not annualized)."""
    diffs = [roi_series[i + 1] - roi_series[i] for i in range(len(roi_series) - 1)]
    n = max(1, len(diffs))
    mean = sum(diffs) / n
    std = math.sqrt(sum((d - mean) ** 2 for d in diffs) / n)
    return mean / std if std > 0 else 0.0


def _max_drawdown(roi_series: Sequence[float]) -> float:
    """Largest peak-to-trough drop, as % of the peak floored at 1."""
    if not roi_series:
        return 0.0
    peak = roi_series[0]
    max_dd = 0.0
    for roi in roi_series:
        if roi > peak:
            peak = roi
        dd = (peak - roi) / max(1.0, abs(peak)) * 100
        max_dd = max(max_dd, dd)
    return max_dd


def _avg_spread(levels: Sequence[GridLevel]) -> float:
    """Mean % gap between adjacent levels, relative to the level above."""
    spreads: List[float] = []
    for prev, cur in zip(levels, levels[1:]):
        if prev.price != 0:
            spreads.append(abs(cur.price - prev.price) / prev.price * 100)
    return sum(spreads) / len(spreads) if spreads else 0.0


def calculate_performance_metrics(
    candles: Sequence[Candle],
    levels: Sequence[GridLevel],
    contract_value: float,
    total_contracts: int,
) -> PerformanceMetrics:
    """Aggregate a grid's performance over a candle series.

    Fill-dependent counts (active_grids, grid_efficiency) read each level's
    status as given, so pass levels already evaluated at the current price.
    """
    if not candles:
        return PerformanceMetrics(active_grids=len(levels))

    roi_series = calculate_roi_series(candles, levels, contract_value, total_contracts)
    last_close = candles[-1].close

    total_return = roi_series[-1]
    daily_roi = total_return / len(candles) if len(candles) > 1 else 0.0

    n_filled = sum(1 for l in levels if l.status == LevelStatus.FILLED)
    efficiency = n_filled / len(levels) * 100 if levels else 0.0

    return PerformanceMetrics(
        current_capital=total_contracts * contract_value
        + calculate_pnl_usd(levels, last_close, contract_value),
        total_return=total_return,
        daily_roi=daily_roi,
        monthly_roi=daily_roi * 30,
        sharpe_ratio=_sharpe_like(roi_series),
        max_drawdown=_max_drawdown(roi_series),
        active_grids=sum(1 for l in levels if l.status == LevelStatus.ACTIVE),
        filled_orders=calculate_filled_contracts(levels, last_close),
        grid_efficiency=efficiency,
        avg_spread=_avg_spread(levels),
    )
