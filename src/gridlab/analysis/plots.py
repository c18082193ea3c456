"""Visualization for grid simulations.

All functions return a ``matplotlib.figure.Figure``. Call ``fig.savefig()``
to save, or ``plt.show()`` to display interactively.

The price chart is drawn as a sequence of render passes: a base
candlestick pass followed by an ordered list of overlay passes (grid
levels, current price, or any custom ``RenderPass``).

matplotlib is an optional dependency. Install with::

    pip install gridlab[plots]

Import directly::

    from gridlab.analysis.plots import plot_grid_chart
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, List, Optional, Sequence, Tuple

from ..data.types import Candle, GridLevel
from .chart import calculate_price_bounds

if TYPE_CHECKING:
    import matplotlib.axes
    import matplotlib.figure


def _import_matplotlib():
    """Lazy import with helpful error message."""
    try:
        import matplotlib
        import matplotlib.pyplot as plt

        return matplotlib, plt
    except ImportError:
        raise ImportError(
            "matplotlib is required for plotting. Install with:\n"
            "  pip install gridlab[plots]"
        ) from None


_UP_COLOR = "#22c55e"
_DOWN_COLOR = "#ef4444"


class RenderPass(ABC):
    """One layer of the price chart, drawn onto shared axes in order."""

    @abstractmethod
    def draw(self, ax: "matplotlib.axes.Axes", candles: Sequence[Candle]) -> None:
        """Draw this layer onto ax."""
        ...


class CandlestickPass(RenderPass):
    """Base layer: wicks plus open/close bodies, one slot per candle."""

    def __init__(self, body_width: float = 0.6):
        self.body_width = body_width

    def draw(self, ax, candles):
        for i, c in enumerate(candles):
            color = _UP_COLOR if c.close >= c.open else _DOWN_COLOR
            ax.vlines(i, c.low, c.high, color=color, linewidth=0.8)
            bottom = min(c.open, c.close)
            height = max(abs(c.close - c.open), 1e-12)
            ax.bar(i, height, bottom=bottom, width=self.body_width, color=color)


class GridLevelPass(RenderPass):
    """Horizontal line per level; filled levels solid, active levels dashed."""

    def __init__(self, levels: Sequence[GridLevel], annotate: bool = True):
        self.levels = list(levels)
        self.annotate = annotate

    def draw(self, ax, candles):
        right = max(len(candles) - 1, 0)
        for level in self.levels:
            style = "-" if level.filled else "--"
            ax.axhline(level.price, color="#f59e0b", linestyle=style,
                       linewidth=0.8, alpha=0.8)
            if self.annotate:
                ax.text(
                    right, level.price, f" L{level.level} x{level.contracts}",
                    va="center", ha="left", fontsize=7, color="#f59e0b",
                )


class CurrentPricePass(RenderPass):
    """Marker line at the reference price used for fill evaluation."""

    def __init__(self, price: float):
        self.price = price

    def draw(self, ax, candles):
        ax.axhline(self.price, color="#3b82f6", linewidth=1.2, label="Current price")


def plot_grid_chart(
    candles: Sequence[Candle],
    levels: Sequence[GridLevel] = (),
    current_price: Optional[float] = None,
    overlays: Optional[Sequence[RenderPass]] = None,
    title: str = "",
    figsize: Tuple[int, int] = (12, 6),
) -> "matplotlib.figure.Figure":
    """Plot candles with grid levels overlaid.

    Args:
        candles: Daily candles, chronological.
        levels: Grid levels to overlay.
        current_price: Optional reference price line.
        overlays: Extra passes drawn after the built-in ones, in order.
        title: Chart title.
        figsize: Figure dimensions.

    Returns:
        matplotlib Figure.
    """
    _, plt = _import_matplotlib()

    fig, ax = plt.subplots(figsize=figsize)

    if not candles and not levels:
        ax.text(
            0.5, 0.5, "No price data", ha="center", va="center",
            transform=ax.transAxes, fontsize=14,
        )
        ax.set_title(title or "Grid")
        plt.close(fig)
        return fig

    passes: List[RenderPass] = [CandlestickPass()]
    if levels:
        passes.append(GridLevelPass(levels))
    if current_price is not None:
        passes.append(CurrentPricePass(current_price))
    passes.extend(overlays or ())

    for render_pass in passes:
        render_pass.draw(ax, candles)

    lo, hi = calculate_price_bounds(candles, levels)
    ax.set_ylim(lo, hi)

    if candles:
        step = max(1, len(candles) // 8)
        ticks = list(range(0, len(candles), step))
        ax.set_xticks(ticks)
        ax.set_xticklabels([candles[i].date for i in ticks], rotation=30, ha="right")

    ax.set_title(title or f"Grid ({len(levels)} levels)")
    ax.set_xlabel("Date")
    ax.set_ylabel("Price")
    ax.grid(True, alpha=0.3)
    fig.tight_layout()
    plt.close(fig)
    return fig


def _plot_series(
    values: Sequence[float],
    labels: Sequence[str],
    title: str,
    ylabel: str,
    color: str,
    figsize: Tuple[int, int],
):
    _, plt = _import_matplotlib()

    fig, ax = plt.subplots(figsize=figsize)

    if not values:
        ax.text(
            0.5, 0.5, "No data", ha="center", va="center",
            transform=ax.transAxes, fontsize=14,
        )
        ax.set_title(title)
        plt.close(fig)
        return fig

    xs = list(range(len(values)))
    ax.plot(xs, list(values), color=color, linewidth=1.2)
    ax.axhline(0, color="black", linewidth=0.5)

    if labels:
        step = max(1, len(values) // 8)
        ticks = xs[::step]
        ax.set_xticks(ticks)
        ax.set_xticklabels(
            [labels[i] if i < len(labels) else str(i) for i in ticks],
            rotation=30, ha="right",
        )

    ax.set_title(title)
    ax.set_xlabel("Date")
    ax.set_ylabel(ylabel)
    ax.grid(True, alpha=0.3)
    fig.tight_layout()
    plt.close(fig)
    return fig


def plot_roi(
    roi_series: Sequence[float],
    labels: Sequence[str] = (),
    figsize: Tuple[int, int] = (12, 4),
) -> "matplotlib.figure.Figure":
    """Plot the ROI (%) series."""
    return _plot_series(roi_series, labels, "ROI", "ROI %", "steelblue", figsize)


def plot_capital(
    capital_series: Sequence[float],
    labels: Sequence[str] = (),
    figsize: Tuple[int, int] = (12, 4),
) -> "matplotlib.figure.Figure":
    """Plot filled contracts per day."""
    return _plot_series(
        capital_series, labels, "Capital Deployed", "Filled contracts", "darkorange", figsize
    )
