"""GridLab: a single-user simulation session.

Holds one grid configuration, a candle series and a reference price, and
recomputes levels, fills, series and metrics from them on demand:

  config  -> allocate levels (memoized per configuration)
  levels  -> evaluate fills at current_price
  candles -> capital / ROI series -> PerformanceMetrics
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, fields, replace
from datetime import date, datetime, timedelta, timezone
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

from ..data.providers.base import CandleProvider
from ..data.seed import generate_seed_candles
from ..data.types import Candle, GridLevel
from ..grid.allocation import calculate_grid_levels
from ..grid.pnl import calculate_capital_series, calculate_roi_series
from ..grid.status import update_grid_level_status
from ..grid.types import AllocMode, GridConfigurationParams
from ..reporting.export import build_export, default_export_filename, export_state
from ..reporting.metrics import PerformanceMetrics, calculate_performance_metrics

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class LabConfig:
    """Configuration for a grid lab session."""

    symbol: str = "LINKUSD (Coin-M)"
    contract_value: float = 10.0  # USD face value per contract
    # Grid
    range_low: float = 10.0
    range_high: float = 15.0
    grid_steps: int = 12
    total_contracts: int = 200
    alloc_mode: Union[AllocMode, str] = AllocMode.GEOMETRIC
    growth_factor: float = 1.22
    atr_percent: float = 2.5
    depth_exponent: float = 1.8
    round_to_integers: bool = True
    # Synthetic candles
    seed_avg_price: float = 13.0
    seed_days: int = 90
    seed_volatility: float = 0.35
    # Reference price for fill evaluation
    current_price: float = 13.25

    def __post_init__(self) -> None:
        if not isinstance(self.alloc_mode, AllocMode):
            object.__setattr__(self, "alloc_mode", AllocMode(self.alloc_mode))

    @property
    def grid_params(self) -> GridConfigurationParams:
        return GridConfigurationParams(
            range_low=self.range_low,
            range_high=self.range_high,
            grid_steps=self.grid_steps,
            total_contracts=self.total_contracts,
            alloc_mode=self.alloc_mode,
            growth_factor=self.growth_factor,
            atr_percent=self.atr_percent,
            depth_exponent=self.depth_exponent,
            round_to_integers=self.round_to_integers,
        )

    @classmethod
    def from_dict(cls, config: Dict[str, Any]) -> "LabConfig":
        """Build from a config dict; unknown keys are ignored."""
        names = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in config.items() if k in names})


@lru_cache(maxsize=64)
def _allocate(params: GridConfigurationParams) -> Tuple[GridLevel, ...]:
    return tuple(calculate_grid_levels(params))


class GridLab:
    """Interactive grid simulation session.

    Args:
        config: LabConfig, or a config dict with LabConfig keys.
        candles: Optional initial candle series.

    Usage::

        lab = GridLab({"range_low": 10, "range_high": 15, "grid_steps": 5})
        lab.seed_candles(seed=42)
        print(lab.metrics().summary())
    """

    def __init__(
        self,
        config: Union[LabConfig, Dict[str, Any], None] = None,
        candles: Optional[List[Candle]] = None,
    ):
        if config is None:
            config = LabConfig()
        elif isinstance(config, dict):
            config = LabConfig.from_dict(config)
        self.config: LabConfig = config
        self.candles: List[Candle] = list(candles or [])
        self.scrub_index: int = 0
        self.pending_open: Optional[float] = None

    # ------------------------------------------------------------------
    # Inputs
    # ------------------------------------------------------------------

    def configure(self, **changes: Any) -> LabConfig:
        """Replace config fields; levels are regenerated on next access."""
        self.config = replace(self.config, **changes)
        return self.config

    def set_current_price(self, price: float) -> None:
        self.config = replace(self.config, current_price=price)

    def scrub_to(self, index: int) -> float:
        """Move the reference price to the close of candle ``index``."""
        if not self.candles:
            return self.config.current_price
        index = max(0, min(index, len(self.candles) - 1))
        self.scrub_index = index
        self.set_current_price(self.candles[index].close)
        return self.config.current_price

    def seed_candles(self, seed: Optional[int] = None) -> List[Candle]:
        """Replace the candle series with a synthetic walk.

        The reference price moves to the last seeded close.
        """
        cfg = self.config
        self.candles = generate_seed_candles(
            cfg.seed_avg_price, cfg.seed_days, cfg.seed_volatility, seed=seed
        )
        self.pending_open = None
        self.scrub_index = max(0, len(self.candles) - 1)
        if self.candles:
            self.set_current_price(self.candles[-1].close)
        logger.debug("Seeded %d candles around %s", len(self.candles), cfg.seed_avg_price)
        return self.candles

    def load_candles(self, provider: CandleProvider) -> List[Candle]:
        """Replace the candle series with everything the provider yields."""
        self.candles = list(provider)
        self.pending_open = None
        return self.candles

    def _next_date(self) -> str:
        if self.candles:
            last = date.fromisoformat(self.candles[-1].date)
            return (last + timedelta(days=1)).isoformat()
        return date.today().isoformat()

    def add_candle(self, candle: Optional[Candle] = None) -> Candle:
        """Append a candle.

        Without an argument, appends a flat candle at current_price dated
        the day after the last candle (or today when there are none).
        """
        if candle is None:
            price = self.config.current_price
            candle = Candle(self._next_date(), price, price, price, price)
        self.candles.append(candle)
        return candle

    def delete_candle(self, index: int) -> Optional[Candle]:
        """Remove the candle at ``index``; out-of-range indexes remove nothing.

        The scrub position steps back one when it sits at or after the
        removed candle.
        """
        removed = None
        if 0 <= index < len(self.candles):
            removed = self.candles.pop(index)
        if self.scrub_index >= index and self.scrub_index > 0:
            self.scrub_index -= 1
        return removed

    def draw_candle(self, price: float) -> Candle:
        """Draw a candle in two clicks.

        The first click opens a flat candle at ``price`` for the next day.
        The second closes it at ``price``, spanning high/low over open and
        close, and moves the reference price and scrub position to it.
        """
        if self.pending_open is None:
            self.pending_open = price
            return self.add_candle(Candle(self._next_date(), price, price, price, price))

        open_ = self.pending_open
        candle = replace(
            self.candles[-1],
            high=max(open_, price),
            low=min(open_, price),
            close=price,
        )
        self.candles[-1] = candle
        self.pending_open = None
        self.scrub_index = len(self.candles) - 1
        self.set_current_price(price)
        return candle

    def clear_candles(self) -> None:
        self.candles = []
        self.pending_open = None
        self.scrub_index = 0

    # ------------------------------------------------------------------
    # Derived values
    # ------------------------------------------------------------------

    def levels(self) -> List[GridLevel]:
        """Allocated levels with fills evaluated at current_price."""
        allocated = _allocate(self.config.grid_params)
        return update_grid_level_status(allocated, self.config.current_price)

    def capital_series(self) -> List[int]:
        return calculate_capital_series(
            self.candles, self.levels(), self.config.contract_value
        )

    def roi_series(self) -> List[float]:
        return calculate_roi_series(
            self.candles,
            self.levels(),
            self.config.contract_value,
            self.config.total_contracts,
        )

    def metrics(self) -> PerformanceMetrics:
        return calculate_performance_metrics(
            self.candles,
            self.levels(),
            self.config.contract_value,
            self.config.total_contracts,
        )

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------

    def export(self, path: Union[str, Path, None] = None) -> Dict[str, Any]:
        """Build the export document, writing it to ``path`` if given.

        When ``path`` is an existing directory the file is named
        ``grid-lab-<symbol>-<YYYY-MM-DD>.json`` inside it.
        """
        cfg = self.config
        exported_at = datetime.now(timezone.utc)
        document = build_export(
            symbol=cfg.symbol,
            contract_value=cfg.contract_value,
            params=cfg.grid_params,
            levels=self.levels(),
            candles=self.candles,
            metrics=self.metrics(),
            exported_at=exported_at,
        )
        if path is not None:
            path = Path(path)
            if path.is_dir():
                path = path / default_export_filename(cfg.symbol, exported_at)
            export_state(path, document)
        return document

    def summary(self) -> str:
        cfg = self.config
        header = (
            f"  {cfg.symbol}: {cfg.grid_steps} levels {cfg.range_low:g}-{cfg.range_high:g}, "
            f"{cfg.total_contracts} contracts ({cfg.alloc_mode.value}), "
            f"{len(self.candles)} candles @ {cfg.current_price:g}"
        )
        return header + "\n" + self.metrics().summary()

    def __repr__(self) -> str:
        return f"GridLab({asdict(self.config)!r})"
