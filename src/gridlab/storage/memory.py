"""In-memory repository for grid configurations, candles and levels.

Records are keyed by generated uuid4 strings. The store is a plain
last-write-wins map: construct one per session and pass it to whatever
needs it. Not safe for concurrent mutation.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field, fields, replace
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from ..grid.types import AllocMode, GridConfigurationParams

logger = logging.getLogger(__name__)


def _new_id() -> str:
    return str(uuid.uuid4())


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class StoredConfig:
    """A named grid configuration for a symbol."""
    id: str
    name: str
    symbol: str
    contract_value: float
    params: GridConfigurationParams
    created_at: datetime = field(default_factory=_now)


@dataclass(frozen=True)
class StoredCandle:
    id: str
    config_id: Optional[str]
    date: str
    open: float
    high: float
    low: float
    close: float
    timestamp: datetime = field(default_factory=_now)


@dataclass(frozen=True)
class StoredLevel:
    id: str
    config_id: Optional[str]
    level: int
    price: float
    contracts: int
    weight: float
    status: str = "active"


def _apply_updates(record, updates: Dict[str, Any]):
    """Merge updates into a frozen record; unknown keys and ``id`` are ignored."""
    allowed = {f.name for f in fields(record)} - {"id"}
    return replace(record, **{k: v for k, v in updates.items() if k in allowed})


class MemStorage:
    """CRUD store for grid lab records.

    Updating a missing id raises KeyError; deleting one returns False.
    """

    def __init__(self) -> None:
        self._configs: Dict[str, StoredConfig] = {}
        self._candles: Dict[str, StoredCandle] = {}
        self._levels: Dict[str, StoredLevel] = {}

    # ------------------------------------------------------------------
    # Grid configurations
    # ------------------------------------------------------------------

    def get_grid_config(self, config_id: str) -> Optional[StoredConfig]:
        return self._configs.get(config_id)

    def create_grid_config(
        self,
        name: str,
        symbol: str,
        contract_value: float,
        params: GridConfigurationParams,
    ) -> StoredConfig:
        config = StoredConfig(
            id=_new_id(),
            name=name,
            symbol=symbol,
            contract_value=contract_value,
            params=params,
        )
        self._configs[config.id] = config
        return config

    def update_grid_config(self, config_id: str, **updates: Any) -> StoredConfig:
        """Update a configuration.

        Allocation fields (``range_low``, ``grid_steps``, ...) may be passed
        directly; they are folded into ``params``.
        """
        existing = self._configs.get(config_id)
        if existing is None:
            logger.debug("update_grid_config: %s not found", config_id)
            raise KeyError(f"Grid configuration not found: {config_id}")

        param_names = {f.name for f in fields(GridConfigurationParams)}
        param_updates = {k: updates.pop(k) for k in list(updates) if k in param_names}
        if param_updates:
            if "alloc_mode" in param_updates:
                param_updates["alloc_mode"] = AllocMode(param_updates["alloc_mode"])
            base = updates.get("params", existing.params)
            updates["params"] = replace(base, **param_updates)

        updated = _apply_updates(existing, updates)
        self._configs[config_id] = updated
        return updated

    def delete_grid_config(self, config_id: str) -> bool:
        return self._configs.pop(config_id, None) is not None

    def list_grid_configs(self) -> List[StoredConfig]:
        return sorted(self._configs.values(), key=lambda c: c.created_at)

    # ------------------------------------------------------------------
    # Candles
    # ------------------------------------------------------------------

    def get_candles_by_config_id(self, config_id: str) -> List[StoredCandle]:
        """Candles for a configuration, oldest first."""
        return sorted(
            (c for c in self._candles.values() if c.config_id == config_id),
            key=lambda c: c.date,
        )

    def create_candle(
        self,
        config_id: Optional[str],
        date: str,
        open: float,
        high: float,
        low: float,
        close: float,
    ) -> StoredCandle:
        candle = StoredCandle(
            id=_new_id(),
            config_id=config_id,
            date=date,
            open=open,
            high=high,
            low=low,
            close=close,
        )
        self._candles[candle.id] = candle
        return candle

    def delete_candle(self, candle_id: str) -> bool:
        return self._candles.pop(candle_id, None) is not None

    # ------------------------------------------------------------------
    # Grid levels
    # ------------------------------------------------------------------

    def get_grid_levels_by_config_id(self, config_id: str) -> List[StoredLevel]:
        """Levels for a configuration, ordered by level number."""
        return sorted(
            (l for l in self._levels.values() if l.config_id == config_id),
            key=lambda l: l.level,
        )

    def create_grid_level(
        self,
        config_id: Optional[str],
        level: int,
        price: float,
        contracts: int,
        weight: float,
        status: str = "active",
    ) -> StoredLevel:
        record = StoredLevel(
            id=_new_id(),
            config_id=config_id,
            level=level,
            price=price,
            contracts=contracts,
            weight=weight,
            status=status,
        )
        self._levels[record.id] = record
        return record

    def update_grid_level(self, level_id: str, **updates: Any) -> StoredLevel:
        existing = self._levels.get(level_id)
        if existing is None:
            logger.debug("update_grid_level: %s not found", level_id)
            raise KeyError(f"Grid level not found: {level_id}")
        updated = _apply_updates(existing, updates)
        self._levels[level_id] = updated
        return updated

    def delete_grid_level(self, level_id: str) -> bool:
        return self._levels.pop(level_id, None) is not None
