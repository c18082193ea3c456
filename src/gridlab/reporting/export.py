"""Export a grid lab state (config, levels, candles, metrics) as JSON."""

from __future__ import annotations

import json
import logging
import re
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional, Sequence

from ..data.types import Candle, GridLevel
from ..grid.types import GridConfigurationParams
from .metrics import PerformanceMetrics

logger = logging.getLogger(__name__)


def build_export(
    symbol: str,
    contract_value: float,
    params: GridConfigurationParams,
    levels: Sequence[GridLevel],
    candles: Sequence[Candle],
    metrics: PerformanceMetrics,
    exported_at: Optional[datetime] = None,
) -> Dict[str, Any]:
    """Build the export document as a plain dict."""
    exported_at = exported_at or datetime.now(timezone.utc)
    return {
        "symbol": symbol,
        "contractValue": contract_value,
        "gridParams": params.to_dict(),
        "gridLevels": [l.to_dict() for l in levels],
        "candles": [c.to_dict() for c in candles],
        "performanceMetrics": metrics.to_dict(),
        "exportedAt": exported_at.isoformat(),
    }


def default_export_filename(symbol: str, exported_at: Optional[datetime] = None) -> str:
    """File name for an export, e.g. ``grid-lab-LINKUSD--Coin-M--2024-01-03.json``."""
    exported_at = exported_at or datetime.now(timezone.utc)
    safe = re.sub(r"[^a-zA-Z0-9]", "-", symbol)
    return f"grid-lab-{safe}-{exported_at.date().isoformat()}.json"


def export_state(path: str | Path, document: Dict[str, Any]) -> Path:
    """Write an export document as indented JSON.

    Returns:
        The path written.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        json.dump(document, f, indent=2)
    logger.info(
        "Exported %d levels and %d candles to %s",
        len(document.get("gridLevels", [])),
        len(document.get("candles", [])),
        path,
    )
    return path


def load_export(path: str | Path) -> Dict[str, Any]:
    """Read an export document back, rebuilding typed values.

    Returns a dict with ``params`` (GridConfigurationParams), ``candles``
    (list of Candle) plus the raw ``symbol`` and ``contract_value``.
    """
    with Path(path).open(encoding="utf-8") as f:
        doc = json.load(f)
    return {
        "symbol": doc.get("symbol", ""),
        "contract_value": float(doc.get("contractValue", 0.0)),
        "params": GridConfigurationParams.from_dict(doc["gridParams"]),
        "candles": [Candle.from_dict(c) for c in doc.get("candles", [])],
    }
