"""CSV and Parquet candle provider."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator, Optional

import pandas as pd

from ..types import Candle
from .base import CandleProvider

logger = logging.getLogger(__name__)


class CSVProvider(CandleProvider):
    """Load daily OHLC candles from CSV or Parquet files.

    Expected columns: date, open, high, low, close (volume is ignored).
    The date column can be any pandas-parseable datetime format.

    Args:
        path: Path to CSV or Parquet file.
        symbol_name: Symbol name (e.g. 'LINKUSD'); inferred from filename if empty.
        start: Optional start date filter (inclusive).
        end: Optional end date filter (inclusive).
        date_col: Name of the date column.
    """

    def __init__(
        self,
        path: str | Path,
        symbol_name: str = "",
        start: Optional[str] = None,
        end: Optional[str] = None,
        date_col: str = "date",
    ):
        self._path = Path(path)
        self._symbol = symbol_name or self._infer_symbol()
        self._start = start
        self._end = end
        self._date_col = date_col
        self._df: Optional[pd.DataFrame] = None

    def _infer_symbol(self) -> str:
        """Try to extract symbol from filename like 'LINKUSD_1d.csv'."""
        name = self._path.stem
        parts = name.split("_")
        return parts[0] if parts else name

    def _load(self) -> pd.DataFrame:
        """Load and cache the dataframe."""
        if self._df is not None:
            return self._df

        if self._path.suffix == ".parquet":
            df = pd.read_parquet(self._path)
        else:
            df = pd.read_csv(self._path)

        if self._date_col in df.columns:
            df["date"] = pd.to_datetime(df[self._date_col])
        elif "timestamp" in df.columns:
            df["date"] = pd.to_datetime(df["timestamp"])
        else:
            df["date"] = pd.to_datetime(df.iloc[:, 0])

        df = df.sort_values("date").reset_index(drop=True)

        if self._start:
            df = df[df["date"] >= pd.Timestamp(self._start)]
        if self._end:
            df = df[df["date"] <= pd.Timestamp(self._end)]

        for col in ("open", "high", "low", "close"):
            if col not in df.columns:
                raise ValueError(f"Missing required column: {col}")

        logger.debug("Loaded %d candles from %s", len(df), self._path)
        self._df = df
        return df

    def __iter__(self) -> Iterator[Candle]:
        df = self._load()
        for row in df.itertuples(index=False):
            yield Candle(
                date=row.date.strftime("%Y-%m-%d"),
                open=float(row.open),
                high=float(row.high),
                low=float(row.low),
                close=float(row.close),
            )

    def symbol(self) -> str:
        return self._symbol

    def reset(self) -> None:
        pass  # Stateless: re-iterates from cached df

    def to_dataframe(self) -> pd.DataFrame:
        """Return the underlying dataframe."""
        return self._load().copy()

    def __len__(self) -> int:
        return len(self._load())
