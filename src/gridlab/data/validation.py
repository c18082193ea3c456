"""Data validation for daily candle series and CandleProviders."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import timedelta
from typing import Iterable, Iterator, List, Optional

import pandas as pd

from .providers.base import CandleProvider
from .types import Candle

logger = logging.getLogger(__name__)

_PRICE_COLS = ("open", "high", "low", "close")


@dataclass(frozen=True)
class DataIssue:
    """A single data quality issue found during validation.

    Attributes:
        severity: 'ERROR', 'WARNING', or 'INFO'.
        check: Short identifier (e.g. 'gaps', 'duplicates', 'ohlc').
        message: Human-readable description.
        row_index: DataFrame row index if applicable.
        date: Candle date (ISO string) if applicable.
    """

    severity: str
    check: str
    message: str
    row_index: Optional[int] = None
    date: Optional[str] = None


def candles_to_dataframe(candles: Iterable[Candle]) -> pd.DataFrame:
    """Build a date/open/high/low/close DataFrame from candles."""
    df = pd.DataFrame(
        [c.to_dict() for c in candles],
        columns=["date", *_PRICE_COLS],
    )
    df["date"] = pd.to_datetime(df["date"])
    return df


def _date_at(df: pd.DataFrame, idx) -> Optional[str]:
    ts = df.loc[idx, "date"]
    if pd.isna(ts):
        return None
    return pd.Timestamp(ts).strftime("%Y-%m-%d")


class CandleValidator:
    """Validate daily OHLC DataFrames for common data quality issues.

    Checks for duplicates, ordering, NaN values, OHLC consistency,
    non-positive prices and missing days.

    Args:
        tolerance: Absolute slack allowed in OHLC consistency checks, so
            rounded prices (e.g. to 4 decimals) do not trip them.
        max_gap_days: Gaps longer than this many days trigger warnings.
    """

    def __init__(self, tolerance: float = 1e-9, max_gap_days: int = 1):
        self._tolerance = tolerance
        self._max_gap = timedelta(days=max_gap_days)

    def validate(self, df: pd.DataFrame) -> List[DataIssue]:
        """Run all checks on a DataFrame.

        Args:
            df: Must have columns: date, open, high, low, close.

        Returns:
            List of DataIssue objects (may be empty if clean).
        """
        issues: List[DataIssue] = []

        if len(df) == 0:
            issues.append(DataIssue("WARNING", "empty", "No candles"))
            return issues

        df = df.copy()
        df["date"] = pd.to_datetime(df["date"])

        self._check_duplicates(df, issues)
        self._check_monotonic(df, issues)
        self._check_nulls(df, issues)
        self._check_ohlc(df, issues)
        self._check_prices(df, issues)
        self._check_gaps(df, issues)

        return issues

    def _check_duplicates(self, df: pd.DataFrame, issues: List[DataIssue]) -> None:
        """Check for duplicate dates."""
        dupes = df[df["date"].duplicated(keep=False)]
        if len(dupes) > 0:
            first_idx = dupes.index[0]
            issues.append(DataIssue(
                "ERROR", "duplicates",
                f"{len(dupes)} duplicate dates found (first at row {first_idx})",
                row_index=int(first_idx),
                date=_date_at(df, first_idx),
            ))

    def _check_monotonic(self, df: pd.DataFrame, issues: List[DataIssue]) -> None:
        """Check that dates are strictly increasing."""
        dates = df["date"]
        if not dates.is_monotonic_increasing:
            diffs = dates.diff()
            bad = diffs[diffs <= pd.Timedelta(0)]
            if len(bad) > 0:
                idx = bad.index[0]
                issues.append(DataIssue(
                    "ERROR", "monotonic",
                    f"Dates not strictly increasing (first violation at row {idx})",
                    row_index=int(idx),
                    date=_date_at(df, idx),
                ))

    def _check_nulls(self, df: pd.DataFrame, issues: List[DataIssue]) -> None:
        """Check for NaN/None in OHLC columns."""
        for col in _PRICE_COLS:
            if col not in df.columns:
                issues.append(DataIssue("ERROR", "nulls", f"Missing column: {col}"))
                continue
            nulls = df[df[col].isna()]
            if len(nulls) > 0:
                first_idx = nulls.index[0]
                issues.append(DataIssue(
                    "ERROR", "nulls",
                    f"{len(nulls)} NaN values in '{col}' (first at row {first_idx})",
                    row_index=int(first_idx),
                    date=_date_at(df, first_idx),
                ))

    def _check_ohlc(self, df: pd.DataFrame, issues: List[DataIssue]) -> None:
        """Check OHLC consistency: low <= open/close <= high."""
        if not set(_PRICE_COLS).issubset(df.columns):
            return
        tol = self._tolerance

        bad_hl = df[df["high"] < df["low"] - tol]
        if len(bad_hl) > 0:
            first_idx = bad_hl.index[0]
            issues.append(DataIssue(
                "ERROR", "ohlc",
                f"{len(bad_hl)} candles where high < low (first at row {first_idx})",
                row_index=int(first_idx),
                date=_date_at(df, first_idx),
            ))

        bad_ho = df[(df["high"] < df["open"] - tol) | (df["high"] < df["close"] - tol)]
        if len(bad_ho) > 0:
            first_idx = bad_ho.index[0]
            issues.append(DataIssue(
                "ERROR", "ohlc",
                f"{len(bad_ho)} candles where high < open or high < close (first at row {first_idx})",
                row_index=int(first_idx),
                date=_date_at(df, first_idx),
            ))

        bad_lo = df[(df["low"] > df["open"] + tol) | (df["low"] > df["close"] + tol)]
        if len(bad_lo) > 0:
            first_idx = bad_lo.index[0]
            issues.append(DataIssue(
                "ERROR", "ohlc",
                f"{len(bad_lo)} candles where low > open or low > close (first at row {first_idx})",
                row_index=int(first_idx),
                date=_date_at(df, first_idx),
            ))

    def _check_prices(self, df: pd.DataFrame, issues: List[DataIssue]) -> None:
        """Inverse-futures P&L needs strictly positive prices."""
        cols = [c for c in _PRICE_COLS if c in df.columns]
        if not cols:
            return
        bad = df[(df[cols] <= 0).any(axis=1)]
        if len(bad) > 0:
            first_idx = bad.index[0]
            issues.append(DataIssue(
                "ERROR", "prices",
                f"{len(bad)} candles with non-positive prices (first at row {first_idx})",
                row_index=int(first_idx),
                date=_date_at(df, first_idx),
            ))

    def _check_gaps(self, df: pd.DataFrame, issues: List[DataIssue]) -> None:
        """Check for missing days."""
        if len(df) < 2:
            return
        diffs = df["date"].diff().dropna()
        gaps = diffs[diffs > self._max_gap]
        if len(gaps) > 0:
            first_idx = gaps.index[0]
            issues.append(DataIssue(
                "WARNING", "gaps",
                f"{len(gaps)} gaps detected (first: {gaps.iloc[0]} at row {first_idx})",
                row_index=int(first_idx),
                date=_date_at(df, first_idx),
            ))

    def report(self, issues: List[DataIssue]) -> str:
        """Format issues as a human-readable report."""
        if not issues:
            return "Data validation: CLEAN (no issues found)"

        errors = sum(1 for i in issues if i.severity == "ERROR")
        warnings = sum(1 for i in issues if i.severity == "WARNING")

        lines = [
            f"Data validation: {len(issues)} issues ({errors} errors, {warnings} warnings)",
            "",
        ]

        for issue in issues:
            loc = ""
            if issue.row_index is not None:
                loc = f" [row {issue.row_index}]"
            if issue.date is not None:
                loc += f" @ {issue.date}"
            lines.append(f"  {issue.severity} ({issue.check}){loc}: {issue.message}")

        return "\n".join(lines)


class ValidatedProvider(CandleProvider):
    """CandleProvider wrapper that validates data on first iteration.

    Logs any issues found. If strict=True, raises ValueError
    when ERROR-level issues are detected.

    Args:
        inner: The CandleProvider to wrap.
        strict: If True, raise on ERROR issues.
        tolerance: OHLC consistency slack passed to CandleValidator.
    """

    def __init__(
        self,
        inner: CandleProvider,
        strict: bool = False,
        tolerance: float = 1e-9,
    ):
        self._inner = inner
        self._strict = strict
        self._tolerance = tolerance
        self._validated = False

    def _validate_once(self) -> None:
        if self._validated:
            return
        self._validated = True

        candles = list(self._inner)
        self._inner.reset()
        if not candles:
            return

        validator = CandleValidator(tolerance=self._tolerance)
        issues = validator.validate(candles_to_dataframe(candles))

        if issues:
            report = validator.report(issues)
            logger.warning("Data validation issues:\n%s", report)

            if self._strict:
                errors = [i for i in issues if i.severity == "ERROR"]
                if errors:
                    raise ValueError(
                        f"Data validation failed with {len(errors)} errors. "
                        f"First: {errors[0].message}"
                    )

    def __iter__(self) -> Iterator[Candle]:
        self._validate_once()
        return iter(self._inner)

    def symbol(self) -> str:
        return self._inner.symbol()

    def reset(self) -> None:
        self._inner.reset()
        self._validated = False


def validate_dataframe(
    df: pd.DataFrame,
    tolerance: float = 1e-9,
    max_gap_days: int = 1,
) -> List[DataIssue]:
    """Validate a daily OHLC DataFrame (columns: date, open, high, low, close)."""
    return CandleValidator(tolerance, max_gap_days).validate(df)


def validate_candles(
    candles: Iterable[Candle],
    tolerance: float = 1e-9,
    max_gap_days: int = 1,
) -> List[DataIssue]:
    """Validate a sequence of candles."""
    return validate_dataframe(candles_to_dataframe(candles), tolerance, max_gap_days)
