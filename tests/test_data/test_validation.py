"""Tests for candle validation."""

import logging
from pathlib import Path

import numpy as np
import pandas as pd
import pytest

from gridlab.data.providers.csv import CSVProvider
from gridlab.data.providers.memory import ListProvider
from gridlab.data.types import Candle
from gridlab.data.validation import (
    CandleValidator,
    ValidatedProvider,
    candles_to_dataframe,
    validate_candles,
    validate_dataframe,
)

FIXTURE_PATH = Path(__file__).parent.parent / "fixtures" / "LINKUSD_1d.csv"


def _clean(n: int = 5):
    return [
        Candle(date=f"2024-01-{i + 1:02d}", open=10.0, high=10.5, low=9.5, close=10.2)
        for i in range(n)
    ]


def _checks(issues):
    return {i.check for i in issues}


class TestClean:
    def test_fixture_is_clean(self):
        df = CSVProvider(FIXTURE_PATH).to_dataframe()
        assert validate_dataframe(df) == []

    def test_clean_candles(self):
        assert validate_candles(_clean()) == []

    def test_empty(self):
        issues = validate_candles([])
        assert len(issues) == 1
        assert issues[0].check == "empty"
        assert issues[0].severity == "WARNING"


class TestOHLC:
    def test_high_below_low(self):
        candles = _clean()
        candles[2] = Candle("2024-01-03", 10.0, 9.0, 9.5, 9.2)
        issues = validate_candles(candles)
        ohlc = [i for i in issues if i.check == "ohlc"]
        assert ohlc
        assert ohlc[0].row_index == 2
        assert ohlc[0].date == "2024-01-03"

    def test_close_above_high(self):
        candles = _clean()
        candles[1] = Candle("2024-01-02", 10.0, 10.5, 9.5, 11.0)
        assert "ohlc" in _checks(validate_candles(candles))

    def test_tolerance(self):
        candles = _clean()
        candles[1] = Candle("2024-01-02", 10.0, 10.5, 9.5, 10.50004)
        assert "ohlc" in _checks(validate_candles(candles))
        assert "ohlc" not in _checks(validate_candles(candles, tolerance=1e-4))

    def test_non_positive_prices(self):
        candles = _clean()
        candles[4] = Candle("2024-01-05", 0.0, 0.5, 0.0, 0.2)
        issues = validate_candles(candles)
        assert "prices" in _checks(issues)


class TestDates:
    def test_duplicates(self):
        candles = _clean()
        candles[3] = Candle("2024-01-03", 10.0, 10.5, 9.5, 10.2)
        assert "duplicates" in _checks(validate_candles(candles))

    def test_out_of_order(self):
        candles = _clean()
        candles[1], candles[2] = candles[2], candles[1]
        assert "monotonic" in _checks(validate_candles(candles))

    def test_gap_warning(self):
        candles = _clean(3) + [Candle("2024-01-10", 10.0, 10.5, 9.5, 10.2)]
        issues = [i for i in validate_candles(candles) if i.check == "gaps"]
        assert len(issues) == 1
        assert issues[0].severity == "WARNING"

    def test_gap_threshold(self):
        candles = _clean(3) + [Candle("2024-01-05", 10.0, 10.5, 9.5, 10.2)]
        assert "gaps" in _checks(validate_candles(candles))
        assert "gaps" not in _checks(validate_candles(candles, max_gap_days=2))


class TestNulls:
    def test_nan_values(self):
        df = candles_to_dataframe(_clean())
        df.loc[2, "close"] = np.nan
        issues = validate_dataframe(df)
        nulls = [i for i in issues if i.check == "nulls"]
        assert nulls and "close" in nulls[0].message

    def test_missing_column(self):
        df = pd.DataFrame({"date": ["2024-01-01"], "open": [1.0], "high": [1.0], "low": [1.0]})
        issues = validate_dataframe(df)
        assert any("Missing column: close" in i.message for i in issues)


class TestReport:
    def test_clean_report(self):
        assert "CLEAN" in CandleValidator().report([])

    def test_counts(self):
        candles = _clean()
        candles[1] = Candle("2024-01-02", 10.0, 9.0, 9.5, 9.2)
        validator = CandleValidator()
        issues = validator.validate(candles_to_dataframe(candles))
        report = validator.report(issues)
        assert "errors" in report
        assert "[row 1]" in report


class TestValidatedProvider:
    def test_passes_through(self):
        provider = ValidatedProvider(ListProvider(_clean(), "TEST"))
        assert len(list(provider)) == 5
        assert provider.symbol() == "TEST"

    def test_strict_raises_on_errors(self):
        candles = _clean()
        candles[1] = Candle("2024-01-02", 10.0, 9.0, 9.5, 9.2)
        provider = ValidatedProvider(ListProvider(candles), strict=True)
        with pytest.raises(ValueError, match="Data validation failed"):
            list(provider)

    def test_lenient_logs(self, caplog):
        candles = _clean()
        candles[1] = Candle("2024-01-02", 10.0, 9.0, 9.5, 9.2)
        provider = ValidatedProvider(ListProvider(candles))
        with caplog.at_level(logging.WARNING, logger="gridlab.data.validation"):
            assert len(list(provider)) == 5
        assert "Data validation issues" in caplog.text

    def test_strict_ignores_warnings(self):
        candles = _clean(2) + [Candle("2024-01-09", 10.0, 10.5, 9.5, 10.2)]
        provider = ValidatedProvider(ListProvider(candles), strict=True)
        assert len(list(provider)) == 3
