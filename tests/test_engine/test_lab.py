"""Tests for the GridLab session facade."""

import json
from datetime import date
from pathlib import Path

import pytest

from gridlab.data.providers.csv import CSVProvider
from gridlab.data.types import Candle, LevelStatus
from gridlab.engine.lab import GridLab, LabConfig, _allocate
from gridlab.grid.types import AllocMode


FIXTURE_PATH = Path(__file__).parent.parent / "fixtures" / "LINKUSD_1d.csv"


class TestConfig:
    def test_defaults(self):
        cfg = LabConfig()
        assert cfg.range_low == 10.0
        assert cfg.range_high == 15.0
        assert cfg.grid_steps == 12
        assert cfg.total_contracts == 200
        assert cfg.alloc_mode is AllocMode.GEOMETRIC
        assert cfg.current_price == 13.25

    def test_from_dict_ignores_unknown_keys(self):
        lab = GridLab({"grid_steps": 5, "alloc_mode": "atr", "bogus": 1})
        assert lab.config.grid_steps == 5
        assert lab.config.alloc_mode is AllocMode.ATR

    def test_grid_params(self):
        params = LabConfig(grid_steps=7).grid_params
        assert params.grid_steps == 7
        assert params.growth_factor == 1.22

    def test_bad_mode_rejected(self):
        with pytest.raises(ValueError):
            LabConfig(alloc_mode="linear")


class TestLevels:
    def test_default_allocation(self):
        levels = GridLab().levels()
        assert len(levels) == 12
        assert sum(l.contracts for l in levels) == 200
        assert levels[0].price == 15.0

    def test_fills_follow_current_price(self):
        lab = GridLab()
        for level in lab.levels():
            assert level.filled == (13.25 <= level.price)

        lab.set_current_price(9.0)
        assert all(l.status == LevelStatus.FILLED for l in lab.levels())

    def test_allocation_memoized(self):
        _allocate.cache_clear()
        lab = GridLab()
        lab.levels()
        lab.set_current_price(12.0)
        lab.levels()
        assert _allocate.cache_info().hits >= 1

    def test_configure_regenerates(self):
        lab = GridLab()
        lab.configure(grid_steps=5, total_contracts=50)
        levels = lab.levels()
        assert len(levels) == 5
        assert sum(l.contracts for l in levels) == 50

    def test_degenerate_config(self):
        lab = GridLab({"range_low": 15, "range_high": 10})
        assert lab.levels() == []


class TestCandles:
    def test_seed_deterministic(self):
        a = GridLab().seed_candles(seed=7)
        b = GridLab().seed_candles(seed=7)
        assert a == b
        assert len(a) == 90

    def test_load_from_provider(self):
        lab = GridLab()
        candles = lab.load_candles(CSVProvider(FIXTURE_PATH))
        assert len(candles) == 20
        assert lab.candles[0].date == "2024-01-01"

    def test_add_and_clear(self):
        lab = GridLab()
        lab.add_candle(Candle("2024-01-01", 13, 13.5, 12.5, 13))
        assert len(lab.candles) == 1
        lab.clear_candles()
        assert lab.candles == []

    def test_scrub_to_clamps(self):
        lab = GridLab()
        candles = lab.seed_candles(seed=3)
        assert lab.scrub_to(999) == candles[-1].close
        assert lab.scrub_to(-5) == candles[0].close
        assert lab.config.current_price == candles[0].close

    def test_scrub_without_candles(self):
        lab = GridLab()
        assert lab.scrub_to(4) == 13.25

    def test_seed_moves_price_to_last_close(self):
        lab = GridLab()
        candles = lab.seed_candles(seed=1)
        assert lab.config.current_price == candles[-1].close
        assert lab.scrub_index == len(candles) - 1
        for level in lab.levels():
            assert level.filled == (candles[-1].close <= level.price)

    def test_seed_with_no_days_keeps_price(self):
        lab = GridLab({"seed_days": 0})
        assert lab.seed_candles(seed=1) == []
        assert lab.config.current_price == 13.25

    def test_add_default_candle_is_flat_next_day(self):
        lab = GridLab(candles=[Candle("2024-01-31", 13, 13.5, 12.5, 13)])
        lab.set_current_price(12.4)
        candle = lab.add_candle()
        assert candle == Candle("2024-02-01", 12.4, 12.4, 12.4, 12.4)
        assert lab.candles[-1] is candle

    def test_add_default_candle_without_history_uses_today(self):
        candle = GridLab().add_candle()
        assert candle.date == date.today().isoformat()
        assert candle.close == 13.25

    def test_delete_candle_steps_scrub_back(self):
        lab = GridLab()
        candles = list(lab.seed_candles(seed=4))
        removed = lab.delete_candle(10)
        assert removed == candles[10]
        assert len(lab.candles) == len(candles) - 1
        assert lab.scrub_index == len(candles) - 2

    def test_delete_after_scrub_keeps_position(self):
        lab = GridLab()
        lab.seed_candles(seed=4)
        lab.scrub_to(5)
        lab.delete_candle(20)
        assert lab.scrub_index == 5

    def test_delete_out_of_range(self):
        lab = GridLab()
        lab.seed_candles(seed=4)
        assert lab.delete_candle(500) is None
        assert len(lab.candles) == 90

    def test_draw_candle_two_clicks(self):
        lab = GridLab(candles=[Candle("2024-01-01", 13, 13.5, 12.5, 13)])

        opened = lab.draw_candle(12.0)
        assert opened == Candle("2024-01-02", 12.0, 12.0, 12.0, 12.0)
        assert lab.pending_open == 12.0
        assert lab.config.current_price == 13.25

        closed = lab.draw_candle(12.8)
        assert closed == Candle("2024-01-02", 12.0, 12.8, 12.0, 12.8)
        assert lab.candles[-1] == closed
        assert len(lab.candles) == 2
        assert lab.pending_open is None
        assert lab.config.current_price == 12.8
        assert lab.scrub_index == 1

    def test_draw_down_candle(self):
        lab = GridLab()
        lab.draw_candle(13.0)
        candle = lab.draw_candle(11.5)
        assert (candle.open, candle.high, candle.low, candle.close) == (13.0, 13.0, 11.5, 11.5)

    def test_clear_resets_drawing(self):
        lab = GridLab()
        lab.draw_candle(13.0)
        lab.clear_candles()
        assert lab.pending_open is None
        assert lab.scrub_index == 0
        assert lab.draw_candle(12.0).date == date.today().isoformat()


class TestOutputs:
    def test_series_lengths(self):
        lab = GridLab()
        lab.seed_candles(seed=1)
        assert len(lab.capital_series()) == 90
        assert len(lab.roi_series()) == 90

    def test_metrics_without_candles(self):
        metrics = GridLab().metrics()
        assert metrics.total_return == 0.0
        assert metrics.active_grids == 12

    def test_metrics_with_candles(self):
        lab = GridLab()
        lab.load_candles(CSVProvider(FIXTURE_PATH))
        metrics = lab.metrics()
        assert metrics.max_drawdown >= 0.0
        assert metrics.avg_spread > 0.0

    def test_export_writes_file(self, tmp_path):
        lab = GridLab()
        lab.seed_candles(seed=2)
        path = tmp_path / "state.json"
        doc = lab.export(path)
        assert path.exists()
        on_disk = json.loads(path.read_text())
        assert on_disk["symbol"] == "LINKUSD (Coin-M)"
        assert len(on_disk["gridLevels"]) == 12
        assert doc["candles"] == on_disk["candles"]

    def test_export_into_directory(self, tmp_path):
        lab = GridLab()
        doc = lab.export(tmp_path)
        day = doc["exportedAt"][:10]
        path = tmp_path / f"grid-lab-LINKUSD--Coin-M--{day}.json"
        assert path.exists()
        assert json.loads(path.read_text())["symbol"] == "LINKUSD (Coin-M)"

    def test_export_without_path(self):
        doc = GridLab().export()
        assert doc["candles"] == []

    def test_summary(self):
        lab = GridLab()
        text = lab.summary()
        assert "LINKUSD (Coin-M)" in text
        assert "Grid Performance" in text
