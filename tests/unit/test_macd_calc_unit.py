# tests/unit/test_macd_calc_unit.py
import pytest

from macd_engine.core.errors import InvalidInput
from macd_engine.indicators.classic.macd import MACDConfig, macd_series
from macd_engine.pipelines.macd import MacdCalc


def test_incremental_equals_full_recompute(make_prices_fn):
    prices = make_prices_fn(120, seed=9)
    calc = MacdCalc(12, 26, 9)
    points = [calc.on_price("X", p) for p in prices]
    full = macd_series(prices, MACDConfig())
    assert [p["macd"] for p in points] == full.macd_line
    assert [p["signal"] for p in points] == full.signal_line
    assert [p["hist"] for p in points] == full.hist


def test_first_point_has_no_previous():
    calc = MacdCalc()
    pt = calc.on_price("X", 10.0)
    assert pt["prev_macd"] is None and pt["prev_signal"] is None
    assert pt["macd"] == 0.0 and pt["signal"] == 0.0


def test_previous_point_is_carried():
    calc = MacdCalc()
    a = calc.on_price("X", 10.0)
    b = calc.on_price("X", 11.0)
    assert b["prev_macd"] == a["macd"]
    assert b["prev_signal"] == a["signal"]


def test_state_is_per_symbol():
    calc = MacdCalc()
    calc.on_price("X", 10.0)
    calc.on_price("X", 20.0)
    y = calc.on_price("Y", 5.0)
    assert y["prev_macd"] is None
    assert y["macd"] == 0.0


@pytest.mark.parametrize("args", [(0, 26, 9), (26, 12, 9), (12, 26, 0)])
def test_bad_periods(args):
    with pytest.raises(InvalidInput):
        MacdCalc(*args)
