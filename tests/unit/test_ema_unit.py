# tests/unit/test_ema_unit.py
import pytest

from macd_engine.core.errors import InvalidInput
from macd_engine.core.utils import ema_step
from macd_engine.indicators.classic.ema import ema_series


@pytest.mark.parametrize("period", [1, 2, 9, 12, 26, 200])
def test_ema_seed_is_first_price(period):
    assert ema_series([42.5], period) == [42.5]


def test_ema_preserves_length():
    for n in (1, 2, 7, 100):
        xs = [float(i) for i in range(n)]
        assert len(ema_series(xs, 12)) == n


def test_ema_hand_computed_values():
    # k = 2 / (3 + 1) = 0.5
    assert ema_series([1.0, 2.0, 3.0], 3) == [1.0, 1.5, 2.25]


def test_ema_period_one_tracks_prices():
    xs = [3.0, 1.0, 4.0, 1.0, 5.0]
    assert ema_series(xs, 1) == xs


def test_ema_constant_input_stays_constant():
    assert ema_series([7.25] * 50, 26) == [7.25] * 50


def test_ema_converges_towards_constant_level():
    xs = [0.0] + [10.0] * 100
    ema = ema_series(xs, 12)
    errors = [abs(10.0 - e) for e in ema[1:]]
    assert all(b <= a for a, b in zip(errors, errors[1:]))
    assert errors[-1] < 1e-5


def test_ema_matches_step_recurrence():
    xs = [10.0, 11.5, 9.75, 12.0, 12.25]
    prev = None
    expected = []
    for x in xs:
        prev = ema_step(prev, x, 5)
        expected.append(prev)
    assert ema_series(xs, 5) == expected


def test_ema_empty_input_is_invalid():
    with pytest.raises(InvalidInput):
        ema_series([], 12)


@pytest.mark.parametrize("period", [0, -1, 2.5, True])
def test_ema_bad_period_is_invalid(period):
    with pytest.raises(InvalidInput):
        ema_series([1.0, 2.0], period)


def test_invalid_input_is_a_value_error():
    with pytest.raises(ValueError):
        ema_series([], 12)
