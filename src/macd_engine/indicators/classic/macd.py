from __future__ import annotations
from dataclasses import dataclass
from typing import Sequence

from ...core.errors import InvalidInput
from ...core.types import MacdSeries
from ...core.utils import check_period
from .ema import ema_series


@dataclass(slots=True, frozen=True)
class MACDConfig:
    fast: int = 12
    slow: int = 26
    signal: int = 9

    def __post_init__(self) -> None:
        check_period(self.fast, "fast")
        check_period(self.slow, "slow")
        check_period(self.signal, "signal")
        if self.fast >= self.slow:
            raise InvalidInput(f"fast ({self.fast}) must be < slow ({self.slow})")

    @property
    def default_min_eval(self) -> int:
        # EMA lenta + EMA de la señal
        return self.slow + self.signal


def macd_series(prices: Sequence[float], cfg: MACDConfig = MACDConfig()) -> MacdSeries:
    """
    MACD clásico (EMA12, EMA26, SIGNAL9) recalculado sobre toda la serie.
    Ambas líneas tienen la misma longitud que `prices`; los primeros valores
    arrastran el sesgo de la semilla y es el llamador quien decide desde
    cuántas muestras son utilizables.
    """
    if len(prices) == 0:
        raise InvalidInput("MACD requires a non-empty price sequence")

    ema_fast = ema_series(prices, cfg.fast)
    ema_slow = ema_series(prices, cfg.slow)
    macd_line = [f - s for f, s in zip(ema_fast, ema_slow)]
    signal_line = ema_series(macd_line, cfg.signal)
    return MacdSeries(macd_line, signal_line)
