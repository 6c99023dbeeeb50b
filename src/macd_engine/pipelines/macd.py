# src/macd_engine/pipelines/macd.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Dict, TypedDict, cast

from ..core.utils import ema_step, check_period
from ..core.errors import InvalidInput


class MacdPoint(TypedDict):
    macd: float
    signal: float
    hist: float
    prev_macd: Optional[float]
    prev_signal: Optional[float]


@dataclass
class _MacdState:
    ema_fast: Optional[float] = None
    ema_slow: Optional[float] = None
    signal: Optional[float] = None
    macd: Optional[float] = None


class MacdCalc:
    """
    MACD incremental por símbolo: solo guarda la última EMA rápida, lenta y de
    señal. Aplica la misma recurrencia que macd_series(), así que coincide
    valor a valor con el recálculo completo mientras la ventana de historia no
    haya expulsado ninguna muestra (después, el recálculo re-siembra desde la
    muestra más antigua retenida y este estado sigue con la historia entera).
    """
    def __init__(self, fast: int = 12, slow: int = 26, signal: int = 9):
        check_period(fast, "fast")
        check_period(slow, "slow")
        check_period(signal, "signal")
        if fast >= slow:
            raise InvalidInput("fast must be < slow")
        self.fast = fast
        self.slow = slow
        self.signal_period = signal
        self._state: Dict[str, _MacdState] = {}

    def on_price(self, symbol: str, close: float) -> MacdPoint:
        s = self._state.setdefault(symbol, _MacdState())

        s.ema_fast = ema_step(s.ema_fast, close, self.fast)
        s.ema_slow = ema_step(s.ema_slow, close, self.slow)
        macd_val = s.ema_fast - s.ema_slow
        signal_val = ema_step(s.signal, macd_val, self.signal_period)

        prev_macd, prev_signal = s.macd, s.signal
        s.macd, s.signal = macd_val, signal_val

        return cast(MacdPoint, {"macd": float(macd_val),
                                "signal": float(signal_val),
                                "hist": float(macd_val - signal_val),
                                "prev_macd": prev_macd,
                                "prev_signal": prev_signal})

