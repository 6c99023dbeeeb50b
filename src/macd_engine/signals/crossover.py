from __future__ import annotations
from typing import Optional, Sequence

from ..core.errors import InvalidInput
from ..core.types import Side


def classify(macd_prev: float, sig_prev: float, macd_last: float, sig_last: float) -> Optional[Side]:
    """
    Regla de cruce sobre los dos últimos puntos.
    El punto previo admite igualdad (<=, >=); el actual exige desigualdad estricta.
    """
    if macd_prev <= sig_prev and macd_last > sig_last:
        return "buy"
    if macd_prev >= sig_prev and macd_last < sig_last:
        return "sell"
    return None


def detect_crossover(macd_line: Sequence[float], signal_line: Sequence[float]) -> Optional[Side]:
    n = len(macd_line)
    if n != len(signal_line):
        raise InvalidInput(
            f"macd and signal lines differ in length ({n} != {len(signal_line)})"
        )
    if n < 2:
        raise InvalidInput(f"crossover needs at least 2 points, got {n}")
    return classify(macd_line[-2], signal_line[-2], macd_line[-1], signal_line[-1])
