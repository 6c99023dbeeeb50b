from __future__ import annotations
from typing import List, Sequence

from ...core.errors import InvalidInput
from ...core.utils import check_period, ema_step


def ema_series(prices: Sequence[float], period: int) -> List[float]:
    """
    EMA sobre toda la serie, un valor por muestra.
    Semilla: ema[0] = prices[0] (sin warm-up por SMA).
    """
    check_period(period)
    if len(prices) == 0:
        raise InvalidInput("EMA requires a non-empty price sequence")

    out: List[float] = []
    prev = None
    for x in prices:
        prev = ema_step(prev, float(x), period)
        out.append(prev)
    return out
