from __future__ import annotations
import math
from typing import Optional

from .errors import InvalidInput


# ========= helpers numéricos =========

def is_finite(x) -> bool:
    try:
        return math.isfinite(float(x))
    except (TypeError, ValueError):
        return False

def safe_float(x, default: float | None = None) -> Optional[float]:
    try:
        v = float(x)
        return v if math.isfinite(v) else default
    except (TypeError, ValueError):
        return default

def check_period(period: int, name: str = "period") -> int:
    if isinstance(period, bool) or not isinstance(period, int) or period < 1:
        raise InvalidInput(f"{name} must be an integer >= 1, got {period!r}")
    return period


# ========= medias exponenciales =========

def ema_multiplier(period: int) -> float:
    return 2.0 / (period + 1.0)

def ema_step(prev: float | None, x: float, period: int) -> float:
    """
    Paso de EMA con periodo N (k = 2/(N+1)): (x - prev) * k + prev.
    Si prev es None -> devuelve x (semilla).
    """
    if prev is None:
        return x
    return (x - prev) * ema_multiplier(period) + prev
