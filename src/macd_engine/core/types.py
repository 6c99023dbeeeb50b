from __future__ import annotations
from dataclasses import dataclass
from typing import Literal, NamedTuple, Optional, List


# ==== Datos base y tipados ====

Side = Literal["buy", "sell"]  # None = sin cruce


class MacdSeries(NamedTuple):
    """Par (macd, señal), misma longitud que la serie de precios de entrada."""
    macd_line: List[float]
    signal_line: List[float]

    @property
    def hist(self) -> List[float]:
        return [m - s for m, s in zip(self.macd_line, self.signal_line)]


@dataclass(slots=True)
class SignalEvent:
    """
    Resultado de una evaluación para un instrumento.
    side=None significa que se evaluó pero no hubo cruce.
    """
    symbol: str
    side: Optional[Side]
    seq: int          # muestras aceptadas para el instrumento (incluida ésta)
    price: float
    macd: float
    signal: float
    hist: float
