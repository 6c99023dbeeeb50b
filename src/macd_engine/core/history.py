from __future__ import annotations
from typing import List

from .errors import InvalidInput

DEFAULT_CAPACITY = 100


class PriceHistory:
    """
    Ventana deslizante FIFO de precios para un instrumento (buffer circular).
    - push(): añade al final; si está llena, expulsa la muestra más antigua.
    - values(): copia en orden cronológico (la más antigua primero).
    """
    __slots__ = ("capacity", "_buf", "_i", "_count", "_total")

    def __init__(self, capacity: int = DEFAULT_CAPACITY):
        if isinstance(capacity, bool) or not isinstance(capacity, int) or capacity < 1:
            raise InvalidInput(f"history capacity must be an integer >= 1, got {capacity!r}")
        self.capacity = capacity
        self._buf = [0.0] * capacity
        self._i = 0          # próxima posición de escritura
        self._count = 0
        self._total = 0

    def push(self, x: float) -> None:
        self._buf[self._i] = float(x)
        self._i = (self._i + 1) % self.capacity
        self._count = min(self._count + 1, self.capacity)
        self._total += 1

    def values(self) -> List[float]:
        if self._count < self.capacity:
            return self._buf[: self._count]
        # orden cronológico
        i = self._i
        return self._buf[i:] + self._buf[:i]

    @property
    def total(self) -> int:
        """Muestras recibidas desde la creación (incluidas las expulsadas)."""
        return self._total

    def __len__(self) -> int:
        return self._count
