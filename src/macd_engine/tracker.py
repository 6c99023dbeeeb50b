from __future__ import annotations
import threading
from dataclasses import dataclass, field
from typing import Dict, Literal, Optional, Tuple

from .core.errors import InvalidInput
from .core.history import PriceHistory, DEFAULT_CAPACITY
from .core.types import SignalEvent
from .core.utils import is_finite
from .indicators.classic.macd import MACDConfig, macd_series
from .pipelines.macd import MacdCalc
from .signals.crossover import classify, detect_crossover

Mode = Literal["recompute", "incremental"]


@dataclass(slots=True)
class TrackerConfig:
    fast: int = 12
    slow: int = 26
    signal: int = 9
    capacity: int = DEFAULT_CAPACITY
    # None -> slow + signal. Más bajo = señales antes pero más ruidosas
    # (sesgo de la semilla de las EMAs); más alto = más estables y tardías.
    min_eval_length: Optional[int] = None
    mode: Mode = "recompute"

    def __post_init__(self) -> None:
        macd_cfg = self.macd()  # valida periodos
        if self.min_eval_length is None:
            self.min_eval_length = macd_cfg.default_min_eval
        if isinstance(self.min_eval_length, bool) or not isinstance(self.min_eval_length, int) \
                or self.min_eval_length < 2:
            raise InvalidInput(f"min_eval_length must be an integer >= 2, got {self.min_eval_length!r}")
        if isinstance(self.capacity, bool) or not isinstance(self.capacity, int) \
                or self.capacity < self.min_eval_length:
            raise InvalidInput(
                f"capacity ({self.capacity!r}) must be >= min_eval_length ({self.min_eval_length})"
            )
        if self.mode not in ("recompute", "incremental"):
            raise InvalidInput(f"unknown tracker mode: {self.mode!r}")

    def macd(self) -> MACDConfig:
        return MACDConfig(fast=self.fast, slow=self.slow, signal=self.signal)


@dataclass
class _Instrument:
    history: PriceHistory
    # solo en modo incremental; vive y muere con la historia
    calc: Optional[MacdCalc] = None
    lock: threading.Lock = field(default_factory=threading.Lock)


class InstrumentTracker:
    """
    Orquestador: una PriceHistory por instrumento, alimentada muestra a muestra.

    on_sample() devuelve:
      * None mientras no haya historia suficiente (min_eval_length), o
      * SignalEvent con side = "buy" / "sell" / None (evaluado, sin cruce).

    Cada instrumento (historia + estado EMA incremental) se modifica bajo su
    propio lock: se puede llamar desde varios hilos y instrumentos distintos
    nunca se bloquean entre sí. No hace I/O ni logging.

    En modo incremental el estado EMA solo se usa mientras la ventana no haya
    expulsado muestras; desde la primera expulsión se recalcula sobre la
    ventana, igual que en modo recompute.
    """
    def __init__(self, cfg: Optional[TrackerConfig] = None):
        self.cfg = cfg or TrackerConfig()
        self._macd_cfg = self.cfg.macd()
        self._instruments: Dict[str, _Instrument] = {}
        self._registry_lock = threading.Lock()

    @property
    def min_eval_length(self) -> int:
        return self.cfg.min_eval_length

    def _instrument(self, symbol: str) -> _Instrument:
        inst = self._instruments.get(symbol)
        if inst is None:
            with self._registry_lock:
                inst = self._instruments.get(symbol)
                if inst is None:
                    calc = None
                    if self.cfg.mode == "incremental":
                        calc = MacdCalc(self.cfg.fast, self.cfg.slow, self.cfg.signal)
                    inst = _Instrument(PriceHistory(self.cfg.capacity), calc)
                    self._instruments[symbol] = inst
        return inst

    def on_sample(self, symbol: str, price: float) -> Optional[SignalEvent]:
        if not isinstance(symbol, str) or not symbol:
            raise InvalidInput(f"instrument id must be a non-empty string, got {symbol!r}")
        if isinstance(price, bool) or not is_finite(price):
            raise InvalidInput(f"price for {symbol} must be a finite number, got {price!r}")
        price = float(price)

        inst = self._instrument(symbol)
        with inst.lock:
            inst.history.push(price)
            if inst.calc is not None:
                if inst.history.total <= inst.history.capacity:
                    return self._eval_incremental(symbol, inst, price)
                # ventana deslizando: el estado incremental ya no equivale
                inst.calc = None
            if len(inst.history) < self.cfg.min_eval_length:
                return None
            return self._eval_recompute(symbol, inst.history, price)

    def _eval_recompute(self, symbol: str, history: PriceHistory, price: float) -> SignalEvent:
        series = macd_series(history.values(), self._macd_cfg)
        side = detect_crossover(series.macd_line, series.signal_line)
        return SignalEvent(symbol=symbol, side=side, seq=history.total, price=price,
                           macd=series.macd_line[-1], signal=series.signal_line[-1],
                           hist=series.hist[-1])

    def _eval_incremental(self, symbol: str, inst: _Instrument, price: float) -> Optional[SignalEvent]:
        # el estado EMA avanza siempre, también durante el warm-up
        pt = inst.calc.on_price(symbol, price)
        if len(inst.history) < self.cfg.min_eval_length:
            return None
        side = classify(pt["prev_macd"], pt["prev_signal"], pt["macd"], pt["signal"])
        return SignalEvent(symbol=symbol, side=side, seq=inst.history.total, price=price,
                           macd=pt["macd"], signal=pt["signal"], hist=pt["hist"])

    # ---- diagnóstico ----

    def history(self, symbol: str) -> Tuple[float, ...]:
        inst = self._instruments.get(symbol)
        if inst is None:
            return ()
        with inst.lock:
            return tuple(inst.history.values())

    def history_len(self, symbol: str) -> int:
        inst = self._instruments.get(symbol)
        return len(inst.history) if inst is not None else 0

    def symbols(self) -> Tuple[str, ...]:
        with self._registry_lock:
            return tuple(self._instruments)

    def reset(self, symbol: Optional[str] = None) -> None:
        """
        Olvida uno o todos los instrumentos. Historia y estado EMA se descartan
        juntos; una muestra en curso para ese instrumento queda en el objeto
        descartado y la siguiente empieza una historia nueva.
        """
        with self._registry_lock:
            if symbol is None:
                self._instruments.clear()
            else:
                self._instruments.pop(symbol, None)
