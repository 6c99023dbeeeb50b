# src/macd_engine/nats/publisher.py
from __future__ import annotations
import time
from typing import Optional

import orjson
from nats.aio.client import Client as NATS

from ..core.types import SignalEvent
from ..schemas import SignalOut


def to_payload(event: SignalEvent, ticker: Optional[str] = None, ts: Optional[int] = None) -> SignalOut:
    # event.symbol es la clave del tracker (id de la moneda)
    return SignalOut(
        symbol=ticker or event.symbol,
        coin_id=event.symbol,
        side=event.side,
        seq=event.seq,
        price=event.price,
        macd=event.macd,
        signal=event.signal,
        hist=event.hist,
        ts=int(time.time() * 1000) if ts is None else ts,
    )


class SignalPublisher:
    """
    Publica las señales de cruce MACD en NATS.
    No depende de la lógica de cálculo (separación clara de responsabilidades).
    """

    def __init__(self, nc: NATS, out_prefix: str = "signals"):
        self.nc = nc
        self.out_prefix = out_prefix.rstrip(".")

    def subject(self, side: str, coin_id: str) -> str:
        # los puntos romperían la jerarquía de subjects
        return f"{self.out_prefix}.macd.{side}.{coin_id.replace('.', '_')}"

    async def publish_signal(self, event: SignalEvent, ticker: Optional[str] = None) -> bool:
        """
        Publica solo eventos con cruce (side buy/sell). Devuelve si se publicó.
        """
        if event.side is None:
            return False
        payload = to_payload(event, ticker)
        await self.nc.publish(self.subject(event.side, event.symbol),
                              orjson.dumps(payload.model_dump()))
        return True
