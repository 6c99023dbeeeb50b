from __future__ import annotations
import asyncio
import logging
from typing import Dict, List, Optional, Protocol, Sequence

import httpx

from .config import FeedSettings
from .core.errors import InvalidInput
from .core.types import SignalEvent
from .feed.coingecko import FeedError, filter_coins_by_platform
from .schemas import Coin
from .tracker import InstrumentTracker

log = logging.getLogger("macd_engine.runner")


class PriceFeed(Protocol):
    async def fetch_all_coins(self) -> List[Coin]: ...
    async def fetch_prices(self, coin_ids: Sequence[str]) -> Dict[str, float]: ...


class SignalSink(Protocol):
    async def publish_signal(self, event: SignalEvent, ticker: Optional[str] = None) -> bool: ...


def batched(items: Sequence[str], size: int) -> List[List[str]]:
    return [list(items[i:i + size]) for i in range(0, len(items), size)]


class SignalRunner:
    """
    Bucle de sondeo:
      - carga el universo (monedas de una plataforma)
      - cada ciclo pide precios por lotes y alimenta el tracker
      - registra y publica los cruces
    Toda la espera (rate limit, intervalo de sondeo) vive aquí, nunca en el tracker.
    """
    def __init__(self, feed_cfg: FeedSettings, feed: PriceFeed,
                 tracker: InstrumentTracker, publisher: Optional[SignalSink] = None):
        self.cfg = feed_cfg
        self.feed = feed
        self.tracker = tracker
        self.publisher = publisher
        self.coins: Dict[str, Coin] = {}

    async def load_universe(self) -> List[Coin]:
        all_coins = await self.feed.fetch_all_coins()
        coins = filter_coins_by_platform(all_coins, self.cfg.platform)
        self.coins = {c.id: c for c in coins}
        log.info(f"Found {len(coins)} coins on {self.cfg.platform}")
        return coins

    async def poll_once(self) -> List[SignalEvent]:
        """Un ciclo completo sobre el universo. Devuelve los eventos con cruce."""
        fired: List[SignalEvent] = []
        batches = batched(list(self.coins), self.cfg.batch_size)
        for n, ids in enumerate(batches):
            try:
                prices = await self.feed.fetch_prices(ids)
            except (FeedError, httpx.HTTPError) as e:
                log.error(f"Error fetching prices for batch {n + 1}/{len(batches)}: {e!r}", exc_info=True)
                prices = {}

            for coin_id in ids:
                price = prices.get(coin_id)
                if price is None:
                    log.debug(f"No price data for {coin_id}")
                    continue
                event = self._on_price(coin_id, price)
                if event is not None and event.side is not None:
                    fired.append(event)
                    await self._dispatch(event)

            if n < len(batches) - 1 and self.cfg.request_delay > 0:
                await asyncio.sleep(self.cfg.request_delay)
        return fired

    def _on_price(self, coin_id: str, price: float) -> Optional[SignalEvent]:
        ticker = self._ticker(coin_id)
        try:
            event = self.tracker.on_sample(coin_id, price)
        except InvalidInput as e:
            log.error(f"Rejected price for {ticker} ({coin_id}): {e}")
            return None
        log.debug(f"Price data found for {ticker}: ${price} "
                  f"(history {self.tracker.history_len(coin_id)}/{self.tracker.min_eval_length})")
        if event is not None:
            log.debug(f"MACD {ticker}: macd={event.macd:.10g} signal={event.signal:.10g} hist={event.hist:.10g}")
        return event

    def _ticker(self, coin_id: str) -> str:
        coin = self.coins.get(coin_id)
        return coin.symbol if coin is not None else coin_id

    async def _dispatch(self, event: SignalEvent) -> None:
        ticker = self._ticker(event.symbol)
        log.info(f"{event.side} signal for {ticker} ({event.symbol}) @ {event.price}")
        if self.publisher is None:
            return
        try:
            await self.publisher.publish_signal(event, ticker)
        except Exception as e:
            # un fallo de publicación no detiene el sondeo
            log.error(f"[publish] error for {event.symbol}: {e}", exc_info=True)

    async def run(self, max_cycles: Optional[int] = None) -> None:
        if not self.coins:
            await self.load_universe()
        cycle = 0
        try:
            while max_cycles is None or cycle < max_cycles:
                cycle += 1
                fired = await self.poll_once()
                log.debug(f"cycle {cycle} done, {len(fired)} signals")
                if max_cycles is None or cycle < max_cycles:
                    await asyncio.sleep(self.cfg.poll_interval)
        except asyncio.CancelledError:
            log.info("runner cancelled")
            raise
