from __future__ import annotations
import asyncio, os

import httpx
from nats.aio.client import Client as NATS

from macd_engine.config import load_settings
from macd_engine.feed.coingecko import CoinGeckoFeed, FeedError
from macd_engine.logs.logger import get_logger, LOG_LEVELS
from macd_engine.nats.publisher import SignalPublisher
from macd_engine.runner import SignalRunner
from macd_engine.tracker import InstrumentTracker


async def main():
    ini = os.getenv("ENGINE_INI", "settings.ini")
    settings = load_settings(ini)
    log = get_logger("macd_engine", log_dir=settings.log_dir,
                     console_level=LOG_LEVELS[settings.log_level])

    # Componentes
    nc = None
    publisher = None
    if settings.nats_enabled:
        nc = NATS()
        await nc.connect(servers=[settings.nats_url])
        log.info(f"[NATS] Conectado → {settings.nats_url}")
        publisher = SignalPublisher(nc, out_prefix=settings.out_prefix)

    tracker = InstrumentTracker(settings.engine)
    feed = CoinGeckoFeed(
        base_url=settings.feed.base_url,
        vs_currency=settings.feed.vs_currency,
        api_key=settings.feed.api_key,
        timeout=settings.feed.timeout,
    )
    runner = SignalRunner(settings.feed, feed, tracker, publisher)

    try:
        try:
            await runner.load_universe()
        except (FeedError, httpx.HTTPError) as e:
            log.error(f"Error fetching all coins: {e}", exc_info=True)
            return
        await runner.run()
    finally:
        await feed.aclose()
        if nc is not None:
            await nc.drain()
            log.info("[NATS] cerrado")

def run():
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        pass

if __name__ == "__main__":
    run()
