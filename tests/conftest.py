# tests/conftest.py
"""
Conftest for macd-signals-engine tests.
Price-series generators shared by unit and integration tests, plus an
optional NATS client (skipped when no server is reachable).
"""
import asyncio
import random

import pytest
import pytest_asyncio
from nats.aio.client import Client as NatsClient

from macd_engine.tracker import InstrumentTracker, TrackerConfig


# ------------------------- pytest.ini options -------------------------
def pytest_addoption(parser):
    # --- Infra ---
    parser.addini("nats_url", "NATS URL", default="nats://127.0.0.1:4222")

    # --- OUT (señales) ---
    parser.addini("signals_prefix", "Subject prefix OUT signals", default="test-signals")

    # --- Serie de precios sintética ---
    parser.addini("price_symbol", "Instrument id", default="the-open-network")
    parser.addini("price_n",      "N samples",     default="60")
    parser.addini("price_start",  "Start price",   default="5.25")
    parser.addini("price_seed",   "Seed",          default="1")


# ------------------------- cfg fixture -------------------------
@pytest.fixture(scope="session")
def cfg(pytestconfig):
    get = pytestconfig.getini
    return {
        "nats_url":       get("nats_url"),
        "signals_prefix": get("signals_prefix"),
        "symbol":         get("price_symbol"),
        "n":              int(get("price_n")),
        "price":          float(get("price_start")),
        "seed":           int(get("price_seed")),
    }


# ------------------------- NATS client -------------------------
@pytest_asyncio.fixture
async def nc(cfg):
    url = cfg["nats_url"]
    print(f"[nc] intentando conectar a {url} ...")
    client = NatsClient()
    last_err = None
    for attempt in range(1, 4):
        try:
            await asyncio.wait_for(
                client.connect(url, name="pytest-macd-signals", allow_reconnect=False,
                               max_reconnect_attempts=0),
                timeout=2.0,
            )
            print("[nc] conectado ✔")
            break
        except Exception as e:
            last_err = e
            print(f"[nc] fallo intento {attempt}: {repr(e)}")
            await asyncio.sleep(0.3)
    else:
        pytest.skip(f"[nc] no se pudo conectar a {url}: {repr(last_err)}")

    try:
        yield client
    finally:
        await client.drain()


# ------------------------- data generators -------------------------
def make_prices(n, price0=100.0, amplitude=0.5, pattern="randomwalk", seed=1):
    """Serie determinista de precios positivos."""
    rnd = random.Random(seed)
    price = float(price0)
    out = []
    for i in range(n):
        if pattern == "zigzag":
            step = (-amplitude, 0.0, amplitude)[i % 3]
        elif pattern == "randomwalk":
            step = rnd.uniform(-amplitude, amplitude)
        elif pattern == "up":
            step = amplitude
        elif pattern == "down":
            step = -amplitude
        else:
            step = 0.0
        out.append(round(price, 6))
        price = max(price + step, 1e-9)
    return out


@pytest.fixture
def make_prices_fn():
    return make_prices


@pytest.fixture
def tracker():
    return InstrumentTracker(TrackerConfig())
