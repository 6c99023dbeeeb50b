# src/macd_engine/feed/coingecko.py
from __future__ import annotations
import logging
from typing import Dict, Iterable, List, Optional, Sequence

import httpx
from pydantic import ValidationError

from ..core.utils import safe_float
from ..schemas import Coin

log = logging.getLogger("macd_engine.feed")


class FeedError(RuntimeError):
    """Respuesta no válida del proveedor de precios."""
    def __init__(self, message: str, status: Optional[int] = None, body: str = ""):
        super().__init__(message)
        self.status = status
        self.body = body


def filter_coins_by_platform(coins: Iterable[Coin], platform: str) -> List[Coin]:
    filtered = [c for c in coins if platform in c.platforms]
    log.debug(f"Found {len(filtered)} coins for platform {platform}")
    return filtered


class CoinGeckoFeed:
    """
    Cliente async de CoinGecko:
      - lista de monedas (con plataformas) para montar el universo
      - precio spot por lotes de ids
    No sabe nada de indicadores; devuelve floats por id.
    """
    def __init__(self, base_url: str = "https://api.coingecko.com/api/v3",
                 vs_currency: str = "usd", api_key: Optional[str] = None,
                 timeout: float = 10.0, client: Optional[httpx.AsyncClient] = None):
        headers = {"accept": "application/json"}
        if api_key:
            headers["x-cg-demo-api-key"] = api_key
        self.vs_currency = vs_currency
        self._owns_client = client is None
        self.client = client or httpx.AsyncClient(base_url=base_url.rstrip("/"),
                                                  headers=headers, timeout=timeout)

    async def aclose(self) -> None:
        if self._owns_client:
            await self.client.aclose()

    async def __aenter__(self) -> "CoinGeckoFeed":
        return self

    async def __aexit__(self, *exc) -> None:
        await self.aclose()

    async def _get_json(self, path: str, params: Dict[str, str]):
        resp = await self.client.get(path, params=params)
        if not resp.is_success:
            body = resp.text
            log.error(f"GET {path} failed. Status: {resp.status_code}, Body: {body}")
            raise FeedError(f"GET {path} failed with status {resp.status_code}",
                            status=resp.status_code, body=body)
        try:
            return resp.json()
        except ValueError as e:
            raise FeedError(f"GET {path} returned invalid JSON: {e}",
                            status=resp.status_code, body=resp.text) from e

    async def fetch_all_coins(self) -> List[Coin]:
        log.debug("Fetching all coins from CoinGecko")
        data = await self._get_json("/coins/list", {"include_platform": "true"})
        if not isinstance(data, list):
            raise FeedError("coins list: expected a JSON array")
        coins: List[Coin] = []
        for raw in data:
            try:
                coins.append(Coin.model_validate(raw))
            except ValidationError as e:
                log.debug(f"Skipping malformed coin entry {raw!r}: {e}")
        log.debug(f"Successfully fetched {len(coins)} coins")
        return coins

    async def fetch_prices(self, coin_ids: Sequence[str]) -> Dict[str, float]:
        """
        Precio spot para un lote de ids. Los ids ausentes en la respuesta o sin
        precio numérico no aparecen en el resultado.
        """
        if not coin_ids:
            return {}
        data = await self._get_json("/simple/price", {
            "ids": ",".join(coin_ids),
            "vs_currencies": self.vs_currency,
        })
        if not isinstance(data, dict):
            raise FeedError("simple/price: expected a JSON object")

        out: Dict[str, float] = {}
        for coin_id in coin_ids:
            entry = data.get(coin_id)
            if not isinstance(entry, dict):
                log.debug(f"Coin {coin_id} not found in API response.")
                continue
            price = safe_float(entry.get(self.vs_currency))
            if price is None:
                log.debug(f"Price for {coin_id} not found in expected format.")
                continue
            out[coin_id] = price
        return out
