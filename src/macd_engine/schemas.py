from typing import Dict, Literal, Optional

from pydantic import BaseModel, Field


class Coin(BaseModel):
    """Entrada de /coins/list?include_platform=true."""
    id: str
    symbol: str
    name: str = ""
    platforms: Dict[str, Optional[str]] = Field(default_factory=dict)


class SignalOut(BaseModel):
    symbol: str
    coin_id: str
    side: Literal["buy", "sell"]
    seq: int
    price: float
    macd: float
    signal: float
    hist: float
    ts: int  # epoch millis
