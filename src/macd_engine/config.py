from __future__ import annotations
import configparser
import os
from dataclasses import dataclass, field
from typing import Optional

from .logs.logger import LOG_LEVELS
from .tracker import TrackerConfig

DEFAULT_INI = "settings.ini"


@dataclass(slots=True)
class FeedSettings:
    base_url: str = "https://api.coingecko.com/api/v3"
    platform: str = "the-open-network"
    vs_currency: str = "usd"
    api_key: Optional[str] = None
    timeout: float = 10.0
    batch_size: int = 50          # ids por petición /simple/price
    request_delay: float = 1.0    # segundos entre lotes (rate limit)
    poll_interval: float = 60.0   # segundos entre ciclos (1 vela = 1 ciclo)


@dataclass(slots=True)
class Settings:
    engine: TrackerConfig = field(default_factory=TrackerConfig)
    feed: FeedSettings = field(default_factory=FeedSettings)
    nats_enabled: bool = False
    nats_url: str = "nats://127.0.0.1:4222"
    out_prefix: str = "signals"
    log_level: str = "info"
    log_dir: Optional[str] = None


def _opt_int(sec: configparser.SectionProxy, key: str) -> Optional[int]:
    raw = sec.get(key, fallback="").strip()
    return int(raw) if raw else None


def load_settings(ini_path: Optional[str] = None) -> Settings:
    """
    Lee settings.ini (o ENGINE_INI). Todas las claves tienen valor por defecto;
    el fichero sí debe existir.
    """
    ini_path = ini_path or os.getenv("ENGINE_INI", DEFAULT_INI)
    cfg = configparser.ConfigParser()
    if not cfg.read(ini_path):
        raise FileNotFoundError(f"No se pudo leer el INI: {ini_path}")

    for section in ("Engine", "Feed", "NATS", "SignalsOut", "Logging"):
        if not cfg.has_section(section):
            cfg.add_section(section)

    eng = cfg["Engine"]
    engine = TrackerConfig(
        fast=eng.getint("fast", fallback=12),
        slow=eng.getint("slow", fallback=26),
        signal=eng.getint("signal", fallback=9),
        capacity=eng.getint("capacity", fallback=100),
        min_eval_length=_opt_int(eng, "min_eval_length"),
        mode=eng.get("mode", fallback="recompute").strip(),
    )

    f = cfg["Feed"]
    defaults = FeedSettings()
    feed = FeedSettings(
        base_url=f.get("base_url", fallback=defaults.base_url).rstrip("/"),
        platform=f.get("platform", fallback=defaults.platform),
        vs_currency=f.get("vs_currency", fallback=defaults.vs_currency),
        api_key=f.get("api_key", fallback="").strip() or os.getenv("COINGECKO_API_KEY") or None,
        timeout=f.getfloat("timeout", fallback=defaults.timeout),
        batch_size=f.getint("batch_size", fallback=defaults.batch_size),
        request_delay=f.getfloat("request_delay", fallback=defaults.request_delay),
        poll_interval=f.getfloat("poll_interval", fallback=defaults.poll_interval),
    )
    if feed.batch_size < 1:
        raise ValueError(f"[Feed] batch_size must be >= 1, got {feed.batch_size}")

    log_level = cfg["Logging"].get("level", fallback="info").strip().lower()
    if log_level not in LOG_LEVELS:
        raise ValueError(f"[Logging] level must be one of {sorted(LOG_LEVELS)}, got {log_level!r}")

    return Settings(
        engine=engine,
        feed=feed,
        nats_enabled=cfg["NATS"].getboolean("enabled", fallback=False),
        nats_url=cfg["NATS"].get("url", fallback="nats://127.0.0.1:4222"),
        out_prefix=cfg["SignalsOut"].get("prefix", fallback="signals"),
        log_level=log_level,
        log_dir=cfg["Logging"].get("dir", fallback="").strip() or None,
    )
