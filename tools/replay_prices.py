#!/usr/bin/env python3
"""
Reproduce offline una serie de precios a través del tracker y vuelca los eventos.

Entrada: JSONL ({"symbol": "...", "price": ...} por línea) o CSV con columnas symbol,price.

Uso:
    python tools/replay_prices.py prices.jsonl events.jsonl
    python tools/replay_prices.py prices.csv events.jsonl --min-eval 26 --all
"""
import argparse
import csv
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Tuple

import orjson

# Asegurar que el path del proyecto está en sys.path
import sys

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from macd_engine.tracker import InstrumentTracker, TrackerConfig


def read_samples(path: Path) -> Iterator[Tuple[str, float]]:
    if path.suffix.lower() == ".csv":
        with path.open(newline="") as f:
            for row in csv.DictReader(f):
                yield str(row["symbol"]), float(row["price"])
        return
    with path.open("rb") as f:
        for line in f:
            line = line.strip()
            if not line:
                continue
            d = orjson.loads(line)
            yield str(d["symbol"]), float(d["price"])


def replay(samples, cfg: TrackerConfig, include_flat: bool = False) -> List[Dict[str, Any]]:
    tracker = InstrumentTracker(cfg)
    out: List[Dict[str, Any]] = []
    for symbol, price in samples:
        ev = tracker.on_sample(symbol, price)
        if ev is None or (ev.side is None and not include_flat):
            continue
        out.append({
            "symbol": ev.symbol,
            "seq": ev.seq,
            "side": ev.side,
            "price": ev.price,
            "macd": ev.macd,
            "signal": ev.signal,
            "hist": ev.hist,
        })
    return out


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Replay de precios → eventos MACD")
    parser.add_argument("input", type=Path, help="JSONL o CSV con symbol,price")
    parser.add_argument("output", type=Path, help="JSONL de salida")
    parser.add_argument("--fast", type=int, default=12)
    parser.add_argument("--slow", type=int, default=26)
    parser.add_argument("--signal", type=int, default=9)
    parser.add_argument("--capacity", type=int, default=100)
    parser.add_argument("--min-eval", type=int, default=None, help="por defecto slow + signal")
    parser.add_argument("--mode", choices=("recompute", "incremental"), default="recompute")
    parser.add_argument("--all", action="store_true", help="incluir evaluaciones sin cruce")
    args = parser.parse_args(argv)

    cfg = TrackerConfig(fast=args.fast, slow=args.slow, signal=args.signal,
                        capacity=args.capacity, min_eval_length=args.min_eval, mode=args.mode)

    print(f"📂 Leyendo {args.input}...")
    events = replay(read_samples(args.input), cfg, include_flat=args.all)

    args.output.parent.mkdir(parents=True, exist_ok=True)
    with args.output.open("wb") as f:
        for ev in events:
            f.write(orjson.dumps(ev))
            f.write(b"\n")

    print(f"✅ {len(events)} eventos escritos en {args.output}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
