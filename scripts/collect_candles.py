"""Collect one UTC day of klines into the local data directory."""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

from candlesim.collector import BinanceCandleSource, collect_day, default_target_date
from candlesim.config import API_MAX_LIMIT, DATA_DIR, INTERVAL, SYMBOL
from candlesim.data import JsonCandleStore
from candlesim.execution.logging_utils import log_line


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Download one day of klines from Binance futures.")
    parser.add_argument("--symbol", default=SYMBOL)
    parser.add_argument("--interval", default=INTERVAL)
    parser.add_argument("--date", dest="day", default=None, help="UTC day YYYY-MM-DD (default: yesterday).")
    parser.add_argument("--limit", type=int, default=API_MAX_LIMIT)
    parser.add_argument("--data-dir", type=Path, default=DATA_DIR)
    return parser.parse_args(argv)


def main(argv: list[str] | None = None, source: BinanceCandleSource | None = None) -> int:
    args = _parse_args(argv)
    day = args.day or default_target_date()
    source = source or BinanceCandleSource()
    store = JsonCandleStore(args.data_dir)
    try:
        path = collect_day(source, store, args.symbol, args.interval, day, args.limit)
    except Exception as exc:
        log_line(f"[collector] collection failed: {exc}", source.log_path)
        return 1
    return 0 if path is not None else 1


if __name__ == "__main__":
    sys.exit(main())
