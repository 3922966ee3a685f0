"""Count alternating rising/falling candle runs across stored day files."""
from __future__ import annotations

import argparse
import json
import sys
from datetime import datetime, timezone
from pathlib import Path

from candlesim.analysis import analyze_days, write_analysis_report
from candlesim.config import DATA_DIR, RESULTS_DIR, SYMBOL
from candlesim.data import DataSourceError, JsonCandleStore
from candlesim.execution import CandleDataError


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Alternating candle sequence analysis.")
    parser.add_argument("--symbol", default=SYMBOL)
    parser.add_argument("--data-dir", type=Path, default=DATA_DIR)
    parser.add_argument("--results-dir", type=Path, default=RESULTS_DIR)
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    store = JsonCandleStore(args.data_dir)
    datasets = store.list_datasets(args.symbol)
    if not datasets:
        print(f"No {args.symbol} day files found in {args.data_dir}.")
        return 1
    print(f"Analyzing {len(datasets)} file(s)...")

    try:
        report = analyze_days(store.load_candles(handle) for handle in datasets)
    except (CandleDataError, DataSourceError) as exc:
        print(f"Analysis aborted: {exc}")
        return 1
    today = datetime.now(timezone.utc).date().isoformat()
    path = write_analysis_report(report, args.results_dir, today)
    print(f"Analysis complete. Report saved to {path}")
    print(json.dumps(report.to_dict(), indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
