"""Entry script to backtest the flip-on-loss strategy over stored day files."""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

from candlesim.config import DATA_DIR, LOGS_DIR, RESULTS_DIR, SYMBOL
from candlesim.data import DataSourceError, JsonCandleStore
from candlesim.execution import (
    BacktestConfig,
    CandleDataError,
    ConfigError,
    LogLineObserver,
    log_line,
    pause_minutes_to_ms,
    run_backtest,
)
from candlesim.report import format_summary, write_equity_chart, write_report_json, write_trades_csv


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the flip-on-loss minute-candle backtest.")
    parser.add_argument("--symbol", default=SYMBOL, help="Instrument symbol (day-file prefix).")
    parser.add_argument("--data-dir", type=Path, default=DATA_DIR)
    parser.add_argument("--results-dir", type=Path, default=RESULTS_DIR)
    parser.add_argument("--initial-equity", type=float, default=None)
    parser.add_argument("--position-size", type=float, default=None, help="Notional USD per trade.")
    parser.add_argument("--stop-loss", type=float, default=None, help="Stop distance as a fraction of entry.")
    parser.add_argument("--fee-rate", type=float, default=None, help="Taker fee rate per leg.")
    parser.add_argument("--losses-before-pause", type=int, default=None)
    parser.add_argument("--pause-minutes", type=float, default=None)
    parser.add_argument("--log-trades", action="store_true", help="Log every simulated trade.")
    parser.add_argument("--chart", action="store_true", help="Write an equity curve PNG.")
    return parser.parse_args(argv)


def _build_config(args: argparse.Namespace) -> BacktestConfig:
    pause_ms = pause_minutes_to_ms(args.pause_minutes) if args.pause_minutes is not None else None
    return BacktestConfig.from_env().with_overrides(
        initial_equity=args.initial_equity,
        position_size_usd=args.position_size,
        stop_loss_fraction=args.stop_loss,
        fee_rate=args.fee_rate,
        losses_before_pause=args.losses_before_pause,
        pause_duration_ms=pause_ms,
    )


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    log_path = LOGS_DIR / "backtest.log"
    try:
        config = _build_config(args)
    except ConfigError as exc:
        log_line(f"[backtest] invalid configuration: {exc}", log_path)
        return 2

    store = JsonCandleStore(args.data_dir)
    datasets = store.list_datasets(args.symbol)
    if not datasets:
        log_line(f"[backtest] no {args.symbol} day files found in {args.data_dir}", log_path)
        return 1
    log_line(f"[backtest] replaying {len(datasets)} day(s) of {args.symbol}", log_path)

    observer = LogLineObserver(
        log_path=log_path,
        state_path=LOGS_DIR / "backtest_state.json",
        log_trades=args.log_trades,
    )
    try:
        report = run_backtest(store, args.symbol, config, observer)
    except (CandleDataError, DataSourceError) as exc:
        log_line(f"[backtest] aborted: {exc}", log_path)
        return 1

    print()
    print(format_summary(report.summary))

    results_dir: Path = args.results_dir
    write_report_json(report, results_dir / f"backtest_{args.symbol}.json")
    write_trades_csv(report, results_dir / f"backtest_{args.symbol}_trades.csv")
    if args.chart:
        write_equity_chart(report, results_dir / f"backtest_{args.symbol}_equity.png", title=f"{args.symbol} equity")
    return 0


if __name__ == "__main__":
    sys.exit(main())
