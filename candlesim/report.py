"""Reporting helpers for backtest runs."""
from __future__ import annotations

import csv
from pathlib import Path

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402

from candlesim.execution.logging_utils import format_ms
from candlesim.execution.models import BacktestReport, BacktestSummary


def format_summary(summary: BacktestSummary) -> str:
    lines = [
        "--- Backtest Summary ---",
        f"Initial equity:      {summary.initial_equity:.2f} USD",
        f"Final equity:        {summary.final_equity:.2f} USD",
        f"Total PnL:           {summary.total_pnl:.2f} USD",
        f"Total trades:        {summary.total_trades}",
        f"Winning trades:      {summary.winning_trades}",
        f"Losing trades:       {summary.losing_trades}",
        f"Win rate:            {summary.win_rate_percent:.2f}%",
        f"Pauses (loss streak): {summary.pause_count}",
        "------------------------",
    ]
    return "\n".join(lines)


def write_report_json(report: BacktestReport, path: str | Path) -> None:
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(report.to_json(), encoding="utf-8")


def write_trades_csv(report: BacktestReport, path: str | Path) -> None:
    """Write the trade ledger with the running equity after each trade."""
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    equity = equity_curve(report)
    with target.open("w", newline="", encoding="utf-8") as handle:
        writer = csv.DictWriter(
            handle,
            fieldnames=["timestamp", "time_utc", "side", "entry_price", "exit_price", "pnl", "equity"],
        )
        writer.writeheader()
        for trade, equity_after in zip(report.trades, equity[1:]):
            writer.writerow(
                {
                    "timestamp": trade.timestamp,
                    "time_utc": format_ms(trade.timestamp),
                    "side": trade.side.value,
                    "entry_price": trade.entry_price,
                    "exit_price": trade.exit_price,
                    "pnl": trade.pnl,
                    "equity": equity_after,
                }
            )


def equity_curve(report: BacktestReport) -> list[float]:
    """Equity before the first trade followed by equity after each trade."""
    equity = report.summary.initial_equity
    curve = [equity]
    for trade in report.trades:
        equity += trade.pnl
        curve.append(equity)
    return curve


def write_equity_chart(report: BacktestReport, path: str | Path, title: str = "Equity curve") -> None:
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    curve = equity_curve(report)
    plt.figure(figsize=(10, 5))
    plt.plot(range(len(curve)), curve, linewidth=1.0)
    plt.axhline(report.summary.initial_equity, color="grey", linestyle="--", alpha=0.6)
    plt.xlabel("Trade #")
    plt.ylabel("Equity (USD)")
    plt.title(title)
    plt.grid(True, linestyle="--", alpha=0.4)
    plt.tight_layout()
    plt.savefig(target, dpi=150)
    plt.close()
