"""Logging helpers and run observers for backtests."""
from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
import tempfile
from typing import Protocol

from .models import BacktestReport, SimulatedTrade


def log_line(msg: str, path: str | Path = "logs/backtest.log") -> None:
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    print(msg)
    with target.open("a", encoding="utf-8") as handle:
        handle.write(msg + "\n")


def write_state(state: dict, path: str | Path = "logs/backtest_state.json") -> None:
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    with tempfile.NamedTemporaryFile("w", encoding="utf-8", delete=False, dir=target.parent) as handle:
        json.dump(state, handle, sort_keys=True)
        handle.flush()
        temp_path = Path(handle.name)
    temp_path.replace(target)


def format_ms(timestamp: int) -> str:
    return datetime.fromtimestamp(timestamp / 1000, tz=timezone.utc).isoformat()


class BacktestObserver(Protocol):
    """Receives engine events; the engine itself never writes output."""

    def on_day(self, label: str, candle_count: int) -> None: ...

    def on_trade(self, trade: SimulatedTrade, equity: float) -> None: ...

    def on_pause(self, timestamp: int, pause_until: int) -> None: ...

    def on_finish(self, report: BacktestReport) -> None: ...


class NullObserver:
    def on_day(self, label: str, candle_count: int) -> None:
        pass

    def on_trade(self, trade: SimulatedTrade, equity: float) -> None:
        pass

    def on_pause(self, timestamp: int, pause_until: int) -> None:
        pass

    def on_finish(self, report: BacktestReport) -> None:
        pass


class LogLineObserver:
    """Writes day/pause events to the backtest log and a final state snapshot.

    Individual trades are only logged when ``log_trades`` is set; a full day
    is 1440 of them.
    """

    def __init__(
        self,
        log_path: str | Path = "logs/backtest.log",
        state_path: str | Path | None = "logs/backtest_state.json",
        log_trades: bool = False,
    ) -> None:
        self.log_path = Path(log_path)
        self.state_path = Path(state_path) if state_path is not None else None
        self.log_trades = log_trades

    def on_day(self, label: str, candle_count: int) -> None:
        log_line(f"[backtest] DAY {label} candles={candle_count}", self.log_path)

    def on_trade(self, trade: SimulatedTrade, equity: float) -> None:
        if not self.log_trades:
            return
        log_line(
            f"[backtest] TRADE t={format_ms(trade.timestamp)} side={trade.side.value} "
            f"order={trade.side.order_side} "
            f"entry={trade.entry_price:.5f} exit={trade.exit_price:.5f} "
            f"pnl={trade.pnl:.4f} equity={equity:.2f}",
            self.log_path,
        )

    def on_pause(self, timestamp: int, pause_until: int) -> None:
        log_line(
            f"[backtest] PAUSE t={format_ms(timestamp)} until={format_ms(pause_until)}",
            self.log_path,
        )

    def on_finish(self, report: BacktestReport) -> None:
        summary = report.summary
        log_line(
            f"[backtest] DONE trades={summary.total_trades} pauses={summary.pause_count} "
            f"equity={summary.final_equity:.2f}",
            self.log_path,
        )
        if self.state_path is not None:
            write_state(report.to_dict(include_trades=False), self.state_path)
