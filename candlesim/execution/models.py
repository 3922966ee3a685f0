"""Execution models for the backtest engine."""
from __future__ import annotations

import json
from dataclasses import dataclass
from enum import Enum
from typing import Any


class CandleDataError(ValueError):
    """Candle stream is empty, out of order, or carries a bad price."""


class ConfigError(ValueError):
    """Backtest configuration is out of range."""


class PositionSide(str, Enum):
    LONG = "LONG"
    SHORT = "SHORT"

    @property
    def order_side(self) -> str:
        return "BUY" if self is PositionSide.LONG else "SELL"

    def flipped(self) -> "PositionSide":
        return PositionSide.SHORT if self is PositionSide.LONG else PositionSide.LONG


@dataclass(frozen=True)
class SimulatedTrade:
    side: PositionSide
    entry_price: float
    exit_price: float
    pnl: float
    timestamp: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "side": self.side.value,
            "entryPrice": self.entry_price,
            "exitPrice": self.exit_price,
            "pnl": self.pnl,
            "timestamp": self.timestamp,
        }


@dataclass(frozen=True)
class Settlement:
    exit_price: float
    pnl: float
    gross_pnl: float
    fees: float
    stopped_out: bool


@dataclass(frozen=True)
class CooldownUpdate:
    consecutive_losses: int
    triggered_pause: bool
    pause_until: int | None = None


@dataclass(frozen=True)
class EngineState:
    side: PositionSide = PositionSide.LONG
    consecutive_losses: int = 0
    pause_until: int = 0


@dataclass(frozen=True)
class StepResult:
    state: EngineState
    trade: SimulatedTrade | None = None
    pause_triggered: bool = False
    pause_until: int | None = None

    @property
    def skipped(self) -> bool:
        return self.trade is None


@dataclass(frozen=True)
class BacktestSummary:
    initial_equity: float
    final_equity: float
    total_pnl: float
    total_trades: int
    winning_trades: int
    losing_trades: int
    win_rate_percent: float
    pause_count: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "initialEquity": self.initial_equity,
            "finalEquity": self.final_equity,
            "totalPnl": self.total_pnl,
            "totalTrades": self.total_trades,
            "winningTrades": self.winning_trades,
            "losingTrades": self.losing_trades,
            "winRatePercent": self.win_rate_percent,
            "pauseCount": self.pause_count,
        }


@dataclass(frozen=True)
class BacktestReport:
    summary: BacktestSummary
    trades: tuple[SimulatedTrade, ...]
    days_processed: int = 0
    candles_processed: int = 0
    candles_skipped: int = 0

    def to_dict(self, include_trades: bool = True) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "summary": self.summary.to_dict(),
            "daysProcessed": self.days_processed,
            "candlesProcessed": self.candles_processed,
            "candlesSkipped": self.candles_skipped,
        }
        if include_trades:
            payload["trades"] = [trade.to_dict() for trade in self.trades]
        return payload

    def to_json(self, include_trades: bool = True) -> str:
        return json.dumps(self.to_dict(include_trades), sort_keys=True, indent=2)
