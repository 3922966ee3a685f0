"""Simulated account for backtest runs."""
from __future__ import annotations

from dataclasses import dataclass, field

from .models import BacktestSummary, SimulatedTrade
from .policy import is_win


@dataclass
class SimulatedAccount:
    initial_equity: float
    equity: float = field(init=False)
    trades: list[SimulatedTrade] = field(default_factory=list)
    pause_count: int = 0

    def __post_init__(self) -> None:
        self.equity = self.initial_equity

    def record_trade(self, trade: SimulatedTrade) -> None:
        self.trades.append(trade)
        self.equity += trade.pnl

    def record_pause(self) -> None:
        self.pause_count += 1

    def summary(self) -> BacktestSummary:
        total_trades = len(self.trades)
        winning_trades = sum(1 for trade in self.trades if is_win(trade.pnl))
        win_rate = (winning_trades / total_trades * 100) if total_trades else 0.0
        return BacktestSummary(
            initial_equity=self.initial_equity,
            final_equity=self.equity,
            total_pnl=self.equity - self.initial_equity,
            total_trades=total_trades,
            winning_trades=winning_trades,
            losing_trades=total_trades - winning_trades,
            win_rate_percent=win_rate,
            pause_count=self.pause_count,
        )
