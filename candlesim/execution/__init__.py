"""Backtest execution package."""

from .config import BacktestConfig, pause_minutes_to_ms
from .cooldown import on_trade_settled, should_skip
from .engine import BacktestEngine, initial_state, parse_prices, run_backtest, step
from .ledger import SimulatedAccount
from .logging_utils import BacktestObserver, LogLineObserver, NullObserver, log_line, write_state
from .models import (
    BacktestReport,
    BacktestSummary,
    CandleDataError,
    ConfigError,
    CooldownUpdate,
    EngineState,
    PositionSide,
    Settlement,
    SimulatedTrade,
    StepResult,
)
from .policy import INITIAL_SIDE, is_win, next_side
from .settlement import compute_quantity, compute_stop, settle

__all__ = [
    "BacktestConfig",
    "BacktestEngine",
    "BacktestObserver",
    "BacktestReport",
    "BacktestSummary",
    "CandleDataError",
    "ConfigError",
    "CooldownUpdate",
    "EngineState",
    "INITIAL_SIDE",
    "LogLineObserver",
    "NullObserver",
    "PositionSide",
    "Settlement",
    "SimulatedAccount",
    "SimulatedTrade",
    "StepResult",
    "compute_quantity",
    "compute_stop",
    "initial_state",
    "is_win",
    "log_line",
    "next_side",
    "on_trade_settled",
    "parse_prices",
    "pause_minutes_to_ms",
    "run_backtest",
    "settle",
    "should_skip",
    "step",
    "write_state",
]
