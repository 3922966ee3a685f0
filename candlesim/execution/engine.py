"""Sequential backtest engine."""
from __future__ import annotations

import math
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Iterable, Sequence

from candlesim.models import Candle

from .config import BacktestConfig
from .cooldown import on_trade_settled, should_skip
from .ledger import SimulatedAccount
from .logging_utils import BacktestObserver, NullObserver
from .models import BacktestReport, CandleDataError, EngineState, SimulatedTrade, StepResult
from .policy import INITIAL_SIDE, is_win, next_side
from .settlement import settle

if TYPE_CHECKING:
    from candlesim.data import JsonCandleStore

PRICE_FIELDS = ("open", "high", "low", "close")


def initial_state() -> EngineState:
    return EngineState(side=INITIAL_SIDE, consecutive_losses=0, pause_until=0)


def parse_prices(candle: Candle) -> tuple[float, float, float, float]:
    """Parse open/high/low/close, failing on anything that is not a positive finite number."""
    prices: list[float] = []
    for name in PRICE_FIELDS:
        raw = getattr(candle, name)
        try:
            value = float(raw)
        except (TypeError, ValueError):
            raise CandleDataError(
                f"Candle openTime={candle.open_time} has unparseable {name}={raw!r}"
            ) from None
        if not math.isfinite(value) or value <= 0:
            raise CandleDataError(
                f"Candle openTime={candle.open_time} has invalid {name}={raw!r}"
            )
        prices.append(value)
    open_price, high_price, low_price, close_price = prices
    return open_price, high_price, low_price, close_price


def step(state: EngineState, candle: Candle, config: BacktestConfig) -> StepResult:
    """Advance the strategy by one candle.

    A paused candle leaves the state untouched and produces no trade. Otherwise
    the candle is traded on ``state.side`` and the win/loss outcome drives both
    the next side and the loss streak.
    """
    if should_skip(candle.open_time, state.pause_until):
        return StepResult(state=state)

    open_price, high_price, low_price, close_price = parse_prices(candle)
    settlement = settle(
        state.side,
        open_price,
        high_price,
        low_price,
        close_price,
        config.position_size_usd,
        config.stop_loss_fraction,
        config.fee_rate,
    )
    trade = SimulatedTrade(
        side=state.side,
        entry_price=open_price,
        exit_price=settlement.exit_price,
        pnl=settlement.pnl,
        timestamp=candle.open_time,
    )

    won = is_win(settlement.pnl)
    cooldown = on_trade_settled(
        won,
        state.consecutive_losses,
        candle.open_time,
        config.losses_before_pause,
        config.pause_duration_ms,
    )
    new_state = EngineState(
        side=next_side(state.side, won),
        consecutive_losses=cooldown.consecutive_losses,
        pause_until=cooldown.pause_until if cooldown.triggered_pause else state.pause_until,
    )
    return StepResult(
        state=new_state,
        trade=trade,
        pause_triggered=cooldown.triggered_pause,
        pause_until=cooldown.pause_until,
    )


def _day_label(candles: Sequence[Candle]) -> str:
    if not candles:
        return "empty"
    opened = datetime.fromtimestamp(candles[0].open_time / 1000, tz=timezone.utc)
    return opened.date().isoformat()


class BacktestEngine:
    """Replays day-ordered candles through the flip-on-loss strategy."""

    def __init__(self, config: BacktestConfig, observer: BacktestObserver | None = None) -> None:
        self.config = config
        self.observer = observer or NullObserver()

    def run(self, days: Iterable[Sequence[Candle]]) -> BacktestReport:
        """Run one backtest over ``days``, each a chronologically sorted candle list.

        State (side, loss streak, pause window) carries across day boundaries.
        Raises ``CandleDataError`` when no candle is supplied at all or when a
        candle does not strictly follow the previous one in time.
        """
        account = SimulatedAccount(initial_equity=self.config.initial_equity)
        state = initial_state()
        last_open_time: int | None = None
        days_processed = 0
        candles_processed = 0
        candles_skipped = 0

        for candles in days:
            days_processed += 1
            self.observer.on_day(_day_label(candles), len(candles))
            for candle in candles:
                if last_open_time is not None and candle.open_time <= last_open_time:
                    raise CandleDataError(
                        f"Candle openTime={candle.open_time} is not after previous openTime={last_open_time}"
                    )
                last_open_time = candle.open_time
                candles_processed += 1

                result = step(state, candle, self.config)
                state = result.state
                if result.trade is None:
                    candles_skipped += 1
                    continue
                account.record_trade(result.trade)
                self.observer.on_trade(result.trade, account.equity)
                if result.pause_triggered:
                    account.record_pause()
                    self.observer.on_pause(candle.open_time, result.pause_until)

        if candles_processed == 0:
            raise CandleDataError("No candles to backtest")

        report = BacktestReport(
            summary=account.summary(),
            trades=tuple(account.trades),
            days_processed=days_processed,
            candles_processed=candles_processed,
            candles_skipped=candles_skipped,
        )
        self.observer.on_finish(report)
        return report


def run_backtest(
    store: "JsonCandleStore",
    symbol: str,
    config: BacktestConfig,
    observer: BacktestObserver | None = None,
) -> BacktestReport:
    """Backtest every stored day of ``symbol`` in filename (date) order."""
    days = (candles for _, candles in store.iter_days(symbol))
    return BacktestEngine(config, observer).run(days)
