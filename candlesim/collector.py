"""Kline collection from the Binance USD-M futures REST API."""
from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
import os
from pathlib import Path
from typing import Any

from binance.client import Client

from candlesim.config import (
    API_MAX_LIMIT,
    BINANCE_API_KEY,
    BINANCE_API_SECRET,
    CANDLES_PER_DAY,
    LOGS_DIR,
)
from candlesim.data import JsonCandleStore
from candlesim.execution.logging_utils import format_ms, log_line
from candlesim.models import Candle

COLLECTOR_LOG = LOGS_DIR / "collector.log"


def default_target_date(today: date | None = None) -> str:
    """TARGET_DATE from the environment, else yesterday in UTC."""
    configured = os.getenv("TARGET_DATE")
    if configured:
        return configured
    current = today or datetime.now(timezone.utc).date()
    return (current - timedelta(days=1)).isoformat()


def day_window(day: date | str) -> tuple[int, int]:
    """Return (start_ms, end_ms) covering one UTC calendar day, both inclusive."""
    day_value = date.fromisoformat(day) if isinstance(day, str) else day
    start = datetime(day_value.year, day_value.month, day_value.day, tzinfo=timezone.utc)
    start_ms = int(start.timestamp() * 1000)
    end_ms = int((start + timedelta(days=1)).timestamp() * 1000) - 1
    return start_ms, end_ms


class BinanceCandleSource:
    """Fetches klines through python-binance; the client is created on first use."""

    def __init__(self, client: Any | None = None, log_path: str | Path = COLLECTOR_LOG) -> None:
        self._client = client
        self.log_path = Path(log_path)

    @property
    def client(self) -> Any:
        if self._client is None:
            self._client = Client(BINANCE_API_KEY, BINANCE_API_SECRET, requests_params={"timeout": 20})
        return self._client

    def fetch_candles(
        self,
        symbol: str,
        interval: str,
        start_time: int,
        end_time: int,
        limit: int = API_MAX_LIMIT,
    ) -> list[Candle]:
        log_line(
            f"[collector] FETCH {symbol} ({interval}) {format_ms(start_time)} -> {format_ms(end_time)}",
            self.log_path,
        )
        try:
            rows = self.client.futures_klines(
                symbol=symbol,
                interval=interval,
                startTime=start_time,
                endTime=end_time,
                limit=limit,
            )
        except Exception as exc:
            log_line(f"[collector] ERROR fetching klines: {exc}", self.log_path)
            raise
        candles = [Candle.from_kline_row(row) for row in rows]
        log_line(f"[collector] fetched {len(candles)} klines", self.log_path)
        return candles


def collect_day(
    source: BinanceCandleSource,
    store: JsonCandleStore,
    symbol: str,
    interval: str,
    day: str,
    limit: int = API_MAX_LIMIT,
) -> Path | None:
    """Fetch one UTC day of klines and save it; None when the exchange has nothing."""
    start_ms, end_ms = day_window(day)
    candles = source.fetch_candles(symbol, interval, start_ms, end_ms, limit)
    if not candles:
        log_line(f"[collector] no klines for {symbol} on {day}", source.log_path)
        return None
    if len(candles) == CANDLES_PER_DAY:
        log_line(f"[collector] fetched all {CANDLES_PER_DAY} candles for {day}", source.log_path)
    else:
        log_line(
            f"[collector] WARN expected {CANDLES_PER_DAY} candles for {day}, received {len(candles)}",
            source.log_path,
        )
    path = store.save_candles(candles, symbol, interval, day)
    log_line(f"[collector] saved {len(candles)} klines to {path}", source.log_path)
    return path
