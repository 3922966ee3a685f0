"""Shared data models for collected candles."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping


@dataclass(frozen=True)
class Candle:
    """One kline as delivered by the exchange.

    Prices and volume stay decimal strings; the engine parses and validates
    them when it settles a trade.
    """

    open_time: int
    open: str
    high: str
    low: str
    close: str
    volume: str

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Candle":
        return cls(
            open_time=int(data["openTime"]),
            open=str(data["open"]),
            high=str(data["high"]),
            low=str(data["low"]),
            close=str(data["close"]),
            volume=str(data["volume"]),
        )

    @classmethod
    def from_kline_row(cls, row: list[Any]) -> "Candle":
        return cls(
            open_time=int(row[0]),
            open=str(row[1]),
            high=str(row[2]),
            low=str(row[3]),
            close=str(row[4]),
            volume=str(row[5]),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "openTime": self.open_time,
            "open": self.open,
            "high": self.high,
            "low": self.low,
            "close": self.close,
            "volume": self.volume,
        }
