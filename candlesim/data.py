"""Day-file storage for collected candles."""
from __future__ import annotations

import json
import tempfile
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Iterable, Iterator

from candlesim.models import Candle


class DataSourceError(RuntimeError):
    """A stored dataset could not be read."""


@dataclass(frozen=True)
class DatasetHandle:
    path: Path

    @property
    def name(self) -> str:
        return self.path.name

    @property
    def day(self) -> str:
        """Date suffix of ``SYMBOL_INTERVAL_YYYY-MM-DD.json``."""
        return self.path.stem.rsplit("_", 1)[-1]


def dataset_filename(symbol: str, interval: str, day: date | str) -> str:
    day_value = day.isoformat() if isinstance(day, date) else day
    return f"{symbol}_{interval}_{day_value}.json"


class JsonCandleStore:
    """One pretty-printed JSON array of candles per symbol, interval and UTC day."""

    def __init__(self, data_dir: str | Path) -> None:
        self.data_dir = Path(data_dir)

    def _ensure_data_dir(self) -> None:
        self.data_dir.mkdir(parents=True, exist_ok=True)

    def save_candles(
        self,
        candles: Iterable[Candle],
        symbol: str,
        interval: str,
        day: date | str,
    ) -> Path:
        self._ensure_data_dir()
        target = self.data_dir / dataset_filename(symbol, interval, day)
        payload = [candle.to_dict() for candle in candles]
        with tempfile.NamedTemporaryFile(
            "w", encoding="utf-8", delete=False, dir=self.data_dir, suffix=".tmp"
        ) as handle:
            json.dump(payload, handle, indent=2)
            handle.flush()
            temp_path = Path(handle.name)
        temp_path.replace(target)
        return target

    def list_datasets(self, symbol: str) -> list[DatasetHandle]:
        if not self.data_dir.is_dir():
            return []
        paths = [
            path
            for path in self.data_dir.iterdir()
            if path.is_file() and path.name.startswith(symbol) and path.name.endswith(".json")
        ]
        return [DatasetHandle(path) for path in sorted(paths, key=lambda p: p.name)]

    def load_candles(self, handle: DatasetHandle) -> list[Candle]:
        try:
            raw = json.loads(handle.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            raise DataSourceError(f"Cannot read dataset {handle.path}: {exc}") from exc
        if not isinstance(raw, list):
            raise DataSourceError(f"Dataset {handle.path} is not a JSON array")
        try:
            return [Candle.from_dict(entry) for entry in raw]
        except (KeyError, TypeError, ValueError) as exc:
            raise DataSourceError(f"Dataset {handle.path} has a malformed candle: {exc!r}") from exc

    def iter_days(self, symbol: str) -> Iterator[tuple[DatasetHandle, list[Candle]]]:
        """Yield each stored day in filename order, loading one file at a time."""
        for handle in self.list_datasets(symbol):
            yield handle, self.load_candles(handle)
