"""Alternating bullish/bearish candle statistics."""
from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Sequence

from candlesim.execution.models import CandleDataError
from candlesim.models import Candle

# Runs break on two same-colour candles in a row or on any doji.
_BREAKS = re.compile(r"(HH+|BB+|D+)")


@dataclass
class AlternatingReport:
    total_days_analyzed: int = 0
    total_candles_analyzed: int = 0
    alternating_sequence_counts: dict[int, int] = field(default_factory=dict)
    total_candles_in_alternating_sequences: int = 0

    def to_dict(self) -> dict[str, object]:
        return {
            "totalDaysAnalyzed": self.total_days_analyzed,
            "totalCandlesAnalyzed": self.total_candles_analyzed,
            "alternatingSequenceCounts": {
                str(length): count
                for length, count in sorted(self.alternating_sequence_counts.items())
            },
            "totalCandlesInAlternatingSequences": self.total_candles_in_alternating_sequences,
        }


def candle_type(candle: Candle) -> str:
    """H for a rising candle, B for a falling one, D for a doji."""
    try:
        open_price = float(candle.open)
        close_price = float(candle.close)
    except (TypeError, ValueError):
        raise CandleDataError(
            f"Candle openTime={candle.open_time} has unparseable open={candle.open!r} or close={candle.close!r}"
        ) from None
    if close_price > open_price:
        return "H"
    if close_price < open_price:
        return "B"
    return "D"


def alternating_runs(sequence: str) -> list[str]:
    """Split an H/B/D string into pure alternations longer than one candle.

    "HHHBHBHBBBHB" -> ["BHBH", "HB"]
    """
    runs: list[str] = []
    for part in _BREAKS.split(sequence):
        if not part or "HH" in part or "BB" in part or "D" in part:
            continue
        if len(part) > 1:
            runs.append(part)
    return runs


def analyze_days(days: Iterable[Sequence[Candle]]) -> AlternatingReport:
    report = AlternatingReport()
    for candles in days:
        sequence = "".join(candle_type(candle) for candle in candles)
        report.total_days_analyzed += 1
        report.total_candles_analyzed += len(sequence)
        for run in alternating_runs(sequence):
            length = len(run)
            report.alternating_sequence_counts[length] = (
                report.alternating_sequence_counts.get(length, 0) + 1
            )
            report.total_candles_in_alternating_sequences += length
    return report


def write_analysis_report(report: AlternatingReport, results_dir: str | Path, day: str) -> Path:
    target_dir = Path(results_dir)
    target_dir.mkdir(parents=True, exist_ok=True)
    path = target_dir / f"alternating_report_{day}.json"
    path.write_text(json.dumps(report.to_dict(), indent=2), encoding="utf-8")
    return path
