import json

import pytest

from candlesim.analysis import alternating_runs, analyze_days, candle_type, write_analysis_report
from candlesim.data import JsonCandleStore
from candlesim.execution import CandleDataError
from candlesim.models import Candle
from scripts import run_analysis


def _candle(idx: int, open_: str, close: str) -> Candle:
    return Candle(open_time=idx * 60_000, open=open_, high="9", low="0.1", close=close, volume="1")


def _day(pattern: str) -> list[Candle]:
    prices = {"H": ("1.0", "1.1"), "B": ("1.1", "1.0"), "D": ("1.0", "1.0")}
    return [_candle(idx, *prices[char]) for idx, char in enumerate(pattern)]


def test_candle_type():
    assert candle_type(_candle(0, "1.0", "1.2")) == "H"
    assert candle_type(_candle(0, "1.2", "1.0")) == "B"
    assert candle_type(_candle(0, "1.0", "1.00")) == "D"


def test_alternating_runs_split_on_repeats_and_dojis():
    assert alternating_runs("HHHBHBHBBBHB") == ["BHBH", "HB"]
    assert alternating_runs("HBHDBHB") == ["HBH", "BHB"]
    assert alternating_runs("HHBB") == []
    assert alternating_runs("H") == []


def test_analyze_days_counts_lengths():
    report = analyze_days([_day("HBHBB"), _day("DHBD")])

    assert report.total_days_analyzed == 2
    assert report.total_candles_analyzed == 9
    assert report.alternating_sequence_counts == {3: 1, 2: 1}
    assert report.total_candles_in_alternating_sequences == 5


def test_write_analysis_report(tmp_path):
    report = analyze_days([_day("HBHB")])
    path = write_analysis_report(report, tmp_path / "results", "2024-01-01")

    assert path.name == "alternating_report_2024-01-01.json"
    payload = json.loads(path.read_text(encoding="utf-8"))
    assert payload["alternatingSequenceCounts"] == {"4": 1}
    assert payload["totalDaysAnalyzed"] == 1


def test_candle_type_rejects_malformed_price():
    with pytest.raises(CandleDataError, match="openTime=120000"):
        candle_type(_candle(2, "1.0x", "1.1"))


def test_analysis_script_reports_bad_data(tmp_path, capsys):
    bad = Candle(open_time=0, open="oops", high="1", low="1", close="1", volume="1")
    JsonCandleStore(tmp_path / "data").save_candles([bad], "XRPUSDT", "1m", "1970-01-01")

    code = run_analysis.main(
        ["--data-dir", str(tmp_path / "data"), "--results-dir", str(tmp_path / "results")]
    )

    assert code == 1
    assert "Analysis aborted" in capsys.readouterr().out
    assert not (tmp_path / "results").exists()
