import json

import run_backtest as cli
from candlesim.data import JsonCandleStore
from candlesim.models import Candle


def _seed(data_dir) -> None:
    candles = [
        Candle(open_time=idx * 60_000, open="1.0", high="1.0", low="1.0", close="1.0", volume="1")
        for idx in range(6)
    ]
    JsonCandleStore(data_dir).save_candles(candles, "XRPUSDT", "1m", "1970-01-01")


def test_main_writes_report_files(tmp_path, monkeypatch, capsys):
    monkeypatch.setattr(cli, "LOGS_DIR", tmp_path / "logs")
    _seed(tmp_path / "data")

    code = cli.main(
        [
            "--symbol",
            "XRPUSDT",
            "--data-dir",
            str(tmp_path / "data"),
            "--results-dir",
            str(tmp_path / "results"),
            "--fee-rate",
            "0",
            "--pause-minutes",
            "2",
        ]
    )

    assert code == 0
    report = json.loads((tmp_path / "results" / "backtest_XRPUSDT.json").read_text(encoding="utf-8"))
    # four break-even trades, one skipped minute, then one more trade
    assert report["summary"]["totalTrades"] == 5
    assert report["summary"]["pauseCount"] == 1
    assert (tmp_path / "results" / "backtest_XRPUSDT_trades.csv").exists()
    assert "--- Backtest Summary ---" in capsys.readouterr().out


def test_main_without_datasets_fails(tmp_path, monkeypatch):
    monkeypatch.setattr(cli, "LOGS_DIR", tmp_path / "logs")
    code = cli.main(["--data-dir", str(tmp_path / "empty"), "--results-dir", str(tmp_path / "results")])
    assert code == 1


def test_main_rejects_bad_config(tmp_path, monkeypatch):
    monkeypatch.setattr(cli, "LOGS_DIR", tmp_path / "logs")
    _seed(tmp_path / "data")
    code = cli.main(["--data-dir", str(tmp_path / "data"), "--stop-loss", "3"])
    assert code == 2


def test_main_rejects_infinite_pause(tmp_path, monkeypatch):
    monkeypatch.setattr(cli, "LOGS_DIR", tmp_path / "logs")
    _seed(tmp_path / "data")
    code = cli.main(["--data-dir", str(tmp_path / "data"), "--pause-minutes", "inf"])
    assert code == 2
