import pytest

from candlesim.execution import BacktestConfig, ConfigError, pause_minutes_to_ms


def test_defaults_match_strategy_constants():
    config = BacktestConfig()
    assert config.initial_equity == 1000.0
    assert config.position_size_usd == 100.0
    assert config.stop_loss_fraction == 0.02
    assert config.fee_rate == 0.0005
    assert config.losses_before_pause == 4
    assert config.pause_duration_ms == 600_000


@pytest.mark.parametrize(
    "overrides",
    [
        {"position_size_usd": 0.0},
        {"position_size_usd": -5.0},
        {"initial_equity": 0.0},
        {"initial_equity": float("nan")},
        {"stop_loss_fraction": 1.5},
        {"stop_loss_fraction": -0.01},
        {"fee_rate": 2.0},
        {"losses_before_pause": 0},
        {"pause_duration_ms": -1},
    ],
)
def test_invalid_values_rejected_at_construction(overrides):
    with pytest.raises(ConfigError):
        BacktestConfig(**overrides)


def test_from_env_reads_overrides(monkeypatch):
    monkeypatch.setenv("POSITION_SIZE_USD", "250")
    monkeypatch.setenv("STOP_LOSS_FRACTION", "0.01")
    monkeypatch.setenv("PAUSE_DURATION_MINUTES", "5")
    monkeypatch.delenv("INITIAL_EQUITY", raising=False)

    config = BacktestConfig.from_env()

    assert config.position_size_usd == 250.0
    assert config.stop_loss_fraction == 0.01
    assert config.pause_duration_ms == 300_000
    assert config.initial_equity == 1000.0


def test_from_env_rejects_unparseable_value(monkeypatch):
    monkeypatch.setenv("FEE_RATE", "cheap")
    with pytest.raises(ConfigError):
        BacktestConfig.from_env()


def test_with_overrides_ignores_none():
    config = BacktestConfig().with_overrides(fee_rate=0.001, stop_loss_fraction=None)
    assert config.fee_rate == 0.001
    assert config.stop_loss_fraction == 0.02


def test_with_overrides_still_validates():
    with pytest.raises(ConfigError):
        BacktestConfig().with_overrides(fee_rate=3.0)


def test_from_env_rejects_infinite_pause(monkeypatch):
    monkeypatch.setenv("PAUSE_DURATION_MINUTES", "inf")
    with pytest.raises(ConfigError, match="finite"):
        BacktestConfig.from_env()


def test_pause_minutes_to_ms():
    assert pause_minutes_to_ms(10) == 600_000
    assert pause_minutes_to_ms(0.5) == 30_000
    with pytest.raises(ConfigError):
        pause_minutes_to_ms(float("nan"))
