"""Configuration for backtest runs."""
from __future__ import annotations

import math
import os
from dataclasses import dataclass, replace
from typing import Any

from .models import ConfigError


def pause_minutes_to_ms(minutes: float) -> int:
    if not math.isfinite(minutes):
        raise ConfigError(f"pause duration must be finite, got {minutes} minutes")
    return int(minutes * 60 * 1000)


@dataclass(frozen=True)
class BacktestConfig:
    initial_equity: float = 1000.0
    position_size_usd: float = 100.0
    stop_loss_fraction: float = 0.02
    # Taker rate, charged on entry and exit alike.
    fee_rate: float = 0.0005
    losses_before_pause: int = 4
    pause_duration_ms: int = 10 * 60 * 1000

    def __post_init__(self) -> None:
        if not math.isfinite(self.initial_equity) or self.initial_equity <= 0:
            raise ConfigError(f"initial_equity must be positive, got {self.initial_equity}")
        if not math.isfinite(self.position_size_usd) or self.position_size_usd <= 0:
            raise ConfigError(f"position_size_usd must be positive, got {self.position_size_usd}")
        if not 0.0 <= self.stop_loss_fraction <= 1.0:
            raise ConfigError(f"stop_loss_fraction must be within [0, 1], got {self.stop_loss_fraction}")
        if not 0.0 <= self.fee_rate <= 1.0:
            raise ConfigError(f"fee_rate must be within [0, 1], got {self.fee_rate}")
        if self.losses_before_pause < 1:
            raise ConfigError(f"losses_before_pause must be >= 1, got {self.losses_before_pause}")
        if self.pause_duration_ms < 0:
            raise ConfigError(f"pause_duration_ms must be >= 0, got {self.pause_duration_ms}")

    @classmethod
    def from_env(cls) -> "BacktestConfig":
        def _env(key: str, default: str) -> str:
            return os.getenv(key, default)

        try:
            pause_minutes = float(_env("PAUSE_DURATION_MINUTES", "10"))
            return cls(
                initial_equity=float(_env("INITIAL_EQUITY", str(cls.initial_equity))),
                position_size_usd=float(_env("POSITION_SIZE_USD", str(cls.position_size_usd))),
                stop_loss_fraction=float(_env("STOP_LOSS_FRACTION", str(cls.stop_loss_fraction))),
                fee_rate=float(_env("FEE_RATE", str(cls.fee_rate))),
                losses_before_pause=int(_env("LOSSES_BEFORE_PAUSE", str(cls.losses_before_pause))),
                pause_duration_ms=pause_minutes_to_ms(pause_minutes),
            )
        except ConfigError:
            raise
        except ValueError as exc:
            raise ConfigError(f"Invalid backtest setting in environment: {exc}") from exc

    def with_overrides(self, **overrides: Any) -> "BacktestConfig":
        """Return a copy with every non-None override applied."""
        values = {key: value for key, value in overrides.items() if value is not None}
        return replace(self, **values)
