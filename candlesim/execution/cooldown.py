"""Loss-streak cooldown gate."""
from __future__ import annotations

from .models import CooldownUpdate


def should_skip(candle_timestamp: int, pause_until: int) -> bool:
    """Return True while trading is paused; the resume timestamp itself is tradable."""
    return candle_timestamp < pause_until


def update_consecutive_losses(previous: int, won: bool) -> int:
    if won:
        return 0
    return previous + 1


def on_trade_settled(
    won: bool,
    consecutive_losses: int,
    candle_timestamp: int,
    losses_before_pause: int,
    pause_duration_ms: int,
) -> CooldownUpdate:
    """Advance the loss streak and open a pause window when it hits the limit.

    The pause is a wall-clock window on candle open times, so a data gap longer
    than ``pause_duration_ms`` leaves the next available candle tradable.
    """
    losses = update_consecutive_losses(consecutive_losses, won)
    if losses >= losses_before_pause:
        return CooldownUpdate(
            consecutive_losses=0,
            triggered_pause=True,
            pause_until=candle_timestamp + pause_duration_ms,
        )
    return CooldownUpdate(consecutive_losses=losses, triggered_pause=False)
