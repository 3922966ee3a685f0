"""Flip-on-loss direction policy."""
from __future__ import annotations

from .models import PositionSide

INITIAL_SIDE = PositionSide.LONG


def is_win(pnl: float) -> bool:
    """Only a strictly positive pnl counts as a win; break-even is a loss."""
    return pnl > 0


def next_side(current_side: PositionSide, trade_was_profitable: bool) -> PositionSide:
    """Keep the side after a win, reverse it after anything else."""
    if trade_was_profitable:
        return current_side
    return current_side.flipped()
