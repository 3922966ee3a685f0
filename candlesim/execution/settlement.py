"""Stop-loss and fee settlement for one-candle trades."""
from __future__ import annotations

from .models import PositionSide, Settlement


def compute_stop(entry: float, side: PositionSide, stop_loss_fraction: float) -> float:
    """Compute stop-loss price using a fixed percentage distance."""
    if side is PositionSide.LONG:
        return entry * (1 - stop_loss_fraction)
    return entry * (1 + stop_loss_fraction)


def compute_quantity(position_size_usd: float, entry: float) -> float:
    """Constant notional sizing: the same USD amount on every trade."""
    return position_size_usd / entry


def settle(
    side: PositionSide,
    open_price: float,
    high_price: float,
    low_price: float,
    close_price: float,
    position_size_usd: float,
    stop_loss_fraction: float,
    fee_rate: float,
) -> Settlement:
    """Settle a trade opened at the candle open and closed within the candle.

    The stop is checked against the candle extreme first; when it is touched the
    fill is the stop price itself, never the close. Both legs pay ``fee_rate``
    on their notional whatever the exit type.
    """
    quantity = compute_quantity(position_size_usd, open_price)
    stop_price = compute_stop(open_price, side, stop_loss_fraction)

    if side is PositionSide.LONG:
        stopped_out = low_price <= stop_price
        exit_price = stop_price if stopped_out else close_price
        gross_pnl = (exit_price - open_price) * quantity
    else:
        stopped_out = high_price >= stop_price
        exit_price = stop_price if stopped_out else close_price
        gross_pnl = (open_price - exit_price) * quantity

    entry_fee = (open_price * quantity) * fee_rate
    exit_fee = (exit_price * quantity) * fee_rate
    pnl = gross_pnl - entry_fee - exit_fee
    return Settlement(
        exit_price=exit_price,
        pnl=pnl,
        gross_pnl=gross_pnl,
        fees=entry_fee + exit_fee,
        stopped_out=stopped_out,
    )
