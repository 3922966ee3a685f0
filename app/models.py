from typing import Optional

from pydantic import BaseModel, Field


class BacktestRequest(BaseModel):
    symbol: Optional[str] = None
    initial_equity: Optional[float] = None
    position_size_usd: Optional[float] = None
    stop_loss_fraction: Optional[float] = None
    fee_rate: Optional[float] = None
    losses_before_pause: Optional[int] = None
    pause_duration_minutes: Optional[float] = Field(default=None, ge=0)
    include_trades: bool = False


class DatasetInfo(BaseModel):
    name: str
    day: str


class DatasetList(BaseModel):
    symbol: str
    datasets: list[DatasetInfo]
