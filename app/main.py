from fastapi import FastAPI, HTTPException

from app.config import DATA_DIR, DEFAULT_SYMBOL, LOGS_DIR
from app.models import BacktestRequest, DatasetInfo, DatasetList
from candlesim.analysis import analyze_days
from candlesim.data import DataSourceError, JsonCandleStore
from candlesim.execution import (
    BacktestConfig,
    CandleDataError,
    ConfigError,
    LogLineObserver,
    pause_minutes_to_ms,
    run_backtest,
)

app = FastAPI()


@app.on_event("startup")
def _startup() -> None:
    LOGS_DIR.mkdir(parents=True, exist_ok=True)


def _store() -> JsonCandleStore:
    return JsonCandleStore(DATA_DIR)


@app.get("/datasets")
def datasets(symbol: str | None = None) -> DatasetList:
    resolved = symbol or DEFAULT_SYMBOL
    handles = _store().list_datasets(resolved)
    return DatasetList(
        symbol=resolved,
        datasets=[DatasetInfo(name=handle.name, day=handle.day) for handle in handles],
    )


@app.post("/backtest")
def backtest(request: BacktestRequest) -> dict[str, object]:
    symbol = request.symbol or DEFAULT_SYMBOL
    store = _store()
    if not store.list_datasets(symbol):
        raise HTTPException(status_code=404, detail=f"no datasets for {symbol}")

    try:
        pause_ms = (
            pause_minutes_to_ms(request.pause_duration_minutes)
            if request.pause_duration_minutes is not None
            else None
        )
        config = BacktestConfig().with_overrides(
            initial_equity=request.initial_equity,
            position_size_usd=request.position_size_usd,
            stop_loss_fraction=request.stop_loss_fraction,
            fee_rate=request.fee_rate,
            losses_before_pause=request.losses_before_pause,
            pause_duration_ms=pause_ms,
        )
    except ConfigError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc

    observer = LogLineObserver(log_path=LOGS_DIR / "api_backtest.log", state_path=None)
    try:
        report = run_backtest(store, symbol, config, observer)
    except CandleDataError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    except DataSourceError as exc:
        raise HTTPException(status_code=500, detail=str(exc)) from exc

    payload = report.to_dict(include_trades=request.include_trades)
    payload["symbol"] = symbol
    return payload


@app.get("/analysis")
def analysis(symbol: str | None = None) -> dict[str, object]:
    resolved = symbol or DEFAULT_SYMBOL
    store = _store()
    handles = store.list_datasets(resolved)
    if not handles:
        raise HTTPException(status_code=404, detail=f"no datasets for {resolved}")
    try:
        report = analyze_days(store.load_candles(handle) for handle in handles)
    except CandleDataError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    except DataSourceError as exc:
        raise HTTPException(status_code=500, detail=str(exc)) from exc
    return {"symbol": resolved, **report.to_dict()}
