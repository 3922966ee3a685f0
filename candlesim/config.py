import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parents[1]


def _get_str(name: str, default: str) -> str:
    value = os.getenv(name)
    if not value:
        return default
    return value


def _get_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _get_path(name: str, default: Path) -> Path:
    value = os.getenv(name)
    if not value:
        return default
    return Path(value)


SYMBOL = _get_str("SYMBOL", "XRPUSDT")
INTERVAL = _get_str("INTERVAL", "1m")

# Exchange hard cap per klines request; a full day of 1m candles is 1440.
API_MAX_LIMIT = _get_int("API_MAX_LIMIT", 1500)
CANDLES_PER_DAY = 1440

DATA_DIR = _get_path("DATA_DIR", BASE_DIR / "data")
RESULTS_DIR = _get_path("RESULTS_DIR", BASE_DIR / "results")
LOGS_DIR = _get_path("LOGS_DIR", BASE_DIR / "logs")

BINANCE_API_KEY = _get_str("BINANCE_API_KEY", "")
BINANCE_API_SECRET = _get_str("BINANCE_API_SECRET_KEY", "")
