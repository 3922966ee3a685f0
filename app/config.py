from candlesim.config import DATA_DIR, LOGS_DIR, RESULTS_DIR, SYMBOL

DEFAULT_SYMBOL = SYMBOL

__all__ = ["DATA_DIR", "DEFAULT_SYMBOL", "LOGS_DIR", "RESULTS_DIR"]
