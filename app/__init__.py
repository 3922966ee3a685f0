"""HTTP service exposing stored datasets, backtests and analysis."""
