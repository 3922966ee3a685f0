"""Minute-candle collection, analysis and backtesting."""
