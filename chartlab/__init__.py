"""Chart pattern backtesting: synthetic/CSV history, indicator rules, trade simulation."""

__version__ = "0.1.0"
