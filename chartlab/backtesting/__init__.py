"""Backtesting engine: day-by-day pattern-entry simulation with fixed exits."""

from chartlab.backtesting.engine import (
    BacktestEngine,
    BacktestResult,
    run_backtest,
    run_backtest_async,
)

__all__ = ["BacktestEngine", "BacktestResult", "run_backtest", "run_backtest_async"]
