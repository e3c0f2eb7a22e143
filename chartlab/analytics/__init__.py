"""Analytics: performance metrics (win rate, drawdown, Sharpe, profit factor)."""

from chartlab.analytics.metrics import (
    PerformanceMetrics,
    compute_metrics,
    equity_curve,
    sharpe_ratio,
    max_drawdown,
    trade_drawdown,
    win_rate,
    profit_factor,
)

__all__ = [
    "PerformanceMetrics",
    "compute_metrics",
    "equity_curve",
    "sharpe_ratio",
    "max_drawdown",
    "trade_drawdown",
    "win_rate",
    "profit_factor",
]
