"""
Performance metrics over per-trade returns: win rate, total/average return,
compounded max drawdown, simple Sharpe, profit factor.
Returns are signed fractions (0.05 == +5%).
"""

from __future__ import annotations
from dataclasses import dataclass, asdict
from typing import List, Optional, Sequence

import numpy as np


@dataclass(frozen=True)
class PerformanceMetrics:
    """Aggregate performance metrics."""
    total_trades: int
    winning_trades: int
    losing_trades: int
    win_rate: float
    total_return: float
    average_return: float
    max_drawdown: float
    sharpe_ratio: float
    profit_factor: Optional[float]  # None when there are no losing trades
    avg_win: float
    avg_loss: float

    def to_dict(self) -> dict:
        return asdict(self)


def sharpe_ratio(returns: Sequence[float]) -> float:
    """Mean / population std of per-trade returns. Not annualized. 0 if undefined."""
    if len(returns) == 0:
        return 0.0
    arr = np.asarray(returns, dtype=float)
    std = arr.std()
    if std <= 1e-12:
        return 0.0
    return float(arr.mean() / std)


def equity_curve(returns: Sequence[float]) -> List[float]:
    """Compounded curve starting at 1.0: [1, (1+r1), (1+r1)(1+r2), ...]."""
    return [1.0] + np.cumprod(1.0 + np.asarray(returns, dtype=float)).tolist()


def max_drawdown(curve: Sequence[float]) -> float:
    """Largest peak-to-trough decline as a positive fraction (0.15 = 15%).

    The first point is the first peak, so pass the curve without the 1.0
    baseline to measure only from the first closed trade onward.
    """
    if len(curve) == 0:
        return 0.0
    arr = np.asarray(curve, dtype=float)
    peak = np.maximum.accumulate(arr)
    dd = (peak - arr) / np.where(peak > 0, peak, 1.0)
    return float(dd.max())


def trade_drawdown(returns: Sequence[float]) -> float:
    """Max drawdown over equity after each trade; a losing run from the start reads 0."""
    if len(returns) == 0:
        return 0.0
    return max_drawdown(equity_curve(returns)[1:])


def win_rate(returns: Sequence[float]) -> float:
    """Fraction of trades with positive return."""
    if len(returns) == 0:
        return 0.0
    return sum(1 for r in returns if r > 0) / len(returns)


def profit_factor(returns: Sequence[float]) -> Optional[float]:
    """Gross win / gross loss. None when nothing was lost."""
    wins = sum(r for r in returns if r > 0)
    losses = sum(-r for r in returns if r < 0)
    if losses <= 0:
        return None
    return wins / losses


def compute_metrics(returns: Sequence[float]) -> PerformanceMetrics:
    """Full metrics from trade returns in chronological order."""
    total_trades = len(returns)
    if total_trades == 0:
        return PerformanceMetrics(
            total_trades=0, winning_trades=0, losing_trades=0, win_rate=0.0,
            total_return=0.0, average_return=0.0, max_drawdown=0.0, sharpe_ratio=0.0,
            profit_factor=None, avg_win=0.0, avg_loss=0.0,
        )
    wins = [r for r in returns if r > 0]
    losses = [r for r in returns if r <= 0]
    total_return = float(sum(returns))
    return PerformanceMetrics(
        total_trades=total_trades,
        winning_trades=len(wins),
        losing_trades=len(losses),
        win_rate=len(wins) / total_trades,
        total_return=total_return,
        average_return=total_return / total_trades,
        max_drawdown=trade_drawdown(returns),
        sharpe_ratio=sharpe_ratio(returns),
        profit_factor=profit_factor(returns),
        avg_win=sum(wins) / len(wins) if wins else 0.0,
        avg_loss=sum(losses) / len(losses) if losses else 0.0,
    )
