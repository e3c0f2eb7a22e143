"""Unit tests for analytics.metrics."""

import pytest
from chartlab.analytics.metrics import (
    sharpe_ratio,
    max_drawdown,
    equity_curve,
    win_rate,
    profit_factor,
    compute_metrics,
    trade_drawdown,
)


def test_sharpe_ratio_empty():
    assert sharpe_ratio([]) == 0.0


def test_sharpe_ratio_constant():
    assert sharpe_ratio([0.01] * 10) == 0.0  # zero std


def test_sharpe_ratio_population_std():
    # mean 0.01, population std 0.04
    assert sharpe_ratio([0.05, -0.03]) == pytest.approx(0.25)


def test_win_rate():
    assert win_rate([0.01, -0.01, 0.02, 0.03]) == 0.75
    assert win_rate([0.0]) == 0.0
    assert win_rate([]) == 0.0


def test_profit_factor():
    assert profit_factor([0.10, -0.05, 0.10, -0.05]) == pytest.approx(2.0)
    assert profit_factor([0.10, 0.10]) is None
    assert profit_factor([-0.05, -0.05]) == 0.0


def test_equity_curve_compounds():
    assert equity_curve([0.1, -0.1]) == pytest.approx([1.0, 1.1, 0.99])
    assert equity_curve([]) == [1.0]


def test_max_drawdown():
    # equity 1 -> 1.2 -> 1.0 -> 1.1  =>  peak 1.2, dd (1.2-1.0)/1.2
    assert max_drawdown([1.0, 1.2, 1.0, 1.1]) == pytest.approx(1 / 6)


def test_max_drawdown_with_baseline():
    assert max_drawdown(equity_curve([-0.1])) == pytest.approx(0.1)


def test_trade_drawdown_starts_at_first_trade():
    # peak is the equity after the first trade, not the 1.0 baseline
    assert trade_drawdown([-0.03]) == 0.0
    assert trade_drawdown([-0.03, -0.02]) == pytest.approx(0.02)
    assert trade_drawdown([0.1, -0.1, 0.05]) == pytest.approx(0.1)
    assert trade_drawdown([]) == 0.0
    assert compute_metrics([-0.03]).max_drawdown == 0.0


def test_max_drawdown_zero_when_no_losses():
    assert max_drawdown(equity_curve([0.02, 0.0, 0.05])) == 0.0
    assert max_drawdown([]) == 0.0


def test_compute_metrics_win_and_loss():
    m = compute_metrics([0.05, -0.03])
    assert m.total_trades == 2
    assert m.winning_trades == 1
    assert m.losing_trades == 1
    assert m.total_return == pytest.approx(0.02)
    assert m.average_return == pytest.approx(0.01)
    assert m.win_rate == 0.5
    assert m.max_drawdown == pytest.approx(0.03)  # peak 1.05 -> 1.0185
    assert m.sharpe_ratio == pytest.approx(0.25)
    assert m.profit_factor == pytest.approx(0.05 / 0.03)
    assert m.avg_win == pytest.approx(0.05)
    assert m.avg_loss == pytest.approx(-0.03)


def test_compute_metrics_zero_return_counts_as_loss():
    m = compute_metrics([0.0, 0.01])
    assert m.winning_trades == 1
    assert m.losing_trades == 1
    assert m.total_trades == m.winning_trades + m.losing_trades


def test_compute_metrics_no_trades():
    m = compute_metrics([])
    assert m.total_trades == 0
    assert m.win_rate == 0.0
    assert m.total_return == 0.0
    assert m.average_return == 0.0
    assert m.max_drawdown == 0.0
    assert m.sharpe_ratio == 0.0
    assert m.profit_factor is None
