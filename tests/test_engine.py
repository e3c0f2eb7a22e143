"""Unit tests for backtesting.engine."""

import asyncio
from datetime import date

import numpy as np
import pytest
from chartlab.backtesting.engine import BacktestEngine, run_backtest, run_backtest_async
from chartlab.core.types import SignalSide, TradeResult
from chartlab.data import SyntheticPriceProvider

END = date(2024, 6, 30)


def index_of(df, d):
    return [ts.date() for ts in df["date"]].index(d)


def test_long_take_profit(frame_factory, oversold_closes):
    # entry at index 50 (close 86), +5.8% at index 56
    closes = oversold_closes + [87, 88, 89, 90, 90, 91, 91]
    df = frame_factory(closes)
    result = BacktestEngine().run(df, symbol="TEST")
    assert len(result.trades) == 1
    t = result.trades[0]
    assert t.action == SignalSide.LONG
    assert t.action.value == "BUY"
    assert t.pattern == "RSI Oversold"
    assert t.entry_price == 86.0
    assert t.exit_price == 91.0
    assert t.return_pct == pytest.approx(5 / 86)
    assert t.result == TradeResult.WIN
    assert t.exit_reason == "take_profit"
    assert t.holding_bars == 6
    assert index_of(df, t.entry_date) == 50
    assert index_of(df, t.exit_date) == 56
    assert result.metrics.total_trades == 1
    assert result.metrics.win_rate == 1.0
    assert result.equity_curve == pytest.approx([1.0, 1 + 5 / 86])


def test_short_stop_loss(frame_factory):
    # fourteen 1-point rises into index 50 (close 114): RSI 100 -> SHORT
    closes = [100.0] * 37 + [float(101 + k) for k in range(14)]
    closes += [115, 116, 117, 118, 118, 118.6, 118.6]
    result = BacktestEngine().run(frame_factory(closes))
    assert len(result.trades) == 1
    t = result.trades[0]
    assert t.action == SignalSide.SHORT
    assert t.action.value == "SELL"
    assert t.pattern == "RSI Overbought"
    assert t.return_pct == pytest.approx((114 - 118.6) / 114)
    assert t.result == TradeResult.LOSS
    assert t.exit_reason == "stop_loss"
    assert result.metrics.losing_trades == 1
    # a lone losing trade has no earlier peak to fall from
    assert result.metrics.max_drawdown == 0.0


def test_no_exit_before_exit_start_index(frame_factory, oversold_closes):
    # +16% on index 51 is ignored; exit waits for index 56
    closes = oversold_closes + [100, 100, 100, 100, 100, 100, 100]
    df = frame_factory(closes)
    t = BacktestEngine().run(df).trades[0]
    assert index_of(df, t.exit_date) == 56
    assert t.exit_reason == "take_profit"


def test_time_exit(frame_factory, oversold_closes):
    closes = oversold_closes + [86.5] * 12
    df = frame_factory(closes)
    result = BacktestEngine().run(df)
    assert len(result.trades) == 1
    t = result.trades[0]
    assert t.exit_reason == "time_exit"
    assert t.holding_bars == 11
    assert index_of(df, t.exit_date) == 61
    assert t.result == TradeResult.WIN


def test_open_position_dropped_at_end(frame_factory, oversold_closes):
    closes = oversold_closes + [86.5] * 7
    result = BacktestEngine().run(frame_factory(closes))
    assert result.trades == []
    assert result.metrics.total_trades == 0
    assert result.equity_curve == [1.0]


def test_open_position_force_closed_at_end(frame_factory, oversold_closes):
    closes = oversold_closes + [86.5] * 7
    df = frame_factory(closes)
    result = BacktestEngine(close_open_at_end=True).run(df)
    assert len(result.trades) == 1
    t = result.trades[0]
    assert t.exit_reason == "end_of_data"
    assert t.exit_price == 86.5
    assert index_of(df, t.exit_date) == len(df) - 1
    assert t.holding_bars == len(df) - 1 - 50


def test_flat_series_no_trades(frame_factory):
    result = BacktestEngine().run(frame_factory([100.0] * 120))
    assert result.trades == []
    m = result.metrics
    assert (m.total_trades, m.winning_trades, m.losing_trades) == (0, 0, 0)
    assert m.win_rate == 0.0
    assert m.sharpe_ratio == 0.0
    assert m.max_drawdown == 0.0


def test_short_history_no_trades(frame_factory):
    result = BacktestEngine().run(frame_factory([100.0] * 40))
    assert result.trades == []
    assert result.metrics.total_trades == 0


def test_entry_start_before_warmup_rejected():
    with pytest.raises(ValueError):
        BacktestEngine(entry_start_index=10)


def test_invariants_over_random_runs():
    for seed in range(25):
        provider = SyntheticPriceProvider(seed=seed, end_date=END)
        df = provider.get_history("AAPL", 252)
        result = BacktestEngine().run(df, symbol="AAPL")
        m = result.metrics
        assert m.total_trades == m.winning_trades + m.losing_trades == len(result.trades)
        assert 0.0 <= m.win_rate <= 1.0
        assert m.max_drawdown >= 0.0
        prev_exit = -1
        for t in result.trades:
            entry_i = index_of(df, t.entry_date)
            exit_i = index_of(df, t.exit_date)
            assert entry_i >= 50
            assert exit_i >= 56
            assert entry_i > prev_exit  # one position at a time
            assert exit_i - entry_i == t.holding_bars
            assert (t.result == TradeResult.WIN) == (t.return_pct > 0)
            prev_exit = exit_i


def test_seeded_runs_are_identical():
    a = run_backtest("aapl", 252, provider=SyntheticPriceProvider(seed=11, end_date=END))
    b = run_backtest("aapl", 252, provider=SyntheticPriceProvider(seed=11, end_date=END))
    assert a == b
    assert a.symbol == "AAPL"


def test_run_backtest_seed_argument():
    a = run_backtest("MSFT", 150, seed=5)
    b = run_backtest("MSFT", 150, seed=5)
    assert a.to_dict() == b.to_dict()


def test_run_backtest_async_matches_sync():
    provider = SyntheticPriceProvider(seed=8, end_date=END)
    sync = run_backtest("TSLA", 200, provider=provider)
    result = asyncio.run(run_backtest_async("TSLA", 200, provider=provider))
    assert result == sync


def test_run_backtest_async_rejects_shared_rng():
    provider = SyntheticPriceProvider(rng=np.random.default_rng(1), end_date=END)
    assert provider.shares_state
    with pytest.raises(ValueError, match="shares state"):
        asyncio.run(run_backtest_async("TSLA", 200, provider=provider))
    assert not SyntheticPriceProvider(seed=1).shares_state


def test_to_dict_is_flat():
    result = run_backtest("AAPL", 252, provider=SyntheticPriceProvider(seed=2, end_date=END))
    d = result.to_dict()
    for key in ("symbol", "total_trades", "winning_trades", "losing_trades", "win_rate",
                "total_return", "average_return", "max_drawdown", "sharpe_ratio", "trades"):
        assert key in d
    assert len(d["trades"]) == result.metrics.total_trades
