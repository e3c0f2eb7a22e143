"""
Backtest engine: day-by-day walk, one position at a time, close-only triggers.
"""

from __future__ import annotations
import asyncio
import logging
from dataclasses import dataclass, field
from typing import List, Optional

import pandas as pd

from chartlab.analytics.metrics import PerformanceMetrics, compute_metrics, equity_curve
from chartlab.core.types import (
    PatternType,
    Position,
    PriceBar,
    SignalSide,
    Trade,
    TradeResult,
)
from chartlab.data.base import PriceProvider, frame_to_bars
from chartlab.data.synthetic import SyntheticPriceProvider
from chartlab.strategies.base import BaseStrategy
from chartlab.strategies.pattern_rules import PatternRuleStrategy, strongest_pattern

logger = logging.getLogger("chartlab.backtest")


@dataclass(frozen=True)
class BacktestResult:
    """Backtest output: ordered trades, compounded equity curve, metrics."""
    symbol: str
    trades: List[Trade] = field(default_factory=list)
    equity_curve: List[float] = field(default_factory=lambda: [1.0])
    metrics: PerformanceMetrics = field(default_factory=lambda: compute_metrics([]))

    def to_dict(self) -> dict:
        out = {"symbol": self.symbol}
        out.update(self.metrics.to_dict())
        out["trades"] = [t.to_dict() for t in self.trades]
        return out


class BacktestEngine:
    """
    Entry (flat, index >= entry_start_index): strongest pattern above min_confidence,
    bullish -> LONG, bearish -> SHORT at the close.
    Exit (index >= exit_start_index): take profit, stop loss, or max holding bars.
    The final bar is never walked; an open position there is dropped unless
    close_open_at_end is set.
    """

    def __init__(
        self,
        strategy: Optional[BaseStrategy] = None,
        entry_start_index: int = 50,
        exit_start_index: int = 56,
        min_confidence: float = 0.6,
        take_profit_pct: float = 0.05,
        stop_loss_pct: float = 0.03,
        max_holding_bars: int = 10,
        close_open_at_end: bool = False,
    ):
        self.strategy = strategy or PatternRuleStrategy()
        if entry_start_index < self.strategy.min_history - 1:
            raise ValueError(
                f"entry_start_index {entry_start_index} is before indicator warmup "
                f"({self.strategy.min_history} bars)"
            )
        self.entry_start_index = entry_start_index
        self.exit_start_index = exit_start_index
        self.min_confidence = min_confidence
        self.take_profit_pct = take_profit_pct
        self.stop_loss_pct = stop_loss_pct
        self.max_holding_bars = max_holding_bars
        self.close_open_at_end = close_open_at_end

    def _exit_reason(self, ret: float, holding: int) -> Optional[str]:
        if ret > self.take_profit_pct:
            return "take_profit"
        if ret < -self.stop_loss_pct:
            return "stop_loss"
        if holding > self.max_holding_bars:
            return "time_exit"
        return None

    @staticmethod
    def _close(pos: Position, bar: PriceBar, index: int, reason: str) -> Trade:
        ret = pos.return_at(bar.close)
        return Trade(
            entry_date=pos.entry_date,
            exit_date=bar.date,
            entry_price=pos.entry_price,
            exit_price=bar.close,
            action=pos.side,
            return_pct=ret,
            result=TradeResult.WIN if ret > 0 else TradeResult.LOSS,
            pattern=pos.pattern,
            exit_reason=reason,
            holding_bars=index - pos.entry_index,
        )

    def run(self, df: pd.DataFrame, symbol: str = "AAPL") -> BacktestResult:
        """Run on an OHLCV frame (date, open, high, low, close, volume), oldest first."""
        bars = frame_to_bars(df)
        closes = [b.close for b in bars]
        trades: List[Trade] = []
        position: Optional[Position] = None

        if len(bars) - 1 <= self.entry_start_index:
            logger.warning(
                "%s: %d bars, need more than %d to trade; no trades",
                symbol, len(bars), self.entry_start_index + 1,
            )

        for i in range(self.entry_start_index, len(bars) - 1):
            bar = bars[i]

            if position is None:
                snapshot = self.strategy.compute_indicators(closes[: i + 1])
                best = strongest_pattern(self.strategy.get_patterns(snapshot))
                if best is not None and best.confidence > self.min_confidence:
                    side = None
                    if best.type == PatternType.BULLISH:
                        side = SignalSide.LONG
                    elif best.type == PatternType.BEARISH:
                        side = SignalSide.SHORT
                    if side is not None:
                        position = Position(
                            side=side,
                            entry_index=i,
                            entry_date=bar.date,
                            entry_price=bar.close,
                            pattern=best.name,
                        )
                        logger.debug("%s %s entry %s @ %.2f (%s)",
                                     symbol, side.name, bar.date, bar.close, best.name)

            if position is not None and i >= self.exit_start_index:
                reason = self._exit_reason(position.return_at(bar.close), i - position.entry_index)
                if reason:
                    trade = self._close(position, bar, i, reason)
                    trades.append(trade)
                    logger.debug("%s exit %s @ %.2f %s %.4f",
                                 symbol, bar.date, bar.close, reason, trade.return_pct)
                    position = None

        if position is not None:
            if self.close_open_at_end:
                trades.append(self._close(position, bars[-1], len(bars) - 1, "end_of_data"))
            else:
                logger.info("%s: open %s position from %s dropped at end of data",
                            symbol, position.side.name, position.entry_date)

        returns = [t.return_pct for t in trades]
        metrics = compute_metrics(returns)
        logger.info("%s: %d trades, win rate %.1f%%, total return %.2f%%",
                    symbol, metrics.total_trades, metrics.win_rate * 100, metrics.total_return * 100)
        return BacktestResult(
            symbol=symbol,
            trades=trades,
            equity_curve=equity_curve(returns),
            metrics=metrics,
        )


def run_backtest(
    symbol: str,
    days: int = 252,
    seed: Optional[int] = None,
    provider: Optional[PriceProvider] = None,
    engine: Optional[BacktestEngine] = None,
) -> BacktestResult:
    """Fetch `days` of history for `symbol` and run the engine. Synthetic data by default."""
    provider = provider or SyntheticPriceProvider(seed=seed)
    engine = engine or BacktestEngine()
    df = provider.get_history(symbol, days)
    return engine.run(df, symbol=symbol.upper())


async def run_backtest_async(
    symbol: str,
    days: int = 252,
    seed: Optional[int] = None,
    provider: Optional[PriceProvider] = None,
    engine: Optional[BacktestEngine] = None,
) -> BacktestResult:
    """Awaitable run_backtest; the walk runs in a worker thread.

    Concurrent runs must not share mutable provider state, so a provider with
    `shares_state` set (a SyntheticPriceProvider built on an injected rng) is
    rejected. Give each task its own provider or a seed instead.
    """
    if provider is not None and provider.shares_state:
        raise ValueError(f"{type(provider).__name__} shares state across calls; not usable from a worker thread")
    return await asyncio.to_thread(run_backtest, symbol, days, seed, provider, engine)
