"""
Core data types for price bars, indicator readings, patterns, positions, and trades.
"""

from __future__ import annotations
from dataclasses import dataclass
from datetime import date
from enum import Enum


class SignalSide(str, Enum):
    LONG = "BUY"
    SHORT = "SELL"


class PatternType(str, Enum):
    BULLISH = "bullish"
    BEARISH = "bearish"
    NEUTRAL = "neutral"


class TradeResult(str, Enum):
    WIN = "WIN"
    LOSS = "LOSS"


@dataclass(frozen=True)
class PriceBar:
    """Daily OHLCV bar."""
    date: date
    open: float
    high: float
    low: float
    close: float
    volume: int


@dataclass(frozen=True)
class IndicatorSnapshot:
    """Indicator readings for the last bar of a price prefix."""
    rsi: float
    macd: float  # SMA20 - SMA50, not EMA based
    sma20: float
    sma50: float
    bollinger_upper: float
    bollinger_lower: float


@dataclass(frozen=True)
class SignalPattern:
    """Directional hint derived from one snapshot."""
    name: str
    type: PatternType
    confidence: float
    description: str = ""
    reliability: str = "medium"


@dataclass
class Position:
    """Open position state. At most one per simulation."""
    side: SignalSide
    entry_index: int
    entry_date: date
    entry_price: float
    pattern: str

    def return_at(self, price: float) -> float:
        """Signed fractional return if closed at price."""
        if self.side == SignalSide.LONG:
            return (price - self.entry_price) / self.entry_price
        return (self.entry_price - price) / self.entry_price


@dataclass(frozen=True)
class Trade:
    """Closed round trip."""
    entry_date: date
    exit_date: date
    entry_price: float
    exit_price: float
    action: SignalSide
    return_pct: float  # signed fraction, 0.05 == 5%
    result: TradeResult
    pattern: str
    exit_reason: str  # "take_profit" | "stop_loss" | "time_exit" | "end_of_data"
    holding_bars: int = 0

    def to_dict(self) -> dict:
        return {
            "entry_date": self.entry_date.isoformat(),
            "exit_date": self.exit_date.isoformat(),
            "entry_price": self.entry_price,
            "exit_price": self.exit_price,
            "action": self.action.value,
            "return": self.return_pct,
            "result": self.result.value,
            "pattern": self.pattern,
            "exit_reason": self.exit_reason,
            "holding_bars": self.holding_bars,
        }
