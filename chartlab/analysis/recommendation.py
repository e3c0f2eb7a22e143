"""
Rule-table chart analysis on the latest bar: pattern list plus a BUY/SELL/HOLD
recommendation with volatility-scaled stop and 2.5x target.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Sequence

import pandas as pd

from chartlab.core.errors import DataUnavailable
from chartlab.core.types import IndicatorSnapshot, PatternType, SignalPattern

logger = logging.getLogger("chartlab.analysis")

MAX_PATTERNS = 3
MIN_STOP_PCT = 0.02
REWARD_MULT = 2.5


class Action(str, Enum):
    BUY = "BUY"
    SELL = "SELL"
    HOLD = "HOLD"


class Conviction(str, Enum):
    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"


@dataclass(frozen=True)
class Quote:
    """Latest price and day-over-day change."""
    symbol: str
    price: float
    change: float
    change_pct: float
    previous_close: float
    volume: int


@dataclass(frozen=True)
class TradingRecommendation:
    action: Action
    confidence: Conviction
    reasoning: str
    stop_loss: float
    target_price: float
    risk_reward: float


def quote_from_history(df: pd.DataFrame, symbol: str) -> Quote:
    """Quote from the last two bars of an OHLCV frame."""
    if df.empty:
        raise DataUnavailable(f"{symbol}: no bars to quote")
    last = df.iloc[-1]
    price = float(last["close"])
    prev = float(df.iloc[-2]["close"]) if len(df) > 1 else price
    change = price - prev
    return Quote(
        symbol=symbol.upper(),
        price=price,
        change=change,
        change_pct=change / prev * 100 if prev else 0.0,
        previous_close=prev,
        volume=int(last["volume"]),
    )


def analyze_patterns(quote: Quote, snapshot: IndicatorSnapshot) -> List[SignalPattern]:
    """RSI, MACD, moving-average and band patterns; first three matches."""
    patterns: List[SignalPattern] = []
    rsi = snapshot.rsi

    if rsi > 70:
        patterns.append(SignalPattern(
            name="Overbought Condition",
            type=PatternType.BEARISH,
            confidence=min(0.95, (rsi - 70) / 30 + 0.7),
            description="RSI indicates overbought conditions, potential reversal signal",
            reliability="high" if rsi > 80 else "medium",
        ))
    elif rsi < 30:
        patterns.append(SignalPattern(
            name="Oversold Condition",
            type=PatternType.BULLISH,
            confidence=min(0.95, (30 - rsi) / 30 + 0.7),
            description="RSI indicates oversold conditions, potential bounce signal",
            reliability="high" if rsi < 20 else "medium",
        ))

    macd_conf = min(0.9, abs(snapshot.macd) * 0.5 + 0.6)
    macd_reliability = "high" if abs(snapshot.macd) > 1 else "medium"
    if snapshot.macd > 0:
        patterns.append(SignalPattern(
            name="MACD Bullish Signal",
            type=PatternType.BULLISH,
            confidence=macd_conf,
            description="MACD above zero indicates bullish momentum",
            reliability=macd_reliability,
        ))
    else:
        patterns.append(SignalPattern(
            name="MACD Bearish Signal",
            type=PatternType.BEARISH,
            confidence=macd_conf,
            description="MACD below zero indicates bearish momentum",
            reliability=macd_reliability,
        ))

    if quote.price > snapshot.sma20 > snapshot.sma50:
        patterns.append(SignalPattern(
            name="Golden Cross Formation",
            type=PatternType.BULLISH,
            confidence=0.85,
            description="Price above short-term MA, which is above long-term MA",
            reliability="high",
        ))
    elif quote.price < snapshot.sma20 < snapshot.sma50:
        patterns.append(SignalPattern(
            name="Death Cross Formation",
            type=PatternType.BEARISH,
            confidence=0.85,
            description="Price below short-term MA, which is below long-term MA",
            reliability="high",
        ))

    if quote.price > snapshot.bollinger_upper:
        patterns.append(SignalPattern(
            name="Bollinger Band Breakout",
            type=PatternType.BULLISH,
            confidence=0.75,
            description="Price broke above upper Bollinger Band",
        ))
    elif quote.price < snapshot.bollinger_lower:
        patterns.append(SignalPattern(
            name="Bollinger Band Oversold",
            type=PatternType.BULLISH,
            confidence=0.75,
            description="Price touched lower Bollinger Band, potential bounce",
        ))

    return patterns[:MAX_PATTERNS]


def generate_recommendation(
    quote: Quote,
    snapshot: IndicatorSnapshot,
    patterns: Sequence[SignalPattern],
) -> TradingRecommendation:
    """
    Net score = bullish confidence sum - bearish confidence sum.
    > 0.5 BUY, < -0.5 SELL, else HOLD; beyond +-1.2 is HIGH conviction.
    """
    bullish = sum(p.confidence for p in patterns if p.type == PatternType.BULLISH)
    bearish = sum(p.confidence for p in patterns if p.type == PatternType.BEARISH)
    net = bullish - bearish

    if net > 0.5:
        action = Action.BUY
        confidence = Conviction.HIGH if net > 1.2 else Conviction.MEDIUM
    elif net < -0.5:
        action = Action.SELL
        confidence = Conviction.HIGH if net < -1.2 else Conviction.MEDIUM
    else:
        action = Action.HOLD
        confidence = Conviction.LOW

    volatility = abs(quote.change) / quote.previous_close if quote.previous_close else 0.0
    stop_pct = max(MIN_STOP_PCT, volatility * 1.5)
    target_pct = stop_pct * REWARD_MULT

    # HOLD levels are quoted on the short side
    if action == Action.BUY:
        stop_loss = quote.price * (1 - stop_pct)
        target_price = quote.price * (1 + target_pct)
    else:
        stop_loss = quote.price * (1 + stop_pct)
        target_price = quote.price * (1 - target_pct)

    risk_reward = abs(target_price - quote.price) / abs(quote.price - stop_loss)
    reasoning = (
        f"Technical analysis shows {len(patterns)} patterns detected. "
        f"RSI: {snapshot.rsi:.1f}, MACD: {snapshot.macd:.3f}"
    )
    logger.debug("%s net score %.2f -> %s/%s", quote.symbol, net, action.value, confidence.value)
    return TradingRecommendation(
        action=action,
        confidence=confidence,
        reasoning=reasoning,
        stop_loss=stop_loss,
        target_price=target_price,
        risk_reward=risk_reward,
    )
