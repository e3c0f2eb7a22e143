"""
RSI extreme + SMA crossover rules (the backtest signal set).
Rules are evaluated in declared order; ties on confidence go to the earlier rule.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence

from chartlab.core.types import IndicatorSnapshot, PatternType, SignalPattern
from chartlab.strategies.base import BaseStrategy
from chartlab.strategies.indicators import compute_snapshot, min_history


@dataclass(frozen=True)
class SignalRule:
    """Predicate on a snapshot plus the pattern it emits."""
    name: str
    type: PatternType
    confidence: float
    description: str
    predicate: Callable[[IndicatorSnapshot], bool]

    def evaluate(self, snapshot: IndicatorSnapshot) -> Optional[SignalPattern]:
        if not self.predicate(snapshot):
            return None
        return SignalPattern(
            name=self.name,
            type=self.type,
            confidence=self.confidence,
            description=self.description,
        )


DEFAULT_RULES: tuple[SignalRule, ...] = (
    SignalRule("RSI Oversold", PatternType.BULLISH, 0.7,
               "RSI indicates oversold conditions", lambda s: s.rsi < 30),
    SignalRule("RSI Overbought", PatternType.BEARISH, 0.7,
               "RSI indicates overbought conditions", lambda s: s.rsi > 70),
    SignalRule("Bullish MA Crossover", PatternType.BULLISH, 0.6,
               "20-day SMA above 50-day SMA", lambda s: s.sma20 > s.sma50),
    SignalRule("Bearish MA Crossover", PatternType.BEARISH, 0.6,
               "20-day SMA below 50-day SMA", lambda s: s.sma20 < s.sma50),
)


def detect_patterns(
    snapshot: IndicatorSnapshot,
    rules: Sequence[SignalRule] = DEFAULT_RULES,
) -> List[SignalPattern]:
    """All matching patterns, in rule order."""
    patterns = []
    for rule in rules:
        pattern = rule.evaluate(snapshot)
        if pattern is not None:
            patterns.append(pattern)
    return patterns


def strongest_pattern(patterns: Sequence[SignalPattern]) -> Optional[SignalPattern]:
    """Highest confidence; first one wins a tie. None if empty."""
    best: Optional[SignalPattern] = None
    for pattern in patterns:
        if best is None or pattern.confidence > best.confidence:
            best = pattern
    return best


class PatternRuleStrategy(BaseStrategy):
    """Snapshot from closes, patterns from DEFAULT_RULES (or a custom rule list)."""

    def __init__(self, rsi_period: int = 14, rules: Sequence[SignalRule] = DEFAULT_RULES):
        self.rsi_period = rsi_period
        self.rules = tuple(rules)

    @property
    def min_history(self) -> int:
        return min_history(self.rsi_period)

    def compute_indicators(self, closes: Sequence[float]) -> IndicatorSnapshot:
        return compute_snapshot(closes, self.rsi_period)

    def get_patterns(self, snapshot: IndicatorSnapshot) -> List[SignalPattern]:
        return detect_patterns(snapshot, self.rules)
