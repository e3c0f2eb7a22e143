"""Strategies: indicator engine, signal rules, base interface."""

from chartlab.strategies.base import BaseStrategy
from chartlab.strategies.indicators import compute_snapshot, rsi, sma
from chartlab.strategies.pattern_rules import (
    DEFAULT_RULES,
    PatternRuleStrategy,
    SignalRule,
    detect_patterns,
    strongest_pattern,
)

__all__ = [
    "BaseStrategy",
    "compute_snapshot",
    "rsi",
    "sma",
    "DEFAULT_RULES",
    "PatternRuleStrategy",
    "SignalRule",
    "detect_patterns",
    "strongest_pattern",
]
