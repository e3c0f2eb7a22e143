"""Chart analysis: rule-table patterns, recommendation, symbol extraction."""

from chartlab.analysis.recommendation import (
    Action,
    Conviction,
    Quote,
    TradingRecommendation,
    analyze_patterns,
    generate_recommendation,
    quote_from_history,
)
from chartlab.analysis.symbols import extract_symbol, normalize_symbol

__all__ = [
    "Action",
    "Conviction",
    "Quote",
    "TradingRecommendation",
    "analyze_patterns",
    "generate_recommendation",
    "quote_from_history",
    "extract_symbol",
    "normalize_symbol",
]
