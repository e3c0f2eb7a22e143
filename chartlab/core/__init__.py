"""Core: config, types, errors, logging."""

from chartlab.core.config import load_config, Config
from chartlab.core.errors import ChartlabError, DataUnavailable, InsufficientHistory
from chartlab.core.types import (
    PatternType,
    PriceBar,
    IndicatorSnapshot,
    SignalPattern,
    SignalSide,
    Position,
    Trade,
    TradeResult,
)
from chartlab.core.logger import setup_logging

__all__ = [
    "load_config",
    "Config",
    "ChartlabError",
    "DataUnavailable",
    "InsufficientHistory",
    "PatternType",
    "PriceBar",
    "IndicatorSnapshot",
    "SignalPattern",
    "SignalSide",
    "Position",
    "Trade",
    "TradeResult",
    "setup_logging",
]
