"""
Indicator engine: RSI, SMA20/50, SMA-difference MACD proxy, +-2% Bollinger proxy.
All readings are for the last close of the given prefix.
"""

from __future__ import annotations
from typing import Optional, Sequence

import numpy as np

from chartlab.core.errors import InsufficientHistory
from chartlab.core.types import IndicatorSnapshot

SMA_FAST = 20
SMA_SLOW = 50
BAND_OFFSET = 0.02


def rsi(closes: Sequence[float], period: int = 14) -> float:
    """
    Simple-average RSI over the trailing `period` close deltas.
    No losses -> 100; no movement at all -> 50.
    """
    arr = np.asarray(closes, dtype=float)
    if arr.size < period + 1:
        raise InsufficientHistory(arr.size, period + 1)
    deltas = np.diff(arr)[-period:]
    avg_gain = deltas.clip(min=0).sum() / period
    avg_loss = (-deltas).clip(min=0).sum() / period
    if avg_loss == 0:
        return 50.0 if avg_gain == 0 else 100.0
    rs = avg_gain / avg_loss
    return float(100.0 - 100.0 / (1.0 + rs))


def sma(closes: Sequence[float], window: int) -> Optional[float]:
    """Mean of the trailing `window` closes, or None if fewer are available."""
    arr = np.asarray(closes, dtype=float)
    if window < 1 or arr.size < window:
        return None
    return float(arr[-window:].mean())


def min_history(period: int = 14) -> int:
    """Bars needed before compute_snapshot() is defined."""
    return max(period + 1, SMA_SLOW)


def compute_snapshot(closes: Sequence[float], period: int = 14) -> IndicatorSnapshot:
    """Indicator snapshot for the final close. Raises InsufficientHistory on short prefixes."""
    required = min_history(period)
    if len(closes) < required:
        raise InsufficientHistory(len(closes), required)
    sma20 = sma(closes, SMA_FAST)
    sma50 = sma(closes, SMA_SLOW)
    return IndicatorSnapshot(
        rsi=rsi(closes, period),
        macd=sma20 - sma50,
        sma20=sma20,
        sma50=sma50,
        bollinger_upper=sma20 * (1 + BAND_OFFSET),
        bollinger_lower=sma20 * (1 - BAND_OFFSET),
    )
