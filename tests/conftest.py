"""Shared fixtures: OHLCV frames from a list of closes."""

from datetime import date, timedelta

import pandas as pd
import pytest


def make_frame(closes, start=date(2024, 1, 1)):
    """Daily frame; open = previous close, 1% wicks, constant volume."""
    closes = [float(c) for c in closes]
    opens = [closes[0]] + closes[:-1]
    return pd.DataFrame({
        "date": pd.to_datetime([start + timedelta(days=i) for i in range(len(closes))]),
        "open": opens,
        "high": [max(o, c) * 1.01 for o, c in zip(opens, closes)],
        "low": [min(o, c) * 0.99 for o, c in zip(opens, closes)],
        "close": closes,
        "volume": [1_000_000] * len(closes),
    })


@pytest.fixture
def frame_factory():
    return make_frame


@pytest.fixture
def oversold_closes():
    """Flat at 100, fourteen 1-point drops into index 50 (close 86)."""
    return [100.0] * 37 + [float(99 - k) for k in range(14)]
