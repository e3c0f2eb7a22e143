"""Unit tests for analysis.recommendation and analysis.symbols."""

import pandas as pd
import pytest
from chartlab.analysis import (
    Action,
    Conviction,
    Quote,
    analyze_patterns,
    extract_symbol,
    generate_recommendation,
    normalize_symbol,
    quote_from_history,
)
from chartlab.core.errors import DataUnavailable
from chartlab.core.types import IndicatorSnapshot, PatternType, SignalPattern


def snap(rsi=50.0, macd=0.0, sma20=100.0, sma50=100.0):
    return IndicatorSnapshot(
        rsi=rsi, macd=macd, sma20=sma20, sma50=sma50,
        bollinger_upper=sma20 * 1.02, bollinger_lower=sma20 * 0.98,
    )


def quote(price=100.0, change=1.0):
    return Quote(symbol="AAPL", price=price, change=change, change_pct=change / (price - change) * 100,
                 previous_close=price - change, volume=1_000_000)


def test_quote_from_history(frame_factory):
    q = quote_from_history(frame_factory([100.0, 98.0, 99.0]), "aapl")
    assert q.symbol == "AAPL"
    assert q.price == 99.0
    assert q.previous_close == 98.0
    assert q.change == pytest.approx(1.0)
    assert q.change_pct == pytest.approx(100 / 98)
    assert q.volume == 1_000_000


def test_quote_from_empty_history(frame_factory):
    with pytest.raises(DataUnavailable):
        quote_from_history(frame_factory([100.0]).iloc[0:0], "AAPL")


def test_analyze_overbought_keeps_first_three():
    patterns = analyze_patterns(quote(price=110.0), snap(rsi=85.0, macd=2.0, sma20=105.0, sma50=103.0))
    assert [p.name for p in patterns] == [
        "Overbought Condition", "MACD Bullish Signal", "Golden Cross Formation",
    ]
    assert patterns[0].confidence == pytest.approx(0.95)
    assert patterns[0].reliability == "high"
    assert patterns[1].confidence == pytest.approx(0.9)
    assert patterns[1].reliability == "high"
    assert patterns[2].confidence == 0.85


def test_analyze_oversold_and_band_touch():
    patterns = analyze_patterns(quote(price=90.0), snap(rsi=25.0, macd=-0.2, sma20=100.0, sma50=99.0))
    assert [p.name for p in patterns] == [
        "Oversold Condition", "MACD Bearish Signal", "Bollinger Band Oversold",
    ]
    assert patterns[0].confidence == pytest.approx(5 / 30 + 0.7)
    assert patterns[0].reliability == "medium"
    assert patterns[1].confidence == pytest.approx(0.7)
    assert patterns[1].type == PatternType.BEARISH
    assert patterns[2].type == PatternType.BULLISH


def test_analyze_zero_macd_is_bearish():
    patterns = analyze_patterns(quote(price=100.0), snap())
    assert [p.name for p in patterns] == ["MACD Bearish Signal"]


def test_recommendation_buy_high():
    patterns = [
        SignalPattern("MACD Bullish Signal", PatternType.BULLISH, 0.9),
        SignalPattern("Golden Cross Formation", PatternType.BULLISH, 0.85),
    ]
    rec = generate_recommendation(quote(price=100.0, change=1.0), snap(rsi=55.0, macd=2.0), patterns)
    assert rec.action == Action.BUY
    assert rec.confidence == Conviction.HIGH
    assert rec.stop_loss == pytest.approx(98.0)
    assert rec.target_price == pytest.approx(105.0)
    assert rec.risk_reward == pytest.approx(2.5)
    assert "2 patterns" in rec.reasoning
    assert "RSI: 55.0" in rec.reasoning


def test_recommendation_sell_medium_uses_volatility_stop():
    patterns = [SignalPattern("Death Cross Formation", PatternType.BEARISH, 0.85)]
    rec = generate_recommendation(quote(price=100.0, change=-4.0), snap(), patterns)
    assert rec.action == Action.SELL
    assert rec.confidence == Conviction.MEDIUM
    stop_pct = 1.5 * 4.0 / 104.0
    assert rec.stop_loss == pytest.approx(100.0 * (1 + stop_pct))
    assert rec.target_price == pytest.approx(100.0 * (1 - 2.5 * stop_pct))


def test_recommendation_hold():
    patterns = [
        SignalPattern("MACD Bullish Signal", PatternType.BULLISH, 0.6),
        SignalPattern("Overbought Condition", PatternType.BEARISH, 0.7),
    ]
    rec = generate_recommendation(quote(), snap(), patterns)
    assert rec.action == Action.HOLD
    assert rec.confidence == Conviction.LOW
    assert rec.stop_loss > 100.0 > rec.target_price


@pytest.mark.parametrize("filename,expected", [
    ("nflx_candlestick.png", "NFLX"),
    ("Tesla_chart.png", "TSLA"),
    ("screenshots/apple-daily.jpg", "AAPL"),
    ("my_xyz_chart.png", "XYZ"),
    ("IMG_0042.jpeg", "AAPL"),
])
def test_extract_symbol(filename, expected):
    assert extract_symbol(filename) == expected


def test_normalize_symbol():
    assert normalize_symbol("  msft ") == "MSFT"
