"""Ticker symbol from a chart image file name or free text."""

from __future__ import annotations
import re
from pathlib import PurePath

DEFAULT_SYMBOL = "AAPL"

# Scanned in order; first substring hit wins.
KNOWN_SYMBOLS = (
    "aapl", "msft", "googl", "amzn", "tsla", "nvda", "meta", "nflx",
    "spy", "qqq", "iwm", "dia", "vti", "voo", "ber", "gld", "slv",
    "netflix", "apple", "microsoft", "google", "amazon", "tesla",
)

COMPANY_TICKERS = {
    "netflix": "NFLX",
    "apple": "AAPL",
    "microsoft": "MSFT",
    "google": "GOOGL",
    "amazon": "AMZN",
    "tesla": "TSLA",
}

_CHART_NAME = re.compile(r"([a-z]{1,5})(?:_chart|_candlestick|chart|\.)", re.IGNORECASE)


def normalize_symbol(text: str) -> str:
    return text.strip().upper()


def extract_symbol(filename: str) -> str:
    """
    Known ticker or company name in the file name, else a short prefix before
    "_chart" / "_candlestick" / "chart" / ".", else AAPL.
    """
    name = PurePath(filename).name.lower()
    for candidate in KNOWN_SYMBOLS:
        if candidate in name:
            return COMPANY_TICKERS.get(candidate, candidate.upper())
    match = _CHART_NAME.search(name)
    if match:
        return match.group(1).upper()
    return DEFAULT_SYMBOL
