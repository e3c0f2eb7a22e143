"""Price history providers: synthetic random walk and CSV files."""

from chartlab.data.base import PriceProvider, frame_to_bars, OHLCV_COLUMNS
from chartlab.data.synthetic import SyntheticPriceProvider
from chartlab.data.csv_provider import CsvPriceProvider

__all__ = [
    "PriceProvider",
    "frame_to_bars",
    "OHLCV_COLUMNS",
    "SyntheticPriceProvider",
    "CsvPriceProvider",
]
