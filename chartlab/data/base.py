"""Abstract price provider: ordered daily OHLCV history for a symbol."""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import List

import pandas as pd

from chartlab.core.types import PriceBar

OHLCV_COLUMNS = ["date", "open", "high", "low", "close", "volume"]


class PriceProvider(ABC):
    """
    Supplies daily history. Construct once, open, pass to whatever needs it, close.
    Usable as a context manager.
    """

    # True when get_history mutates state shared between calls (e.g. one RNG)
    shares_state = False

    def open(self) -> None:
        """Acquire resources. Default no-op."""

    def close(self) -> None:
        """Release resources. Default no-op."""

    def __enter__(self) -> "PriceProvider":
        self.open()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    @abstractmethod
    def get_history(self, symbol: str, days: int = 252) -> pd.DataFrame:
        """
        Return `days` bars, oldest first, with columns: date, open, high, low, close, volume.
        Raise DataUnavailable if the history is shorter than requested.
        """
        pass


def frame_to_bars(df: pd.DataFrame) -> List[PriceBar]:
    """Convert an OHLCV frame to PriceBar list, preserving order."""
    return [
        PriceBar(
            date=pd.Timestamp(row.date).date(),
            open=float(row.open),
            high=float(row.high),
            low=float(row.low),
            close=float(row.close),
            volume=int(row.volume),
        )
        for row in df[OHLCV_COLUMNS].itertuples(index=False)
    ]
