"""CSV daily history. Columns: date, open, high, low, close, volume [, symbol]."""

from __future__ import annotations
import logging
from pathlib import Path
from typing import Optional

import pandas as pd

from chartlab.core.errors import DataUnavailable
from chartlab.data.base import PriceProvider, OHLCV_COLUMNS

logger = logging.getLogger("chartlab.data.csv")


class CsvPriceProvider(PriceProvider):
    """Loads the file once on open(); get_history() returns the trailing `days` rows."""

    def __init__(self, path: Path):
        self.path = Path(path)
        self._df: Optional[pd.DataFrame] = None

    def open(self) -> None:
        if self._df is not None:
            return
        if not self.path.exists():
            raise DataUnavailable(f"CSV not found: {self.path}")
        df = pd.read_csv(self.path)
        df.columns = [c.strip().lower() for c in df.columns]
        missing = [c for c in OHLCV_COLUMNS if c not in df.columns]
        if missing:
            raise DataUnavailable(f"{self.path.name} missing columns: {', '.join(missing)}")
        df["date"] = pd.to_datetime(df["date"])
        self._df = df.sort_values("date", kind="stable").reset_index(drop=True)
        logger.info("Loaded %d rows from %s", len(self._df), self.path)

    def close(self) -> None:
        self._df = None

    def get_history(self, symbol: str, days: int = 252) -> pd.DataFrame:
        if days < 1:
            raise ValueError(f"days must be >= 1, got {days}")
        self.open()
        df = self._df
        if "symbol" in df.columns:
            df = df[df["symbol"].astype(str).str.upper() == symbol.upper()]
        if len(df) < days:
            raise DataUnavailable(f"{symbol}: requested {days} bars, only {len(df)} available")
        return df[OHLCV_COLUMNS].tail(days).reset_index(drop=True)
