"""
Synthetic daily history: contiguous random walk, +-2% per day.
Stand-in for a historical data feed; same (symbol, days) -> frame contract.
"""

from __future__ import annotations
import logging
import time
from datetime import date
from typing import Optional

import numpy as np
import pandas as pd

from chartlab.data.base import PriceProvider, OHLCV_COLUMNS

logger = logging.getLogger("chartlab.data.synthetic")


class SyntheticPriceProvider(PriceProvider):
    """
    Base price U[100, 200]; daily return U[-2%, 2%]; open = previous close.
    High/low extend the body by U[0, 2%]. Volume U{1e6 .. 6e6 - 1}.

    Pass `rng` to share a generator, or `seed` for a fresh generator per call
    (same seed -> same frame). With neither, every call draws new data.
    A shared `rng` is not thread-safe: such a provider reports `shares_state`
    and is refused by run_backtest_async.
    """

    def __init__(
        self,
        seed: Optional[int] = None,
        rng: Optional[np.random.Generator] = None,
        end_date: Optional[date] = None,
        latency_s: float = 0.0,
        max_daily_move: float = 0.02,
        max_wick: float = 0.02,
    ):
        self.seed = seed
        self._rng = rng
        self.end_date = end_date
        self.latency_s = latency_s
        self.max_daily_move = max_daily_move
        self.max_wick = max_wick

    @property
    def shares_state(self) -> bool:
        return self._rng is not None

    def get_history(self, symbol: str, days: int = 252) -> pd.DataFrame:
        if days < 1:
            raise ValueError(f"days must be >= 1, got {days}")
        if self.latency_s > 0:
            time.sleep(self.latency_s)
        rng = self._rng if self._rng is not None else np.random.default_rng(self.seed)

        base = rng.uniform(100.0, 200.0)
        rets = rng.uniform(-self.max_daily_move, self.max_daily_move, days)
        close = base * np.cumprod(1.0 + rets)
        open_ = np.concatenate(([base], close[:-1]))
        high = np.maximum(open_, close) * (1.0 + rng.uniform(0.0, self.max_wick, days))
        low = np.minimum(open_, close) * (1.0 - rng.uniform(0.0, self.max_wick, days))
        volume = rng.integers(1_000_000, 6_000_000, days)

        end = self.end_date or date.today()
        dates = pd.date_range(end=pd.Timestamp(end), periods=days, freq="D")
        df = pd.DataFrame({
            "date": dates,
            "open": open_,
            "high": high,
            "low": low,
            "close": close,
            "volume": volume.astype("int64"),
        }, columns=OHLCV_COLUMNS)
        logger.debug("Generated %d synthetic bars for %s (base %.2f)", days, symbol, base)
        return df
