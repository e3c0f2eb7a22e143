"""Abstract strategy: indicator snapshot + pattern detection."""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import List, Sequence

from chartlab.core.types import IndicatorSnapshot, SignalPattern


class BaseStrategy(ABC):
    """Strategy turns a close prefix into a snapshot, and a snapshot into patterns."""

    @property
    @abstractmethod
    def min_history(self) -> int:
        """Bars required before compute_indicators() is defined."""
        pass

    @abstractmethod
    def compute_indicators(self, closes: Sequence[float]) -> IndicatorSnapshot:
        """Snapshot for the last close. No lookahead."""
        pass

    @abstractmethod
    def get_patterns(self, snapshot: IndicatorSnapshot) -> List[SignalPattern]:
        """Patterns for one snapshot, in evaluation order."""
        pass
