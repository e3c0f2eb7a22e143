"""Exceptions raised by data providers and indicator computation."""


class ChartlabError(Exception):
    """Base class for chartlab errors."""


class DataUnavailable(ChartlabError):
    """Provider cannot supply the requested price history."""


class InsufficientHistory(ChartlabError):
    """Too few bars to compute the requested indicators."""

    def __init__(self, available: int, required: int):
        super().__init__(f"need {required} bars, have {available}")
        self.available = available
        self.required = required
