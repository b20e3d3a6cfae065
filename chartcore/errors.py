"""chartcore error hierarchy.

Resampling and indicator computation never raise for data reasons.
These exceptions belong to the translation boundary: parsing timeframe
tags, looking up indicator types, and decoding candle records.
"""

from __future__ import annotations


class ChartCoreError(Exception):
    """Base exception for all chartcore errors."""


class UnknownTimeframeError(ChartCoreError, ValueError):
    """Timeframe tag is not one of the supported values."""

    def __init__(self, value: object) -> None:
        self.value = value
        super().__init__(f"Unknown timeframe: {value!r}")


class UnknownIndicatorError(ChartCoreError, KeyError):
    """Indicator type tag has no registry entry."""

    def __init__(self, value: object) -> None:
        self.value = value
        super().__init__(f"Unknown indicator type: {value!r}")

    def __str__(self) -> str:
        # KeyError.__str__ would repr() the message
        return str(self.args[0])


class CandleFormatError(ChartCoreError):
    """A candle record is missing a field or carries a non-numeric value.

    Stores the offending record position when decoding a list.
    """

    def __init__(self, message: str, index: int | None = None) -> None:
        self.index = index
        if index is not None:
            message = f"candle[{index}]: {message}"
        super().__init__(message)
