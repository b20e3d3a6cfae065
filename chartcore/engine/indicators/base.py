"""Indicator types, parameters and the helpers every algorithm shares."""

from __future__ import annotations

import math
from collections.abc import Callable, Sequence
from enum import Enum
from operator import attrgetter

from pydantic import BaseModel, ConfigDict, Field, field_validator

from chartcore.types import Candle, IndicatorPoint, PriceSource


class IndicatorType(str, Enum):
    """Registry tags. Values match the tags used by the chart front end."""

    SMA = "sma"
    EMA = "ema"
    RSI = "rsi"
    VWAP = "vwap"
    MACD = "macd"
    MACD_SIGNAL = "macdSignal"
    MACD_HISTOGRAM = "macdHistogram"
    BOLLINGER = "bollinger"
    VOLUME = "volume"
    VOLUME_MA = "volumeMA"
    ATR = "atr"


class IndicatorPane(str, Enum):
    """Where the chart draws an indicator."""

    OVERLAY = "overlay"
    SEPARATE = "separate"


class IndicatorParams(BaseModel):
    """User-chosen indicator options.

    Accepts the camelCase names used on the wire (``stdDev``, ``macdFast``,
    ``anchorIso``) as well as the snake_case field names. Window lengths
    are floored and clamped to >= 1 by the algorithms, not here.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    length: int | float = 20
    source: PriceSource = PriceSource.CLOSE
    std_dev: int | float = Field(default=2, alias="stdDev")
    macd_fast: int | float = Field(default=12, alias="macdFast")
    macd_slow: int | float = Field(default=26, alias="macdSlow")
    macd_signal: int | float = Field(default=9, alias="macdSignal")
    anchor_iso: str | None = Field(default=None, alias="anchorIso")

    @field_validator("length", "std_dev", "macd_fast", "macd_slow", "macd_signal")
    @classmethod
    def integral_float_to_int(cls, v: int | float) -> int | float:
        """20.0 becomes 20 so labels read ``SMA(20)``, not ``SMA(20.0)``."""
        if isinstance(v, float) and v.is_integer():
            return int(v)
        return v


IndicatorCompute = Callable[[Sequence[Candle], IndicatorParams], list[IndicatorPoint]]

_by_timestamp = attrgetter("timestamp")


def clamp_length(length: int | float) -> int:
    """Window size as used by every algorithm: ``max(1, floor(length))``."""
    return max(1, math.floor(length))


def source_value(candle: Candle, source: PriceSource) -> float:
    """Read the OHLC field selected by ``source``."""
    if source is PriceSource.OPEN:
        return candle.open
    if source is PriceSource.HIGH:
        return candle.high
    if source is PriceSource.LOW:
        return candle.low
    return candle.close


def ordered(candles: Sequence[Candle]) -> list[Candle]:
    """Stable ascending copy by timestamp; already-sorted input costs O(n)."""
    return sorted(candles, key=_by_timestamp)
