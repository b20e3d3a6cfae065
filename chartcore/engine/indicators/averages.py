"""Moving averages over a price source: SMA and EMA."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from chartcore.engine.indicators.base import (
    IndicatorParams,
    clamp_length,
    ordered,
    source_value,
)
from chartcore.engine.rolling import ExponentialAverage, RollingWindow
from chartcore.types import Candle, IndicatorPoint


def ema_series(values: Iterable[float], length: int) -> list[float]:
    """EMA of ``values``; element k belongs to input index ``k + length - 1``."""
    ema = ExponentialAverage(length)
    result: list[float] = []
    for value in values:
        current = ema.update(value)
        if current is not None:
            result.append(current)
    return result


def calculate_sma(candles: Sequence[Candle], params: IndicatorParams) -> list[IndicatorPoint]:
    """Simple moving average. Needs ``length`` candles; first point at index length-1."""
    length = clamp_length(params.length)
    if len(candles) < length:
        return []

    window = RollingWindow(length)
    points: list[IndicatorPoint] = []
    for candle in ordered(candles):
        window.update(source_value(candle, params.source))
        mean = window.mean
        if mean is not None:
            points.append(IndicatorPoint(timestamp=candle.timestamp, value=mean))
    return points


def calculate_ema(candles: Sequence[Candle], params: IndicatorParams) -> list[IndicatorPoint]:
    """Exponential moving average seeded with the SMA of the first window."""
    length = clamp_length(params.length)
    if len(candles) < length:
        return []

    series = ordered(candles)
    values = ema_series((source_value(c, params.source) for c in series), length)
    return [
        IndicatorPoint(timestamp=candle.timestamp, value=value)
        for candle, value in zip(series[length - 1 :], values)
    ]
