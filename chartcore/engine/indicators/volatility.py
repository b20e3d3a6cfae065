"""Volatility measures: ATR and Bollinger Bands."""

from __future__ import annotations

import math
from collections.abc import Sequence

from chartcore.engine.indicators.base import (
    IndicatorParams,
    clamp_length,
    ordered,
    source_value,
)
from chartcore.engine.rolling import RollingWindow, WilderAverage
from chartcore.types import Candle, IndicatorPoint


def true_range(candle: Candle, prev_close: float) -> float:
    """Largest of high-low and the gaps from the previous close."""
    return max(
        candle.high - candle.low,
        abs(candle.high - prev_close),
        abs(candle.low - prev_close),
    )


def calculate_atr(candles: Sequence[Candle], params: IndicatorParams) -> list[IndicatorPoint]:
    """Average True Range with Wilder smoothing.

    The first true range needs a previous close, so ``length + 1`` candles
    are required and the first point sits on candle[length].
    """
    length = clamp_length(params.length)
    if len(candles) < length + 1:
        return []

    series = ordered(candles)
    atr = WilderAverage(length)
    points: list[IndicatorPoint] = []
    for prev, candle in zip(series, series[1:]):
        value = atr.update(true_range(candle, prev.close))
        if value is not None:
            points.append(IndicatorPoint(timestamp=candle.timestamp, value=value))
    return points


def calculate_bollinger(
    candles: Sequence[Candle], params: IndicatorParams
) -> list[IndicatorPoint]:
    """Bollinger Bands: SMA middle line +/- ``std_dev`` population sigmas.

    Each window is re-summed left to right rather than carried as a running
    sum, so the middle line and the deviation come from the same exact
    window values. Plain addition loops keep the result independent of
    the float summation strategy of the built-in ``sum()``.
    """
    length = clamp_length(params.length)
    if len(candles) < length:
        return []

    multiplier = params.std_dev
    window = RollingWindow(length)
    points: list[IndicatorPoint] = []
    for candle in ordered(candles):
        window.update(source_value(candle, params.source))
        if not window.is_warm:
            continue
        values = window.values
        total = 0.0
        for v in values:
            total += v
        middle = total / length
        variance = 0.0
        for v in values:
            variance += (v - middle) ** 2
        sigma = math.sqrt(variance / length)
        points.append(
            IndicatorPoint(
                timestamp=candle.timestamp,
                value=middle,
                extra={
                    "upper": middle + multiplier * sigma,
                    "lower": middle - multiplier * sigma,
                },
            )
        )
    return points
