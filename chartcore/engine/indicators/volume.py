"""Volume-based series: raw volume, volume moving average, anchored VWAP."""

from __future__ import annotations

from collections.abc import Sequence

from chartcore.engine.indicators.base import IndicatorParams, clamp_length, ordered
from chartcore.engine.rolling import RollingWindow
from chartcore.types import Candle, IndicatorPoint
from chartcore.utils.time import parse_anchor_ms


def calculate_volume(candles: Sequence[Candle], params: IndicatorParams) -> list[IndicatorPoint]:
    """One point per candle carrying its volume. ``params`` is unused."""
    return [
        IndicatorPoint(timestamp=candle.timestamp, value=candle.volume)
        for candle in ordered(candles)
    ]


def calculate_volume_ma(
    candles: Sequence[Candle], params: IndicatorParams
) -> list[IndicatorPoint]:
    """Rolling mean of volume over ``length`` candles."""
    length = clamp_length(params.length)
    if len(candles) < length:
        return []

    window = RollingWindow(length)
    points: list[IndicatorPoint] = []
    for candle in ordered(candles):
        window.update(candle.volume)
        mean = window.mean
        if mean is not None:
            points.append(IndicatorPoint(timestamp=candle.timestamp, value=mean))
    return points


def typical_price(candle: Candle) -> float:
    return (candle.high + candle.low + candle.close) / 3


def anchor_index(candles: Sequence[Candle], anchor_iso: str | None) -> int:
    """Index of the first candle at or after the anchor.

    Falls back to 0 when the anchor is absent, unparsable, or later than
    every candle.
    """
    anchor_ms = parse_anchor_ms(anchor_iso)
    if anchor_ms is None:
        return 0
    for i, candle in enumerate(candles):
        if candle.timestamp >= anchor_ms:
            return i
    return 0


def calculate_anchored_vwap(
    candles: Sequence[Candle], params: IndicatorParams
) -> list[IndicatorPoint]:
    """Cumulative volume-weighted typical price from the anchor forward.

    While cumulative volume is zero the point carries the typical price.
    """
    if not candles:
        return []

    series = ordered(candles)
    start = anchor_index(series, params.anchor_iso)

    cumulative_pv = 0.0
    cumulative_volume = 0.0
    points: list[IndicatorPoint] = []
    for candle in series[start:]:
        price = typical_price(candle)
        cumulative_pv += price * candle.volume
        cumulative_volume += candle.volume
        value = price if cumulative_volume == 0 else cumulative_pv / cumulative_volume
        points.append(IndicatorPoint(timestamp=candle.timestamp, value=value))
    return points
