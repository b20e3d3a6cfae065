"""Momentum oscillators: RSI and the MACD family.

MACD line, signal and histogram are three registry entries computed from
one shared derivation so the three series always agree.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from chartcore.engine.indicators.averages import ema_series
from chartcore.engine.indicators.base import (
    IndicatorParams,
    clamp_length,
    ordered,
    source_value,
)
from chartcore.engine.rolling import WilderAverage
from chartcore.types import Candle, IndicatorPoint


def _rsi(avg_gain: float, avg_loss: float) -> float:
    rs = float("inf") if avg_loss == 0 else avg_gain / avg_loss
    return 100 - 100 / (1 + rs)


def calculate_rsi(candles: Sequence[Candle], params: IndicatorParams) -> list[IndicatorPoint]:
    """Relative Strength Index with Wilder smoothing.

    Needs ``length + 1`` candles; the first point sits on candle[length].
    A window with no losses reads 100.
    """
    length = clamp_length(params.length)
    if len(candles) <= length:
        return []

    series = ordered(candles)
    gains = WilderAverage(length)
    losses = WilderAverage(length)
    points: list[IndicatorPoint] = []

    prev = source_value(series[0], params.source)
    for candle in series[1:]:
        value = source_value(candle, params.source)
        change = value - prev
        prev = value
        if change >= 0:
            avg_gain = gains.update(change)
            avg_loss = losses.update(0.0)
        else:
            avg_gain = gains.update(0.0)
            avg_loss = losses.update(-change)
        if avg_gain is None or avg_loss is None:
            continue
        points.append(
            IndicatorPoint(timestamp=candle.timestamp, value=_rsi(avg_gain, avg_loss))
        )
    return points


# --- MACD family ---


@dataclass(frozen=True)
class MACDRow:
    """MACD line and signal for one candle."""

    timestamp: int
    macd: float
    signal: float

    @property
    def histogram(self) -> float:
        return self.macd - self.signal


def _macd_lengths(params: IndicatorParams) -> tuple[int, int, int]:
    return (
        clamp_length(params.macd_fast),
        clamp_length(params.macd_slow),
        clamp_length(params.macd_signal),
    )


def macd_rows(candles: Sequence[Candle], params: IndicatorParams) -> list[MACDRow]:
    """Shared MACD derivation.

    The fast EMA starts at candle[fast-1] and the slow EMA at candle[slow-1],
    so slow_ema[i] pairs with fast_ema[i + (slow - fast)]. The signal line is
    the EMA of the MACD line, so the first row lands on
    candle[slow + signal - 2]. Needs ``slow + signal`` candles.

    With fast > slow the roles of the two offsets swap and the longer EMA
    decides where the line starts.
    """
    fast, slow, signal = _macd_lengths(params)
    longest = max(fast, slow)
    if len(candles) < longest + signal:
        return []

    series = ordered(candles)
    values = [source_value(c, params.source) for c in series]
    fast_ema = ema_series(values, fast)
    slow_ema = ema_series(values, slow)

    # macd_line[k] belongs to candle[longest - 1 + k]
    fast_skip = longest - fast
    slow_skip = longest - slow
    macd_line = [
        fast_ema[k + fast_skip] - slow_ema[k + slow_skip]
        for k in range(len(series) - longest + 1)
    ]
    signal_line = ema_series(macd_line, signal)

    start = longest - 1 + signal - 1
    return [
        MACDRow(
            timestamp=series[start + k].timestamp,
            macd=macd_line[k + signal - 1],
            signal=signal_value,
        )
        for k, signal_value in enumerate(signal_line)
    ]


def calculate_macd(candles: Sequence[Candle], params: IndicatorParams) -> list[IndicatorPoint]:
    """MACD line: fast EMA minus slow EMA."""
    return [
        IndicatorPoint(timestamp=row.timestamp, value=row.macd)
        for row in macd_rows(candles, params)
    ]


def calculate_macd_signal(
    candles: Sequence[Candle], params: IndicatorParams
) -> list[IndicatorPoint]:
    """MACD signal line: EMA of the MACD line."""
    return [
        IndicatorPoint(timestamp=row.timestamp, value=row.signal)
        for row in macd_rows(candles, params)
    ]


def calculate_macd_histogram(
    candles: Sequence[Candle], params: IndicatorParams
) -> list[IndicatorPoint]:
    """MACD histogram: line minus signal."""
    return [
        IndicatorPoint(timestamp=row.timestamp, value=row.histogram)
        for row in macd_rows(candles, params)
    ]
