"""Resampling of 1-minute candles into coarser timeframes.

Intraday buckets align to the Unix epoch, not to the session open: with
5m, a bar stamped 14:32 UTC lands in the 14:30 bucket and with 60m in the
14:00 bucket. Daily buckets keep only regular-session bars (09:30-16:00
New York) and key each bucket at that day's 09:30 local instant.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from operator import attrgetter

import structlog

from chartcore.types import Candle, Timeframe
from chartcore.utils.time import is_regular_session_minute, session_start_ms

log = structlog.get_logger()

_by_timestamp = attrgetter("timestamp")


class _Bucket:
    """Running OHLCV for one bucket, fed in time order."""

    __slots__ = ("close", "high", "low", "open", "timestamp", "volume")

    def __init__(self, timestamp: int, first: Candle) -> None:
        self.timestamp = timestamp
        self.open = first.open
        self.high = first.high
        self.low = first.low
        self.close = first.close
        self.volume = first.volume

    def push(self, candle: Candle) -> None:
        self.high = max(self.high, candle.high)
        self.low = min(self.low, candle.low)
        self.close = candle.close
        self.volume += candle.volume

    def to_candle(self) -> Candle:
        return Candle(
            timestamp=self.timestamp,
            open=self.open,
            high=self.high,
            low=self.low,
            close=self.close,
            volume=self.volume,
        )


def _aggregate(
    candles: Iterable[Candle],
    bucket_key: Callable[[Candle], int | None],
) -> list[Candle]:
    """One pass over time-ordered candles; a None key drops the candle."""
    buckets: dict[int, _Bucket] = {}
    for candle in candles:
        key = bucket_key(candle)
        if key is None:
            continue
        bucket = buckets.get(key)
        if bucket is None:
            buckets[key] = _Bucket(key, candle)
        else:
            bucket.push(candle)
    return [buckets[key].to_candle() for key in sorted(buckets)]


def _intraday_key(width_ms: int) -> Callable[[Candle], int | None]:
    def key(candle: Candle) -> int:
        return candle.timestamp // width_ms * width_ms

    return key


def _session_key(candle: Candle) -> int | None:
    if not is_regular_session_minute(candle.timestamp):
        return None
    return session_start_ms(candle.timestamp)


def resample(candles: Sequence[Candle], timeframe: Timeframe | str) -> list[Candle]:
    """Aggregate candles into ``timeframe`` buckets.

    The input is stable-sorted by timestamp into a new list and never
    mutated. Each bucket takes the first open, max high, min low, last
    close and summed volume of its candles. Buckets without candles are
    never emitted. Duplicate timestamps are aggregated as separate bars.

    ``1m`` returns the sorted copy unchanged.
    """
    timeframe = Timeframe.parse(timeframe)
    ordered = sorted(candles, key=_by_timestamp)

    if timeframe is Timeframe.ONE_MINUTE:
        result = ordered
    elif timeframe is Timeframe.ONE_DAY:
        result = _aggregate(ordered, _session_key)
    else:
        result = _aggregate(ordered, _intraday_key(timeframe.duration_ms))

    log.debug(
        "candles_resampled",
        timeframe=timeframe.value,
        input_count=len(ordered),
        output_count=len(result),
    )
    return result
