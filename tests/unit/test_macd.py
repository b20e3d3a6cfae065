"""Tests for the MACD family (line, signal, histogram)."""

from __future__ import annotations

import pytest

from chartcore.engine.indicators import (
    IndicatorParams,
    calculate_ema,
    calculate_macd,
    calculate_macd_histogram,
    calculate_macd_signal,
)
from chartcore.engine.indicators.momentum import macd_rows
from tests.factories import make_candles

_WAVY = [100.0 + ((i * 7) % 11) - ((i * 3) % 5) * 0.5 for i in range(60)]


def _linear(n: int) -> list:
    return make_candles([float(v) for v in range(1, n + 1)])


class TestMACDOnLinearInput:
    """On a straight line each seeded EMA lags by (length - 1) / 2."""

    def test_line_is_half_the_length_gap(self) -> None:
        points = calculate_macd(_linear(40), IndicatorParams())
        assert len(points) == 7
        assert all(p.value == pytest.approx(7.0) for p in points)

    def test_signal_equals_constant_line(self) -> None:
        points = calculate_macd_signal(_linear(40), IndicatorParams())
        assert all(p.value == pytest.approx(7.0) for p in points)

    def test_histogram_is_zero(self) -> None:
        points = calculate_macd_histogram(_linear(40), IndicatorParams())
        assert all(p.value == pytest.approx(0.0, abs=1e-9) for p in points)

    def test_custom_lengths(self) -> None:
        params = IndicatorParams(macd_fast=2, macd_slow=3, macd_signal=2)
        points = calculate_macd(_linear(10), params)
        assert all(p.value == pytest.approx(0.5) for p in points)


class TestAlignment:
    def test_first_point_on_slow_plus_signal_minus_two(self) -> None:
        candles = _linear(40)
        points = calculate_macd(candles, IndicatorParams())
        assert points[0].timestamp == candles[26 + 9 - 2].timestamp
        assert points[-1].timestamp == candles[-1].timestamp

    def test_three_series_share_timestamps(self) -> None:
        candles = make_candles(_WAVY)
        params = IndicatorParams(macd_fast=5, macd_slow=13, macd_signal=4)
        stamps = [
            [p.timestamp for p in fn(candles, params)]
            for fn in (calculate_macd, calculate_macd_signal, calculate_macd_histogram)
        ]
        assert stamps[0] == stamps[1] == stamps[2]

    def test_histogram_is_line_minus_signal(self) -> None:
        candles = make_candles(_WAVY)
        params = IndicatorParams(macd_fast=5, macd_slow=13, macd_signal=4)
        line = calculate_macd(candles, params)
        signal = calculate_macd_signal(candles, params)
        histogram = calculate_macd_histogram(candles, params)
        for m, s, h in zip(line, signal, histogram):
            assert h.value == m.value - s.value

    def test_line_matches_difference_of_emas(self) -> None:
        candles = make_candles(_WAVY)
        params = IndicatorParams(macd_fast=5, macd_slow=13, macd_signal=4)
        fast = {p.timestamp: p.value for p in calculate_ema(candles, IndicatorParams(length=5))}
        slow = {p.timestamp: p.value for p in calculate_ema(candles, IndicatorParams(length=13))}
        for point in calculate_macd(candles, params):
            assert point.value == fast[point.timestamp] - slow[point.timestamp]


class TestMinimumData:
    def test_empty_below_slow_plus_signal(self) -> None:
        assert calculate_macd(_linear(34), IndicatorParams()) == []
        assert calculate_macd_signal(_linear(34), IndicatorParams()) == []
        assert calculate_macd_histogram(_linear(34), IndicatorParams()) == []

    def test_non_empty_at_slow_plus_signal(self) -> None:
        assert len(calculate_macd(_linear(35), IndicatorParams())) == 2


class TestSwappedLengths:
    """A fast length above the slow one still pairs EMAs by candle."""

    def test_fast_longer_than_slow(self) -> None:
        params = IndicatorParams(macd_fast=26, macd_slow=12, macd_signal=9)
        points = calculate_macd(_linear(40), params)
        assert len(points) == 7
        assert all(p.value == pytest.approx(-7.0) for p in points)

    def test_equal_lengths_give_zero_line(self) -> None:
        params = IndicatorParams(macd_fast=5, macd_slow=5, macd_signal=3)
        rows = macd_rows(make_candles(_WAVY), params)
        assert rows
        assert all(row.macd == 0.0 for row in rows)
