"""Tests for UTC helpers and New York session arithmetic."""

from __future__ import annotations

import time
from datetime import UTC, date, datetime, timedelta, timezone

import pytest

from chartcore.utils.time import (
    datetime_to_ms,
    is_regular_session_minute,
    ms_to_datetime,
    ny_date,
    parse_anchor_ms,
    session_start_ms,
)
from tests.factories import ms


class TestConversions:
    """Epoch-millisecond conversions."""

    def test_ms_to_datetime_is_utc(self) -> None:
        dt = ms_to_datetime(0)
        assert dt == datetime(1970, 1, 1, tzinfo=UTC)
        assert dt.tzinfo == UTC

    def test_roundtrip_keeps_milliseconds(self) -> None:
        assert datetime_to_ms(ms_to_datetime(1_704_205_800_123)) == 1_704_205_800_123

    def test_naive_datetime_taken_as_utc(self) -> None:
        assert datetime_to_ms(datetime(2024, 1, 2, 14, 30)) == ms(2024, 1, 2, 14, 30)

    def test_offset_datetime(self) -> None:
        dt = datetime(2024, 1, 2, 9, 30, tzinfo=timezone(timedelta(hours=-5)))
        assert datetime_to_ms(dt) == ms(2024, 1, 2, 14, 30)

    def test_negative_timestamps(self) -> None:
        assert ms_to_datetime(-60_000) == datetime(1969, 12, 31, 23, 59, tzinfo=UTC)


class TestNyDate:
    """Local calendar date on the New York wall clock."""

    def test_evening_utc_is_same_ny_day(self) -> None:
        assert ny_date(ms(2024, 1, 2, 20, 0)) == date(2024, 1, 2)

    def test_after_utc_midnight_is_previous_ny_day(self) -> None:
        # 01:00 UTC Jan 3 is 20:00 EST Jan 2
        assert ny_date(ms(2024, 1, 3, 1, 0)) == date(2024, 1, 2)


class TestRegularSession:
    """09:30-16:00 New York, inclusive at both ends."""

    @pytest.mark.parametrize(
        ("hour", "minute", "expected"),
        [
            (14, 29, False),  # 09:29 EST
            (14, 30, True),  # 09:30 EST
            (18, 0, True),
            (20, 59, True),
            (21, 0, True),  # 16:00 EST
            (21, 1, False),  # 16:01 EST
            (3, 0, False),
        ],
    )
    def test_winter_boundaries(self, hour: int, minute: int, expected: bool) -> None:
        assert is_regular_session_minute(ms(2024, 1, 2, hour, minute)) is expected

    @pytest.mark.parametrize(
        ("hour", "minute", "expected"),
        [
            (13, 29, False),  # 09:29 EDT
            (13, 30, True),  # 09:30 EDT
            (20, 0, True),  # 16:00 EDT
            (20, 1, False),
            (14, 30, True),
        ],
    )
    def test_summer_boundaries(self, hour: int, minute: int, expected: bool) -> None:
        assert is_regular_session_minute(ms(2024, 7, 1, hour, minute)) is expected

    def test_seconds_inside_close_minute_still_in_session(self) -> None:
        assert is_regular_session_minute(ms(2024, 1, 2, 21, 0) + 30_000) is True

    def test_weekends_are_not_special(self) -> None:
        """The window is a fixed wall-clock range with no holiday calendar."""
        assert is_regular_session_minute(ms(2024, 1, 6, 15, 0)) is True


class TestSessionStart:
    """Bucket key for daily candles."""

    def test_winter_open_is_1430_utc(self) -> None:
        assert session_start_ms(ms(2024, 1, 2, 18, 45)) == ms(2024, 1, 2, 14, 30)

    def test_summer_open_is_1330_utc(self) -> None:
        assert session_start_ms(ms(2024, 7, 1, 19, 0)) == ms(2024, 7, 1, 13, 30)

    def test_dst_change_day(self) -> None:
        """2024-03-10: clocks jump forward at 02:00; 09:30 is already EDT."""
        assert session_start_ms(ms(2024, 3, 10, 15, 0)) == ms(2024, 3, 10, 13, 30)

    def test_uses_local_date(self) -> None:
        # 02:00 UTC Jan 3 is still Jan 2 in New York
        assert session_start_ms(ms(2024, 1, 3, 2, 0)) == ms(2024, 1, 2, 14, 30)


class TestParseAnchor:
    """ISO anchor parsing for VWAP."""

    def test_z_suffix(self) -> None:
        assert parse_anchor_ms("2024-01-02T14:30:00Z") == ms(2024, 1, 2, 14, 30)

    def test_offset(self) -> None:
        assert parse_anchor_ms("2024-01-02T09:30:00-05:00") == ms(2024, 1, 2, 14, 30)

    def test_naive_is_utc(self) -> None:
        assert parse_anchor_ms("2024-01-02T14:30") == ms(2024, 1, 2, 14, 30)

    @pytest.mark.skipif(not hasattr(time, "tzset"), reason="needs time.tzset")
    def test_naive_ignores_host_timezone(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TZ", "Asia/Tokyo")
        time.tzset()
        try:
            assert parse_anchor_ms("2024-01-02T14:30") == ms(2024, 1, 2, 14, 30)
        finally:
            monkeypatch.undo()
            time.tzset()

    def test_date_only(self) -> None:
        assert parse_anchor_ms("2024-01-02") == ms(2024, 1, 2, 0, 0)

    def test_milliseconds(self) -> None:
        assert parse_anchor_ms("2024-01-02T14:30:00.250Z") == ms(2024, 1, 2, 14, 30) + 250

    @pytest.mark.parametrize("value", [None, "", "not a date", "2024-13-45"])
    def test_unparsable_returns_none(self, value: str | None) -> None:
        assert parse_anchor_ms(value) is None
