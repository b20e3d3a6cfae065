"""UTC helpers and New York regular-session arithmetic.

All timestamps are integer epoch milliseconds in UTC. The regular session
is a fixed 09:30-16:00 window on the America/New_York wall clock; zoneinfo
handles the DST shift, so the UTC offset of the session moves with the date.
No holiday calendar is consulted.
"""

from __future__ import annotations

from datetime import UTC, date, datetime, time, timedelta
from zoneinfo import ZoneInfo

NY_TZ = ZoneInfo("America/New_York")
SESSION_OPEN = time(9, 30)
SESSION_CLOSE = time(16, 0)

_EPOCH = datetime(1970, 1, 1, tzinfo=UTC)
_ONE_MS = timedelta(milliseconds=1)


def ms_to_datetime(timestamp_ms: int) -> datetime:
    """Convert epoch milliseconds to a timezone-aware UTC datetime."""
    return _EPOCH + timedelta(milliseconds=timestamp_ms)


def datetime_to_ms(dt: datetime) -> int:
    """Convert a datetime to epoch milliseconds. Naive values are taken as UTC."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return (dt - _EPOCH) // _ONE_MS


def ny_date(timestamp_ms: int) -> date:
    """Calendar date of the instant on the New York wall clock."""
    return ms_to_datetime(timestamp_ms).astimezone(NY_TZ).date()


def is_regular_session_minute(timestamp_ms: int) -> bool:
    """True if the instant falls in 09:30-16:00 New York time.

    Both ends are inclusive at minute resolution: the 16:00 bar belongs
    to the session, 16:01 does not.
    """
    local = ms_to_datetime(timestamp_ms).astimezone(NY_TZ)
    after_open = (local.hour, local.minute) >= (SESSION_OPEN.hour, SESSION_OPEN.minute)
    before_close = (local.hour, local.minute) <= (
        SESSION_CLOSE.hour,
        SESSION_CLOSE.minute,
    )
    return after_open and before_close


def session_start_ms(timestamp_ms: int) -> int:
    """Epoch ms of 09:30 New York time on the instant's local calendar date."""
    open_dt = datetime.combine(ny_date(timestamp_ms), SESSION_OPEN, tzinfo=NY_TZ)
    return datetime_to_ms(open_dt)


def parse_anchor_ms(value: str | None) -> int | None:
    """Parse an ISO 8601 timestamp into epoch ms.

    Accepts a trailing Z and date-only strings. Returns None for empty or
    unparsable input.

    A value without an offset is read as UTC, not as the host's local
    time, so the same string anchors at the same instant on every machine.
    """
    if not value:
        return None
    s = value.strip()
    if s.endswith("Z"):
        s = s[:-1] + "+00:00"
    try:
        dt = datetime.fromisoformat(s)
    except ValueError:
        return None
    return datetime_to_ms(dt)
