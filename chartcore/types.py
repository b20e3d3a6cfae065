"""Domain types shared by the resampler and the indicator engine.

Frozen dataclasses for value objects. Prices and volume are float;
timestamps are integer epoch milliseconds (UTC).
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType

from chartcore.errors import UnknownTimeframeError

MINUTE_MS = 60_000

# Regular session length (09:30-16:00) used as the nominal width of a daily candle
SESSION_MINUTES = 390


class Timeframe(str, Enum):
    """Supported candle timeframes."""

    ONE_MINUTE = "1m"
    FIVE_MINUTES = "5m"
    TEN_MINUTES = "10m"
    THIRTY_MINUTES = "30m"
    SIXTY_MINUTES = "60m"
    ONE_DAY = "1d"

    @classmethod
    def parse(cls, value: str | Timeframe) -> Timeframe:
        """Resolve a tag like "5m" to a Timeframe.

        Raises:
            UnknownTimeframeError: If the tag is not supported.
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip())
        except ValueError:
            raise UnknownTimeframeError(value) from None

    @property
    def minutes(self) -> int | None:
        """Fixed bucket width in minutes, or None for session-aligned 1d."""
        return _TIMEFRAME_MINUTES.get(self)

    @property
    def duration_ms(self) -> int:
        """Nominal candle width in milliseconds (1d counts one session)."""
        minutes = self.minutes
        if minutes is None:
            minutes = SESSION_MINUTES
        return minutes * MINUTE_MS


_TIMEFRAME_MINUTES: dict[Timeframe, int] = {
    Timeframe.ONE_MINUTE: 1,
    Timeframe.FIVE_MINUTES: 5,
    Timeframe.TEN_MINUTES: 10,
    Timeframe.THIRTY_MINUTES: 30,
    Timeframe.SIXTY_MINUTES: 60,
}


class PriceSource(str, Enum):
    """Which OHLC field an indicator reads per candle."""

    OPEN = "open"
    HIGH = "high"
    LOW = "low"
    CLOSE = "close"


# --- Value Objects (frozen) ---


@dataclass(frozen=True)
class Candle:
    """OHLCV candle keyed by its bucket start time in epoch milliseconds."""

    timestamp: int
    open: float
    high: float
    low: float
    close: float
    volume: float


@dataclass(frozen=True)
class IndicatorPoint:
    """One indicator sample aligned to the candle that closes its window.

    Multi-line indicators (Bollinger) carry their extra lines in ``extra``.
    """

    timestamp: int
    value: float
    extra: Mapping[str, float] = field(default_factory=dict)

    def __post_init__(self) -> None:
        # Own a read-only copy of the caller's mapping
        object.__setattr__(self, "extra", MappingProxyType(dict(self.extra)))

    def __hash__(self) -> int:
        return hash((self.timestamp, self.value, frozenset(self.extra.items())))

    def line(self, name: str) -> float:
        """Return the named line; ``"value"`` is the primary line."""
        if name == "value":
            return self.value
        return self.extra[name]
