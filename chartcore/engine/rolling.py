"""Incremental accumulators behind the indicator functions.

Each accumulator consumes one value per update in O(1) and reports None
until it has seen enough values. The batch indicator functions are built
on these same classes, so feeding candles one at a time yields exactly
the numbers a from-scratch computation produces.
"""

from __future__ import annotations

from collections import deque


def _check_length(length: int, kind: str) -> None:
    if length < 1:
        raise ValueError(f"{kind} length must be >= 1, got {length}")


class RollingWindow:
    """Fixed-length window with a running sum.

    The new value is added before the expired one is subtracted. Running
    sums drift by a few ulps over very long series; callers that need a
    fresh sum per window read ``values`` instead.
    """

    __slots__ = ("_buf", "_length", "_sum")

    def __init__(self, length: int) -> None:
        _check_length(length, "Window")
        self._length = length
        self._buf: deque[float] = deque()
        self._sum: float = 0.0

    def update(self, value: float) -> None:
        """Push a value, evicting the oldest once the window is full."""
        self._sum += value
        self._buf.append(value)
        if len(self._buf) > self._length:
            self._sum -= self._buf.popleft()

    @property
    def mean(self) -> float | None:
        """Running-sum mean of the window, or None if not warm."""
        if len(self._buf) < self._length:
            return None
        return self._sum / self._length

    @property
    def values(self) -> tuple[float, ...]:
        """Window contents, oldest first."""
        return tuple(self._buf)

    @property
    def is_warm(self) -> bool:
        return len(self._buf) >= self._length

    @property
    def count(self) -> int:
        return len(self._buf)


class ExponentialAverage:
    """EMA seeded with the simple mean of the first ``length`` values.

    After seeding: ``ema = value * a + ema * (1 - a)`` with ``a = 2 / (length + 1)``.
    """

    __slots__ = ("_alpha", "_length", "_seed_count", "_seed_sum", "_value")

    def __init__(self, length: int) -> None:
        _check_length(length, "EMA")
        self._length = length
        self._alpha = 2 / (length + 1)
        self._seed_sum: float = 0.0
        self._seed_count = 0
        self._value: float | None = None

    def update(self, value: float) -> float | None:
        """Consume a value and return the current EMA (None while seeding)."""
        if self._value is None:
            self._seed_sum += value
            self._seed_count += 1
            if self._seed_count == self._length:
                self._value = self._seed_sum / self._length
            return self._value
        self._value = value * self._alpha + self._value * (1 - self._alpha)
        return self._value

    @property
    def value(self) -> float | None:
        return self._value


class WilderAverage:
    """Wilder's smoothed average (RSI, ATR).

    Seeded with the simple mean of the first ``length`` values, then
    ``avg = (avg * (length - 1) + value) / length``. This is a 1/length
    recurrence, not the EMA's 2/(length + 1).
    """

    __slots__ = ("_length", "_seed_count", "_seed_sum", "_value")

    def __init__(self, length: int) -> None:
        _check_length(length, "Wilder")
        self._length = length
        self._seed_sum: float = 0.0
        self._seed_count = 0
        self._value: float | None = None

    def update(self, value: float) -> float | None:
        """Consume a value and return the current average (None while seeding)."""
        if self._value is None:
            self._seed_sum += value
            self._seed_count += 1
            if self._seed_count == self._length:
                self._value = self._seed_sum / self._length
            return self._value
        self._value = (self._value * (self._length - 1) + value) / self._length
        return self._value

    @property
    def value(self) -> float | None:
        return self._value
