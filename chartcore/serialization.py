"""JSON mapping for candles and indicator points.

Candles travel as flat objects ``{timestamp, open, high, low, close,
volume}``; indicator points as ``{timestamp, value, ...extra lines}``.
"""

from __future__ import annotations

import json
import math
from collections.abc import Iterable, Mapping
from dataclasses import asdict
from typing import Any

from chartcore.errors import CandleFormatError
from chartcore.types import Candle, IndicatorPoint

CANDLE_FIELDS = ("timestamp", "open", "high", "low", "close", "volume")


def candle_from_dict(record: Mapping[str, Any], index: int | None = None) -> Candle:
    """Build a Candle from a mapping.

    Raises:
        CandleFormatError: If a field is missing or not numeric.
    """
    if not isinstance(record, Mapping):
        raise CandleFormatError(f"expected an object, got {type(record).__name__}", index)
    missing = [name for name in CANDLE_FIELDS if name not in record]
    if missing:
        raise CandleFormatError(f"missing field(s): {', '.join(missing)}", index)

    values: dict[str, float] = {}
    for name in CANDLE_FIELDS:
        raw = record[name]
        if isinstance(raw, bool) or not isinstance(raw, (int, float, str)):
            raise CandleFormatError(f"{name} must be a number, got {raw!r}", index)
        try:
            values[name] = float(raw)
        except ValueError:
            raise CandleFormatError(f"{name} must be a number, got {raw!r}", index) from None

    timestamp = values.pop("timestamp")
    if not math.isfinite(timestamp):
        raise CandleFormatError(f"timestamp must be finite, got {timestamp!r}", index)
    return Candle(timestamp=int(timestamp), **values)


def candle_to_dict(candle: Candle) -> dict[str, Any]:
    return asdict(candle)


def point_to_dict(point: IndicatorPoint) -> dict[str, Any]:
    """Flatten extra lines next to ``value``."""
    return {"timestamp": point.timestamp, "value": point.value, **point.extra}


def load_candles(text: str) -> list[Candle]:
    """Decode a JSON array of candle objects.

    Raises:
        CandleFormatError: On invalid JSON, a non-array document, or a bad record.
    """
    try:
        document = json.loads(text)
    except json.JSONDecodeError as e:
        raise CandleFormatError(f"invalid JSON: {e}") from e
    if not isinstance(document, list):
        raise CandleFormatError("expected a JSON array of candles")
    return [candle_from_dict(record, index=i) for i, record in enumerate(document)]


def dump_candles(candles: Iterable[Candle], indent: int | None = None) -> str:
    return json.dumps([candle_to_dict(c) for c in candles], indent=indent)


def dump_points(points: Iterable[IndicatorPoint], indent: int | None = None) -> str:
    return json.dumps([point_to_dict(p) for p in points], indent=indent)
