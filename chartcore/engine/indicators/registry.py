"""Read-only indicator registry.

One IndicatorDefinition per IndicatorType, fixed at import. The registry
covers every IndicatorType member; a missing entry fails the import.
"""

from __future__ import annotations

import uuid
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

import structlog

from chartcore.engine.indicators.averages import calculate_ema, calculate_sma
from chartcore.engine.indicators.base import (
    IndicatorCompute,
    IndicatorPane,
    IndicatorParams,
    IndicatorType,
)
from chartcore.engine.indicators.momentum import (
    calculate_macd,
    calculate_macd_histogram,
    calculate_macd_signal,
    calculate_rsi,
)
from chartcore.engine.indicators.volatility import calculate_atr, calculate_bollinger
from chartcore.engine.indicators.volume import (
    calculate_anchored_vwap,
    calculate_volume,
    calculate_volume_ma,
)
from chartcore.errors import UnknownIndicatorError
from chartcore.types import Candle, IndicatorPoint

log = structlog.get_logger()


@dataclass(frozen=True)
class IndicatorDefinition:
    """Registry entry: defaults, pane, display metadata and the algorithm."""

    type: IndicatorType
    name: str
    pane: IndicatorPane
    default_params: IndicatorParams
    label: Callable[[IndicatorParams], str]
    compute: IndicatorCompute
    lines: tuple[str, ...] = ("value",)


def _macd_args(params: IndicatorParams) -> str:
    return f"{params.macd_fast},{params.macd_slow},{params.macd_signal}"


def _vwap_label(params: IndicatorParams) -> str:
    anchor = params.anchor_iso.replace("T", " ") if params.anchor_iso else "auto"
    return f"AVWAP {anchor}"


_MACD_DEFAULTS = IndicatorParams(length=12, macd_fast=12, macd_slow=26, macd_signal=9)

_DEFINITIONS = (
    IndicatorDefinition(
        type=IndicatorType.SMA,
        name="SMA",
        pane=IndicatorPane.OVERLAY,
        default_params=IndicatorParams(length=20),
        label=lambda p: f"SMA({p.length}) {p.source.value}",
        compute=calculate_sma,
    ),
    IndicatorDefinition(
        type=IndicatorType.EMA,
        name="EMA",
        pane=IndicatorPane.OVERLAY,
        default_params=IndicatorParams(length=20),
        label=lambda p: f"EMA({p.length}) {p.source.value}",
        compute=calculate_ema,
    ),
    IndicatorDefinition(
        type=IndicatorType.RSI,
        name="RSI",
        pane=IndicatorPane.SEPARATE,
        default_params=IndicatorParams(length=14),
        label=lambda p: f"RSI({p.length}) {p.source.value}",
        compute=calculate_rsi,
    ),
    IndicatorDefinition(
        type=IndicatorType.VWAP,
        name="Anchored VWAP",
        pane=IndicatorPane.OVERLAY,
        default_params=IndicatorParams(length=1, anchor_iso=""),
        label=_vwap_label,
        compute=calculate_anchored_vwap,
    ),
    IndicatorDefinition(
        type=IndicatorType.MACD,
        name="MACD Line",
        pane=IndicatorPane.SEPARATE,
        default_params=_MACD_DEFAULTS,
        label=lambda p: f"MACD({_macd_args(p)})",
        compute=calculate_macd,
    ),
    IndicatorDefinition(
        type=IndicatorType.MACD_SIGNAL,
        name="MACD Signal",
        pane=IndicatorPane.SEPARATE,
        default_params=_MACD_DEFAULTS,
        label=lambda p: f"Signal({_macd_args(p)})",
        compute=calculate_macd_signal,
    ),
    IndicatorDefinition(
        type=IndicatorType.MACD_HISTOGRAM,
        name="MACD Histogram",
        pane=IndicatorPane.SEPARATE,
        default_params=_MACD_DEFAULTS,
        label=lambda p: f"Histogram({_macd_args(p)})",
        compute=calculate_macd_histogram,
    ),
    IndicatorDefinition(
        type=IndicatorType.BOLLINGER,
        name="Bollinger Bands",
        pane=IndicatorPane.OVERLAY,
        default_params=IndicatorParams(length=20, std_dev=2),
        label=lambda p: f"BB({p.length}, {p.std_dev})",
        compute=calculate_bollinger,
        lines=("upper", "lower", "value"),
    ),
    IndicatorDefinition(
        type=IndicatorType.VOLUME,
        name="Volume",
        pane=IndicatorPane.SEPARATE,
        default_params=IndicatorParams(length=1),
        label=lambda p: "Volume",
        compute=calculate_volume,
    ),
    IndicatorDefinition(
        type=IndicatorType.VOLUME_MA,
        name="Volume MA",
        pane=IndicatorPane.SEPARATE,
        default_params=IndicatorParams(length=20),
        label=lambda p: f"Vol MA({p.length})",
        compute=calculate_volume_ma,
    ),
    IndicatorDefinition(
        type=IndicatorType.ATR,
        name="ATR",
        pane=IndicatorPane.SEPARATE,
        default_params=IndicatorParams(length=14),
        label=lambda p: f"ATR({p.length})",
        compute=calculate_atr,
    ),
)

INDICATOR_REGISTRY: Mapping[IndicatorType, IndicatorDefinition] = MappingProxyType(
    {definition.type: definition for definition in _DEFINITIONS}
)

_missing = set(IndicatorType) - set(INDICATOR_REGISTRY)
if _missing:
    raise RuntimeError(f"Indicator registry is missing {sorted(t.value for t in _missing)}")


def get_definition(indicator_type: IndicatorType | str) -> IndicatorDefinition:
    """Look up a registry entry by enum member or tag.

    Raises:
        UnknownIndicatorError: If the tag is not registered.
    """
    try:
        return INDICATOR_REGISTRY[IndicatorType(indicator_type)]
    except (ValueError, KeyError):
        raise UnknownIndicatorError(indicator_type) from None


def resolve_params(
    definition: IndicatorDefinition,
    params: IndicatorParams | Mapping[str, Any] | None = None,
) -> IndicatorParams:
    """Overlay the explicitly set caller options on the definition defaults."""
    if params is None:
        return definition.default_params
    if not isinstance(params, IndicatorParams):
        params = IndicatorParams.model_validate(params)
    return definition.default_params.model_copy(
        update=params.model_dump(exclude_unset=True)
    )


def compute_indicator(
    indicator_type: IndicatorType | str,
    candles: Sequence[Candle],
    params: IndicatorParams | Mapping[str, Any] | None = None,
) -> list[IndicatorPoint]:
    """Run one registered indicator over ``candles``.

    An empty result means there were not enough candles for the window.
    """
    definition = get_definition(indicator_type)
    resolved = resolve_params(definition, params)
    points = definition.compute(candles, resolved)
    if candles and not points:
        log.debug(
            "indicator_insufficient_data",
            indicator=definition.type.value,
            candle_count=len(candles),
            label=definition.label(resolved),
        )
    else:
        log.debug(
            "indicator_computed",
            indicator=definition.type.value,
            candle_count=len(candles),
            point_count=len(points),
        )
    return points


@dataclass(frozen=True)
class IndicatorInstance:
    """A chart's use of one indicator: type, chosen params and an identity."""

    type: IndicatorType
    params: IndicatorParams = field(default_factory=IndicatorParams)
    id: str = field(default_factory=lambda: uuid.uuid4().hex)

    @classmethod
    def create(
        cls,
        indicator_type: IndicatorType | str,
        params: IndicatorParams | Mapping[str, Any] | None = None,
    ) -> IndicatorInstance:
        """Build an instance whose params are merged over the type's defaults."""
        definition = get_definition(indicator_type)
        return cls(type=definition.type, params=resolve_params(definition, params))

    @property
    def definition(self) -> IndicatorDefinition:
        return INDICATOR_REGISTRY[self.type]

    @property
    def label(self) -> str:
        return self.definition.label(self.params)

    def compute(self, candles: Sequence[Candle]) -> list[IndicatorPoint]:
        return compute_indicator(self.type, candles, self.params)
