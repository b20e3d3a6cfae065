"""Indicator engine: algorithms, parameters and the registry."""

from chartcore.engine.indicators.averages import calculate_ema, calculate_sma
from chartcore.engine.indicators.base import (
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
from chartcore.engine.indicators.registry import (
    INDICATOR_REGISTRY,
    IndicatorDefinition,
    IndicatorInstance,
    compute_indicator,
    get_definition,
)
from chartcore.engine.indicators.volatility import calculate_atr, calculate_bollinger
from chartcore.engine.indicators.volume import (
    calculate_anchored_vwap,
    calculate_volume,
    calculate_volume_ma,
)

__all__ = [
    "INDICATOR_REGISTRY",
    "IndicatorDefinition",
    "IndicatorInstance",
    "IndicatorPane",
    "IndicatorParams",
    "IndicatorType",
    "calculate_anchored_vwap",
    "calculate_atr",
    "calculate_bollinger",
    "calculate_ema",
    "calculate_macd",
    "calculate_macd_histogram",
    "calculate_macd_signal",
    "calculate_rsi",
    "calculate_sma",
    "calculate_volume",
    "calculate_volume_ma",
    "compute_indicator",
    "get_definition",
]
