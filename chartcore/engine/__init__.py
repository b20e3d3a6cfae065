"""Engine layer: candle resampling and indicator computation."""

from chartcore.engine.indicators import (
    INDICATOR_REGISTRY,
    IndicatorParams,
    IndicatorType,
    compute_indicator,
)
from chartcore.engine.resampler import resample

__all__ = [
    "INDICATOR_REGISTRY",
    "IndicatorParams",
    "IndicatorType",
    "compute_indicator",
    "resample",
]
