"""chartcore: candle resampling and technical indicator computation."""

__version__ = "0.1.0"
