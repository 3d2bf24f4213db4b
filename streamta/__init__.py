"""
streamta: streaming technical analysis

Stateful indicators that consume one scalar or OHLCV sample at a time and
return an updated value after each sample, with memory bounded by their
period.

This library provides:
- Windowed statistics substrate: ring buffer, running sums, monotonic min/max deque
- Primitive indicators: SMA, EMA, WMA, HMA, Minimum/Maximum, SD, MAD, TR, ROC, OBV, ER
- Composite indicators: RSI, MACD, PPO, Stochastics, CCI, MFI, ATR, Bollinger, Keltner, Chandelier
- Factory pattern for creating indicators by name
- YAML-driven indicator sets and logging setup

Example Usage:
    import streamta as ta

    sma = ta.create('sma', period=20)
    macd = ta.MACD(fast_period=12, slow_period=26, signal_period=9)

    for bar in bars:
        trend = sma.next(bar)
        lines = macd.next(bar)
"""

__version__ = "0.6.0"

from .base import BaseIndicator
from .exceptions import (
    IndicatorError,
    ConfigError,
    InvalidParameterError,
    MissingInputError,
    InvalidDataError,
    IndicatorNotFoundError
)
from .samples import Bar, PricePoint
from .window import RingBuffer, SumAccumulator, MonotonicExtremumTracker, RollingWindow
from .indicators import (
    SMA, EMA, WMA, HMA,
    Minimum, Maximum,
    StandardDeviation, MeanAbsoluteDeviation, TrueRange, AverageTrueRange,
    RSI, RateOfChange, EfficiencyRatio,
    OnBalanceVolume, MFI,
    MACD, PPO, FastStochastic, SlowStochastic, CCI,
    BollingerBands, KeltnerChannel, ChandelierExit,
    MACDOutput, BandsOutput, StochasticOutput, ChandelierOutput,
    WildersSmoothing,
)
from .factory import (
    create,
    list_indicators,
    describe,
    validate_period,
    validate_alpha,
    validate_k_factor,
    validate_input_field
)
from .config import ConfigLoader, setup_logging, build_indicators, load_indicators
from .frame import IndicatorSet, run_series

__all__ = [
    # Core classes
    "BaseIndicator",
    "Bar",
    "PricePoint",

    # Substrate
    "RingBuffer",
    "SumAccumulator",
    "MonotonicExtremumTracker",
    "RollingWindow",

    # Factory functions
    "create",
    "list_indicators",
    "describe",

    # Primitive indicators
    "SMA",
    "EMA",
    "WMA",
    "HMA",
    "Minimum",
    "Maximum",
    "StandardDeviation",
    "MeanAbsoluteDeviation",
    "TrueRange",
    "RateOfChange",
    "OnBalanceVolume",
    "EfficiencyRatio",
    "WildersSmoothing",

    # Composite indicators
    "RSI",
    "MACD",
    "PPO",
    "FastStochastic",
    "SlowStochastic",
    "CCI",
    "MFI",
    "AverageTrueRange",
    "BollingerBands",
    "KeltnerChannel",
    "ChandelierExit",

    # Output records
    "MACDOutput",
    "BandsOutput",
    "StochasticOutput",
    "ChandelierOutput",

    # Validation utilities
    "validate_period",
    "validate_alpha",
    "validate_k_factor",
    "validate_input_field",

    # Configuration
    "ConfigLoader",
    "setup_logging",
    "build_indicators",
    "load_indicators",

    # Stream replay
    "IndicatorSet",
    "run_series",

    # Exceptions
    "IndicatorError",
    "ConfigError",
    "InvalidParameterError",
    "MissingInputError",
    "InvalidDataError",
    "IndicatorNotFoundError",

    # Metadata
    "__version__",
]
