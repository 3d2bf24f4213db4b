"""
Technical Analysis Indicators Module

Concrete implementations of streaming technical indicators built on BaseIndicator.
"""

from .smoothing import WildersSmoothing, make_smoother, SMOOTHING_KINDS
from .trend import SMA, EMA, WMA, HMA
from .minmax import Minimum, Maximum
from .volatility import StandardDeviation, MeanAbsoluteDeviation, TrueRange, AverageTrueRange
from .momentum import RSI, RateOfChange, EfficiencyRatio
from .volume import OnBalanceVolume, MFI
from .composite import (
    MACD, PPO,
    FastStochastic, SlowStochastic,
    CCI,
    BollingerBands, KeltnerChannel, ChandelierExit,
    MACDOutput, BandsOutput, StochasticOutput, ChandelierOutput,
)

__all__ = [
    # Trend indicators
    "SMA",
    "EMA",
    "WMA",
    "HMA",

    # Min/max
    "Minimum",
    "Maximum",

    # Volatility indicators
    "StandardDeviation",
    "MeanAbsoluteDeviation",
    "TrueRange",
    "AverageTrueRange",

    # Momentum indicators
    "RSI",
    "RateOfChange",
    "EfficiencyRatio",

    # Volume indicators
    "OnBalanceVolume",
    "MFI",

    # Composite indicators
    "MACD",
    "PPO",
    "FastStochastic",
    "SlowStochastic",
    "CCI",
    "BollingerBands",
    "KeltnerChannel",
    "ChandelierExit",

    # Output records
    "MACDOutput",
    "BandsOutput",
    "StochasticOutput",
    "ChandelierOutput",

    # Smoothing
    "WildersSmoothing",
    "make_smoother",
    "SMOOTHING_KINDS",
]
