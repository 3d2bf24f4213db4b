"""
Smoothing kinds for indicators that average a derived series.

RSI and ATR smooth gains, losses or true ranges with a configurable moving
average. This module maps the smoothing names accepted by their constructors
to freshly built, exclusively owned indicator instances.

Classes:
    WildersSmoothing: Wilder's exponential smoothing (α = 1/N)

Functions:
    make_smoother: Build the smoother for a named kind
"""

from typing import Optional

from ..base import BaseIndicator
from ..exceptions import InvalidParameterError
from .trend import EMA, SMA

EMA_SMOOTHING = 'ema'
WILDERS_SMOOTHING = 'wilders'
SMA_SMOOTHING = 'sma'

SMOOTHING_KINDS = (EMA_SMOOTHING, WILDERS_SMOOTHING, SMA_SMOOTHING)


class WildersSmoothing(EMA):
    """
    Wilder's exponential smoothing.

    Uses α = 1/N, the smoothing J. Welles Wilder Jr. used for RSI, ATR and ADX.
    It reacts more slowly than the standard EMA of the same period.

    Mathematical Formula:
        α = 1 / period
        smoothed_value = α * new_value + (1-α) * previous_smoothed_value
    """

    short_name = 'WILDERS'

    def __init__(self, period: int = 14, input_field: str = 'close'):
        self._validate_period(period, "period", self.__class__.__name__)
        super().__init__(period, input_field, alpha=1.0 / period)


def make_smoother(kind: str, period: int, indicator_name: Optional[str] = None) -> BaseIndicator:
    """
    Build a new smoothing indicator.

    Args:
        kind (str): 'ema' (α = 2/(N+1)), 'wilders' (α = 1/N) or 'sma'.
        period (int): Smoothing period.
        indicator_name (Optional[str]): Owner name for error messages.

    Returns:
        BaseIndicator: A fresh instance owned by the caller.

    Raises:
        InvalidParameterError: If kind is unknown or period is invalid.
    """
    if kind == EMA_SMOOTHING:
        return EMA(period)
    if kind == WILDERS_SMOOTHING:
        return WildersSmoothing(period)
    if kind == SMA_SMOOTHING:
        return SMA(period)

    raise InvalidParameterError("smoothing", kind, f"one of {list(SMOOTHING_KINDS)}", indicator_name)
