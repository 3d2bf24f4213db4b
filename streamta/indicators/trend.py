"""
Trend-following technical indicators.

This module implements the moving averages every other indicator is built on.

Classes:
    SMA: Simple Moving Average over a rolling sum
    EMA: Exponential Moving Average seeded with the first sample
    WMA: Linearly Weighted Moving Average
    HMA: Hull Moving Average built from three owned WMAs
"""

import math
from typing import List, Optional

from ..base import BaseIndicator
from ..exceptions import InvalidParameterError
from ..window import RingBuffer, RollingWindow


class SMA(BaseIndicator):
    """
    Simple Moving Average (SMA) indicator.

    Calculates the arithmetic mean of the last ``period`` values using a
    running sum, so each update is O(1).

    Mathematical Formula:
        SMA = (P1 + P2 + ... + Pn) / n

    Before ``period`` samples have been fed the window simply grows and the
    output is the mean of the samples seen so far.

    Example:
        >>> sma = SMA(period=3)
        >>> [sma.next(x) for x in (4.0, 5.0, 6.0, 7.0)]
        [4.0, 4.5, 5.0, 6.0]
    """

    required_inputs = ('close',)
    short_name = 'SMA'

    def __init__(self, period: int = 9, input_field: str = 'close'):
        """
        Initialize Simple Moving Average indicator.

        Args:
            period (int): Number of values averaged. Must be a positive integer.
            input_field (str): OHLCV field read from bars. Defaults to 'close'.

        Raises:
            InvalidParameterError: If period is not a positive integer.
        """
        super().__init__(period, input_field)
        self.required_inputs = (input_field,)

        self._window = RollingWindow(period)

    def _compute(self, value: float) -> float:
        self._window.push(value)
        return self._window.mean()

    @property
    def window(self) -> List[float]:
        """Values currently averaged, oldest first."""
        return list(self._window)

    def reset(self) -> None:
        super().reset()
        self._window.reset()


class EMA(BaseIndicator):
    """
    Exponential Moving Average (EMA) indicator.

    Mathematical Formula:
        EMA_today = α * Price_today + (1-α) * EMA_yesterday
        where α = 2 / (period + 1) by default, or custom alpha if provided

    The first output is the first sample itself. State is a single float.

    Example:
        >>> ema = EMA(period=3)
        >>> [ema.next(x) for x in (2.0, 5.0, 1.0, 6.25)]
        [2.0, 3.5, 2.25, 4.25]
    """

    required_inputs = ('close',)
    short_name = 'EMA'

    def __init__(self, period: int = 9, input_field: str = 'close', alpha: Optional[float] = None):
        """
        Initialize Exponential Moving Average indicator.

        Args:
            period (int): Smoothing period. Must be a positive integer.
            input_field (str): OHLCV field read from bars. Defaults to 'close'.
            alpha (Optional[float]): Custom smoothing factor in (0, 1].
                If None, uses the standard α = 2/(period+1).

        Raises:
            InvalidParameterError: If period is not positive or alpha is out of range.
        """
        super().__init__(period, input_field)
        self.required_inputs = (input_field,)

        if alpha is not None:
            if not isinstance(alpha, (int, float)) or isinstance(alpha, bool) or not 0 < alpha <= 1:
                raise InvalidParameterError("alpha", alpha, "value between 0 and 1", self._name)
            self._alpha = float(alpha)
        else:
            self._alpha = 2.0 / (period + 1)

        self._ema_value: Optional[float] = None

    def _compute(self, value: float) -> float:
        if self._ema_value is None:
            self._ema_value = value
        else:
            self._ema_value = self._alpha * value + (1 - self._alpha) * self._ema_value
        return self._ema_value

    @property
    def alpha(self) -> float:
        """Smoothing factor applied to the newest sample."""
        return self._alpha

    def reset(self) -> None:
        super().reset()
        self._ema_value = None


class WMA(BaseIndicator):
    """
    Weighted Moving Average (WMA) indicator.

    The i-th oldest of the k values in the window gets weight i + 1, so the
    newest value weighs the most.

    Mathematical Formula:
        WMA = (1*P1 + 2*P2 + ... + k*Pk) / (k(k+1)/2)

    Recomputed from the window each step, O(period).
    """

    required_inputs = ('close',)
    short_name = 'WMA'

    def __init__(self, period: int = 9, input_field: str = 'close'):
        super().__init__(period, input_field)
        self.required_inputs = (input_field,)

        self._buffer = RingBuffer(period)

    def _compute(self, value: float) -> float:
        self._buffer.push(value)

        weighted_sum = 0.0
        for weight, item in enumerate(self._buffer, start=1):
            weighted_sum += weight * item

        n = len(self._buffer)
        return weighted_sum / (n * (n + 1) / 2)

    @property
    def window(self) -> List[float]:
        return list(self._buffer)

    def reset(self) -> None:
        super().reset()
        self._buffer.reset()


class HMA(BaseIndicator):
    """
    Hull Moving Average (HMA) indicator.

    Mathematical Formula:
        raw = 2 * WMA(period // 2) - WMA(period)
        HMA = WMA(raw, floor(sqrt(period)))

    Sub-periods are clamped to at least 1. The three WMAs are owned by the
    HMA and fed in lockstep.
    """

    required_inputs = ('close',)
    short_name = 'HMA'

    def __init__(self, period: int = 9, input_field: str = 'close'):
        super().__init__(period, input_field)
        self.required_inputs = (input_field,)

        half_period = max(1, period // 2)
        sqrt_period = max(1, math.isqrt(period))

        self.half_wma = WMA(half_period)
        self.full_wma = WMA(period)
        self.smooth_wma = WMA(sqrt_period)

        self._children = [self.half_wma, self.full_wma, self.smooth_wma]
        self._ready_threshold = period + sqrt_period - 1

    def _compute(self, value: float) -> float:
        raw = 2.0 * self.half_wma.next(value) - self.full_wma.next(value)
        return self.smooth_wma.next(raw)
