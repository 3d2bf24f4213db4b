"""
Volatility technical indicators.

This module implements indicators that measure market volatility.

Classes:
    StandardDeviation: Rolling standard deviation from running sums.
    MeanAbsoluteDeviation: Rolling mean absolute deviation.
    TrueRange: Wilder's True Range.
    AverageTrueRange: Smoothed True Range.
"""

import math
from typing import List

from ..base import BaseIndicator
from ..exceptions import InvalidParameterError
from ..samples import PricePoint
from ..window import POPULATION, VARIANCE_KINDS, RingBuffer, RollingWindow
from .smoothing import EMA_SMOOTHING, make_smoother


class StandardDeviation(BaseIndicator):
    """
    Efficient O(1) rolling standard deviation.

    Uses a running sum and sum of squares over the window.

    Mathematical Formula:
        variance = sum(x^2)/n - (sum(x)/n)^2              (population)
        variance = population_variance * n / (n - 1)      (sample)
        std_dev = sqrt(variance)

    Small negative variances caused by rounding are clamped to zero.
    """

    required_inputs = ('close',)
    short_name = 'SD'

    def __init__(self, period: int = 9, input_field: str = 'close', kind: str = POPULATION):
        """
        Initialize the rolling standard deviation.

        Args:
            period (int): The lookback period. Must be > 0.
            input_field (str): OHLCV field read from bars.
            kind (str): 'population' (default) or 'sample' for Bessel's correction.
        """
        super().__init__(period, input_field)
        self.required_inputs = (input_field,)

        if kind not in VARIANCE_KINDS:
            raise InvalidParameterError("kind", kind, f"one of {list(VARIANCE_KINDS)}", self._name)

        self.kind = kind
        self._window = RollingWindow(period)

    def _compute(self, value: float) -> float:
        self._window.push(value)
        return math.sqrt(self._window.variance(self.kind))

    @property
    def window(self) -> List[float]:
        return list(self._window)

    def reset(self) -> None:
        super().reset()
        self._window.reset()


class MeanAbsoluteDeviation(BaseIndicator):
    """
    Rolling mean absolute deviation around the window mean.

    The mean moves with every sample, so the deviations are recomputed from
    the window on each update, O(period).
    """

    required_inputs = ('close',)
    short_name = 'MAD'

    def __init__(self, period: int = 9, input_field: str = 'close'):
        super().__init__(period, input_field)
        self.required_inputs = (input_field,)

        self._buffer = RingBuffer(period)

    def _compute(self, value: float) -> float:
        self._buffer.push(value)

        # Shift by the oldest value so a flat window yields exactly zero
        shift = self._buffer.oldest
        n = len(self._buffer)
        mean_offset = sum(item - shift for item in self._buffer) / n

        return sum(abs(item - shift - mean_offset) for item in self._buffer) / n

    @property
    def window(self) -> List[float]:
        return list(self._buffer)

    def reset(self) -> None:
        super().reset()
        self._buffer.reset()


class TrueRange(BaseIndicator):
    """
    True Range (TR).

    Mathematical Formula:
        TR = max(high - low, |high - prev_close|, |low - prev_close|)

    On the first sample there is no previous close and TR is high - low.
    """

    required_inputs = ('high', 'low', 'close')
    short_name = 'TRUE_RANGE'

    def __init__(self):
        super().__init__()
        self._previous_close = None

    def _compute(self, high: float, low: float, close: float) -> float:
        if self._previous_close is None:
            true_range = high - low
        else:
            true_range = max(
                high - low,
                abs(high - self._previous_close),
                abs(low - self._previous_close),
            )

        self._previous_close = close
        return true_range

    def reset(self) -> None:
        super().reset()
        self._previous_close = None


class AverageTrueRange(BaseIndicator):
    """
    Average True Range (ATR).

    Owns a TrueRange and a smoother of the given kind ('ema' by default,
    'wilders' for Wilder's original definition, or 'sma').
    """

    required_inputs = ('high', 'low', 'close')
    short_name = 'ATR'

    def __init__(self, period: int = 14, smoothing: str = EMA_SMOOTHING):
        super().__init__(period)

        self.smoothing = smoothing
        self.true_range = TrueRange()
        self.smoother = make_smoother(smoothing, period, self._name)

        self._children = [self.true_range, self.smoother]

    def _compute(self, high: float, low: float, close: float) -> float:
        true_range = self.true_range.next(PricePoint(high, low, close))
        return self.smoother.next(true_range)
