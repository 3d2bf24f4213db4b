"""
Momentum technical indicators.

This module implements indicators that measure the speed and strength of price movements.

Classes:
    RSI: Relative Strength Index with configurable smoothing
    RateOfChange: Percentage change over the window
    EfficiencyRatio: Kaufman's Efficiency Ratio
"""

import math
from typing import List, Optional

from ..base import BaseIndicator
from ..window import RingBuffer
from .smoothing import EMA_SMOOTHING, make_smoother


class RSI(BaseIndicator):
    """
    Relative Strength Index (RSI) momentum indicator.

    Measures the speed and change of price movements to identify
    overbought/oversold conditions.

    Mathematical Formula:
        RSI = 100 - (100 / (1 + RS))
        where RS = Average Gain / Average Loss

        Gains = max(0, current_price - previous_price)
        Losses = max(0, previous_price - current_price)

    Smoothing Methods:
        - 'ema': Standard EMA smoothing (α = 2/(N+1)), the default
        - 'wilders': Original Wilder's smoothing (α = 1/N)
        - 'sma': Simple average of the last N gains/losses

    Edge cases:
        - The first sample has no price change and yields 50.0.
        - When the average loss is zero the RSI is 100.0.

    Example:
        >>> rsi = RSI(period=14)
        >>> for bar in market_data:
        ...     value = rsi.next(bar)
        ...     if value > 70:
        ...         print(f"Overbought: RSI = {value:.1f}")
    """

    required_inputs = ('close',)
    short_name = 'RSI'

    def __init__(self, period: int = 14, input_field: str = 'close', smoothing: str = EMA_SMOOTHING):
        """
        Initialize Relative Strength Index indicator.

        Args:
            period (int): Smoothing period for gains and losses. Standard period is 14.
            input_field (str): OHLCV field read from bars. Defaults to 'close'.
            smoothing (str): Smoothing method for gain/loss averages.

        Raises:
            InvalidParameterError: If period is not positive or smoothing is unknown.
        """
        super().__init__(period, input_field)
        self.required_inputs = (input_field,)

        # One extra sample for the first price change
        self._ready_threshold = period + 1

        self.smoothing = smoothing
        self.gain_average = make_smoother(smoothing, period, self._name)
        self.loss_average = make_smoother(smoothing, period, self._name)
        self._children = [self.gain_average, self.loss_average]

        self._previous_price: Optional[float] = None

    def _compute(self, current_price: float) -> float:
        if self._previous_price is None:
            self._previous_price = current_price
            return 50.0

        price_change = current_price - self._previous_price
        self._previous_price = current_price

        # Rolling-sum smoothers may drift a hair below zero
        avg_gain = max(0.0, self.gain_average.next(max(0.0, price_change)))
        avg_loss = max(0.0, self.loss_average.next(max(0.0, -price_change)))

        if avg_loss == 0:
            return 100.0

        rs = avg_gain / avg_loss
        return 100.0 - (100.0 / (1.0 + rs))

    @property
    def average_gain(self) -> float:
        """Current smoothed average gain, NaN before the first price change."""
        return self.gain_average.value

    @property
    def average_loss(self) -> float:
        """Current smoothed average loss, NaN before the first price change."""
        return self.loss_average.value

    @property
    def relative_strength(self) -> float:
        """
        Get the current Relative Strength (RS) ratio.

        Returns:
            float: average_gain / average_loss, inf when there are no losses,
                NaN before the first price change.
        """
        avg_gain = self.average_gain
        avg_loss = self.average_loss

        if math.isnan(avg_gain) or math.isnan(avg_loss):
            return math.nan

        if avg_loss == 0:
            return math.inf

        return avg_gain / avg_loss

    def _display_params(self):
        return (self.period,) if self.smoothing == EMA_SMOOTHING else (self.period, self.smoothing)

    def reset(self) -> None:
        super().reset()
        self._previous_price = None


class RateOfChange(BaseIndicator):
    """
    Rate of Change (ROC).

    Mathematical Formula:
        ROC = (price - price_n_periods_ago) / price_n_periods_ago * 100

    The window holds the previous ``period`` prices. Until it is full the
    oldest price seen so far is the base; the very first sample is its own
    base and yields 0. A zero base yields 0.0 rather than a division error.
    """

    required_inputs = ('close',)
    short_name = 'ROC'

    def __init__(self, period: int = 9, input_field: str = 'close'):
        super().__init__(period, input_field)
        self.required_inputs = (input_field,)

        self._buffer = RingBuffer(period)
        self._ready_threshold = period + 1

    def _compute(self, value: float) -> float:
        base = self._buffer.oldest if len(self._buffer) else value
        self._buffer.push(value)

        if base == 0:
            return 0.0

        return (value - base) / base * 100.0

    @property
    def window(self) -> List[float]:
        return list(self._buffer)

    def reset(self) -> None:
        super().reset()
        self._buffer.reset()


class EfficiencyRatio(BaseIndicator):
    """
    Kaufman's Efficiency Ratio (ER).

    Mathematical Formula:
        ER = |last - first| / sum(|p[i] - p[i-1]|)   over the window

    1.0 means a straight-line move, values near 0 a choppy market. A window
    with no movement (including a single sample) yields 0.0.
    """

    required_inputs = ('close',)
    short_name = 'ER'

    def __init__(self, period: int = 14, input_field: str = 'close'):
        super().__init__(period, input_field)
        self.required_inputs = (input_field,)

        self._buffer = RingBuffer(period)

    def _compute(self, value: float) -> float:
        self._buffer.push(value)

        movement = 0.0
        previous = None
        for item in self._buffer:
            if previous is not None:
                movement += abs(item - previous)
            previous = item

        if movement == 0:
            return 0.0

        return abs(self._buffer.newest - self._buffer.oldest) / movement

    @property
    def window(self) -> List[float]:
        return list(self._buffer)

    def reset(self) -> None:
        super().reset()
        self._buffer.reset()
