"""
Composite technical indicators.

This module implements composite indicators that are built from other indicators.
Each composite owns its children exclusively, feeds them in a fixed order on
every sample and resets them together with itself.
"""

import math
from dataclasses import dataclass, asdict
from typing import Dict

from ..base import BaseIndicator
from ..exceptions import InvalidParameterError
from ..samples import PricePoint, typical_price
from .minmax import Maximum, Minimum
from .trend import SMA, EMA
from .volatility import AverageTrueRange, MeanAbsoluteDeviation, StandardDeviation


@dataclass(frozen=True)
class MACDOutput:
    macd: float
    signal: float
    histogram: float

    def as_dict(self) -> Dict[str, float]:
        return asdict(self)


@dataclass(frozen=True)
class BandsOutput:
    """Upper, middle and lower band of an envelope indicator."""
    upper: float
    middle: float
    lower: float

    @property
    def bandwidth(self) -> float:
        """(upper - lower) / middle, 0.0 when the middle band is zero."""
        return (self.upper - self.lower) / self.middle if self.middle != 0 else 0.0

    def as_dict(self) -> Dict[str, float]:
        return asdict(self)


@dataclass(frozen=True)
class StochasticOutput:
    k: float
    d: float

    def as_dict(self) -> Dict[str, float]:
        return asdict(self)


@dataclass(frozen=True)
class ChandelierOutput:
    long: float
    short: float

    def as_dict(self) -> Dict[str, float]:
        return asdict(self)


class MACD(BaseIndicator):
    """
    Moving Average Convergence Divergence (MACD) indicator.

    A trend-following momentum indicator that shows the relationship between two
    exponential moving averages (EMAs) of a security's price.

    Mathematical Formula:
        MACD Line = EMA(fast_period) - EMA(slow_period)
        Signal Line = EMA(MACD Line, signal_period)
        Histogram = MACD Line - Signal Line

    Attributes:
        fast_ema (EMA): The fast EMA indicator.
        slow_ema (EMA): The slow EMA indicator.
        signal_ema (EMA): The signal line EMA, fed with the MACD line.
    """

    required_inputs = ('close',)
    short_name = 'MACD'

    def __init__(self, fast_period: int = 12, slow_period: int = 26, signal_period: int = 9, input_field: str = 'close'):
        """
        Initialize MACD indicator.

        Args:
            fast_period (int): The period for the fast EMA.
            slow_period (int): The period for the slow EMA. Must exceed fast_period.
            signal_period (int): The period for the signal line EMA.
            input_field (str): The input field to use.

        Raises:
            InvalidParameterError: If a period is not positive or fast_period >= slow_period.
        """
        name = self.__class__.__name__
        self._validate_period(fast_period, "fast_period", name)
        self._validate_period(slow_period, "slow_period", name)
        self._validate_period(signal_period, "signal_period", name)
        if fast_period >= slow_period:
            raise InvalidParameterError("fast_period", fast_period, f"less than slow_period ({slow_period})", name)

        super().__init__(period=slow_period, input_field=input_field)
        self.required_inputs = (input_field,)

        self.fast_period = fast_period
        self.slow_period = slow_period
        self.signal_period = signal_period

        self.fast_ema = EMA(fast_period)
        self.slow_ema = EMA(slow_period)
        self.signal_ema = EMA(signal_period)

        self._children = [self.fast_ema, self.slow_ema, self.signal_ema]
        self._ready_threshold = slow_period + signal_period - 1

    def _line(self, fast: float, slow: float) -> float:
        return fast - slow

    def _compute(self, price: float) -> MACDOutput:
        fast = self.fast_ema.next(price)
        slow = self.slow_ema.next(price)

        line = self._line(fast, slow)
        signal = self.signal_ema.next(line)

        return MACDOutput(macd=line, signal=signal, histogram=line - signal)

    def _empty_output(self) -> MACDOutput:
        return MACDOutput(math.nan, math.nan, math.nan)

    def _display_params(self):
        return (self.fast_period, self.slow_period, self.signal_period)


class PPO(MACD):
    """
    Percentage Price Oscillator (PPO).

    MACD with the line expressed as a percentage of the slow EMA.

    Mathematical Formula:
        PPO Line = (EMA(fast) - EMA(slow)) / EMA(slow) * 100
        Signal Line = EMA(PPO Line, signal_period)
        Histogram = PPO Line - Signal Line

    A zero slow EMA yields a PPO line of 0.0.
    """

    short_name = 'PPO'

    def _line(self, fast: float, slow: float) -> float:
        if slow == 0:
            return 0.0
        return (fast - slow) / slow * 100.0


class FastStochastic(BaseIndicator):
    """
    Fast Stochastic Oscillator (%K).

    Mathematical Formula:
        %K = 100 * (close - lowest_low) / (highest_high - lowest_low)

    Returns 50.0 when the highest high equals the lowest low.

    Attributes:
        lowest_low (Minimum): Rolling minimum of lows.
        highest_high (Maximum): Rolling maximum of highs.
    """

    required_inputs = ('high', 'low', 'close')
    short_name = 'FAST_STOCH'

    def __init__(self, period: int = 14):
        super().__init__(period)

        self.lowest_low = Minimum(period)
        self.highest_high = Maximum(period)
        self._children = [self.lowest_low, self.highest_high]

    def _compute(self, high: float, low: float, close: float) -> float:
        lowest_low = self.lowest_low.next(low)
        highest_high = self.highest_high.next(high)

        if highest_high == lowest_low:
            return 50.0

        return 100.0 * (close - lowest_low) / (highest_high - lowest_low)


class SlowStochastic(BaseIndicator):
    """
    Slow Stochastic Oscillator.

    Mathematical Formula:
        %K = FastStochastic(k_period)
        %D = SMA(%K, d_period)

    Attributes:
        fast_stochastic (FastStochastic): The raw %K.
        d_sma (SMA): Smoothing of %K into %D.
    """

    required_inputs = ('high', 'low', 'close')
    short_name = 'SLOW_STOCH'

    def __init__(self, k_period: int = 14, d_period: int = 3):
        name = self.__class__.__name__
        self._validate_period(k_period, "k_period", name)
        self._validate_period(d_period, "d_period", name)

        super().__init__(period=k_period)

        self.k_period = k_period
        self.d_period = d_period

        self.fast_stochastic = FastStochastic(k_period)
        self.d_sma = SMA(d_period)
        self._children = [self.fast_stochastic, self.d_sma]
        self._ready_threshold = k_period + d_period - 1

    def _compute(self, high: float, low: float, close: float) -> StochasticOutput:
        k = self.fast_stochastic.next(PricePoint(high, low, close))
        d = self.d_sma.next(k)
        return StochasticOutput(k=k, d=d)

    def _empty_output(self) -> StochasticOutput:
        return StochasticOutput(math.nan, math.nan)

    def _display_params(self):
        return (self.k_period, self.d_period)


class CCI(BaseIndicator):
    """
    Commodity Channel Index (CCI).

    Mathematical Formula:
        typical_price = (high + low + close) / 3
        CCI = (typical_price - SMA(typical_price)) / (0.015 * MAD(typical_price))

    Returns 0.0 when the mean absolute deviation is zero.
    """

    required_inputs = ('high', 'low', 'close')
    short_name = 'CCI'

    CONSTANT = 0.015

    def __init__(self, period: int = 20):
        super().__init__(period)

        self.sma = SMA(period)
        self.mad = MeanAbsoluteDeviation(period)
        self._children = [self.sma, self.mad]

    def _compute(self, high: float, low: float, close: float) -> float:
        tp = typical_price(high, low, close)
        mean = self.sma.next(tp)
        mad = self.mad.next(tp)

        if mad == 0:
            return 0.0

        return (tp - mean) / (self.CONSTANT * mad)


class BollingerBands(BaseIndicator):
    """
    Bollinger Bands (BBands) indicator.

    Comprises a middle band (SMA) and upper/lower bands based on standard deviation.

    Mathematical Formula:
        Middle Band = SMA(period)
        Upper Band = Middle Band + (K * StdDev(period))
        Lower Band = Middle Band - (K * StdDev(period))

    Attributes:
        middle_band (SMA): The middle band (SMA) indicator.
        std_dev (StandardDeviation): The population standard deviation.
    """

    required_inputs = ('close',)
    short_name = 'BB'

    def __init__(self, period: int = 9, k: float = 2.0, input_field: str = 'close'):
        """
        Initialize Bollinger Bands indicator.

        Args:
            period (int): The lookback period for SMA and StdDev.
            k (float): The number of standard deviations for the bands, >= 0.
            input_field (str): The input field to use.
        """
        super().__init__(period, input_field)
        self.required_inputs = (input_field,)

        self._k = self._validate_multiplier(k, "k", self._name)

        self.middle_band = SMA(period)
        self.std_dev = StandardDeviation(period)
        self._children = [self.middle_band, self.std_dev]

    @property
    def k(self) -> float:
        return self._k

    def _compute(self, value: float) -> BandsOutput:
        middle = self.middle_band.next(value)
        width = self._k * self.std_dev.next(value)
        return BandsOutput(upper=middle + width, middle=middle, lower=middle - width)

    def _empty_output(self) -> BandsOutput:
        return BandsOutput(math.nan, math.nan, math.nan)

    def _display_params(self):
        return (self.period, f"{self._k:g}")


class KeltnerChannel(BaseIndicator):
    """
    Keltner Channel.

    Mathematical Formula:
        typical_price = (high + low + close) / 3
        Middle Line = EMA(typical_price, period)
        Upper/Lower = Middle Line +/- K * ATR(period)

    Attributes:
        middle_ema (EMA): EMA of the typical price.
        atr (AverageTrueRange): Channel width.
    """

    required_inputs = ('high', 'low', 'close')
    short_name = 'KC'

    def __init__(self, period: int = 10, k: float = 2.0):
        super().__init__(period)

        self._k = self._validate_multiplier(k, "k", self._name)

        self.middle_ema = EMA(period)
        self.atr = AverageTrueRange(period)
        self._children = [self.middle_ema, self.atr]

    @property
    def k(self) -> float:
        return self._k

    def _compute(self, high: float, low: float, close: float) -> BandsOutput:
        middle = self.middle_ema.next(typical_price(high, low, close))
        width = self._k * self.atr.next(PricePoint(high, low, close))
        return BandsOutput(upper=middle + width, middle=middle, lower=middle - width)

    def _empty_output(self) -> BandsOutput:
        return BandsOutput(math.nan, math.nan, math.nan)

    def _display_params(self):
        return (self.period, f"{self._k:g}")


class ChandelierExit(BaseIndicator):
    """
    Chandelier Exit.

    Mathematical Formula:
        Long Exit = Highest High(period) - K * ATR(period)
        Short Exit = Lowest Low(period) + K * ATR(period)

    Attributes:
        highest_high (Maximum): Rolling maximum of highs.
        lowest_low (Minimum): Rolling minimum of lows.
        atr (AverageTrueRange): Distance of the exits from the extremes.
    """

    required_inputs = ('high', 'low', 'close')
    short_name = 'CE'

    def __init__(self, period: int = 22, k: float = 3.0):
        super().__init__(period)

        self._k = self._validate_multiplier(k, "k", self._name)

        self.highest_high = Maximum(period)
        self.lowest_low = Minimum(period)
        self.atr = AverageTrueRange(period)
        self._children = [self.highest_high, self.lowest_low, self.atr]

    @property
    def k(self) -> float:
        return self._k

    def _compute(self, high: float, low: float, close: float) -> ChandelierOutput:
        highest_high = self.highest_high.next(high)
        lowest_low = self.lowest_low.next(low)
        distance = self._k * self.atr.next(PricePoint(high, low, close))
        return ChandelierOutput(long=highest_high - distance, short=lowest_low + distance)

    def _empty_output(self) -> ChandelierOutput:
        return ChandelierOutput(math.nan, math.nan)

    def _display_params(self):
        return (self.period, f"{self._k:g}")
