"""
Volume technical indicators.

Both indicators read 'volume', so bare scalar samples are rejected with
MissingInputError.

Classes:
    OnBalanceVolume: Running volume total signed by close direction
    MFI: Money Flow Index over rolling positive/negative money flow
"""

from ..base import BaseIndicator
from ..samples import typical_price
from ..window import RollingWindow


class OnBalanceVolume(BaseIndicator):
    """
    On-Balance Volume (OBV).

    Adds the bar's volume when the close rises, subtracts it when the close
    falls and leaves the total unchanged on an equal close. The previous
    close starts at 0.0, so a positive first close adds its volume.
    """

    required_inputs = ('close', 'volume')
    short_name = 'OBV'

    def __init__(self):
        super().__init__()
        self._total = 0.0
        self._previous_close = 0.0

    def _compute(self, close: float, volume: float) -> float:
        if close > self._previous_close:
            self._total += volume
        elif close < self._previous_close:
            self._total -= volume

        self._previous_close = close
        return self._total

    def reset(self) -> None:
        super().reset()
        self._total = 0.0
        self._previous_close = 0.0


class MFI(BaseIndicator):
    """
    Money Flow Index (MFI), the volume-weighted RSI.

    Mathematical Formula:
        typical_price = (high + low + close) / 3
        money_flow = typical_price * volume
        positive/negative flow = money_flow when typical price rose/fell
        MFI = 100 * positive_sum / (positive_sum + negative_sum)
            = 100 - 100 / (1 + positive_sum / negative_sum)

    Sums run over the last ``period`` typical-price changes. An unchanged
    typical price adds to neither side. The first sample, and any window with
    no money flow at all, yield 50.0.
    """

    required_inputs = ('high', 'low', 'close', 'volume')
    short_name = 'MFI'

    def __init__(self, period: int = 14):
        super().__init__(period)

        self._positive_flow = RollingWindow(period)
        self._negative_flow = RollingWindow(period)
        self._previous_typical_price = None
        self._ready_threshold = period + 1

    def _compute(self, high: float, low: float, close: float, volume: float) -> float:
        tp = typical_price(high, low, close)

        if self._previous_typical_price is None:
            self._previous_typical_price = tp
            return 50.0

        money_flow = tp * volume
        previous = self._previous_typical_price
        self._previous_typical_price = tp

        self._positive_flow.push(money_flow if tp > previous else 0.0)
        self._negative_flow.push(money_flow if tp < previous else 0.0)

        positive = max(0.0, self._positive_flow.sum)
        negative = max(0.0, self._negative_flow.sum)
        total = positive + negative

        if total == 0:
            return 50.0

        return 100.0 * positive / total

    def reset(self) -> None:
        super().reset()
        self._positive_flow.reset()
        self._negative_flow.reset()
        self._previous_typical_price = None
