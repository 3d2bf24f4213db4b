"""
Min/Max technical indicators.

This module implements indicators that track the rolling minimum and maximum.

Classes:
    Minimum: Lowest value over the last ``period`` samples (reads 'low').
    Maximum: Highest value over the last ``period`` samples (reads 'high').
"""

from typing import Optional

from ..base import BaseIndicator
from ..window import MonotonicExtremumTracker


class _RollingExtremum(BaseIndicator):
    """
    O(1) amortized rolling extremum.

    Keeps a monotonic deque of (value, position) candidates where position is
    the feed counter. Candidates dominated by a newer value are dropped from
    the back on push, candidates older than the window from the front.
    """

    order = 'max'
    default_field = 'high'

    def __init__(self, period: int = 14, input_field: Optional[str] = None):
        input_field = input_field or self.default_field
        super().__init__(period, input_field)
        self.required_inputs = (input_field,)

        self._tracker = MonotonicExtremumTracker(self.order)
        self._position = 0

    def _compute(self, value: float) -> float:
        self._tracker.push(value, self._position)
        self._tracker.evict_before(self._position - self.period + 1)
        self._position += 1
        return self._tracker.current()

    def reset(self) -> None:
        super().reset()
        self._tracker.reset()
        self._position = 0


class Minimum(_RollingExtremum):
    """
    Lowest value over the last ``period`` samples.

    Example:
        >>> low = Minimum(period=3)
        >>> [low.next(x) for x in (4.0, 2.0, 5.0, 6.0, 7.0)]
        [4.0, 2.0, 2.0, 2.0, 5.0]
    """

    order = 'min'
    default_field = 'low'
    required_inputs = ('low',)
    short_name = 'MIN'


class Maximum(_RollingExtremum):
    """
    Highest value over the last ``period`` samples.

    Example:
        >>> high = Maximum(period=3)
        >>> [high.next(x) for x in (7.0, 5.0, 4.0, 4.0, 8.0)]
        [7.0, 7.0, 7.0, 5.0, 8.0]
    """

    order = 'max'
    default_field = 'high'
    required_inputs = ('high',)
    short_name = 'MAX'
