"""
Windowed statistics substrate.

Plain data structures every indicator is built from. None of them knows
anything about indicator semantics and none has an "invalid" state: an empty
structure simply reports no mean or extremum until something is pushed.

Classes:
    RingBuffer: Fixed-capacity FIFO window that reports the evicted element.
    SumAccumulator: Running sum and sum of squares with O(1) push/evict.
    MonotonicExtremumTracker: Monotonic deque answering the window min or max.
    RollingWindow: RingBuffer and SumAccumulator kept in step.
"""

from collections import deque
from typing import Deque, Iterable, Iterator, Optional, Tuple

POPULATION = 'population'
SAMPLE = 'sample'
VARIANCE_KINDS = (POPULATION, SAMPLE)


def _check_capacity(capacity: int) -> None:
    if not isinstance(capacity, int) or isinstance(capacity, bool) or capacity <= 0:
        raise ValueError("Capacity must be a positive integer.")


class RingBuffer:
    """
    Last ``capacity`` values pushed, oldest first.

    Pushing onto a full buffer evicts exactly the oldest element and returns it.
    """

    def __init__(self, capacity: int):
        _check_capacity(capacity)
        self._capacity = capacity
        self._items: Deque[float] = deque(maxlen=capacity)

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def is_full(self) -> bool:
        return len(self._items) == self._capacity

    @property
    def oldest(self) -> Optional[float]:
        return self._items[0] if self._items else None

    @property
    def newest(self) -> Optional[float]:
        return self._items[-1] if self._items else None

    def push(self, value: float) -> Optional[float]:
        """
        Append a value, evicting the oldest one when the buffer is full.

        Args:
            value (float): The new element.

        Returns:
            Optional[float]: The evicted element, or None if nothing was evicted.
        """
        evicted = self._items[0] if len(self._items) == self._capacity else None
        self._items.append(value)
        return evicted

    def reset(self) -> None:
        self._items.clear()

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[float]:
        return iter(self._items)

    def __getitem__(self, index: int) -> float:
        return self._items[index]

    def __repr__(self) -> str:
        return f"RingBuffer(capacity={self._capacity}, items={list(self._items)})"


def _compensated_add(total: float, compensation: float, value: float) -> Tuple[float, float]:
    """
    Neumaier summation step.

    Returns the new running total and the accumulated low-order bits lost
    while adding ``value``.
    """
    new_total = total + value
    if abs(total) >= abs(value):
        compensation += (total - new_total) + value
    else:
        compensation += (value - new_total) + total
    return new_total, compensation


class SumAccumulator:
    """
    Running sum and sum of squares over the current window contents.

    The owner calls ``on_push`` for every value entering the window and
    ``on_evict`` for every value leaving it. Both sums are compensated
    (Neumaier), so evicting a value much larger than the rest of the window
    leaves the remaining sum exact. ``resync`` recomputes both sums from the
    window contents.
    """

    def __init__(self):
        self.count = 0
        self._sum = 0.0
        self._sum_comp = 0.0
        self._sum_sq = 0.0
        self._sum_sq_comp = 0.0

    @property
    def sum(self) -> float:
        return self._sum + self._sum_comp

    @property
    def sum_sq(self) -> float:
        return self._sum_sq + self._sum_sq_comp

    def _add(self, value: float) -> None:
        self._sum, self._sum_comp = _compensated_add(self._sum, self._sum_comp, value)
        self._sum_sq, self._sum_sq_comp = _compensated_add(self._sum_sq, self._sum_sq_comp, value * value)

    def on_push(self, value: float) -> None:
        self.count += 1
        self._add(value)

    def on_evict(self, value: float) -> None:
        self.count -= 1
        if self.count == 0:
            self.reset()
            return

        self._sum, self._sum_comp = _compensated_add(self._sum, self._sum_comp, -value)
        self._sum_sq, self._sum_sq_comp = _compensated_add(self._sum_sq, self._sum_sq_comp, -(value * value))

    def mean(self) -> Optional[float]:
        """Window mean, or None when the window is empty."""
        if self.count == 0:
            return None
        return self.sum / self.count

    def variance(self, kind: str = POPULATION) -> float:
        """
        Window variance.

        Args:
            kind (str): 'population' divides by n, 'sample' applies Bessel's
                correction and divides by n - 1.

        Returns:
            float: The variance, clamped to >= 0. Zero for an empty window,
                and for a single value when kind is 'sample'.
        """
        if kind not in VARIANCE_KINDS:
            raise ValueError(f"Variance kind must be one of {VARIANCE_KINDS}, got {kind!r}.")

        n = self.count
        if n == 0 or (kind == SAMPLE and n < 2):
            return 0.0

        mean = self.sum / n
        variance = self.sum_sq / n - mean * mean
        if kind == SAMPLE:
            variance = variance * n / (n - 1)

        return variance if variance > 0.0 else 0.0

    def resync(self, values: Iterable[float]) -> None:
        """Recompute count, sum and sum of squares from the window contents."""
        self.reset()
        for value in values:
            self.count += 1
            self._add(value)

    def reset(self) -> None:
        self.count = 0
        self._sum = 0.0
        self._sum_comp = 0.0
        self._sum_sq = 0.0
        self._sum_sq_comp = 0.0


class MonotonicExtremumTracker:
    """
    Monotonic deque of (value, position) candidates for a window min or max.

    Values increase front to back when tracking the minimum and decrease when
    tracking the maximum, so the front is always the window extremum. A push
    first drops every candidate from the back that the new value dominates;
    ``evict_before`` drops candidates that aged out of the window.
    """

    def __init__(self, order: str = 'max'):
        if order not in ('min', 'max'):
            raise ValueError(f"Order must be 'min' or 'max', got {order!r}.")
        self.order = order
        self._deque: Deque[Tuple[float, int]] = deque()

    def push(self, value: float, position: int) -> None:
        candidates = self._deque
        if self.order == 'max':
            while candidates and candidates[-1][0] <= value:
                candidates.pop()
        else:
            while candidates and candidates[-1][0] >= value:
                candidates.pop()
        candidates.append((value, position))

    def evict_before(self, min_position: int) -> None:
        """Drop front candidates whose position is below ``min_position``."""
        candidates = self._deque
        while candidates and candidates[0][1] < min_position:
            candidates.popleft()

    def current(self) -> Optional[float]:
        """Current extremum, or None when empty."""
        return self._deque[0][0] if self._deque else None

    def current_position(self) -> Optional[int]:
        return self._deque[0][1] if self._deque else None

    def reset(self) -> None:
        self._deque.clear()

    def __len__(self) -> int:
        return len(self._deque)


class RollingWindow:
    """
    Ring buffer with a SumAccumulator kept in step.

    The accumulator is resynchronised from the buffer every ``capacity``
    evictions, which keeps drift bounded at O(1) amortised cost.
    """

    def __init__(self, capacity: int):
        self.buffer = RingBuffer(capacity)
        self.stats = SumAccumulator()
        self._evictions = 0

    @property
    def capacity(self) -> int:
        return self.buffer.capacity

    @property
    def is_full(self) -> bool:
        return self.buffer.is_full

    @property
    def sum(self) -> float:
        return self.stats.sum

    def push(self, value: float) -> Optional[float]:
        evicted = self.buffer.push(value)
        if evicted is not None:
            self.stats.on_evict(evicted)
            self._evictions += 1
        self.stats.on_push(value)

        if self._evictions >= self.buffer.capacity:
            self.stats.resync(self.buffer)
            self._evictions = 0

        return evicted

    def mean(self) -> Optional[float]:
        return self.stats.mean()

    def variance(self, kind: str = POPULATION) -> float:
        return self.stats.variance(kind)

    def reset(self) -> None:
        self.buffer.reset()
        self.stats.reset()
        self._evictions = 0

    def __len__(self) -> int:
        return len(self.buffer)

    def __iter__(self) -> Iterator[float]:
        return iter(self.buffer)
