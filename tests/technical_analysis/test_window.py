"""Tests for the windowed statistics substrate."""

import math
import random

import pytest

from streamta.window import MonotonicExtremumTracker, RingBuffer, RollingWindow, SumAccumulator


class TestRingBuffer:

    def test_push_returns_evicted_oldest(self):
        buffer = RingBuffer(3)

        assert buffer.push(1.0) is None
        assert buffer.push(2.0) is None
        assert buffer.push(3.0) is None
        assert buffer.is_full
        assert buffer.push(4.0) == 1.0
        assert buffer.push(0.0) == 2.0
        assert list(buffer) == [3.0, 4.0, 0.0]

    def test_evicting_zero_is_reported(self):
        buffer = RingBuffer(1)
        buffer.push(0.0)
        assert buffer.push(5.0) == 0.0

    def test_iteration_is_restartable(self):
        buffer = RingBuffer(4)
        for value in (1.0, 2.0, 3.0):
            buffer.push(value)

        assert list(buffer) == [1.0, 2.0, 3.0]
        assert list(buffer) == [1.0, 2.0, 3.0]
        assert buffer.oldest == 1.0
        assert buffer.newest == 3.0

    def test_length_never_exceeds_capacity(self):
        buffer = RingBuffer(5)
        for i in range(50):
            buffer.push(float(i))
            assert len(buffer) == min(i + 1, 5)
        assert buffer.capacity == 5

    def test_reset(self):
        buffer = RingBuffer(2)
        buffer.push(1.0)
        buffer.reset()

        assert len(buffer) == 0
        assert buffer.oldest is None
        assert buffer.newest is None

    @pytest.mark.parametrize("capacity", [0, -1, 2.5, True])
    def test_invalid_capacity(self, capacity):
        with pytest.raises(ValueError):
            RingBuffer(capacity)


class TestSumAccumulator:

    def test_empty_state(self):
        acc = SumAccumulator()
        assert acc.mean() is None
        assert acc.variance() == 0.0
        assert acc.variance('sample') == 0.0

    def test_mean_and_variance(self):
        acc = SumAccumulator()
        for value in (2.0, 4.0, 4.0, 4.0, 5.0, 5.0, 7.0, 9.0):
            acc.on_push(value)

        assert acc.mean() == 5.0
        assert acc.variance('population') == pytest.approx(4.0)
        assert acc.variance('sample') == pytest.approx(32.0 / 7.0)

    def test_single_value_sample_variance_is_zero(self):
        acc = SumAccumulator()
        acc.on_push(3.0)
        assert acc.variance('sample') == 0.0
        assert acc.variance('population') == 0.0

    def test_evict_updates_sums(self):
        acc = SumAccumulator()
        for value in (1.0, 2.0, 3.0):
            acc.on_push(value)
        acc.on_evict(1.0)

        assert acc.count == 2
        assert acc.sum == 5.0
        assert acc.sum_sq == 13.0

    def test_evicting_last_value_zeroes_sums(self):
        acc = SumAccumulator()
        acc.on_push(0.1)
        acc.on_push(0.2)
        acc.on_evict(0.1)
        acc.on_evict(0.2)

        assert acc.sum == 0.0
        assert acc.sum_sq == 0.0

    def test_variance_never_negative(self):
        acc = SumAccumulator()
        for _ in range(10):
            acc.on_push(1e8 + 0.1)
        assert acc.variance() >= 0.0

    def test_resync(self):
        acc = SumAccumulator()
        acc.resync([1.0, 2.0, 3.0])

        assert acc.count == 3
        assert acc.sum == 6.0
        assert acc.sum_sq == 14.0

    def test_evicting_large_value_leaves_exact_sum(self):
        acc = SumAccumulator()
        for value in (1e16, 1.0, 1.0):
            acc.on_push(value)
        acc.on_evict(1e16)
        acc.on_push(1.0)

        assert acc.sum == 3.0
        assert acc.sum_sq == 3.0
        assert acc.mean() == 1.0
        assert acc.variance() == 0.0

    def test_unknown_variance_kind(self):
        with pytest.raises(ValueError):
            SumAccumulator().variance('biased')


class TestMonotonicExtremumTracker:

    @staticmethod
    def _feed(order, period, values):
        tracker = MonotonicExtremumTracker(order)
        results = []
        for position, value in enumerate(values):
            tracker.push(value, position)
            tracker.evict_before(position - period + 1)
            results.append(tracker.current())
        return results

    @pytest.mark.parametrize("order, pick", [('max', max), ('min', min)])
    @pytest.mark.parametrize("period", [1, 2, 3, 7, 20])
    def test_matches_brute_force(self, order, pick, period):
        rng = random.Random(period)
        # Small integer range forces plenty of ties
        values = [float(rng.randint(-5, 5)) for _ in range(300)]

        results = self._feed(order, period, values)

        for i, result in enumerate(results):
            window = values[max(0, i - period + 1):i + 1]
            assert result == pick(window)

    def test_deque_stays_monotonic(self):
        tracker = MonotonicExtremumTracker('max')
        for position, value in enumerate([5.0, 3.0, 4.0, 1.0, 2.0]):
            tracker.push(value, position)

        values = [candidate[0] for candidate in tracker._deque]
        assert values == sorted(values, reverse=True)
        assert tracker.current() == 5.0
        assert tracker.current_position() == 0

    def test_evict_before_drops_aged_candidates(self):
        tracker = MonotonicExtremumTracker('min')
        tracker.push(1.0, 0)
        tracker.push(2.0, 1)
        tracker.evict_before(1)

        assert tracker.current() == 2.0
        assert len(tracker) == 1

    def test_empty_and_reset(self):
        tracker = MonotonicExtremumTracker('min')
        assert tracker.current() is None

        tracker.push(1.0, 0)
        tracker.reset()
        assert tracker.current() is None

    def test_invalid_order(self):
        with pytest.raises(ValueError):
            MonotonicExtremumTracker('median')


class TestRollingWindow:

    def test_sum_tracks_window(self):
        window = RollingWindow(3)
        for value in (1.0, 2.0, 3.0, 4.0, 5.0):
            window.push(value)

        assert list(window) == [3.0, 4.0, 5.0]
        assert window.sum == 12.0
        assert window.mean() == 4.0

    def test_resync_discards_drift(self):
        window = RollingWindow(4)
        rng = random.Random(7)
        values = [rng.uniform(-1e6, 1e6) for _ in range(97)] + [0.1, 0.2, 0.3, 0.4]
        for value in values:
            window.push(value)

        assert window.sum == pytest.approx(math.fsum(values[-4:]), abs=1e-6)

    def test_large_value_leaving_window(self):
        window = RollingWindow(3)
        for value in (1e16, 1.0, 1.0, 1.0):
            window.push(value)

        assert window.sum == 3.0
        assert window.mean() == 1.0

    def test_reset(self):
        window = RollingWindow(2)
        window.push(1.0)
        window.reset()

        assert len(window) == 0
        assert window.mean() is None
        assert window.variance() == 0.0
