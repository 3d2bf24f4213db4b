"""Tests for rolling Minimum/Maximum."""

import pandas as pd
import pytest

from streamta import Bar, Maximum, Minimum
from streamta.exceptions import InvalidParameterError


class TestMaximum:

    def test_new(self):
        with pytest.raises(InvalidParameterError):
            Maximum(0)
        Maximum(1)

    def test_next(self):
        maximum = Maximum(3)
        inputs = [4.0, 1.2, 5.0, 3.0, 4.0, 0.0, -1.0, -2.0, -1.5]
        expected = [4.0, 4.0, 5.0, 5.0, 5.0, 4.0, 4.0, 0.0, -1.0]

        assert [maximum.next(x) for x in inputs] == expected

    def test_next_with_bars(self):
        def bar(high):
            return Bar(open=high, high=high, low=0.0, close=high)

        maximum = Maximum(2)

        assert maximum.next(bar(1.1)) == 1.1
        assert maximum.next(bar(4.0)) == 4.0
        assert maximum.next(bar(3.5)) == 4.0
        assert maximum.next(bar(2.0)) == 3.5

    def test_reset(self):
        maximum = Maximum(100)
        assert maximum.next(4.0) == 4.0
        assert maximum.next(10.0) == 10.0
        assert maximum.next(4.0) == 10.0

        maximum.reset()
        assert maximum.next(4.0) == 4.0

    def test_default(self):
        assert Maximum().period == 14

    def test_display(self):
        assert str(Maximum(7)) == "MAX(7)"


class TestMinimum:

    def test_next(self):
        minimum = Minimum(3)
        inputs = [4.0, 1.2, 5.0, 3.0, 4.0, 0.0, -1.0, 2.0, -1.5]
        expected = [4.0, 1.2, 1.2, 1.2, 3.0, 0.0, -1.0, -1.0, -1.5]

        assert [minimum.next(x) for x in inputs] == expected

    def test_reads_low_from_bars(self):
        minimum = Minimum(2)
        assert minimum.next(Bar(open=5.0, high=6.0, low=2.0, close=5.0)) == 2.0
        assert minimum.next(Bar(open=5.0, high=6.0, low=3.0, close=5.0)) == 2.0
        assert minimum.next(Bar(open=5.0, high=6.0, low=4.0, close=5.0)) == 3.0

    def test_custom_input_field(self):
        minimum = Minimum(2, input_field='close')
        assert minimum.next({'close': 3.0}) == 3.0

    def test_display(self):
        assert str(Minimum(7)) == "MIN(7)"


@pytest.mark.parametrize("period", [1, 5, 14, 50])
def test_matches_pandas_rolling(period, ohlcv_frame, bars):
    minimum, maximum = Minimum(period), Maximum(period)
    lows = [minimum.next(bar) for bar in bars]
    highs = [maximum.next(bar) for bar in bars]

    assert lows == ohlcv_frame['low'].rolling(period, min_periods=1).min().tolist()
    assert highs == ohlcv_frame['high'].rolling(period, min_periods=1).max().tolist()
