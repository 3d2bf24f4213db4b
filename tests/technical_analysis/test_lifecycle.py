"""Uniform construction/feed/reset contract shared by every indicator."""

import math
import pickle

import pytest

import streamta as ta
from streamta.exceptions import ConfigError, InvalidParameterError

ALL_INDICATORS = [
    ta.SMA, ta.EMA, ta.WMA, ta.HMA,
    ta.Minimum, ta.Maximum,
    ta.StandardDeviation, ta.MeanAbsoluteDeviation, ta.TrueRange, ta.AverageTrueRange,
    ta.RSI, ta.RateOfChange, ta.EfficiencyRatio,
    ta.OnBalanceVolume, ta.MFI,
    ta.MACD, ta.PPO, ta.FastStochastic, ta.SlowStochastic, ta.CCI,
    ta.BollingerBands, ta.KeltnerChannel, ta.ChandelierExit,
]

PERIOD_INDICATORS = [
    cls for cls in ALL_INDICATORS
    if cls not in (ta.TrueRange, ta.OnBalanceVolume, ta.MACD, ta.PPO, ta.SlowStochastic)
]

WINDOWED_PRIMITIVES = [
    ta.SMA, ta.WMA, ta.StandardDeviation, ta.MeanAbsoluteDeviation, ta.RateOfChange, ta.EfficiencyRatio,
]


def feed(indicator, bars):
    return [indicator.next(bar) for bar in bars]


@pytest.mark.parametrize("indicator_class", ALL_INDICATORS)
class TestLifecycle:

    def test_defaults_construct(self, indicator_class):
        indicator = indicator_class()
        assert indicator.count == 0
        assert str(indicator)

    def test_reset_reproduces_outputs(self, indicator_class, bars):
        indicator = indicator_class()
        first_run = feed(indicator, bars)

        indicator.reset()
        assert indicator.count == 0
        assert indicator.get_history() == []

        assert feed(indicator, bars) == first_run

    def test_constructed_equals_reset(self, indicator_class, bars):
        fresh = indicator_class()
        used = indicator_class()
        feed(used, bars[:37])
        used.reset()

        assert feed(used, bars) == feed(fresh, bars)

    def test_copy_is_independent(self, indicator_class, bars):
        indicator = indicator_class()
        feed(indicator, bars[:50])

        clone = indicator.copy()
        assert clone.value == indicator.value

        feed(clone, bars[50:])
        assert indicator.count == 50
        assert feed(indicator, bars[50:]) == clone.get_history(len(bars) - 50)

    def test_pickle_resume(self, indicator_class, bars):
        reference = indicator_class()
        expected = feed(reference, bars)

        indicator = indicator_class()
        feed(indicator, bars[:100])
        restored = pickle.loads(pickle.dumps(indicator))

        assert feed(restored, bars[100:]) == expected[100:]

    def test_outputs_defined_from_first_sample(self, indicator_class, bars):
        output = indicator_class().next(bars[0])
        values = output.as_dict().values() if hasattr(output, 'as_dict') else [output]
        assert all(math.isfinite(value) for value in values)

    def test_history(self, indicator_class, bars):
        indicator = indicator_class()
        outputs = feed(indicator, bars[:20])

        assert indicator.get_history(5) == outputs[-5:]
        assert indicator.get_history(0) == []
        assert indicator.last_value() == outputs[-1]

    def test_repr(self, indicator_class):
        assert str(indicator_class()) in repr(indicator_class())


@pytest.mark.parametrize("indicator_class", PERIOD_INDICATORS)
@pytest.mark.parametrize("period", [0, -3, 2.5, "9", True])
def test_invalid_period_rejected(indicator_class, period):
    with pytest.raises(InvalidParameterError):
        indicator_class(period)


@pytest.mark.parametrize("indicator_class", PERIOD_INDICATORS)
def test_config_errors_are_config_errors(indicator_class):
    with pytest.raises(ConfigError):
        indicator_class(0)


@pytest.mark.parametrize("indicator_class", WINDOWED_PRIMITIVES)
@pytest.mark.parametrize("period", [1, 4, 13])
def test_window_holds_most_recent_samples(indicator_class, period, closes):
    indicator = indicator_class(period)
    for i, x in enumerate(closes):
        indicator.next(x)
        if i + 1 >= period:
            assert indicator.window == closes[i + 1 - period:i + 1]


@pytest.mark.parametrize("indicator_class", [ta.BollingerBands, ta.KeltnerChannel, ta.ChandelierExit])
def test_negative_multiplier_rejected(indicator_class):
    with pytest.raises(InvalidParameterError):
        indicator_class(10, -0.5)


def test_composites_do_not_share_children():
    first, second = ta.MACD(), ta.MACD()
    assert all(a is not b for a, b in zip(first.children, second.children))

    first.next(10.0)
    assert all(child.count == 0 for child in second.children)


def test_timestamp_recorded():
    sma = ta.SMA(3)
    sma.next({'close': 1.0, 'timestamp': '2025-01-01'})
    assert sma.last_update_time == '2025-01-01'
