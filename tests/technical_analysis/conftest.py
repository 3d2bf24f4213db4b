"""Shared fixtures for indicator tests."""

import numpy as np
import pandas as pd
import pytest

from streamta import Bar


def create_test_data(num_bars: int, seed: int = 42) -> pd.DataFrame:
    """Create synthetic OHLCV data."""
    rng = np.random.default_rng(seed)
    base_price = 100

    # Generate realistic price movements
    returns = rng.normal(0, 0.02, num_bars)
    closes = base_price * np.exp(np.cumsum(returns))

    return pd.DataFrame({
        'open': closes * (1 + rng.uniform(-0.01, 0.01, num_bars)),
        'high': closes * (1 + rng.uniform(0.01, 0.03, num_bars)),
        'low': closes * (1 + rng.uniform(-0.03, -0.01, num_bars)),
        'close': closes,
        'volume': rng.uniform(1000, 5000, num_bars)
    }, index=pd.date_range('2025-01-01', periods=num_bars, freq='D'))


@pytest.fixture
def ohlcv_frame() -> pd.DataFrame:
    return create_test_data(200)


@pytest.fixture
def bars(ohlcv_frame):
    return [
        Bar(open=row.open, high=row.high, low=row.low, close=row.close, volume=row.volume)
        for row in ohlcv_frame.itertuples()
    ]


@pytest.fixture
def closes(ohlcv_frame):
    return ohlcv_frame['close'].tolist()
