"""
Feeding named indicator sets from event streams and pandas frames.

An IndicatorSet owns a group of labelled indicators and updates all of them
with each data point, the way a strategy keeps one set per symbol. Frames are
replayed row by row through the same streaming path, so a backtest over a
DataFrame yields exactly what live updates would have produced.
"""

import logging
from typing import Any, Dict, Iterator, Mapping, Optional, Union

import numpy as np
import pandas as pd

from .base import BaseIndicator

logger = logging.getLogger(__name__)


def flatten_output(label: str, output: Any) -> Dict[str, float]:
    """Map an indicator output to column values, e.g. 'macd.signal' for records."""
    if hasattr(output, 'as_dict'):
        return {f"{label}.{key}": value for key, value in output.as_dict().items()}
    return {label: output}


class IndicatorSet:
    """
    Labelled indicators updated together.

    Attributes:
        indicators (Dict[str, BaseIndicator]): Owned instances by label.
    """

    def __init__(self, indicators: Optional[Mapping[str, BaseIndicator]] = None):
        self.indicators: Dict[str, BaseIndicator] = dict(indicators or {})

    def add(self, label: str, indicator: BaseIndicator) -> None:
        if label in self.indicators:
            raise KeyError(f"Indicator label '{label}' is already in use")
        self.indicators[label] = indicator

    def update(self, data_point: Any) -> Dict[str, Any]:
        """
        Feed one data point to every indicator, in insertion order.

        Returns:
            Dict[str, Any]: The new output of each indicator by label.
        """
        return {label: indicator.next(data_point) for label, indicator in self.indicators.items()}

    @property
    def values(self) -> Dict[str, Any]:
        return {label: indicator.value for label, indicator in self.indicators.items()}

    @property
    def is_ready(self) -> bool:
        return all(indicator.is_ready for indicator in self.indicators.values())

    def reset(self) -> None:
        for indicator in self.indicators.values():
            indicator.reset()

    def run_frame(self, frame: pd.DataFrame) -> pd.DataFrame:
        """
        Replay an OHLCV DataFrame through the set.

        Rows are fed as dicts keyed by column name. Record outputs are split
        into one column per field ('bands.upper', 'bands.middle', ...).

        Args:
            frame (pd.DataFrame): Columns named after the OHLCV fields.

        Returns:
            pd.DataFrame: One row of outputs per input row, same index.
        """
        logger.debug(f"Replaying {len(frame)} rows through {len(self.indicators)} indicator(s)")

        rows = []
        for data_point in frame.to_dict(orient='records'):
            outputs = self.update(data_point)
            row: Dict[str, float] = {}
            for label, output in outputs.items():
                row.update(flatten_output(label, output))
            rows.append(row)

        return pd.DataFrame(rows, index=frame.index, dtype=np.float64)

    def __len__(self) -> int:
        return len(self.indicators)

    def __iter__(self) -> Iterator[str]:
        return iter(self.indicators)

    def __getitem__(self, label: str) -> BaseIndicator:
        return self.indicators[label]


def run_series(indicator: BaseIndicator, series: pd.Series, label: Optional[str] = None) -> Union[pd.Series, pd.DataFrame]:
    """
    Feed a scalar series through one indicator.

    Scalar outputs come back as a Series named ``label``. Record outputs are
    split into one column per field, named as in ``IndicatorSet.run_frame``
    ('MACD(12, 26, 9).signal' when no label is given).

    Args:
        indicator (BaseIndicator): Instance to feed; its state advances.
        series (pd.Series): Input values.
        label (Optional[str]): Output name. Defaults to str(indicator).
    """
    label = label or str(indicator)
    outputs = [indicator.next(value) for value in series.to_numpy(dtype=np.float64)]

    if hasattr(indicator.value, 'as_dict'):
        rows = [flatten_output(label, output) for output in outputs]
        return pd.DataFrame(rows, index=series.index, dtype=np.float64)

    return pd.Series(outputs, index=series.index, name=label, dtype=np.float64)
