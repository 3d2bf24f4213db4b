"""Base class for streaming technical indicators."""

from abc import ABC, abstractmethod
from collections import deque
from typing import Any, List, Optional, Tuple, Union
import copy
import logging
import math

from .exceptions import InvalidParameterError
from .samples import OHLCV_FIELDS, extract_fields, sample_timestamp

logger = logging.getLogger(__name__)

Output = Union[float, Any]


class BaseIndicator(ABC):
    """
    Abstract base for streaming technical indicators.

    Every indicator follows the same lifecycle:

    * the constructor validates parameters and raises InvalidParameterError
      (a ConfigError) without leaving a usable instance behind;
    * ``next(sample)`` feeds one sample and returns the new output;
    * ``value`` / ``last_value()`` read the latest output without feeding;
    * ``reset()`` returns the instance, children included, to the state it
      had right after construction.

    Outputs are defined from the very first sample. ``is_ready`` only reports
    whether the indicator has seen a full window.
    """

    # Fields read from each sample, overridden by subclasses or per instance
    required_inputs: Tuple[str, ...] = ('close',)

    # Name used by str(), e.g. "SMA(9)"
    short_name: str = ''

    history_size: int = 1000

    def __init__(self, period: Optional[int] = None, input_field: str = 'close'):
        """Initialize indicator with an optional period and input field."""
        if period is not None:
            self._validate_period(period, "period", self.__class__.__name__)
        self._validate_input_field(input_field, self.__class__.__name__)

        self.period = period
        self.input_field = input_field

        self._output_history: deque = deque(maxlen=self.history_size)

        # State management
        self._ready_threshold = period or 1
        self._data_count = 0
        self._value: Output = self._empty_output()

        # Owned sub-indicators, fed and reset together with the parent
        self._children: List['BaseIndicator'] = []

        self._name = self.__class__.__name__
        self._last_update_time: Optional[Any] = None

        logger.debug(f"Initialized {self._name} with period={period}, input_field={input_field}")

    @abstractmethod
    def _compute(self, *inputs: float) -> Output:
        """
        Consume the values of ``required_inputs`` for one sample and return the new output.

        Implementations update their state incrementally and never revisit
        samples beyond what their own window retains.
        """

    def update(self, data_point: Any) -> Output:
        """
        Process a new data point and update the indicator state.

        Args:
            data_point: A scalar, a Bar, a mapping with OHLCV keys or any object
                exposing the fields listed in ``required_inputs``.

        Returns:
            The new indicator output.

        Raises:
            MissingInputError: If required input fields are missing.
            InvalidDataError: If input data contains invalid values.
        """
        inputs = self._validate_input_data(data_point)
        output = self._compute(*inputs)
        self._value = output
        self._update_metadata(data_point)
        self._store_output(output)
        return output

    def next(self, sample: Any) -> Output:
        """Feed one sample and return the new output."""
        return self.update(sample)

    @property
    def value(self) -> Output:
        """
        Most recent output.

        Returns math.nan (or an output record of NaNs for multi-valued
        indicators) before the first sample.
        """
        return self._value

    def last_value(self) -> Output:
        return self._value

    @property
    def is_ready(self) -> bool:
        """True once the indicator has seen a full window of samples."""
        return self._data_count >= self._ready_threshold

    @property
    def count(self) -> int:
        """Samples fed since construction or the last reset."""
        return self._data_count

    @property
    def last_update_time(self) -> Optional[Any]:
        return self._last_update_time

    @property
    def children(self) -> List['BaseIndicator']:
        """
        Get the list of child indicators for composite patterns.

        Returns:
            List[BaseIndicator]: Owned sub-indicators, empty for primitives.
        """
        return self._children.copy()

    def get_history(self, n: int = 10) -> List[Output]:
        """
        Retrieve the last n outputs, oldest first.

        Args:
            n (int): Number of recent values to return. Defaults to 10.
        """
        if n <= 0:
            return []

        history_length = len(self._output_history)
        start_idx = max(0, history_length - n)

        return list(self._output_history)[start_idx:]

    def reset(self) -> None:
        """
        Reset the indicator to its initial state.

        Subclasses clear their own state and call this to clear the shared
        bookkeeping and reset every child.
        """
        self._output_history.clear()
        self._data_count = 0
        self._value = self._empty_output()
        self._last_update_time = None

        for child in self._children:
            child.reset()

        logger.debug(f"Reset {self._name} indicator state")

    def copy(self) -> 'BaseIndicator':
        """Deep copy that can be fed independently of the original."""
        return copy.deepcopy(self)

    def _empty_output(self) -> Output:
        return math.nan

    def _display_params(self) -> Tuple[Any, ...]:
        return (self.period,) if self.period is not None else ()

    def _validate_input_data(self, data_point: Any) -> Tuple[float, ...]:
        return extract_fields(data_point, self.required_inputs, self._name)

    def _update_metadata(self, data_point: Any) -> None:
        self._data_count += 1

        timestamp = sample_timestamp(data_point)
        if timestamp is not None:
            self._last_update_time = timestamp

    def _store_output(self, output_value: Output) -> None:
        self._output_history.append(output_value)

    @staticmethod
    def _validate_period(period: int, name: str = "period", indicator_name: Optional[str] = None) -> None:
        """
        Validate that a period parameter is a positive integer.

        Raises:
            InvalidParameterError: If period is not a positive integer.
        """
        if not isinstance(period, int) or isinstance(period, bool):
            raise InvalidParameterError(name, period, "positive integer", indicator_name)

        if period <= 0:
            raise InvalidParameterError(name, period, "positive integer (> 0)", indicator_name)

    @staticmethod
    def _validate_multiplier(k: float, name: str = "k", indicator_name: Optional[str] = None) -> float:
        """Multipliers must be finite and non-negative."""
        if not isinstance(k, (int, float)) or isinstance(k, bool):
            raise InvalidParameterError(name, k, "non-negative number", indicator_name)

        if not math.isfinite(k) or k < 0:
            raise InvalidParameterError(name, k, "finite non-negative number (>= 0)", indicator_name)

        return float(k)

    @staticmethod
    def _validate_input_field(input_field: str, indicator_name: Optional[str] = None) -> None:
        if input_field not in OHLCV_FIELDS:
            raise InvalidParameterError("input_field", input_field, f"one of {list(OHLCV_FIELDS)}", indicator_name)

    def __str__(self) -> str:
        params = ", ".join(str(param) for param in self._display_params())
        return f"{self.short_name or self._name}({params})"

    def __repr__(self) -> str:
        ready_status = "ready" if self.is_ready else f"warming up ({self._data_count}/{self._ready_threshold})"
        return f"<{self} {ready_status}, value={self._value}>"
