"""
Sample model for streaming indicators.

An indicator consumes one sample per step. A sample is either a bare number,
a validated OHLCV ``Bar``, a mapping with OHLCV keys (the data-point dicts
produced by data handlers), or any object exposing the fields as attributes.

Indicators declare the fields they read in ``required_inputs``. A bare number
stands in for every price field (open = high = low = close = value) but never
for ``volume``.
"""

import math
from collections.abc import Mapping
from dataclasses import dataclass, asdict
from datetime import datetime
from numbers import Real
from typing import Any, Dict, NamedTuple, Optional, Sequence, Tuple

from .exceptions import InvalidDataError, MissingInputError

PRICE_FIELDS: Tuple[str, ...] = ('open', 'high', 'low', 'close')
OHLCV_FIELDS: Tuple[str, ...] = PRICE_FIELDS + ('volume',)

_MISSING = object()


@dataclass(frozen=True)
class Bar:
    """
    OHLCV record for one period of trading.

    Construction enforces ``low <= min(open, close) <= max(open, close) <= high``
    and ``volume >= 0``; a bar that violates either raises InvalidDataError.

    Attributes:
        open: Opening price
        high: Highest traded price
        low: Lowest traded price
        close: Closing price
        volume: Traded volume
        timestamp: Optional bar timestamp, recorded by indicators as last update time
    """
    open: float
    high: float
    low: float
    close: float
    volume: float = 0.0
    timestamp: Optional[datetime] = None

    def __post_init__(self):
        for name in OHLCV_FIELDS:
            value = getattr(self, name)
            if value is None or not isinstance(value, Real) or isinstance(value, bool):
                raise InvalidDataError(name, value, "not a number", "Bar")
            if not math.isfinite(value):
                raise InvalidDataError(name, value, "value is not finite", "Bar")

        if self.low > min(self.open, self.close):
            raise InvalidDataError('low', self.low, "low is above open/close", "Bar")
        if self.high < max(self.open, self.close):
            raise InvalidDataError('high', self.high, "high is below open/close", "Bar")
        if self.volume < 0:
            raise InvalidDataError('volume', self.volume, "volume is negative", "Bar")

    @classmethod
    def from_price(cls, price: float, volume: float = 0.0) -> 'Bar':
        """Flat bar where every price field equals ``price``."""
        return cls(open=price, high=price, low=price, close=price, volume=volume)

    @property
    def typical_price(self) -> float:
        return typical_price(self.high, self.low, self.close)

    @property
    def range(self) -> float:
        return self.high - self.low

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)


def typical_price(high: float, low: float, close: float) -> float:
    """(high + low + close) / 3"""
    return (high + low + close) / 3.0


class PricePoint(NamedTuple):
    """High/low/close triple a composite forwards to its owned children."""
    high: float
    low: float
    close: float


def is_scalar(sample: Any) -> bool:
    """True for plain numeric samples (bool is rejected)."""
    return isinstance(sample, Real) and not isinstance(sample, bool)


def _lookup(sample: Any, field: str) -> Any:
    if is_scalar(sample):
        return sample if field in PRICE_FIELDS else _MISSING
    if isinstance(sample, Mapping):
        return sample.get(field, _MISSING)
    return getattr(sample, field, _MISSING)


def _sample_kind(sample: Any) -> str:
    if is_scalar(sample):
        return 'scalar'
    if isinstance(sample, Mapping):
        return 'mapping'
    return type(sample).__name__


def extract_fields(sample: Any, fields: Sequence[str], indicator_name: Optional[str] = None) -> Tuple[float, ...]:
    """
    Read ``fields`` from a sample in order.

    Args:
        sample: Scalar, Bar, mapping or attribute object.
        fields: Field names to read.
        indicator_name: Used to prefix error messages.

    Returns:
        Tuple[float, ...]: One value per requested field.

    Raises:
        MissingInputError: If the sample does not provide a field.
        InvalidDataError: If a field is None, non-numeric, NaN or infinite.
    """
    values = tuple(_lookup(sample, field) for field in fields)

    missing = [field for field, value in zip(fields, values) if value is _MISSING]
    if missing:
        raise MissingInputError(missing, list(fields), indicator_name, _sample_kind(sample))

    for field, value in zip(fields, values):
        if value is None:
            raise InvalidDataError(field, value, "value is None", indicator_name)
        if not is_scalar(value):
            raise InvalidDataError(field, value, "value is not numeric", indicator_name)
        if math.isnan(value):
            raise InvalidDataError(field, value, "value is NaN", indicator_name)
        if math.isinf(value):
            raise InvalidDataError(field, value, "value is infinite", indicator_name)

    return values


def sample_timestamp(sample: Any) -> Optional[Any]:
    """Timestamp carried by the sample, if any."""
    if is_scalar(sample):
        return None
    if isinstance(sample, Mapping):
        return sample.get('timestamp')
    return getattr(sample, 'timestamp', None)
