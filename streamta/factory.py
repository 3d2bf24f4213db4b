"""Factory for creating technical indicators."""

import inspect
from typing import Dict, Any, Type, List, Optional

from .base import BaseIndicator
from .exceptions import InvalidParameterError, IndicatorNotFoundError
from .samples import OHLCV_FIELDS
from .indicators.trend import SMA, EMA, WMA, HMA
from .indicators.minmax import Minimum, Maximum
from .indicators.volatility import StandardDeviation, MeanAbsoluteDeviation, TrueRange, AverageTrueRange
from .indicators.momentum import RSI, RateOfChange, EfficiencyRatio
from .indicators.volume import OnBalanceVolume, MFI
from .indicators.composite import (
    MACD, PPO, FastStochastic, SlowStochastic, CCI, BollingerBands, KeltnerChannel, ChandelierExit
)


class IndicatorRegistry:
    """Registry for managing indicators with aliases."""

    def __init__(self):
        """Initialize registry with built-in indicators."""
        self._registry: Dict[str, Type[BaseIndicator]] = {}
        self._register_builtin_indicators()

    def _register_builtin_indicators(self) -> None:
        """Register built-in indicators."""
        # Trend indicators
        self.register('sma', SMA, aliases=['simple_ma', 'simple_moving_average'])
        self.register('ema', EMA, aliases=['exp_ma', 'exponential_moving_average'])
        self.register('wma', WMA, aliases=['weighted_moving_average'])
        self.register('hma', HMA, aliases=['hull_moving_average'])

        # Min/max
        self.register('minimum', Minimum, aliases=['min', 'rolling_min'])
        self.register('maximum', Maximum, aliases=['max', 'rolling_max'])

        # Volatility indicators
        self.register('standarddeviation', StandardDeviation, aliases=['sd', 'stddev', 'standard_deviation'])
        self.register('meanabsolutedeviation', MeanAbsoluteDeviation, aliases=['mad', 'mean_absolute_deviation'])
        self.register('truerange', TrueRange, aliases=['tr', 'true_range'])
        self.register('averagetruerange', AverageTrueRange, aliases=['atr', 'average_true_range'])

        # Momentum indicators
        self.register('rsi', RSI, aliases=['relative_strength_index'])
        self.register('rateofchange', RateOfChange, aliases=['roc', 'rate_of_change'])
        self.register('efficiencyratio', EfficiencyRatio, aliases=['er', 'efficiency_ratio'])

        # Volume indicators
        self.register('onbalancevolume', OnBalanceVolume, aliases=['obv', 'on_balance_volume'])
        self.register('mfi', MFI, aliases=['money_flow_index'])

        # Composite indicators
        self.register('macd', MACD, aliases=['moving_average_convergence_divergence'])
        self.register('ppo', PPO, aliases=['percentage_price_oscillator'])
        self.register('faststochastic', FastStochastic, aliases=['stochastic_fast', 'fast_stochastic', 'stoch_fast'])
        self.register('slowstochastic', SlowStochastic, aliases=['stochastic', 'stoch', 'slow_stochastic'])
        self.register('cci', CCI, aliases=['commodity_channel_index'])
        self.register('bollingerbands', BollingerBands, aliases=['bollinger_bands', 'bbands', 'bb'])
        self.register('keltnerchannel', KeltnerChannel, aliases=['keltner_channel', 'keltner', 'kc'])
        self.register('chandelierexit', ChandelierExit, aliases=['chandelier_exit', 'chandelier', 'ce'])

    def register(self, name: str, indicator_class: Type[BaseIndicator], aliases: Optional[List[str]] = None) -> None:
        """Register indicator with aliases."""
        name_lower = name.lower()
        self._registry[name_lower] = indicator_class

        if aliases:
            for alias in aliases:
                self._registry[alias.lower()] = indicator_class

    def get(self, name: str) -> Type[BaseIndicator]:
        """Get indicator class by name."""
        name_lower = name.lower()
        if name_lower not in self._registry:
            raise IndicatorNotFoundError(name, self.list_indicators())

        return self._registry[name_lower]

    def list_indicators(self) -> List[str]:
        """List available indicators."""
        # Get unique class names to avoid showing aliases
        unique_classes = set(self._registry.values())
        class_names = [cls.__name__.lower() for cls in unique_classes]
        return sorted(class_names)

    def get_aliases(self, name: str) -> List[str]:
        """
        Get all aliases for an indicator.

        Args:
            name (str): Indicator name

        Returns:
            List[str]: List of all names (including aliases) for the indicator
        """
        try:
            target_class = self.get(name)
            return [key for key, cls in self._registry.items() if cls == target_class]
        except IndicatorNotFoundError:
            return []


# Global registry instance
_REGISTRY = IndicatorRegistry()


def create(name: str, **kwargs) -> BaseIndicator:
    """
    Factory function to create technical indicators by name.

    Args:
        name (str): Name of the indicator to create (case-insensitive).
            Available indicators can be listed using list_indicators().
        **kwargs: Parameters to pass to the indicator constructor.

    Returns:
        BaseIndicator: Configured indicator instance ready for use

    Raises:
        IndicatorNotFoundError: If the indicator name is not recognized
        InvalidParameterError: If parameters are invalid or unknown

    Examples:
        >>> import streamta as ta
        >>> sma = ta.create('sma', period=20)
        >>> macd = ta.create('MACD', fast_period=12, slow_period=26, signal_period=9)
        >>> bbands = ta.create('bb', period=20, k=2.0)
    """
    indicator_class = _REGISTRY.get(name)
    try:
        return indicator_class(**kwargs)
    except TypeError as e:
        # Convert constructor errors to our custom exception
        sig = inspect.signature(indicator_class.__init__)
        params = list(sig.parameters.keys())[1:]  # Skip 'self'

        raise InvalidParameterError(
            parameter_name="constructor",
            value=str(kwargs),
            expected=f"valid parameters for {name}: {params}",
            indicator_name=name
        ) from e


def list_indicators() -> List[str]:
    """
    Get a list of all available indicator names.

    Returns:
        List[str]: Alphabetically sorted list of canonical indicator names
    """
    return _REGISTRY.list_indicators()


def describe(name: str) -> Dict[str, Any]:
    """
    Get detailed information about an indicator including parameters and documentation.

    Args:
        name (str): Name of the indicator to describe (case-insensitive)

    Returns:
        Dict[str, Any]: Dictionary containing:
            - name: Canonical class name
            - aliases: List of alternative names
            - parameters: Parameter information from constructor signature
            - docstring: Class documentation
            - required_inputs: Required input fields for the indicator

    Raises:
        IndicatorNotFoundError: If the indicator name is not recognized
    """
    indicator_class = _REGISTRY.get(name)

    sig = inspect.signature(indicator_class.__init__)
    parameters = {}

    for param_name, param in sig.parameters.items():
        if param_name == 'self':
            continue

        param_info = {
            'type': param.annotation if param.annotation != inspect.Parameter.empty else 'Any',
            'default': param.default if param.default != inspect.Parameter.empty else None,
            'required': param.default == inspect.Parameter.empty
        }
        parameters[param_name] = param_info

    return {
        'name': indicator_class.__name__,
        'aliases': _REGISTRY.get_aliases(name),
        'parameters': parameters,
        'docstring': indicator_class.__doc__,
        'required_inputs': getattr(indicator_class, 'required_inputs', ()),
    }


def validate_period(period: Any, name: str = "period") -> int:
    """
    Validate period parameter for indicators.

    Raises:
        InvalidParameterError: If period is not a positive integer
    """
    BaseIndicator._validate_period(period, name)
    return period


def validate_alpha(alpha: Any) -> float:
    """
    Validate alpha parameter for EMA indicators.

    Raises:
        InvalidParameterError: If alpha is not in (0, 1]
    """
    if not isinstance(alpha, (int, float)) or isinstance(alpha, bool):
        raise InvalidParameterError("alpha", alpha, "numeric value between 0 and 1")

    if not 0 < alpha <= 1:
        raise InvalidParameterError("alpha", alpha, "value between 0 and 1 (exclusive of 0)")

    return float(alpha)


def validate_k_factor(k: Any) -> float:
    """
    Validate band/exit multiplier.

    Raises:
        InvalidParameterError: If k is not a finite non-negative number
    """
    return BaseIndicator._validate_multiplier(k, "k")


def validate_input_field(input_field: Any) -> str:
    """
    Validate input field parameter.

    Returns:
        str: Lower-cased input field

    Raises:
        InvalidParameterError: If input field is not an OHLCV field
    """
    if not isinstance(input_field, str):
        raise InvalidParameterError("input_field", input_field, "string")

    if input_field.lower() not in OHLCV_FIELDS:
        raise InvalidParameterError("input_field", input_field, f"one of {list(OHLCV_FIELDS)}")

    return input_field.lower()
