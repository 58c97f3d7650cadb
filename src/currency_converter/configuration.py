from __future__ import annotations

import logging
import math
from threading import Lock
from types import MappingProxyType
from typing import Mapping, Optional

import pandas as pd

from currency_converter.errors import InvalidArgumentError, InvalidRateError
from currency_converter.utils.numeric_tools import FloatLike

logger = logging.getLogger(__name__)

# Module-level variables for the process-wide configuration
_configuration: Optional[Configuration] = None
_configuration_lock = Lock()


def normalize_currency(code: object) -> str:
    """Returns canonical string form of currency $code."""
    return code if isinstance(code, str) else str(code)


class Configuration:
    """Immutable snapshot of the base currency and conversion rates.

    Every rate tells how many units of the currency one unit of the base
    currency buys. The base currency itself is never part of $rates; its rate
    is implicitly 1.0.

    Attributes:
        base_currency (str): Currency all rates are relative to.
        rates (Mapping[str, float]): Read-only mapping of currency code to rate.
    """

    def __init__(self, base_currency: object, rates: Optional[Mapping[object, FloatLike]] = None):
        """Initialize a Configuration instance.

        Args:
            base_currency: Base currency code. Non-string codes are converted with `str()`.
            rates: Optional mapping of currency code to rate. Keys are converted with
                `str()` and values with `float()`.

        Raises:
            InvalidArgumentError: If $base_currency is missing or empty, or a rate
                cannot be converted to float.
        """
        # Raise: base currency is required
        if base_currency is None:
            raise InvalidArgumentError("Should provide base currency")
        base_currency = normalize_currency(base_currency)
        if not base_currency:
            raise InvalidArgumentError("Should provide base currency")

        normalized_rates: dict[str, float] = {}
        for code, rate in (rates or {}).items():
            code = normalize_currency(code)

            # Raise: every rate must be convertible to float
            try:
                rate = float(rate)
            except (TypeError, ValueError) as e:
                raise InvalidArgumentError(f"Rate for currency '{code}' must be convertible to float, but provided value is: {rate!r}") from e

            if code == base_currency:
                logger.warning(f"Ignored rate {rate} for base currency '{base_currency}'; base currency rate is always 1.0")
                continue

            normalized_rates[code] = rate

        self._base_currency = base_currency
        self._rates = MappingProxyType(normalized_rates)

    @property
    def base_currency(self) -> str:
        """Get the base currency code."""
        return self._base_currency

    @property
    def rates(self) -> Mapping[str, float]:
        """Get the read-only mapping of currency code to rate."""
        return self._rates

    @property
    def known_currencies(self) -> frozenset[str]:
        """Get all currency codes accepted by this configuration."""
        return frozenset(self._rates) | {self._base_currency}

    def is_known(self, currency: object) -> bool:
        """Check if $currency is the base currency or has a configured rate."""
        currency = normalize_currency(currency)
        return currency == self._base_currency or currency in self._rates

    def rate_for(self, currency: str) -> float:
        """Get the rate of $currency relative to the base currency.

        Args:
            currency (str): Currency code.

        Returns:
            float: 1.0 for the base currency, the configured rate otherwise.

        Raises:
            InvalidRateError: If the rate is missing, zero, negative or not finite.
        """
        if currency == self._base_currency:
            return 1.0

        rate = self._rates.get(currency)
        if rate is None or not math.isfinite(rate) or rate <= 0:
            raise InvalidRateError(currency, rate)

        return rate

    def __eq__(self, other) -> bool:
        """Check equality with another Configuration."""
        if not isinstance(other, Configuration):
            return False
        return self.base_currency == other.base_currency and dict(self.rates) == dict(other.rates)

    def __hash__(self) -> int:
        """Hash based on base currency and rates."""
        return hash((self.base_currency, frozenset(self.rates.items())))

    def __repr__(self) -> str:
        """Return detailed string representation."""
        return f"{self.__class__.__name__}('{self.base_currency}', {dict(self.rates)})"


def configure(base_currency: object, rates: Optional[Mapping[object, FloatLike]] = None) -> Configuration:
    """Replace the process-wide configuration.

    Args:
        base_currency: Base currency code.
        rates: Optional mapping of currency code to rate relative to $base_currency.

    Returns:
        Configuration: The new active configuration.

    Raises:
        InvalidArgumentError: If $base_currency is missing or a rate is not float-convertible.
    """
    global _configuration
    configuration = Configuration(base_currency, rates)
    with _configuration_lock:
        _configuration = configuration

    logger.debug(f"Configured base currency '{configuration.base_currency}' with {len(configuration.rates)} rate(s)")
    return configuration


def get_configuration() -> Optional[Configuration]:
    """Get the process-wide configuration, or None if `configure` was never called."""
    with _configuration_lock:
        return _configuration


def reset_configuration() -> None:
    """Remove the process-wide configuration.

    This function is primarily intended for testing purposes to ensure
    clean state between test runs.
    """
    global _configuration
    with _configuration_lock:
        _configuration = None


def rates_from_dataframe(df: pd.DataFrame, currency_column: str = "currency", rate_column: str = "rate") -> dict[str, float]:
    """Build a rates mapping from a pandas DataFrame with one row per currency.

    The result can be passed directly to `configure`.

    Args:
        df (pd.DataFrame): Source data.
        currency_column (str): Column holding currency codes.
        rate_column (str): Column holding rates relative to the base currency.

    Returns:
        dict[str, float]: Mapping of currency code to rate.

    Raises:
        InvalidArgumentError: If $df is not a DataFrame, a column is missing, a
            currency code occurs more than once or a rate is not float-convertible.
    """
    # Check: $df must be a pandas DataFrame
    if not isinstance(df, pd.DataFrame):
        raise InvalidArgumentError(f"Expected a pandas DataFrame, but received {type(df).__name__}")

    # Check: required columns present
    missing = [c for c in (currency_column, rate_column) if c not in df.columns]
    if missing:
        raise InvalidArgumentError(f"The provided DataFrame is missing required columns: {', '.join(sorted(missing))}")

    codes = df[currency_column].map(normalize_currency)

    # Check: each currency may have only one rate
    duplicated = codes[codes.duplicated()]
    if not duplicated.empty:
        raise InvalidArgumentError(f"The provided DataFrame contains duplicate currencies: {', '.join(sorted(set(duplicated)))}")

    # Raise: every rate must be convertible to float
    try:
        rates = df[rate_column].astype(float).tolist()
    except (TypeError, ValueError) as e:
        raise InvalidArgumentError(f"Column '{rate_column}' contains values that cannot be converted to float") from e

    result = dict(zip(codes.tolist(), rates))
    logger.debug(f"Loaded {len(result)} rate(s) from DataFrame columns '{currency_column}' and '{rate_column}'")
    return result
