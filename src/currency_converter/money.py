from __future__ import annotations

import logging
from typing import Mapping, Optional

from currency_converter.configuration import Configuration, configure, get_configuration, normalize_currency
from currency_converter.errors import InvalidArgumentError, TypeMismatchError, UnknownCurrencyError
from currency_converter.utils.numeric_tools import FloatLike, round_amount

logger = logging.getLogger(__name__)


class Money:
    """Immutable monetary amount in a configured currency.

    The amount is a `float` rounded to two decimal places (ROUND_HALF_UP). The
    currency has to be known to the configuration at construction time, which
    is either the $configuration passed to the constructor or the process-wide
    one set by `configure` / `Money.conversion_rates`.

    Arithmetic is currency-reducing: the result is always in the currency of
    the left operand. A right `Money` operand in another currency is converted
    first, any other operand has to be convertible to `float`.

    Example:
        >>> Money.conversion_rates("EUR", {"USD": 1.11})(50, "EUR").convert_to("USD")
        Money(55.50, USD)
    """

    __slots__ = ("_amount", "_currency", "_configuration")

    def __init__(self, amount: FloatLike, currency: object, configuration: Optional[Configuration] = None):
        """Initialize Money with amount and currency.

        Args:
            amount: Numeric amount, converted to `float` and rounded to two decimals.
            currency: Currency code. Non-string codes are converted with `str()`.
            configuration: Optional configuration used instead of the process-wide one,
                also for all values derived from this one.

        Raises:
            UnknownCurrencyError: If $currency is not known to the configuration, or
                no configuration exists.
            TypeMismatchError: If $amount cannot be converted to float.
        """
        currency = normalize_currency(currency)
        active = configuration if configuration is not None else get_configuration()

        # Raise: currency must be known to the active configuration
        if active is None or not active.is_known(currency):
            raise UnknownCurrencyError(currency)

        # Raise: $amount must be convertible to float
        try:
            amount = float(amount)
        except (TypeError, ValueError) as e:
            raise TypeMismatchError(amount) from e

        self._amount = round_amount(amount)
        self._currency = currency
        self._configuration = configuration

    # region Configuration

    @classmethod
    def conversion_rates(cls, base_currency: object, rates: Optional[Mapping[object, FloatLike]] = None) -> type[Money]:
        """Configure the process-wide base currency and rates.

        Returns the class itself, so calls can be chained:
        `Money.conversion_rates("EUR", {"USD": 1.11})(10, "USD")`.

        Raises:
            InvalidArgumentError: If $base_currency is missing or a rate is not float-convertible.
        """
        configure(base_currency, rates)
        return cls

    def _active_configuration(self) -> Optional[Configuration]:
        return self._configuration if self._configuration is not None else get_configuration()

    # endregion

    # region Properties

    @property
    def amount(self) -> float:
        """Get the amount rounded to two decimals."""
        return self._amount

    @property
    def currency(self) -> str:
        """Get the currency code."""
        return self._currency

    # endregion

    # region Conversion

    def convert_to(self, currency: object) -> Money:
        """Convert this amount into $currency.

        Converting into the current currency returns this very instance.

        Args:
            currency: Target currency code.

        Returns:
            Money: `self` for the same currency, otherwise a new instance in $currency.

        Raises:
            UnknownCurrencyError: If $currency is not configured.
            InvalidRateError: If a rate needed for the conversion is missing, zero or negative.
        """
        config = self._active_configuration()
        currency = self._require_known(config, currency)

        if currency == self._currency:
            return self

        result = self._derive(self._convert_amount(config, currency), currency)
        logger.debug(f"Converted {self} to {result}")
        return result

    def convert_amount_to(self, currency: object) -> float:
        """Get the unrounded amount this value is worth in $currency.

        Raises:
            UnknownCurrencyError: If $currency is not configured.
            InvalidRateError: If a rate needed for the conversion is missing, zero or negative.
        """
        config = self._active_configuration()
        currency = self._require_known(config, currency)
        return self._convert_amount(config, currency)

    def _convert_amount(self, config: Configuration, currency: str) -> float:
        if currency == self._currency:
            return self._amount

        # From base: one rate lookup
        if self._currency == config.base_currency:
            return self._amount * config.rate_for(currency)

        # To base: divide by own rate
        if currency == config.base_currency:
            return self._amount / config.rate_for(self._currency)

        # Cross: through base
        return self._amount / config.rate_for(self._currency) * config.rate_for(currency)

    @staticmethod
    def _require_known(config: Optional[Configuration], currency: object) -> str:
        currency = normalize_currency(currency)
        if config is None or not config.is_known(currency):
            raise UnknownCurrencyError(currency)
        return currency

    def _derive(self, amount: float, currency: Optional[str] = None) -> Money:
        """Build a new instance without re-validating the already known currency."""
        result = object.__new__(self.__class__)
        result._amount = round_amount(amount)
        result._currency = currency if currency is not None else self._currency
        result._configuration = self._configuration
        return result

    # endregion

    # region Arithmetic

    def _operand_amount(self, operand: object) -> float:
        """Resolve right-hand $operand to an amount in the currency of `self`.

        Raises:
            TypeMismatchError: If $operand is neither Money nor float-convertible.
        """
        if isinstance(operand, Money):
            if operand.currency == self._currency:
                return operand.amount
            return operand.convert_to(self._currency).amount

        try:
            return float(operand)
        except (TypeError, ValueError) as e:
            raise TypeMismatchError(operand) from e

    def add(self, addend: Money | FloatLike) -> Money:
        """Add Money (converted to this currency) or a number."""
        return self._derive(self._amount + self._operand_amount(addend))

    def subtract(self, subtrahend: Money | FloatLike) -> Money:
        """Subtract Money (converted to this currency) or a number."""
        return self._derive(self._amount - self._operand_amount(subtrahend))

    def multiply(self, multiplier: Money | FloatLike) -> Money:
        """Multiply by Money (converted to this currency) or a number."""
        return self._derive(self._amount * self._operand_amount(multiplier))

    def divide(self, divider: Money | FloatLike) -> Money:
        """Divide by Money (converted to this currency) or a number.

        Raises:
            ZeroDivisionError: If the resolved divider is zero.
        """
        divider_amount = self._operand_amount(divider)
        if divider_amount == 0:
            raise ZeroDivisionError("Cannot divide Money by zero")
        return self._derive(self._amount / divider_amount)

    __add__ = add
    __sub__ = subtract
    __mul__ = multiply
    __truediv__ = divide

    def _reflected_amount(self, other: object) -> Optional[float]:
        try:
            return float(other)
        except (TypeError, ValueError):
            return None

    def __radd__(self, other):
        """Right addition: number + Money (makes `sum()` work)."""
        other_amount = self._reflected_amount(other)
        if other_amount is None:
            return NotImplemented
        return self._derive(other_amount + self._amount)

    def __rsub__(self, other):
        """Right subtraction: number - Money."""
        other_amount = self._reflected_amount(other)
        if other_amount is None:
            return NotImplemented
        return self._derive(other_amount - self._amount)

    def __rmul__(self, other):
        """Right multiplication: number * Money."""
        other_amount = self._reflected_amount(other)
        if other_amount is None:
            return NotImplemented
        return self._derive(other_amount * self._amount)

    def __neg__(self) -> Money:
        return self._derive(-self._amount)

    def __pos__(self) -> Money:
        return self._derive(self._amount)

    def __abs__(self) -> Money:
        return self._derive(abs(self._amount))

    # endregion

    # region Comparison

    def _compared_amount(self, other: object) -> float:
        # Raise: ordering is defined between Money objects only
        if not isinstance(other, Money):
            raise InvalidArgumentError(f"comparison of {self.__class__.__name__} with {other!r} failed")
        return other.convert_to(self._currency).amount

    def __eq__(self, other) -> bool:
        """Check equality after converting $other into this currency."""
        if not isinstance(other, Money):
            return False
        return self._amount == other.convert_to(self._currency).amount

    # Equality spans currencies, so no hash can be consistent with it
    __hash__ = None

    def __lt__(self, other) -> bool:
        return self._amount < self._compared_amount(other)

    def __le__(self, other) -> bool:
        return self._amount <= self._compared_amount(other)

    def __gt__(self, other) -> bool:
        return self._amount > self._compared_amount(other)

    def __ge__(self, other) -> bool:
        return self._amount >= self._compared_amount(other)

    # endregion

    # region String representations

    def to_display_string(self) -> str:
        """Return string like '55.50 USD'."""
        return f"{self._amount:.2f} {self._currency}"

    def __str__(self) -> str:
        return self.to_display_string()

    def __repr__(self) -> str:
        """Return string like 'Money(55.50, USD)'."""
        return f"{self.__class__.__name__}({self._amount:.2f}, {self._currency})"

    @classmethod
    def from_str(cls, value_str: str, configuration: Optional[Configuration] = None) -> Money:
        """Parse Money from string like '55.50 USD'.

        Args:
            value_str (str): String representation, amount and currency separated by whitespace.
            configuration: Optional configuration passed to the constructor.

        Returns:
            Money: Money object.

        Raises:
            InvalidArgumentError: If string format is invalid.
            UnknownCurrencyError: If the currency part is not configured.
        """
        value_str = value_str.strip()
        if not value_str:
            raise InvalidArgumentError("Value string with $value_str = '' cannot be empty")

        # Split by whitespace
        parts = value_str.split()
        if len(parts) != 2:
            raise InvalidArgumentError(f"Value string with $value_str = '{value_str}' must be in format 'amount currency_code'")

        amount_part, currency_part = parts

        try:
            amount = float(amount_part)
        except ValueError as e:
            raise InvalidArgumentError(f"Invalid amount part '{amount_part}' in string '{value_str}'") from e

        return cls(amount, currency_part, configuration)

    # endregion
