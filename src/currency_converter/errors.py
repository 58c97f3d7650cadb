"""Errors raised by the currency converter."""

from __future__ import annotations

UNKNOWN_CURRENCY_MESSAGE = "Unknown currency. Please, configure via .conversion_rates"


class CurrencyConverterError(Exception):
    """Base class of all errors raised by this package."""


class InvalidArgumentError(CurrencyConverterError, ValueError):
    """Raised when an argument is missing or has an unusable value."""


class UnknownCurrencyError(CurrencyConverterError, ValueError):
    """Raised when a currency is neither the base currency nor a configured rate."""

    def __init__(self, currency: object):
        self.currency = currency
        super().__init__(UNKNOWN_CURRENCY_MESSAGE)


class TypeMismatchError(CurrencyConverterError, TypeError):
    """Raised when an arithmetic operand is neither `Money` nor float-convertible."""

    def __init__(self, operand: object):
        self.operand_type = type(operand)
        super().__init__(f"Can't convert {self.operand_type.__name__} to float. Please, provide either Money or float-convertible object.")


class InvalidRateError(CurrencyConverterError, ValueError):
    """Raised when a conversion needs a rate that is missing, zero, negative or not finite."""

    def __init__(self, currency: str, rate: float | None):
        self.currency = currency
        self.rate = rate

        if rate is None:
            message = f"No conversion rate configured for currency '{currency}'"
        else:
            message = f"Conversion rate for currency '{currency}' must be a positive finite number, but configured value is: {rate}"

        super().__init__(message)
