__version__ = "0.1.0"

from currency_converter.configuration import Configuration, configure, get_configuration, rates_from_dataframe, reset_configuration
from currency_converter.errors import CurrencyConverterError, InvalidArgumentError, InvalidRateError, TypeMismatchError, UnknownCurrencyError
from currency_converter.money import Money

__all__ = [
    "Configuration",
    "CurrencyConverterError",
    "InvalidArgumentError",
    "InvalidRateError",
    "Money",
    "TypeMismatchError",
    "UnknownCurrencyError",
    "configure",
    "get_configuration",
    "rates_from_dataframe",
    "reset_configuration",
]
