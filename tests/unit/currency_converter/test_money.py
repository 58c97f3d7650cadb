import pytest

from currency_converter.configuration import configure, get_configuration, reset_configuration
from currency_converter.errors import InvalidArgumentError, InvalidRateError, TypeMismatchError, UnknownCurrencyError
from currency_converter.money import Money
from tests.helpers.helper_rates import BASE_CURRENCY, RATES, create_usd_jpy_configuration

UNKNOWN_CURRENCY_MESSAGE = r"Unknown currency\. Please, configure via \.conversion_rates"


# region Construction


def test_raises_error_with_unknown_currency():
    with pytest.raises(UnknownCurrencyError, match=UNKNOWN_CURRENCY_MESSAGE) as exc_info:
        Money(123.4, "QWE")
    assert exc_info.value.currency == "QWE"


def test_raises_error_without_configuration():
    reset_configuration()

    with pytest.raises(UnknownCurrencyError, match=UNKNOWN_CURRENCY_MESSAGE):
        Money(123.4, BASE_CURRENCY)


def test_unknown_currency_error_is_value_error():
    with pytest.raises(ValueError):
        Money(1, "QWE")


def test_creates_instance_with_provided_amount_and_currency():
    money = Money(123.4, BASE_CURRENCY)

    assert money.amount == 123.4
    assert money.currency == BASE_CURRENCY


def test_casts_amount_to_float():
    assert isinstance(Money(123, BASE_CURRENCY).amount, float)
    assert Money("12.5", BASE_CURRENCY).amount == 12.5


@pytest.mark.parametrize(
    "amount, expected",
    [
        (123.456, 123.46),
        (123.454, 123.45),
        (0.125, 0.13),
        (0.235, 0.24),
        (-0.125, -0.13),
        (0.1251, 0.13),
        (7, 7.0),
    ],
)
def test_rounds_amount_half_up_to_two_decimals(amount, expected):
    assert Money(amount, BASE_CURRENCY).amount == expected


def test_raises_error_with_amount_not_convertible_to_float():
    with pytest.raises(TypeMismatchError, match="Can't convert NoneType to float"):
        Money(None, BASE_CURRENCY)


def test_stringifies_currency():
    configure(BASE_CURRENCY, {840: 1.11})

    assert Money(1, 840).currency == "840"


def test_existing_values_survive_configuration_change():
    money = Money(10, "USD")

    configure("GBP")

    assert money.amount == 10.0
    assert money.currency == "USD"
    with pytest.raises(UnknownCurrencyError):
        Money(10, "USD")


def test_has_no_instance_dict():
    money = Money(1, BASE_CURRENCY)

    with pytest.raises(AttributeError):
        money.note = "extra"


@pytest.mark.parametrize("amount", [1e26, 1e30, 1e300])
def test_large_amounts_are_kept(amount):
    assert Money(amount, BASE_CURRENCY).amount == round(amount, 2)


def test_arithmetic_and_conversion_with_large_amounts():
    assert (Money(1e20, BASE_CURRENCY) * 1e8).amount == round(1e20 * 1e8, 2)
    assert Money(1e30, BASE_CURRENCY).convert_to("USD").amount == round(1e30 * RATES["USD"], 2)


# endregion

# region Conversion


def test_convert_to_raises_error_with_unknown_currency():
    with pytest.raises(UnknownCurrencyError, match=UNKNOWN_CURRENCY_MESSAGE):
        Money(50, BASE_CURRENCY).convert_to("QWE")


def test_convert_to_own_currency_returns_itself():
    money = Money(50, BASE_CURRENCY)

    assert money.convert_to(BASE_CURRENCY) is money


def test_convert_to_other_currency_returns_new_instance():
    money = Money(50, BASE_CURRENCY)

    converted = money.convert_to("USD")

    assert isinstance(converted, Money)
    assert converted is not money
    assert converted.currency == "USD"
    assert money.amount == 50.0
    assert money.currency == BASE_CURRENCY


def test_convert_from_base_currency_multiplies_by_target_rate():
    assert Money(50, BASE_CURRENCY).convert_to("USD").amount == 55.50


def test_convert_to_base_currency_divides_by_own_rate():
    assert Money(55.50, "USD").convert_to(BASE_CURRENCY).amount == 50.00


def test_convert_between_non_base_currencies_goes_through_base():
    converted = Money(55.50, "USD").convert_to("Bitcoin")

    assert converted.currency == "Bitcoin"
    # 55.50 / 1.11 * 0.0047 is 0.235, rounded half up
    assert converted.amount == 0.24


def test_convert_amount_to_is_not_rounded():
    assert Money(1, BASE_CURRENCY).convert_amount_to("Bitcoin") == RATES["Bitcoin"]
    assert Money(1, "USD").convert_amount_to("USD") == 1.0


@pytest.mark.parametrize("amount", [1, 12.34, 99.99, 1000, 0.5])
def test_round_trip_stays_within_rounding_error(amount):
    result = Money(amount, BASE_CURRENCY).convert_to("USD").convert_to(BASE_CURRENCY)

    assert result.amount == pytest.approx(amount, abs=0.01)


@pytest.mark.parametrize("rate", [0, -1])
def test_convert_with_unusable_rate_raises_error(rate):
    configure(BASE_CURRENCY, {"XXX": rate})

    with pytest.raises(InvalidRateError):
        Money(1, BASE_CURRENCY).convert_to("XXX")
    with pytest.raises(InvalidRateError):
        Money(1, "XXX").convert_to(BASE_CURRENCY)


def test_convert_after_currency_was_removed_raises_error():
    money = Money(10, "USD")

    configure(BASE_CURRENCY)

    with pytest.raises(InvalidRateError, match="No conversion rate configured for currency 'USD'"):
        money.convert_to(BASE_CURRENCY)


# endregion

# region Injected configuration


def test_injected_configuration_is_used_instead_of_global_one():
    configuration = create_usd_jpy_configuration()
    reset_configuration()

    money = Money(2, "USD", configuration)

    assert money.convert_to("JPY").amount == 300.0
    with pytest.raises(UnknownCurrencyError):
        Money(2, BASE_CURRENCY, configuration)


def test_injected_configuration_is_kept_by_derived_values():
    configuration = create_usd_jpy_configuration()
    reset_configuration()

    total = Money(2, "USD", configuration) + 1

    assert total.convert_to("JPY").amount == 450.0
    assert get_configuration() is None


# endregion

# region Display


def test_str_returns_human_representation():
    assert str(Money(50, BASE_CURRENCY)) == "50.00 EUR"
    assert str(Money(55.5, "USD")) == "55.50 USD"
    assert str(Money(-1.5, BASE_CURRENCY)) == "-1.50 EUR"


def test_to_display_string_matches_str():
    money = Money(0.1, "Bitcoin")

    assert money.to_display_string() == str(money) == "0.10 Bitcoin"


def test_repr():
    assert repr(Money(55.5, "USD")) == "Money(55.50, USD)"


def test_from_str():
    money = Money.from_str("  55.50 USD ")

    assert money.amount == 55.5
    assert money.currency == "USD"


def test_from_str_round_trips_display_string():
    money = Money(12.34, "Bitcoin")

    assert Money.from_str(str(money)) == money


@pytest.mark.parametrize("value_str", ["", "   ", "55.50", "1 2 USD", "abc USD"])
def test_from_str_rejects_malformed_strings(value_str):
    with pytest.raises(InvalidArgumentError):
        Money.from_str(value_str)


def test_from_str_rejects_unknown_currency():
    with pytest.raises(UnknownCurrencyError):
        Money.from_str("1.00 QWE")


# endregion
