import pytest

from currency_converter.configuration import configure, reset_configuration
from tests.helpers.helper_rates import BASE_CURRENCY, RATES


@pytest.fixture(autouse=True)
def configured_rates():
    """Configure EUR based rates before each test and remove them afterwards."""
    configuration = configure(BASE_CURRENCY, RATES)
    yield configuration
    reset_configuration()
