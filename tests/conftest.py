"""Shared fixtures.

Reference loan: 250K borrowed at 4.5% over 25 years, close to the average UK
first-time buyer mortgage.
"""

import pytest

from mortgage_calc.data_models import CURRENCY_CONFIGS, CurrencyConfig, MortgageResult, Region
from mortgage_calc.engine import simulate


@pytest.fixture
def reference_result() -> MortgageResult:
    return simulate(250_000, 4.5, 25, 0)


@pytest.fixture
def overpaying_result() -> MortgageResult:
    return simulate(250_000, 4.5, 25, 200)


@pytest.fixture
def gbp() -> CurrencyConfig:
    return CURRENCY_CONFIGS[Region.UK]


@pytest.fixture
def eur() -> CurrencyConfig:
    return CURRENCY_CONFIGS[Region.EU]
