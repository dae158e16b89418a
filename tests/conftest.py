"""Shared fixtures.

Canonical loan: 400K house, 40K down, 3.65 % over 30 years (360K financed).
"""

import logging
from decimal import Decimal

import pytest

from mortgage_calc.data_models import LoanInputs
from mortgage_calc.engine import monthly_payment, monthly_rate, period_count, schedule
from mortgage_calc.logging_config import PACKAGE_LOGGER


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Drop handlers the CLI attaches so later tests do not log to a stale stream."""
    yield
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def canonical_inputs() -> LoanInputs:
    return LoanInputs.from_purchase(Decimal("400000"), Decimal("40000"), Decimal("3.65"), 30)


@pytest.fixture
def canonical_rate() -> Decimal:
    return monthly_rate(Decimal("3.65"))


@pytest.fixture
def canonical_payment(canonical_rate) -> Decimal:
    return monthly_payment(Decimal("360000"), canonical_rate, period_count(30))


@pytest.fixture
def canonical_schedule(canonical_rate, canonical_payment):
    return schedule(Decimal("360000"), canonical_rate, canonical_payment, 360)


@pytest.fixture
def early_payoff_schedule(canonical_rate, canonical_payment):
    return schedule(Decimal("360000"), canonical_rate, canonical_payment, 360, Decimal("500"))
