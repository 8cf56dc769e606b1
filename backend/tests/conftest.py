# backend/tests/conftest.py
"""
Pytest configuration and fixtures.

This module provides shared fixtures for all tests:
- A fixed valuation date (no test reads the real clock)
- An investment record factory with sensible stock defaults
- Logging state isolation for tests that reconfigure the root logger
"""

import logging
from datetime import date
from decimal import Decimal
from typing import Any, Callable, Iterator

import pytest

from portfolio_engine.schemas.investments import InvestmentRecord


# =============================================================================
# DATES
# =============================================================================

# Valuation date used across the suite. 2024 is a leap year, so
# 2022-06-01 -> 2024-06-01 is 731 days (2.0014 years at 365.25 days/year).
AS_OF = date(2024, 6, 1)
TWO_YEARS_AGO = date(2022, 6, 1)
ONE_YEAR_AGO = date(2023, 6, 1)


@pytest.fixture
def as_of() -> date:
    """The fixed valuation date."""
    return AS_OF


# =============================================================================
# INVESTMENT FACTORY
# =============================================================================

def build_investment(**overrides: Any) -> InvestmentRecord:
    """
    Build an InvestmentRecord with stock defaults.

    Defaults: 10 units bought at 100 two years before AS_OF, no current
    price, no rates, no tax.
    """
    data: dict[str, Any] = {
        "name": "Test Investment",
        "type": "stock",
        "quantity": Decimal("10"),
        "purchase_price": Decimal("100"),
        "purchase_date": TWO_YEARS_AGO,
        "currency": "EUR",
    }
    data.update(overrides)
    return InvestmentRecord(**data)


@pytest.fixture
def make_investment() -> Callable[..., InvestmentRecord]:
    """Factory fixture for InvestmentRecord (see build_investment)."""
    return build_investment


# =============================================================================
# LOGGING
# =============================================================================

@pytest.fixture
def restore_root_logger() -> Iterator[logging.Logger]:
    """Restore root logger handlers and level after a test reconfigures them."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)
