# backend/tests/services/investments/test_income.py
"""
Unit tests for the accrual primitives.

All tests use a fixed valuation date (AS_OF = 2024-06-01) so holding
periods are known exactly:
    2022-06-01 -> 731 days (2.0014 years)
    2023-06-01 -> 366 days (1.0021 years)

Test Coverage:
- calculate_dividends_interest_earned: bond coupon, equity dividend, tax
- calculate_yearly_dividend_interest: run-rate without holding period
- calculate_yearly_capital_gains: default path, losses, new positions,
  zero-coupon bonds
"""

from datetime import date
from decimal import Decimal

import pytest

from portfolio_engine.services.investments.income import (
    calculate_dividends_interest_earned,
    calculate_yearly_capital_gains,
    calculate_yearly_dividend_interest,
)
from tests.conftest import AS_OF, ONE_YEAR_AGO, TWO_YEARS_AGO, build_investment

TWO_YEARS = Decimal(731) / Decimal("365.25")
ONE_YEAR = Decimal(366) / Decimal("365.25")


def _coupon_bond(**overrides):
    data = {
        "type": "bond",
        "quantity": Decimal("1"),
        "purchase_price": Decimal("1000"),
        "interest_rate": Decimal("5"),
        "purchase_date": ONE_YEAR_AGO,
    }
    data.update(overrides)
    return build_investment(**data)


def _zero_coupon_bond(**overrides):
    data = {
        "type": "bond",
        "quantity": Decimal("1"),
        "purchase_price": Decimal("900"),
        "current_price": Decimal("1000"),
        "purchase_date": ONE_YEAR_AGO,
        "maturity_date": date(2025, 6, 1),
    }
    data.update(overrides)
    return build_investment(**data)


# =============================================================================
# LIFETIME DIVIDENDS / INTEREST
# =============================================================================

class TestDividendsInterestEarned:
    """Tests for calculate_dividends_interest_earned."""

    def test_bond_coupon_one_year(self):
        """1000 at 5% for one year earns about 50."""
        result = calculate_dividends_interest_earned(_coupon_bond(), AS_OF)

        assert result == pytest.approx(Decimal("50"), abs=Decimal("0.5"))
        assert result == Decimal("1000") * Decimal("0.05") * ONE_YEAR

    def test_bond_coupon_uses_invested_value(self):
        """Coupon is drawn on cost, not on the current market price."""
        cheap = _coupon_bond(current_price=Decimal("500"))
        rich = _coupon_bond(current_price=Decimal("2000"))

        assert calculate_dividends_interest_earned(cheap, AS_OF) == \
            calculate_dividends_interest_earned(rich, AS_OF)

    def test_stock_dividend_uses_current_value(self):
        """Dividend is drawn on market value: 1500 x 4% x years."""
        investment = build_investment(
            current_price=Decimal("150"),
            dividend_yield=Decimal("4"),
        )

        result = calculate_dividends_interest_earned(investment, AS_OF)

        assert result == Decimal("1500") * Decimal("0.04") * TWO_YEARS

    def test_dividend_is_taxed(self):
        """25% tax on accrued dividends."""
        investment = build_investment(
            current_price=Decimal("150"),
            dividend_yield=Decimal("4"),
            taxation=Decimal("25"),
        )

        result = calculate_dividends_interest_earned(investment, AS_OF)

        assert result == pytest.approx(Decimal("1500") * Decimal("0.04") * TWO_YEARS * Decimal("0.75"))

    @pytest.mark.parametrize("investment_type", ["savingsAccount", "cryptocurrency", "realEstate", "mutualFund"])
    def test_other_types_earn_nothing(self, investment_type):
        """Only bonds and stocks/ETFs accrue income."""
        investment = build_investment(
            type=investment_type,
            interest_rate=Decimal("3"),
            dividend_yield=Decimal("2"),
        )

        assert calculate_dividends_interest_earned(investment, AS_OF) == Decimal("0")

    def test_bond_ignores_dividend_yield(self):
        """A dividend yield on a bond record is not income."""
        investment = _coupon_bond(interest_rate=None, dividend_yield=Decimal("4"))

        assert calculate_dividends_interest_earned(investment, AS_OF) == Decimal("0")

    def test_same_day_purchase_earns_nothing(self):
        """No time held, no accrual."""
        investment = _coupon_bond(purchase_date=AS_OF)

        assert calculate_dividends_interest_earned(investment, AS_OF) == Decimal("0")

    @pytest.mark.parametrize("overrides", [
        {"quantity": Decimal("0")},
        {"purchase_price": Decimal("0")},
    ])
    def test_zero_invested(self, overrides):
        """Nothing invested: no income."""
        investment = _coupon_bond(**overrides)

        assert calculate_dividends_interest_earned(investment, AS_OF) == Decimal("0")


# =============================================================================
# RUN-RATE
# =============================================================================

class TestYearlyDividendInterest:
    """Tests for calculate_yearly_dividend_interest."""

    def test_bond_run_rate(self):
        """1000 at 5% pays 50 per year regardless of holding period."""
        assert calculate_yearly_dividend_interest(_coupon_bond()) == Decimal("50")
        assert calculate_yearly_dividend_interest(_coupon_bond(purchase_date=AS_OF)) == Decimal("50")

    def test_etf_run_rate_after_tax(self):
        """1500 x 4% = 60, minus 25% tax = 45."""
        investment = build_investment(
            type="etf",
            current_price=Decimal("150"),
            dividend_yield=Decimal("4"),
            taxation=Decimal("25"),
        )

        assert calculate_yearly_dividend_interest(investment) == Decimal("45")

    def test_no_rate(self):
        """No rate, no income."""
        assert calculate_yearly_dividend_interest(build_investment()) == Decimal("0")


# =============================================================================
# YEARLY CAPITAL GAINS
# =============================================================================

class TestYearlyCapitalGains:
    """Tests for calculate_yearly_capital_gains."""

    def test_average_gain_per_year(self):
        """500 gain over two years."""
        investment = build_investment(current_price=Decimal("150"))

        result = calculate_yearly_capital_gains(investment, AS_OF)

        assert result == Decimal("500") / TWO_YEARS

    def test_gain_is_taxed(self):
        """Positive annualized gain is taxed."""
        investment = build_investment(current_price=Decimal("150"), taxation=Decimal("20"))

        result = calculate_yearly_capital_gains(investment, AS_OF)

        assert result == pytest.approx(Decimal("500") / TWO_YEARS * Decimal("0.8"))

    def test_loss_is_not_annualized(self):
        """A loss returns the full signed loss, untaxed."""
        investment = build_investment(current_price=Decimal("50"), taxation=Decimal("20"))

        assert calculate_yearly_capital_gains(investment, AS_OF) == Decimal("-500")

    def test_new_position_uses_minimum_period(self):
        """10 days held: annualized over 0.1 years, not 10/365.25."""
        investment = build_investment(
            quantity=Decimal("1"),
            current_price=Decimal("200"),
            purchase_date=date(2024, 5, 22),
        )

        assert calculate_yearly_capital_gains(investment, AS_OF) == Decimal("1000")

    def test_zero_coupon_bond_interpolates_over_term(self):
        """
        900 -> 1000 face over a two-year term, one year elapsed.

        Half of the 100 pull-to-par is realized after one year, i.e. ~50 per year.
        """
        result = calculate_yearly_capital_gains(_zero_coupon_bond(), AS_OF)

        term = Decimal(731) / Decimal("365.25")
        expected = Decimal("100") * (ONE_YEAR / term) / ONE_YEAR
        assert result == pytest.approx(expected)
        assert result == pytest.approx(Decimal("50"), abs=Decimal("0.1"))

    def test_zero_coupon_bond_past_maturity_realizes_full_gain(self):
        """Elapsed fraction is capped at the full term."""
        investment = _zero_coupon_bond(
            purchase_date=TWO_YEARS_AGO,
            maturity_date=date(2023, 6, 1),
        )

        result = calculate_yearly_capital_gains(investment, AS_OF)

        assert result == pytest.approx(Decimal("100") / TWO_YEARS)

    def test_zero_coupon_bond_negative_falls_back_to_realized(self):
        """Bought above face: the realized (not annualized) loss is returned."""
        investment = _zero_coupon_bond(
            purchase_price=Decimal("1100"),
            current_price=Decimal("1000"),
        )

        result = calculate_yearly_capital_gains(investment, AS_OF)

        term = Decimal(731) / Decimal("365.25")
        assert result == pytest.approx(Decimal("-100") * ONE_YEAR / term)

    def test_zero_coupon_bond_same_day(self):
        """No time elapsed: nothing realized yet."""
        investment = _zero_coupon_bond(purchase_date=AS_OF)

        assert calculate_yearly_capital_gains(investment, AS_OF) == Decimal("0")

    def test_zero_invested(self):
        """Nothing invested: zero."""
        investment = build_investment(quantity=Decimal("0"), current_price=Decimal("150"))

        assert calculate_yearly_capital_gains(investment, AS_OF) == Decimal("0")
