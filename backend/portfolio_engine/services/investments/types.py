# backend/portfolio_engine/services/investments/types.py
"""
Result types for the investment statistics engine.

These dataclasses are returned by the calculators. Inputs are the Pydantic
InvestmentRecord (portfolio_engine.schemas.investments); outputs are plain
dataclasses, the same split as input schema vs. internal result.

Design Principles:
- Decimal for ALL financial values (never float)
- Percentages are expressed in percent (12.5 = 12.5%) unless the field
  says "rate", which is a decimal fraction (0.125 = 12.5%)
- Zero results are explicit objects, never None

Type Hierarchy:
    YearlyEstimate        - Estimated yearly gain/loss (absolute + percent)
    IndividualReturns     - Complete result for one investment
    TypeBreakdownEntry    - Running sums for one investment type
    InvestmentStatistics  - Complete portfolio result
    ProjectionPoint       - One (year, value) pair of a projection series
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal

from portfolio_engine.services.constants import ZERO


@dataclass(frozen=True)
class YearlyEstimate:
    """
    Estimated after-tax gain or loss over the next year.

    Attributes:
        absolute: Amount in the investment's currency
        percentage: Amount relative to the invested value, in percent
    """
    absolute: Decimal = ZERO
    percentage: Decimal = ZERO


@dataclass(frozen=True)
class IndividualReturns:
    """
    Returns for a single investment.

    Attributes:
        current_value: Market value (quantity x current price), before tax
        total_value: Invested value plus after-tax gain/loss and income
        total_invested: quantity x purchase_price
        total_gain_loss: After-tax capital gain/loss plus lifetime income
        total_gain_loss_percentage: total_gain_loss / total_invested, in percent
        dividends_interest_earned: Lifetime after-tax dividends and interest
        dividends_interest_earned_percentage: Relative to total_invested, in percent
        yearly_dividends_interest: After-tax income run-rate per year
        yearly_capital_gains: Average after-tax capital gain per year held
        estimated_yearly_gain_loss: Forward estimate for the next year
        estimated_yearly_gain_loss_percentage: Relative to total_invested, in percent
    """
    current_value: Decimal = ZERO
    total_value: Decimal = ZERO
    total_invested: Decimal = ZERO
    total_gain_loss: Decimal = ZERO
    total_gain_loss_percentage: Decimal = ZERO
    dividends_interest_earned: Decimal = ZERO
    dividends_interest_earned_percentage: Decimal = ZERO
    yearly_dividends_interest: Decimal = ZERO
    yearly_capital_gains: Decimal = ZERO
    estimated_yearly_gain_loss: Decimal = ZERO
    estimated_yearly_gain_loss_percentage: Decimal = ZERO


@dataclass
class TypeBreakdownEntry:
    """
    Running sums for all investments of one type.

    Mutable: the portfolio aggregator accumulates into it.
    """
    value: Decimal = ZERO
    count: int = 0
    gain_loss: Decimal = ZERO
    estimated_yearly_gain_loss: Decimal = ZERO
    invested_value: Decimal = ZERO

    def add(self, returns: IndividualReturns) -> None:
        """Accumulate one investment's returns."""
        self.value += returns.total_value
        self.count += 1
        self.gain_loss += returns.total_gain_loss
        self.estimated_yearly_gain_loss += returns.estimated_yearly_gain_loss
        self.invested_value += returns.total_invested


@dataclass
class InvestmentStatistics:
    """
    Portfolio-level statistics.

    Weighting bases:
        weighted_cagr: weighted by raw invested value
        expected_yearly_yield: weighted by after-tax total value
        estimated_yearly_gain_loss_percentage: weighted by invested value
        average_tax_rate: weighted by invested value
        yearly_roi: weighted by invested value, outliers excluded

    Attributes:
        weighted_cagr: Decimal fraction (0.08 = 8%)
        yearly_roi: Decimal fraction (0.08 = 8%)
        expected_yearly_yield: Percent
        average_tax_rate: Percent
        projected_value_10_years: total_value compounded at the blended
            estimated yearly gain/loss percentage
        type_breakdown: Running sums keyed by the stored type string
    """
    total_value: Decimal = ZERO
    total_invested: Decimal = ZERO
    total_gain_loss: Decimal = ZERO
    total_gain_loss_percentage: Decimal = ZERO
    dividends_interest_earned: Decimal = ZERO
    dividends_interest_earned_percentage: Decimal = ZERO
    yearly_dividends_interest: Decimal = ZERO
    yearly_capital_gains: Decimal = ZERO
    estimated_yearly_gain_loss: Decimal = ZERO
    estimated_yearly_gain_loss_percentage: Decimal = ZERO
    weighted_cagr: Decimal = ZERO
    expected_yearly_yield: Decimal = ZERO
    yearly_roi: Decimal = ZERO
    average_tax_rate: Decimal = ZERO
    projected_value_10_years: Decimal = ZERO
    investment_count: int = 0
    average_value: Decimal = ZERO
    type_breakdown: dict[str, TypeBreakdownEntry] = field(default_factory=dict)


@dataclass(frozen=True)
class ProjectionPoint:
    """Projected value at the start of a calendar year."""
    year: int
    value: Decimal
