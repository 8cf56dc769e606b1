# backend/portfolio_engine/services/investments/statistics.py
"""
Per-investment and portfolio aggregators.

- calculate_individual_investment_returns: all metrics for one investment
- calculate_yearly_roi: invested-weighted ROI, outliers excluded
- calculate_investment_statistics: portfolio totals, weighted averages,
  type breakdown and 10-year projection
- StatisticsCalculator: convenience wrapper with a fixed valuation date

Data Flow:
    InvestmentRecord (x N)
        ↓
    calculate_individual_investment_returns()
        ├── calculate_current_value()
        ├── calculate_dividends_interest_earned()
        ├── calculate_yearly_dividend_interest()
        ├── calculate_yearly_capital_gains()
        └── calculate_estimated_yearly_gain_loss()
        ↓
    calculate_investment_statistics()
        ├── invested-weighted CAGR           (calculate_cagr)
        ├── value-weighted expected yield    (calculate_expected_yearly_yield)
        ├── invested-weighted ROI            (calculate_individual_roi)
        └── projected value                  (calculate_projected_value_with_composition)
        ↓
    InvestmentStatistics
"""

import logging
from collections.abc import Iterable
from datetime import date
from decimal import Decimal

from portfolio_engine.schemas.investments import (
    InvestmentInput,
    parse_investment,
    parse_investments,
)
from portfolio_engine.services.constants import HUNDRED, PORTFOLIO_PROJECTION_YEARS, ZERO
from portfolio_engine.services.investments.income import (
    calculate_dividends_interest_earned,
    calculate_yearly_capital_gains,
    calculate_yearly_dividend_interest,
)
from portfolio_engine.services.investments.projections import (
    calculate_projected_value_with_composition,
)
from portfolio_engine.services.investments.returns import (
    calculate_cagr,
    calculate_estimated_yearly_gain_loss,
    calculate_expected_yearly_yield,
    calculate_individual_roi,
)
from portfolio_engine.services.investments.types import (
    IndividualReturns,
    InvestmentStatistics,
    TypeBreakdownEntry,
)
from portfolio_engine.services.investments.valuation import apply_tax, calculate_current_value
from portfolio_engine.utils.date_utils import resolve_as_of

logger = logging.getLogger(__name__)


def _percent_of(amount: Decimal, base: Decimal) -> Decimal:
    if base <= ZERO:
        return ZERO
    return amount / base * HUNDRED


def _weighted_average(weighted_sum: Decimal, total_weight: Decimal) -> Decimal:
    if total_weight <= ZERO:
        return ZERO
    return weighted_sum / total_weight


# =============================================================================
# PER-INVESTMENT
# =============================================================================

def calculate_individual_investment_returns(
        investment: InvestmentInput,
        as_of: date | None = None,
) -> IndividualReturns:
    """
    Complete returns for one investment.

    Calculation:
        base_gain = current_value - invested (taxed only if positive)
        total_gain_loss = base_gain_after_tax + lifetime dividends/interest
        total_value = invested + total_gain_loss

    Returns:
        IndividualReturns; all fields zero when nothing is invested

    Raises:
        InvalidInvestmentError: If a raw mapping fails validation
    """
    investment = parse_investment(investment)
    total_invested = investment.invested_value

    if total_invested == ZERO:
        logger.debug(f"Skipping {investment.name or investment.id}: nothing invested")
        return IndividualReturns()

    as_of = resolve_as_of(as_of)
    tax_rate = investment.resolved_tax_rate

    current_value = calculate_current_value(investment)
    after_tax_base_gain = apply_tax(current_value - total_invested, tax_rate)

    dividends_interest = calculate_dividends_interest_earned(investment, as_of)
    total_gain_loss = after_tax_base_gain + dividends_interest

    estimate = calculate_estimated_yearly_gain_loss(investment, as_of)

    return IndividualReturns(
        current_value=current_value,
        total_value=total_invested + total_gain_loss,
        total_invested=total_invested,
        total_gain_loss=total_gain_loss,
        total_gain_loss_percentage=_percent_of(total_gain_loss, total_invested),
        dividends_interest_earned=dividends_interest,
        dividends_interest_earned_percentage=_percent_of(dividends_interest, total_invested),
        yearly_dividends_interest=calculate_yearly_dividend_interest(investment),
        yearly_capital_gains=calculate_yearly_capital_gains(investment, as_of),
        estimated_yearly_gain_loss=estimate.absolute,
        estimated_yearly_gain_loss_percentage=estimate.percentage,
    )


# =============================================================================
# PORTFOLIO
# =============================================================================

def calculate_yearly_roi(
        investments: Iterable[InvestmentInput] | None,
        as_of: date | None = None,
) -> Decimal:
    """
    Invested-value-weighted average of calculate_individual_roi.

    Investments whose ROI is None (nothing invested, implausible outlier)
    do not contribute to either the weighted sum or the total weight.

    Returns:
        Weighted ROI as decimal, 0 when no investment contributes
    """
    records = parse_investments(investments)
    as_of = resolve_as_of(as_of)

    weighted_roi = ZERO
    total_weight = ZERO
    excluded = 0

    for record in records:
        roi = calculate_individual_roi(record, as_of)
        if roi is None:
            excluded += 1
            continue
        weighted_roi += roi * record.invested_value
        total_weight += record.invested_value

    if excluded:
        logger.debug(f"Yearly ROI: excluded {excluded} of {len(records)} investments")

    return _weighted_average(weighted_roi, total_weight)


def calculate_investment_statistics(
        investments: Iterable[InvestmentInput] | None,
        as_of: date | None = None,
) -> InvestmentStatistics:
    """
    Portfolio statistics over all investments.

    Weighting bases:
        weighted_cagr                          raw invested value
        expected_yearly_yield                  after-tax total value (> 0 only)
        estimated_yearly_gain_loss_percentage  invested value
        average_tax_rate                       invested value

    The 10-year projection compounds the after-tax total value at the
    blended estimated yearly gain/loss percentage.

    Args:
        investments: Records or raw mappings (None or empty -> zero result)
        as_of: Valuation date (defaults to today)

    Returns:
        InvestmentStatistics; never None

    Raises:
        InvalidInvestmentError: If a raw mapping fails validation
    """
    records = parse_investments(investments)
    if not records:
        return InvestmentStatistics()

    as_of = resolve_as_of(as_of)
    result = InvestmentStatistics(investment_count=len(records))

    weighted_cagr = ZERO
    cagr_weight = ZERO
    weighted_yield = ZERO
    yield_weight = ZERO
    weighted_yearly_percentage = ZERO
    weighted_tax_rate = ZERO
    invested_weight = ZERO

    for record in records:
        returns = calculate_individual_investment_returns(record, as_of)
        invested = record.invested_value

        result.total_invested += invested
        result.total_value += returns.total_value
        result.total_gain_loss += returns.total_gain_loss
        result.dividends_interest_earned += returns.dividends_interest_earned
        result.yearly_dividends_interest += returns.yearly_dividends_interest
        result.yearly_capital_gains += returns.yearly_capital_gains
        result.estimated_yearly_gain_loss += returns.estimated_yearly_gain_loss

        if invested > ZERO:
            weighted_cagr += calculate_cagr(record, as_of) * invested
            cagr_weight += invested
            weighted_yearly_percentage += returns.estimated_yearly_gain_loss_percentage * invested
            weighted_tax_rate += record.resolved_tax_rate * invested
            invested_weight += invested

        if returns.total_value > ZERO:
            weighted_yield += calculate_expected_yearly_yield(record, as_of) * returns.total_value
            yield_weight += returns.total_value

        entry = result.type_breakdown.setdefault(record.breakdown_key, TypeBreakdownEntry())
        entry.add(returns)

    result.total_gain_loss_percentage = _percent_of(result.total_gain_loss, result.total_invested)
    result.dividends_interest_earned_percentage = _percent_of(
        result.dividends_interest_earned, result.total_invested
    )
    result.weighted_cagr = _weighted_average(weighted_cagr, cagr_weight)
    result.expected_yearly_yield = _weighted_average(weighted_yield, yield_weight)
    result.estimated_yearly_gain_loss_percentage = _weighted_average(
        weighted_yearly_percentage, invested_weight
    )
    result.average_tax_rate = _weighted_average(weighted_tax_rate, invested_weight)
    result.yearly_roi = calculate_yearly_roi(records, as_of)

    result.projected_value_10_years = calculate_projected_value_with_composition(
        result.total_value,
        result.estimated_yearly_gain_loss_percentage / HUNDRED,
        PORTFOLIO_PROJECTION_YEARS,
    )
    result.average_value = result.total_value / len(records)

    logger.debug(
        f"Portfolio statistics computed for {len(records)} investments "
        f"({len(result.type_breakdown)} types) as of {as_of}",
        extra={"investment_count": len(records)},
    )

    return result


# =============================================================================
# CALCULATOR
# =============================================================================

class StatisticsCalculator:
    """
    Calculator bound to one valuation date.

    Useful when a caller needs several views of the same portfolio and
    wants them all computed against the same "now".

    Usage:
        calculator = StatisticsCalculator(as_of=date(2024, 6, 1))
        stats = calculator.calculate_all(investments)
        returns = calculator.calculate_returns(investments[0])
    """

    def __init__(self, as_of: date | None = None) -> None:
        self.as_of = resolve_as_of(as_of)

    def calculate_all(self, investments: Iterable[InvestmentInput] | None) -> InvestmentStatistics:
        """Portfolio statistics at the bound date."""
        return calculate_investment_statistics(investments, self.as_of)

    def calculate_returns(self, investment: InvestmentInput) -> IndividualReturns:
        """Returns for a single investment at the bound date."""
        return calculate_individual_investment_returns(investment, self.as_of)

    def calculate_yearly_roi(self, investments: Iterable[InvestmentInput] | None) -> Decimal:
        """Weighted ROI at the bound date."""
        return calculate_yearly_roi(investments, self.as_of)
