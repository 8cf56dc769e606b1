# backend/portfolio_engine/services/investments/income.py
"""
Accrual primitives: dividends, interest and capital gains.

- calculate_dividends_interest_earned: lifetime income since purchase
- calculate_yearly_dividend_interest: current annual income (run-rate)
- calculate_yearly_capital_gains: average capital gain per year held

Income bases:
    Bond coupon:     invested value x rate      (fixed basis)
    Equity dividend: current value x yield      (scales with the market)

Formulas:
    Lifetime income = run-rate x years since purchase   (linear, no compounding)
    Yearly capital gain = (current - invested) / max(years, 0.1)

All results are after tax; tax only ever reduces positive amounts.
"""

import logging
from datetime import date
from decimal import Decimal

from portfolio_engine.models import InvestmentType
from portfolio_engine.schemas.investments import InvestmentRecord
from portfolio_engine.services.constants import HUNDRED, MIN_HOLDING_YEARS, ONE, ZERO
from portfolio_engine.services.investments.valuation import (
    apply_tax,
    calculate_current_value,
    years_since_purchase,
)
from portfolio_engine.utils.date_utils import resolve_as_of, years_between

logger = logging.getLogger(__name__)


# =============================================================================
# DIVIDENDS & INTEREST
# =============================================================================

def _annual_income_before_tax(investment: InvestmentRecord) -> Decimal:
    """Bond coupon on invested value plus equity dividend on current value."""
    income = ZERO
    investment_type = investment.investment_type

    if investment_type is InvestmentType.BOND and investment.resolved_interest_rate > ZERO:
        income += investment.invested_value * (investment.resolved_interest_rate / HUNDRED)

    if investment_type.is_equity and investment.resolved_dividend_yield > ZERO:
        income += calculate_current_value(investment) * (investment.resolved_dividend_yield / HUNDRED)

    return income


def calculate_dividends_interest_earned(
        investment: InvestmentRecord,
        as_of: date | None = None,
) -> Decimal:
    """
    Lifetime after-tax dividends and interest.

    Income accrues linearly over the holding period. Only bonds (coupon)
    and stocks/ETFs (dividend yield) earn income; other types return 0.

    Args:
        investment: The investment record
        as_of: Valuation date (defaults to today)

    Returns:
        After-tax income earned since purchase
    """
    if not investment.has_investment:
        return ZERO

    as_of = resolve_as_of(as_of)
    years = years_since_purchase(investment, as_of)
    earned = _annual_income_before_tax(investment) * years

    return apply_tax(earned, investment.resolved_tax_rate)


def calculate_yearly_dividend_interest(investment: InvestmentRecord) -> Decimal:
    """
    Current after-tax income per year (run-rate).

    Same bases as calculate_dividends_interest_earned, without the
    holding-period multiplier.
    """
    if not investment.has_investment:
        return ZERO

    return apply_tax(_annual_income_before_tax(investment), investment.resolved_tax_rate)


# =============================================================================
# CAPITAL GAINS
# =============================================================================

def calculate_yearly_capital_gains(
        investment: InvestmentRecord,
        as_of: date | None = None,
) -> Decimal:
    """
    Average after-tax capital gain per year held.

    Default:
        annualized = (current - invested) / max(years, 0.1)
        Positive -> taxed annualized figure.
        Otherwise -> the raw signed total gain (losses are not annualized).

    Zero-coupon bonds (no coupon, known maturity):
        The pull to par is realized linearly over the bond's term:
            realized = total_gain x min(years / term, 1)
            annualized = realized / years
        A negative annualized figure falls back to the realized amount.

    Args:
        investment: The investment record
        as_of: Valuation date (defaults to today)
    """
    if not investment.has_investment:
        return ZERO

    as_of = resolve_as_of(as_of)
    tax_rate = investment.resolved_tax_rate
    total_gain = calculate_current_value(investment) - investment.invested_value
    years = years_since_purchase(investment, as_of)

    if investment.is_zero_coupon_bond:
        term_years = years_between(investment.purchase_date, investment.maturity_date)

        if term_years > ZERO:
            elapsed_fraction = min(years / term_years, ONE)
            realized = total_gain * elapsed_fraction
            annualized = realized / years if years > ZERO else realized

            if annualized < ZERO:
                return apply_tax(realized, tax_rate)
            return apply_tax(annualized, tax_rate)

        logger.debug(
            f"Zero-coupon bond {investment.name or investment.id} matures on or "
            f"before purchase; using the generic capital gain path"
        )

    annualized = total_gain / max(years, MIN_HOLDING_YEARS)

    if annualized > ZERO:
        return apply_tax(annualized, tax_rate)

    return apply_tax(total_gain, tax_rate)
