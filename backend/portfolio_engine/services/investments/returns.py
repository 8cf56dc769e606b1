# backend/portfolio_engine/services/investments/returns.py
"""
Return-rate primitives for individual investments.

- calculate_cagr: Compound Annual Growth Rate from purchase to today
- calculate_individual_roi: Type-aware annualized return (None = outlier)
- calculate_estimated_yearly_gain_loss: Forward one-year estimate
- calculate_expected_yearly_yield: Expected yield in percent for projections

All functions are stateless and never raise for degenerate input; they
return 0 (or None for an excluded ROI) instead.

Formulas:
    CAGR = (Current / Invested)^(1/years) - 1
        years floored at 0.1; holdings < 30 days use the simple return
        capped to +/-50%; result clamped to [-95%, +1000%]

    Zero-coupon YTM = (Face / Purchase)^(1/term_years) - 1
        Face is the current price (the amount repaid at maturity)

    Estimated yearly gain = Invested x (capital rate + (coupon + dividend)/100)
        capital rate = YTM for zero-coupon bonds, CAGR otherwise
"""

import logging
from datetime import date
from decimal import Decimal

from portfolio_engine.models import InvestmentType
from portfolio_engine.schemas.investments import InvestmentRecord
from portfolio_engine.services.constants import (
    CAGR_CEILING,
    CAGR_FLOOR,
    CASH_ACCOUNT_NOMINAL_RETURN,
    DAYS_PER_YEAR,
    DEFAULT_EXPECTED_YIELD_PERCENT,
    HUNDRED,
    LONG_TERM_ROI_OUTLIER,
    MIN_HOLDING_YEARS,
    ONE,
    SHORT_HOLDING_DAYS,
    SHORT_TERM_ROI_OUTLIER,
    SHORT_TERM_ROI_YEARS,
    SIMPLE_RETURN_CAP,
    YIELD_PERCENT_CAP,
    ZERO,
)
from portfolio_engine.services.investments.types import YearlyEstimate
from portfolio_engine.services.investments.valuation import (
    apply_tax,
    calculate_current_value,
    compound,
)
from portfolio_engine.utils.date_utils import days_between, resolve_as_of, years_between

logger = logging.getLogger(__name__)


def _clamp(value: Decimal, low: Decimal, high: Decimal) -> Decimal:
    return max(low, min(high, value))


def _zero_coupon_ytm(investment: InvestmentRecord) -> Decimal | None:
    """
    Yield to maturity of a zero-coupon bond held from purchase to maturity.

    Returns None when the investment is not a zero-coupon bond or its
    term is not positive. Unclamped; callers apply their own cap.
    """
    if not investment.is_zero_coupon_bond or not investment.has_investment:
        return None

    term_years = years_between(investment.purchase_date, investment.maturity_date)
    if term_years <= ZERO:
        return None

    face_value = investment.resolved_current_price
    return compound(face_value / investment.purchase_price, ONE / term_years) - ONE


# =============================================================================
# CAGR
# =============================================================================

def calculate_cagr(
        investment: InvestmentRecord,
        as_of: date | None = None,
) -> Decimal:
    """
    Compound Annual Growth Rate of the position's market value.

    Args:
        investment: The investment record
        as_of: Valuation date (defaults to today)

    Returns:
        CAGR as decimal (0.12 = 12%) in [-0.95, 10.0]; 0 if nothing invested
    """
    if not investment.has_investment:
        return ZERO

    initial_value = investment.invested_value
    current_value = calculate_current_value(investment)

    if current_value <= ZERO or initial_value <= ZERO:
        return ZERO

    as_of = resolve_as_of(as_of)
    days = days_between(investment.purchase_date, as_of)

    if days < SHORT_HOLDING_DAYS:
        # Short holdings: simple return, not compounded
        simple_return = (current_value - initial_value) / initial_value
        cagr = _clamp(simple_return, -SIMPLE_RETURN_CAP, SIMPLE_RETURN_CAP)
    else:
        years = max(Decimal(days) / DAYS_PER_YEAR, MIN_HOLDING_YEARS)
        cagr = compound(current_value / initial_value, ONE / years) - ONE

    return _clamp(cagr, CAGR_FLOOR, CAGR_CEILING)


# =============================================================================
# INDIVIDUAL ROI
# =============================================================================

def calculate_individual_roi(
        investment: InvestmentRecord,
        as_of: date | None = None,
) -> Decimal | None:
    """
    Annualized return of one investment, chosen by investment type.

    Order of rules:
        1. Zero-coupon bond with maturity: YTM, clamped to +/-50%
        2. Any investment with an interest rate: the rate itself
        3. Checking/savings without rate: balance growth, else 0.01%
        4. Same-day purchase: simple price change, clamped to +/-50%
        5. CAGR, rejected as an outlier above 500% (< 3 months) or 200%

    Args:
        investment: The investment record
        as_of: Valuation date (defaults to today)

    Returns:
        Annualized return as decimal, or None when the investment must be
        excluded from weighted averages (nothing invested, outlier)
    """
    if not investment.has_investment:
        return None

    as_of = resolve_as_of(as_of)
    purchase_price = investment.purchase_price
    current_price = investment.resolved_current_price
    years = Decimal(days_between(investment.purchase_date, as_of)) / DAYS_PER_YEAR

    if investment.investment_type is InvestmentType.BOND:
        ytm = _zero_coupon_ytm(investment)
        if ytm is not None:
            return _clamp(ytm, -SIMPLE_RETURN_CAP, SIMPLE_RETURN_CAP)

    if investment.resolved_interest_rate > ZERO:
        return investment.resolved_interest_rate / HUNDRED

    if investment.investment_type.is_cash_account:
        if current_price != purchase_price and years > ZERO:
            return compound(current_price / purchase_price, ONE / years) - ONE
        return CASH_ACCOUNT_NOMINAL_RETURN

    if years <= ZERO:
        price_change = (current_price - purchase_price) / purchase_price
        return _clamp(price_change, -SIMPLE_RETURN_CAP, SIMPLE_RETURN_CAP)

    initial_value = investment.invested_value
    current_value = calculate_current_value(investment)
    if current_value <= ZERO or initial_value <= ZERO:
        return None

    annualized_return = compound(current_value / initial_value, ONE / years) - ONE

    max_return = SHORT_TERM_ROI_OUTLIER if years < SHORT_TERM_ROI_YEARS else LONG_TERM_ROI_OUTLIER
    if abs(annualized_return) > max_return:
        logger.debug(
            f"Excluding {investment.name or investment.id} from ROI: "
            f"annualized {annualized_return:.4f} exceeds +/-{max_return}"
        )
        return None

    return annualized_return


# =============================================================================
# ESTIMATED YEARLY GAIN / LOSS
# =============================================================================

def calculate_estimated_yearly_gain_loss(
        investment: InvestmentRecord,
        as_of: date | None = None,
) -> YearlyEstimate:
    """
    Estimate next year's after-tax gain or loss.

    Formula:
        capital = invested x (YTM for zero-coupon bonds, else CAGR)
        income  = invested x (interest_rate + dividend_yield) / 100
        absolute = tax(capital + income)
        percentage = absolute / invested x 100

    Returns:
        YearlyEstimate; all-zero when nothing is invested
    """
    if not investment.has_investment:
        return YearlyEstimate()

    invested_value = investment.invested_value

    ytm = _zero_coupon_ytm(investment)
    if ytm is not None:
        capital_rate = _clamp(ytm, -SIMPLE_RETURN_CAP, SIMPLE_RETURN_CAP)
    else:
        capital_rate = calculate_cagr(investment, as_of)

    capital_gain = invested_value * capital_rate
    income_rate = (investment.resolved_interest_rate + investment.resolved_dividend_yield) / HUNDRED
    income = invested_value * income_rate

    absolute = apply_tax(capital_gain + income, investment.resolved_tax_rate)

    return YearlyEstimate(
        absolute=absolute,
        percentage=absolute / invested_value * HUNDRED,
    )


# =============================================================================
# EXPECTED YEARLY YIELD
# =============================================================================

def calculate_expected_yearly_yield(
        investment: InvestmentRecord,
        as_of: date | None = None,
) -> Decimal:
    """
    Expected yearly yield in percent, used for forward projections.

    Rules:
        Bond with coupon          -> coupon, after tax
        Zero-coupon bond          -> min(YTM, 50%), after tax
        Any asset with a rate     -> rate, after tax
        Stock/ETF with dividend   -> dividend yield, after tax
        Stock/ETF without         -> historical CAGR clamped to +/-50% (untaxed)
        Everything else           -> 5% (untaxed)

    NOTE: the CAGR fallback and the 5% default are not taxed while every
    other branch is.
    """
    tax_rate = investment.resolved_tax_rate
    interest_rate = investment.resolved_interest_rate
    investment_type = investment.investment_type

    if investment_type is InvestmentType.BOND and interest_rate <= ZERO:
        ytm = _zero_coupon_ytm(investment)
        if ytm is not None:
            return apply_tax(min(ytm * HUNDRED, YIELD_PERCENT_CAP), tax_rate)

    if interest_rate > ZERO:
        return apply_tax(interest_rate, tax_rate)

    if investment_type.is_equity:
        dividend_yield = investment.resolved_dividend_yield
        if dividend_yield > ZERO:
            return apply_tax(dividend_yield, tax_rate)

        cagr_percent = calculate_cagr(investment, as_of) * HUNDRED
        return _clamp(cagr_percent, -YIELD_PERCENT_CAP, YIELD_PERCENT_CAP)

    return DEFAULT_EXPECTED_YIELD_PERCENT
