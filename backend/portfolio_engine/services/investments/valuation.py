# backend/portfolio_engine/services/investments/valuation.py
"""
Time/value primitives.

- calculate_current_value: market value of a position
- apply_tax: deduct tax from positive amounts only
- years_since_purchase: elapsed holding period in years
- compound: Decimal exponentiation with a float fallback

Precision Note:
    Decimal.__pow__() supports non-integer exponents for positive bases,
    so growth factors stay in Decimal. Results that overflow the Decimal
    context fall back to float exponentiation.
"""

import decimal
from datetime import date
from decimal import Decimal

from portfolio_engine.schemas.investments import InvestmentRecord
from portfolio_engine.services.constants import HUNDRED, INFINITY, ONE, ZERO
from portfolio_engine.utils.date_utils import years_since


def calculate_current_value(investment: InvestmentRecord) -> Decimal:
    """
    Market value: quantity x (current price, or purchase price if unknown).

    With no quote the position is valued at cost, so no unrealized gain
    or loss is recorded.
    """
    return investment.quantity * investment.resolved_current_price


def apply_tax(amount: Decimal, tax_rate: Decimal) -> Decimal:
    """
    Deduct tax from a gain or income figure.

    Formula: amount x (1 - rate/100), only when amount > 0.
    Losses and zero pass through unchanged.

    Args:
        amount: Gain or income (may be negative)
        tax_rate: Tax rate in percent (0-100)
    """
    if amount > ZERO:
        return amount * (ONE - tax_rate / HUNDRED)
    return amount


def years_since_purchase(investment: InvestmentRecord, as_of: date) -> Decimal:
    """Elapsed years since purchase (365.25-day year), never negative."""
    return years_since(investment.purchase_date, as_of)


def compound(base: Decimal, exponent: Decimal | int) -> Decimal:
    """
    base ** exponent for a positive base.

    Callers guard against non-positive bases; this only handles the
    precision/overflow edge of Decimal arithmetic. A result beyond both
    Decimal and float range is Infinity when growing, 0 when shrinking.
    """
    try:
        return base ** exponent
    except (decimal.InvalidOperation, decimal.Overflow):
        pass

    try:
        return Decimal(str(float(base) ** float(exponent)))
    except OverflowError:
        if (base > ONE) == (exponent > 0):
            return INFINITY
        return ZERO
