# backend/portfolio_engine/services/constants.py
"""
Centralized constants for the investment statistics engine.

Single source of truth for the thresholds, caps and defaults used by the
return, income and projection calculators. All values are Decimal so they
combine with record values without float conversion.

Usage:
    from portfolio_engine.services.constants import (
        DAYS_PER_YEAR,
        MIN_HOLDING_YEARS,
        CAGR_FLOOR,
    )
"""

from decimal import Decimal


# =============================================================================
# TIME CONSTANTS
# =============================================================================

# Average calendar year including leap years
# Used to convert holding periods (days) into fractional years
DAYS_PER_YEAR: Decimal = Decimal("365.25")

# Minimum holding period used when annualizing
# 0.1 years ~ 36.5 days; prevents explosive annualization of new positions
MIN_HOLDING_YEARS: Decimal = Decimal("0.1")

# Holdings younger than this use a simple (non-compounded) return for CAGR
SHORT_HOLDING_DAYS: int = 30

# Below this holding period the ROI outlier threshold is more lenient
# 0.25 years ~ 3 months
SHORT_TERM_ROI_YEARS: Decimal = Decimal("0.25")


# =============================================================================
# RETURN CAPS
# =============================================================================

# Final CAGR clamp: -95% to +1000%
CAGR_FLOOR: Decimal = Decimal("-0.95")
CAGR_CEILING: Decimal = Decimal("10")

# Cap for simple returns (short holdings) and yield-to-maturity: +/-50%
SIMPLE_RETURN_CAP: Decimal = Decimal("0.5")

# ROI outlier rejection thresholds (absolute annualized return)
# 500% for holdings < 3 months, 200% otherwise
SHORT_TERM_ROI_OUTLIER: Decimal = Decimal("5")
LONG_TERM_ROI_OUTLIER: Decimal = Decimal("2")

# Cap for yields expressed in percent (YTM yield, CAGR fallback): 50%
YIELD_PERCENT_CAP: Decimal = Decimal("50")


# =============================================================================
# DEFAULTS
# =============================================================================

# Nominal return for cash accounts with no rate and no balance change (0.01%)
CASH_ACCOUNT_NOMINAL_RETURN: Decimal = Decimal("0.0001")

# Conservative expected yield (percent) for types without a specific rule
# NOTE: applied without tax, unlike every other yield branch
DEFAULT_EXPECTED_YIELD_PERCENT: Decimal = Decimal("5")

# Horizon of the portfolio-level projected value (projected_value_10_years)
PORTFOLIO_PROJECTION_YEARS: int = 10


# =============================================================================
# UTILITY CONSTANTS
# =============================================================================

ZERO: Decimal = Decimal("0")
ONE: Decimal = Decimal("1")
HUNDRED: Decimal = Decimal("100")

# Result of compounding past the range of Decimal and float
INFINITY: Decimal = Decimal("Infinity")
