# backend/portfolio_engine/services/investments/__init__.py
"""
Investment Statistics Package.

This package computes derived financial metrics from investment records:
- Current value and after-tax gain/loss
- Dividend / interest accrual (lifetime and run-rate)
- CAGR, type-aware ROI, zero-coupon yield to maturity
- Portfolio totals, weighted averages and type breakdown
- Compounding projections

Usage:
    from datetime import date
    from portfolio_engine.services.investments import calculate_investment_statistics

    stats = calculate_investment_statistics(
        [
            {"type": "stock", "quantity": 10, "purchase_price": "100",
             "current_price": "150", "purchase_date": "2022-06-01"},
        ],
        as_of=date(2024, 6, 1),
    )
    print(stats.total_gain_loss, stats.weighted_cagr)

Architecture:
    investments/
    ├── __init__.py              # This file - package exports
    ├── types.py                 # Result dataclasses
    ├── valuation.py             # Value, tax and time primitives
    ├── income.py                # Dividends, interest, capital gains
    ├── returns.py               # CAGR, ROI, yearly estimate, expected yield
    ├── projections.py           # Compounding and projection series
    └── statistics.py            # Per-investment and portfolio aggregators

Every entry point takes an optional `as_of` date; omit it to use today.
"""

from portfolio_engine.services.investments.income import (
    calculate_dividends_interest_earned,
    calculate_yearly_capital_gains,
    calculate_yearly_dividend_interest,
)
from portfolio_engine.services.investments.projections import (
    ProjectionSeries,
    calculate_expected_future_value,
    calculate_projected_value_with_composition,
    generate_projection_data,
    get_investment_projections,
)
from portfolio_engine.services.investments.returns import (
    calculate_cagr,
    calculate_estimated_yearly_gain_loss,
    calculate_expected_yearly_yield,
    calculate_individual_roi,
)
from portfolio_engine.services.investments.statistics import (
    StatisticsCalculator,
    calculate_individual_investment_returns,
    calculate_investment_statistics,
    calculate_yearly_roi,
)
from portfolio_engine.services.investments.types import (
    IndividualReturns,
    InvestmentStatistics,
    ProjectionPoint,
    TypeBreakdownEntry,
    YearlyEstimate,
)
from portfolio_engine.services.investments.valuation import (
    apply_tax,
    calculate_current_value,
    years_since_purchase,
)

__all__ = [
    # Calculator
    "StatisticsCalculator",

    # Result types
    "IndividualReturns",
    "InvestmentStatistics",
    "ProjectionPoint",
    "ProjectionSeries",
    "TypeBreakdownEntry",
    "YearlyEstimate",

    # Primitives
    "apply_tax",
    "calculate_current_value",
    "years_since_purchase",

    # Accrual
    "calculate_dividends_interest_earned",
    "calculate_yearly_dividend_interest",
    "calculate_yearly_capital_gains",

    # Returns
    "calculate_cagr",
    "calculate_individual_roi",
    "calculate_estimated_yearly_gain_loss",
    "calculate_expected_yearly_yield",

    # Projections
    "calculate_expected_future_value",
    "calculate_projected_value_with_composition",
    "generate_projection_data",
    "get_investment_projections",

    # Aggregators
    "calculate_individual_investment_returns",
    "calculate_investment_statistics",
    "calculate_yearly_roi",
]
