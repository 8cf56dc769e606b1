# backend/portfolio_engine/schemas/__init__.py
"""
Pydantic schemas for engine input.

- investments: InvestmentRecord and the parse helpers
- validators: Reusable validation functions (currency, dates, defaults)

Usage:
    from portfolio_engine.schemas import InvestmentRecord, parse_investments
"""

from portfolio_engine.schemas.investments import (
    InvestmentRecord,
    InvestmentInput,
    parse_investment,
    parse_investments,
)

__all__ = [
    "InvestmentRecord",
    "InvestmentInput",
    "parse_investment",
    "parse_investments",
]
