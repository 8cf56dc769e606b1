# backend/portfolio_engine/__init__.py
"""
Portfolio Statistics Engine.

Pure investment return and valuation calculations for a personal-finance
application: current value, CAGR, zero-coupon yield to maturity, after-tax
income accrual, portfolio aggregation and compounding projections.

Usage:
    from portfolio_engine.services.investments import calculate_investment_statistics
"""

__version__ = "1.0.0"
