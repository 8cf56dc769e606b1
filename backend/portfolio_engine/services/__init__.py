# backend/portfolio_engine/services/__init__.py
"""
Service layer for the statistics engine.

Services are pure: no I/O, no shared state, no clock reads below the
entry points (the valuation date is resolved once and passed down).

Architecture:
    services/
    ├── __init__.py                  # This file
    ├── exceptions.py                # Engine exceptions
    ├── constants.py                 # Thresholds, caps and defaults
    └── investments/                 # Return / valuation calculators

Usage:
    from portfolio_engine.services.investments import calculate_investment_statistics
    from portfolio_engine.services.exceptions import InvalidInvestmentError
"""
