# backend/portfolio_engine/utils/__init__.py
"""
Utility modules for the statistics engine.

- logging: Logging configuration (text/JSON output)
- date_utils: Holding-period helpers (fractional years, price refresh status)

Usage:
    from portfolio_engine.utils import setup_logging, get_logger
    from portfolio_engine.utils.date_utils import years_since
"""

from portfolio_engine.utils.date_utils import (
    resolve_as_of,
    days_between,
    years_between,
    years_since,
    is_price_update_failed,
)
from portfolio_engine.utils.logging import setup_logging, get_logger

__all__ = [
    # Logging
    "setup_logging",
    "get_logger",
    # Dates
    "resolve_as_of",
    "days_between",
    "years_between",
    "years_since",
    "is_price_update_failed",
]
