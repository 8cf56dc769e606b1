# backend/portfolio_engine/utils/date_utils.py
"""
Date utility functions for the statistics engine.

Holding periods are measured in calendar days and converted to fractional
years with a 365.25-day year. Centralizing these keeps every calculator
on the same day count.

Usage:
    from portfolio_engine.utils.date_utils import years_between

    years = years_between(purchase_date, as_of)
"""

from datetime import date, datetime
from decimal import Decimal

from portfolio_engine.services.constants import DAYS_PER_YEAR, ZERO


def resolve_as_of(as_of: date | None = None) -> date:
    """
    Resolve the valuation date.

    Args:
        as_of: Explicit valuation date, or None for today

    Returns:
        The valuation date as a plain date (datetimes are truncated)
    """
    if as_of is None:
        return date.today()
    if isinstance(as_of, datetime):
        return as_of.date()
    return as_of


def days_between(start: date, end: date) -> int:
    """
    Calendar days from start to end (negative if end is earlier).

    Example:
        >>> days_between(date(2024, 1, 1), date(2024, 1, 31))
        30
    """
    return (end - start).days


def years_between(start: date, end: date) -> Decimal:
    """
    Fractional years from start to end using a 365.25-day year.

    The result is signed; callers that need an elapsed holding period
    clamp it at zero (see years_since).
    """
    return Decimal(days_between(start, end)) / DAYS_PER_YEAR


def years_since(start: date, as_of: date) -> Decimal:
    """
    Elapsed years since start, never negative.

    A start date after as_of (a future purchase) counts as zero years.
    """
    return max(ZERO, years_between(start, as_of))


def is_price_update_failed(
        last_tentative_update: datetime | date | None,
        last_updated: datetime | date | None,
        today: date | None = None,
) -> bool:
    """
    Check whether today's automatic price refresh failed.

    A refresh failed when it was attempted today but the last successful
    update is from an earlier day. A record that has never been updated
    successfully is not reported as failed.

    Args:
        last_tentative_update: When a refresh was last attempted
        last_updated: When a refresh last succeeded
        today: Reference day (defaults to today)

    Returns:
        True if the refresh was attempted today and did not succeed
    """
    today = resolve_as_of(today)
    tentative_day = _to_date(last_tentative_update)
    updated_day = _to_date(last_updated)

    return tentative_day == today and updated_day is not None and updated_day < today


def _to_date(value: datetime | date | None) -> date | None:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    return value
