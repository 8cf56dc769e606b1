# backend/portfolio_engine/schemas/validators.py
"""
Reusable validation functions for Pydantic schemas.

- Currency code validation and normalization
- Lenient date coercion (ISO strings with a time part, datetimes)
- Optional numeric defaults (None -> 0)

These validators keep record parsing consistent for every caller.
"""

import re
from datetime import date, datetime
from decimal import Decimal

# =============================================================================
# CONSTANTS
# =============================================================================

# Currency: ISO 4217 format (3 uppercase letters)
CURRENCY_PATTERN = re.compile(r'^[A-Z]{3}$')


# =============================================================================
# CURRENCY VALIDATION
# =============================================================================

def validate_currency(value: str) -> str:
    """
    Validate and normalize a currency code.

    Args:
        value: Raw currency input (e.g., "usd", "EUR")

    Returns:
        Normalized currency (uppercase, trimmed)

    Raises:
        ValueError: If currency format is invalid
    """
    if not value:
        raise ValueError("Currency cannot be empty")

    normalized = value.strip().upper()

    if not CURRENCY_PATTERN.match(normalized):
        raise ValueError(
            f"Invalid currency format: '{normalized}'. "
            "Currency must be a 3-letter ISO code (e.g., USD, EUR)"
        )

    return normalized


# =============================================================================
# DATE COERCION
# =============================================================================

def coerce_date(value: object) -> object:
    """
    Reduce timestamps to their calendar day.

    Stored records carry ISO timestamps ("2024-03-01T00:00:00.000Z") as
    often as plain dates. Anything that is not a datetime or a timestamp
    string is returned unchanged for Pydantic to validate.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, str) and "T" in value:
        return value.split("T", 1)[0]
    return value


# =============================================================================
# NUMERIC DEFAULTS
# =============================================================================

def none_to_zero(value: object) -> object:
    """Treat a missing quantity or price as zero."""
    if value is None or value == "":
        return Decimal("0")
    return value
