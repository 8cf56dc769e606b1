# backend/portfolio_engine/services/exceptions.py
"""
Engine exceptions.

The calculators themselves never raise for degenerate numbers (zero
quantities, missing prices, same-day purchases); those degrade to zero or
to exclusion from an aggregate. Exceptions are reserved for input that
cannot be turned into an InvestmentRecord at all.

Exception Hierarchy:
    EngineError (base)
    └── ValidationError
        └── InvalidInvestmentError
"""

from typing import Any


class EngineError(Exception):
    """
    Base exception for all engine errors.

    Attributes:
        message: Human-readable error description
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message


# =============================================================================
# VALIDATION ERRORS
# =============================================================================


class ValidationError(EngineError):
    """
    Raised when input validation fails.

    Attributes:
        field: The field that failed validation (optional)
    """

    def __init__(self, message: str, field: str | None = None) -> None:
        self.field = field
        super().__init__(message)


class InvalidInvestmentError(ValidationError):
    """
    Raised when a raw investment mapping cannot be parsed.

    Attributes:
        index: Position of the record in the input collection (None for a single record)
        errors: Pydantic error details (list of dicts)
    """

    def __init__(
            self,
            errors: list[dict[str, Any]],
            index: int | None = None,
    ) -> None:
        self.index = index
        self.errors = errors

        first = errors[0] if errors else {}
        loc = first.get("loc") or ()
        field = ".".join(str(part) for part in loc) or None
        reason = first.get("msg", "invalid value")

        where = f"Investment #{index}" if index is not None else "Investment"
        message = f"{where} is invalid: {reason}"
        if field:
            message += f" (field '{field}')"

        super().__init__(message, field=field)
