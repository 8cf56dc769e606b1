# backend/portfolio_engine/schemas/investments.py
"""
Pydantic schema for investment records.

InvestmentRecord is the single normalization step for the engine: every
optional numeric field and every fallback (missing current price, missing
rates, missing tax) is resolved here, so the calculators read resolved_*
properties instead of re-deriving defaults.

Fallback rules:
- quantity / purchase_price: None -> 0
- current_price: None -> purchase_price (an explicit 0 is a real price)
- interest_rate / dividend_yield / taxation: None -> 0
- type: unknown strings dispatch as OTHER, the raw string is kept for
  the portfolio breakdown

Raw mappings (as stored by the application, optionally wrapped as
{"id": ..., "data": {...}}) are parsed with parse_investment() and
parse_investments().

IMPORTANT: All financial values use Decimal for precision.
"""

from collections.abc import Iterable, Mapping
from datetime import date, datetime
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from portfolio_engine.models import InvestmentType
from portfolio_engine.schemas.validators import (
    coerce_date,
    none_to_zero,
    validate_currency,
)
from portfolio_engine.services.constants import ZERO
from portfolio_engine.services.exceptions import InvalidInvestmentError
from portfolio_engine.utils.date_utils import is_price_update_failed

OTHER_TYPE_KEY = InvestmentType.OTHER.value


class InvestmentRecord(BaseModel):
    """
    One investment as supplied by the application.

    Percent fields (interest_rate, dividend_yield, taxation) are annual
    percentages: 5 means 5%.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    # Identification (carried, not used in the math)
    id: str | int | None = None
    name: str | None = None
    symbol: str | None = None
    isin: str | None = None
    currency: str | None = Field(
        default=None,
        description="Currency of the investment (ISO 4217); no FX conversion is applied",
        examples=["EUR", "USD"]
    )

    type: str = Field(
        default=OTHER_TYPE_KEY,
        description="Investment category (stock, etf, bond, cryptocurrency, ...)",
        examples=["stock", "bond", "savingsAccount"]
    )

    quantity: Decimal = Field(
        default=ZERO,
        ge=0,
        description="Units held"
    )
    purchase_price: Decimal = Field(
        default=ZERO,
        ge=0,
        description="Per-unit cost at acquisition"
    )
    current_price: Decimal | None = Field(
        default=None,
        ge=0,
        description="Per-unit present value; falls back to purchase_price when absent"
    )

    purchase_date: date = Field(
        ...,
        description="Date of acquisition"
    )
    maturity_date: date | None = Field(
        default=None,
        description="Maturity date (bonds only)"
    )

    interest_rate: Decimal | None = Field(
        default=None,
        ge=0,
        description="Annual coupon / interest rate in percent"
    )
    dividend_yield: Decimal | None = Field(
        default=None,
        ge=0,
        description="Annual dividend yield in percent (stocks and ETFs)"
    )
    taxation: Decimal | None = Field(
        default=None,
        ge=0,
        le=100,
        description="Tax rate in percent applied to positive gains and income"
    )

    # Descriptive metadata
    sector: str | None = None
    risk_level: str | None = None
    notes: str | None = None

    # Price refresh bookkeeping
    last_updated: datetime | None = None
    last_tentative_update: datetime | None = None

    @field_validator("type", mode="before")
    @classmethod
    def normalize_type(cls, v: Any) -> Any:
        """Empty or missing type means 'other'."""
        if v is None:
            return OTHER_TYPE_KEY
        if isinstance(v, str):
            return v.strip() or OTHER_TYPE_KEY
        return v

    @field_validator("quantity", "purchase_price", mode="before")
    @classmethod
    def default_missing_to_zero(cls, v: Any) -> Any:
        return none_to_zero(v)

    @field_validator("purchase_date", "maturity_date", mode="before")
    @classmethod
    def truncate_timestamps(cls, v: Any) -> Any:
        return coerce_date(v)

    @field_validator("currency")
    @classmethod
    def normalize_currency(cls, v: str | None) -> str | None:
        if v is None:
            return None
        return validate_currency(v)

    # =========================================================================
    # RESOLVED VALUES
    # =========================================================================

    @property
    def investment_type(self) -> InvestmentType:
        """Category used for formula dispatch."""
        return InvestmentType.from_raw(self.type)

    @property
    def breakdown_key(self) -> str:
        """Key used in the portfolio type breakdown (the stored type string)."""
        return self.type or OTHER_TYPE_KEY

    @property
    def resolved_current_price(self) -> Decimal:
        """Current price, or purchase price when no quote is known."""
        if self.current_price is None:
            return self.purchase_price
        return self.current_price

    @property
    def resolved_interest_rate(self) -> Decimal:
        return self.interest_rate or ZERO

    @property
    def resolved_dividend_yield(self) -> Decimal:
        return self.dividend_yield or ZERO

    @property
    def resolved_tax_rate(self) -> Decimal:
        return self.taxation or ZERO

    @property
    def invested_value(self) -> Decimal:
        """Amount paid: quantity x purchase price."""
        return self.quantity * self.purchase_price

    @property
    def has_investment(self) -> bool:
        """False when quantity or purchase price is zero (nothing to measure)."""
        return self.quantity != ZERO and self.purchase_price != ZERO

    @property
    def is_zero_coupon_bond(self) -> bool:
        """Bond with a maturity date and no coupon."""
        return (
            self.investment_type is InvestmentType.BOND
            and not self.interest_rate
            and self.maturity_date is not None
        )

    def price_update_failed(self, today: date | None = None) -> bool:
        """True if today's automatic price refresh was attempted and failed."""
        return is_price_update_failed(self.last_tentative_update, self.last_updated, today)


# =============================================================================
# PARSING
# =============================================================================

InvestmentInput = InvestmentRecord | Mapping[str, Any]


def parse_investment(
        value: InvestmentInput,
        index: int | None = None,
) -> InvestmentRecord:
    """
    Turn a record or a raw mapping into an InvestmentRecord.

    Mappings shaped like {"id": ..., "data": {...}} are unwrapped; the
    outer id is used when the data block has none.

    Raises:
        InvalidInvestmentError: If the mapping fails validation
    """
    if isinstance(value, InvestmentRecord):
        return value

    payload: Mapping[str, Any] = value
    data = value.get("data")
    if isinstance(data, Mapping):
        payload = {"id": value.get("id"), **data}

    try:
        return InvestmentRecord.model_validate(payload)
    except PydanticValidationError as exc:
        raise InvalidInvestmentError(exc.errors(), index=index) from exc


def parse_investments(values: Iterable[InvestmentInput] | None) -> list[InvestmentRecord]:
    """
    Parse a collection of records, preserving order.

    None is treated as an empty portfolio.

    Raises:
        InvalidInvestmentError: On the first record that fails validation
    """
    if values is None:
        return []
    return [parse_investment(value, index=i) for i, value in enumerate(values)]
