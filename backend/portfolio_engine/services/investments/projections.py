# backend/portfolio_engine/services/investments/projections.py
"""
Projection primitives.

- calculate_projected_value_with_composition: compound a value forward
- calculate_expected_future_value: one investment at its expected yield
- generate_projection_data: chart series (year, value) for a horizon
- get_investment_projections: portfolio value at several horizons

Formula:
    FV = Value x (1 + rate)^years
"""

from collections.abc import Iterable, Iterator
from datetime import date
from decimal import Decimal

from portfolio_engine.config import settings
from portfolio_engine.schemas.investments import (
    InvestmentInput,
    InvestmentRecord,
    parse_investments,
)
from portfolio_engine.services.constants import HUNDRED, ONE, ZERO
from portfolio_engine.services.investments.returns import calculate_expected_yearly_yield
from portfolio_engine.services.investments.types import ProjectionPoint
from portfolio_engine.services.investments.valuation import calculate_current_value, compound
from portfolio_engine.utils.date_utils import resolve_as_of


def calculate_projected_value_with_composition(
        current_value: Decimal,
        yearly_rate: Decimal,
        years: int | Decimal,
) -> Decimal:
    """
    Compound a value at a constant yearly rate.

    Args:
        current_value: Value today
        yearly_rate: Yearly rate as decimal (0.07 = 7%)
        years: Number of years to compound (fractional allowed)

    Returns:
        Projected value. Non-positive values or horizons are returned
        unchanged; a rate of -100% or worse projects to 0.
    """
    if current_value <= ZERO or years <= 0:
        return current_value

    growth = ONE + yearly_rate
    if growth <= ZERO:
        return ZERO

    exponent = years if isinstance(years, (int, Decimal)) else Decimal(str(years))
    return current_value * compound(growth, exponent)


def calculate_expected_future_value(
        investment: InvestmentRecord,
        years_from_now: int | Decimal,
        as_of: date | None = None,
) -> Decimal:
    """
    Market value of one investment after compounding at its expected yield.

    FV = current_value x (1 + expected_yield/100)^years
    """
    current_value = calculate_current_value(investment)
    expected_yield = calculate_expected_yearly_yield(investment, as_of)

    return calculate_projected_value_with_composition(
        current_value, expected_yield / HUNDRED, years_from_now
    )


class ProjectionSeries:
    """
    Finite, restartable series of ProjectionPoint.

    Holds only its inputs; every iteration recomputes the points from
    scratch, so two iterations yield equal series.
    """

    def __init__(
            self,
            current_value: Decimal,
            yearly_rate: Decimal,
            year_range: int,
            start_year: int,
    ) -> None:
        self.current_value = current_value
        self.yearly_rate = yearly_rate
        self.year_range = year_range
        self.start_year = start_year

    def __iter__(self) -> Iterator[ProjectionPoint]:
        for offset in range(self.year_range + 1):
            yield ProjectionPoint(
                year=self.start_year + offset,
                value=calculate_projected_value_with_composition(
                    self.current_value, self.yearly_rate, offset
                ),
            )

    def __len__(self) -> int:
        return max(0, self.year_range + 1)

    def __repr__(self) -> str:
        return (
            f"ProjectionSeries(start_year={self.start_year}, "
            f"year_range={self.year_range}, yearly_rate={self.yearly_rate})"
        )


def generate_projection_data(
        current_value: Decimal,
        yearly_rate: Decimal,
        year_range: int | None = None,
        start_year: int | None = None,
) -> ProjectionSeries:
    """
    Build the chart series for a projection.

    Points cover offsets 0..year_range inclusive, so the default 10-year
    range has 11 points starting at the current year.

    Args:
        current_value: Value today
        yearly_rate: Yearly rate as decimal (0.07 = 7%)
        year_range: Years to project (defaults to settings.projection_years)
        start_year: Calendar year of the first point (defaults to this year)

    Example:
        >>> [p.value for p in generate_projection_data(Decimal("100"), Decimal("0.1"), 2)]
        [Decimal('100'), Decimal('110.0'), Decimal('121.00')]
    """
    if year_range is None:
        year_range = settings.projection_years
    if start_year is None:
        start_year = date.today().year

    return ProjectionSeries(current_value, yearly_rate, year_range, start_year)


def get_investment_projections(
        investments: Iterable[InvestmentInput] | None,
        time_horizons: Iterable[int] | None = None,
        as_of: date | None = None,
) -> dict[int, Decimal]:
    """
    Projected portfolio value for several horizons.

    Each investment compounds at its own expected yearly yield.

    Args:
        investments: Records or raw mappings
        time_horizons: Years to project (defaults to settings.projection_time_horizons)
        as_of: Valuation date (defaults to today)

    Returns:
        {years: projected total value}

    Raises:
        InvalidInvestmentError: If a raw mapping fails validation
    """
    records = parse_investments(investments)
    horizons = list(time_horizons) if time_horizons is not None else list(settings.projection_time_horizons)
    as_of = resolve_as_of(as_of)

    return {
        years: sum(
            (calculate_expected_future_value(record, years, as_of) for record in records),
            ZERO,
        )
        for years in horizons
    }
