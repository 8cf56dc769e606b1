# backend/portfolio_engine/models.py
"""
Domain enums shared by the schemas and the calculators.

InvestmentType is the closed set of categories the formulas dispatch on.
Raw strings coming from the application are mapped with from_raw();
anything unknown is treated as OTHER (no income, generic return path).
"""

import enum


class InvestmentType(str, enum.Enum):
    STOCK = "stock"
    ETF = "etf"
    BOND = "bond"
    CRYPTOCURRENCY = "cryptocurrency"
    MUTUAL_FUND = "mutualFund"
    REAL_ESTATE = "realEstate"
    COMMODITY = "commodity"
    CHECKING_ACCOUNT = "checkingAccount"
    SAVINGS_ACCOUNT = "savingsAccount"
    CERTIFICATE = "certificate"
    OTHER = "other"

    @classmethod
    def from_raw(cls, value: str | None) -> "InvestmentType":
        """Map a stored type string to a category (unknown -> OTHER)."""
        if not value:
            return cls.OTHER
        if value == "crypto":
            return cls.CRYPTOCURRENCY
        try:
            return cls(value)
        except ValueError:
            return cls.OTHER

    @property
    def is_equity(self) -> bool:
        """Stocks and ETFs: the only types paying a dividend yield."""
        return self in (InvestmentType.STOCK, InvestmentType.ETF)

    @property
    def is_cash_account(self) -> bool:
        """Checking and savings accounts."""
        return self in (InvestmentType.CHECKING_ACCOUNT, InvestmentType.SAVINGS_ACCOUNT)
