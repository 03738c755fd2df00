from dataclasses import dataclass, field
from decimal import Decimal


@dataclass
class MonthlyPLData:
    month: str  # "2025-09"
    income_by_category: dict[str, Decimal] = field(default_factory=dict)
    expenses_by_category: dict[str, Decimal] = field(default_factory=dict)  # Absolute amounts
    total_income: Decimal = Decimal("0")
    total_expenses: Decimal = Decimal("0")
    net_income: Decimal = Decimal("0")

    @property
    def has_activity(self) -> bool:
        return self.total_income > 0 or self.total_expenses > 0


@dataclass
class PLSummary:
    total_income: Decimal = Decimal("0")
    total_expenses: Decimal = Decimal("0")
    net_income: Decimal = Decimal("0")


@dataclass
class PropertyBreakdown:
    property_id: str
    property_address: str

    # Whole report window
    total_income: Decimal = Decimal("0")
    total_expenses: Decimal = Decimal("0")
    net_income: Decimal = Decimal("0")

    # Last full calendar month
    last_month_income: Decimal = Decimal("0")
    last_month_expenses: Decimal = Decimal("0")
    last_month_net_income: Decimal = Decimal("0")


@dataclass
class PropertyPLReport:
    property_id: str
    property_address: str
    months: list[MonthlyPLData] = field(default_factory=list)  # Oldest first
    six_month_average: PLSummary = field(default_factory=PLSummary)  # Trailing average over `months`
    last_full_month: PLSummary = field(default_factory=PLSummary)


@dataclass
class PortfolioPLReport:
    months: list[MonthlyPLData] = field(default_factory=list)
    six_month_average: PLSummary = field(default_factory=PLSummary)
    last_full_month: PLSummary = field(default_factory=PLSummary)
    property_breakdowns: list[PropertyBreakdown] = field(default_factory=list)  # Net income desc
