from dataclasses import dataclass, field
from decimal import Decimal


@dataclass(frozen=True)
class VacantUnitInfo:
    unit_number: int  # 1-based position in the property's unit list
    rent: Decimal
    days_vacant: int
    status: str


@dataclass(frozen=True)
class DelinquentUnitInfo:
    unit_number: int  # 1-based position in the property's unit list
    rent: Decimal
    days_behind: int
    amount_owed: Decimal


@dataclass(frozen=True)
class LastMonthSnapshot:
    income: Decimal = Decimal("0")
    expenses: Decimal = Decimal("0")
    cashflow: Decimal = Decimal("0")


@dataclass(frozen=True)
class ExpenseCategoryAmount:
    category: str
    amount: Decimal


@dataclass
class OperationalMetrics:
    # Problem indicators
    consecutive_months_with_losses: int = 0
    vacant_units: list[VacantUnitInfo] = field(default_factory=list)
    delinquent_units: list[DelinquentUnitInfo] = field(default_factory=list)

    # Performance
    last_month: LastMonthSnapshot = field(default_factory=LastMonthSnapshot)
    occupancy_rate: int = 0  # Percent, 0-100
    top_expense_categories: list[ExpenseCategoryAmount] = field(default_factory=list)
