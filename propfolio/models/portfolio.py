"""Portfolio cash-flow and asset report types."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass
class CashFlowExpenses:
    mortgage: Decimal = Decimal("0")
    property_tax: Decimal = Decimal("0")
    insurance: Decimal = Decimal("0")
    property_management: Decimal = Decimal("0")
    maintenance: Decimal = Decimal("0")
    vacancy: Decimal = Decimal("0")
    other: Decimal = Decimal("0")
    total: Decimal = Decimal("0")


@dataclass
class PropertyCashFlow:
    id: str
    address: str
    status: str
    is_operational: bool = False

    # Current scenario (actual rent)
    current_rent_income: Decimal = Decimal("0")
    current_expenses: CashFlowExpenses = field(default_factory=CashFlowExpenses)
    current_net_cash_flow: Decimal = Decimal("0")

    # Potential scenario (potential rent)
    potential_rent_income: Decimal = Decimal("0")
    potential_expenses: CashFlowExpenses = field(default_factory=CashFlowExpenses)
    potential_net_cash_flow: Decimal = Decimal("0")

    # Unit status counts
    operational_units: int = 0
    behind_rent_units: int = 0
    vacant_units: int = 0


@dataclass
class CashFlowSummary:
    current_total_rent_income: Decimal = Decimal("0")
    current_total_expenses: CashFlowExpenses = field(default_factory=CashFlowExpenses)
    current_total_net_cash_flow: Decimal = Decimal("0")

    potential_total_rent_income: Decimal = Decimal("0")
    potential_total_expenses: CashFlowExpenses = field(default_factory=CashFlowExpenses)
    potential_total_net_cash_flow: Decimal = Decimal("0")

    properties_count: int = 0
    operational_properties_count: int = 0

    total_operational_units: int = 0
    total_behind_rent_units: int = 0
    total_vacant_units: int = 0


@dataclass
class PortfolioCashFlowReport:
    properties: list[PropertyCashFlow] = field(default_factory=list)
    summary: CashFlowSummary = field(default_factory=CashFlowSummary)
    generated_at: datetime = field(default_factory=datetime.now)


@dataclass
class PropertyAssets:
    id: str
    address: str
    status: str
    current_value: Decimal = Decimal("0")
    loan_value: Decimal = Decimal("0")
    equity: Decimal = Decimal("0")
    equity_percent: Decimal = Decimal("0")  # 0-100
    is_operational: bool = False


@dataclass
class AssetSummary:
    total_property_value: Decimal = Decimal("0")
    total_loan_value: Decimal = Decimal("0")
    total_equity: Decimal = Decimal("0")
    average_equity_percent: Decimal = Decimal("0")
    properties_count: int = 0
    operational_properties_count: int = 0


@dataclass
class PortfolioAssetReport:
    properties: list[PropertyAssets] = field(default_factory=list)
    summary: AssetSummary = field(default_factory=AssetSummary)
    generated_at: datetime = field(default_factory=datetime.now)


@dataclass(frozen=True)
class ReportError:
    message: str
    property_id: str = ""
    property_address: str = ""
    details: str = ""


@dataclass
class ReportGenerationResult(Generic[T]):
    data: T | None = None
    errors: list[ReportError] = field(default_factory=list)

    @property
    def has_warnings(self) -> bool:
        return len(self.errors) > 0
