from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class Transaction:
    date: str  # ISO 8601: "2025-09-15"
    amount: Decimal  # Positive = income, negative = expense
    category: str
    expense_type: str = "Operating"  # "Operating" or "Capital"
    property_id: str | None = None  # None = business transaction
    override_date: str | None = None  # Reporting date, wins over `date`
    id: str = ""

    @property
    def report_date(self) -> str:
        return self.override_date or self.date
