from dataclasses import dataclass, field
from decimal import Decimal

# Unit statuses are an open set; these are the ones the analyzer reacts to.
OCCUPIED = "Occupied"
VACANT = "Vacant"
BEHIND_ON_RENT = "Behind on Rent"


@dataclass(frozen=True)
class StatusChange:
    status: str
    date_start: str  # ISO 8601, e.g. "2025-09-15" or "2025-09-15T12:00:00Z"


@dataclass(frozen=True)
class PropertyUnit:
    status: str
    rent: Decimal = Decimal("0")
    status_history: list[StatusChange] = field(default_factory=list)  # Last entry is current


@dataclass(frozen=True)
class MonthlyExpenses:
    mortgage: Decimal = Decimal("0")
    taxes: Decimal = Decimal("0")
    insurance: Decimal = Decimal("0")
    property_management: Decimal = Decimal("0")
    utilities: Decimal = Decimal("0")
    vacancy: Decimal = Decimal("0")
    cap_ex: Decimal = Decimal("0")
    other: Decimal = Decimal("0")

    @property
    def total(self) -> Decimal:
        return (
            self.mortgage + self.taxes + self.insurance + self.property_management
            + self.utilities + self.vacancy + self.cap_ex + self.other
        )


@dataclass(frozen=True)
class CapitalCosts:
    down_payment: Decimal = Decimal("0")
    closing_costs: Decimal = Decimal("0")
    upfront_repairs: Decimal = Decimal("0")
    other: Decimal = Decimal("0")


@dataclass(frozen=True)
class Property:
    id: str = ""
    address: str = ""
    status: str = "Opportunity"
    archived: bool = False

    # Acquisition
    listing_price: Decimal = Decimal("0")
    offer_price: Decimal = Decimal("0")
    rehab_costs: Decimal = Decimal("0")
    potential_rent: Decimal = Decimal("0")  # Monthly, all units
    arv: Decimal = Decimal("0")  # After-repair value
    units: int | None = None  # None means single unit

    # Operations
    actual_rent: Decimal = Decimal("0")
    current_house_value: Decimal = Decimal("0")
    current_loan_value: Decimal | None = None
    property_units: list[PropertyUnit] = field(default_factory=list)

    # Investment summary inputs
    monthly_expenses: MonthlyExpenses | None = None
    capital_costs: CapitalCosts | None = None

    @property
    def unit_count(self) -> int:
        if not self.units or self.units < 1:
            return 1
        return self.units
