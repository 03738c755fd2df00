from dataclasses import dataclass, field
from decimal import Decimal


@dataclass(frozen=True)
class HoldScoreBreakdown:
    cashflow_score: int
    rent_ratio_score: int
    total_score: int


@dataclass(frozen=True)
class FlipScoreBreakdown:
    arv_ratio_score: int
    equity_score: int
    total_score: int


@dataclass(frozen=True)
class ReportIssue:
    field: str
    message: str
    severity: str  # "error" or "warning"


@dataclass
class InvestmentMetrics:
    # Investment analysis
    rent_ratio: Decimal = Decimal("0")
    arv_ratio: Decimal = Decimal("0")
    hold_score: int = 1
    flip_score: int = 1
    hold_score_breakdown: HoldScoreBreakdown | None = None
    flip_score_breakdown: FlipScoreBreakdown | None = None

    # Financing
    home_equity: Decimal = Decimal("0")
    monthly_cashflow: Decimal = Decimal("0")
    new_loan: Decimal = Decimal("0")

    # Capital requirements
    down_payment: Decimal = Decimal("0")
    closing_costs: Decimal = Decimal("0")
    upfront_repairs: Decimal = Decimal("0")
    other_capital_costs: Decimal = Decimal("0")
    total_capital_required: Decimal = Decimal("0")

    # Returns
    annual_cashflow: Decimal = Decimal("0")
    monthly_income: Decimal = Decimal("0")
    monthly_expenses: Decimal = Decimal("0")
    roi_projection: Decimal = Decimal("0")

    # Recommendations (None when there is nothing to price against)
    perfect_rent: Decimal | None = None
    perfect_arv: Decimal | None = None

    issues: list[ReportIssue] = field(default_factory=list)
