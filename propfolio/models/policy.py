"""Policy constants for scoring and reporting.

Every engine function takes one of these as a keyword argument so that a
policy change is a data change, not an edit to a formula.
"""

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class ScoringPolicy:
    # Purchase financing
    down_payment_pct: Decimal = Decimal("0.25")
    cash_remaining: Decimal = Decimal("20000")  # Cash buffer kept after refinance
    refinance_ltv: Decimal = Decimal("0.75")  # Flat refinance loan, % of ARV

    # Mortgage
    interest_rate: Decimal = Decimal("0.07")  # Annual
    loan_term_years: int = 30

    # Monthly carrying costs
    management_pct: Decimal = Decimal("0.12")  # % of rent
    annual_tax_pct: Decimal = Decimal("0.025")  # % of offer price, per year
    other_monthly_costs: Decimal = Decimal("130")  # Insurance + lawn care

    # Hold score: ($ cashflow per unit floor, points), highest first
    cashflow_bands: tuple[tuple[Decimal, int], ...] = (
        (Decimal("200"), 8),
        (Decimal("175"), 7),
        (Decimal("150"), 6),
        (Decimal("125"), 5),
        (Decimal("100"), 4),
        (Decimal("75"), 3),
        (Decimal("50"), 2),
        (Decimal("0"), 1),
    )
    rent_ratio_bands: tuple[tuple[Decimal, int], ...] = (
        (Decimal("0.01"), 2),
        (Decimal("0.008"), 1),
    )

    # Flip score
    flip_arv_max_points: int = 10
    flip_arv_threshold_pct: Decimal = Decimal("65")  # Full points at or below
    flip_arv_step_pct: Decimal = Decimal("3.5")  # One point lost per step above
    equity_bands: tuple[tuple[Decimal, int], ...] = (
        (Decimal("75000"), 2),
        (Decimal("60000"), 1),
    )

    min_score: int = 1
    max_score: int = 10

    @classmethod
    def from_settings(cls, settings) -> "ScoringPolicy":
        return cls(
            cash_remaining=settings.cash_remaining,
            interest_rate=settings.mortgage_rate,
            loan_term_years=settings.loan_term_years,
        )


@dataclass(frozen=True)
class ReportPolicy:
    months: int = 6
    top_expense_categories: int = 3
    days_per_rent_period: int = 30  # Used to estimate rent owed

    operating_expense_type: str = "Operating"
    business_key: str = "business"
    business_label: str = "Business (No Property)"

    # Acquisition-phase statuses never contribute to portfolio reports
    excluded_statuses: tuple[str, ...] = ("Opportunity", "Soft Offer", "Hard Offer")
    operational_statuses: tuple[str, ...] = (
        "Operational",
        "Needs Tenant",
        "Selling",
        "Rehab",
        "Closed",
    )

    # Portfolio cash-flow allowances, % of rent
    maintenance_pct: Decimal = Decimal("0.05")
    vacancy_pct: Decimal = Decimal("0.08")

    @classmethod
    def from_settings(cls, settings) -> "ReportPolicy":
        return cls(
            months=settings.default_report_months,
            top_expense_categories=settings.top_expense_categories,
        )


DEFAULT_SCORING_POLICY = ScoringPolicy()
DEFAULT_REPORT_POLICY = ReportPolicy()
