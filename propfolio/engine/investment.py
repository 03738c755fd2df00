"""Investment summary: every metric the deal report shows for one property."""

from decimal import Decimal, ROUND_HALF_UP

from propfolio.engine.financing import (
    arv_ratio,
    home_equity,
    new_loan,
    rent_ratio,
    total_investment,
)
from propfolio.engine.scoring import (
    calculate_perfect_arv_for_flip_score,
    calculate_perfect_rent_for_hold_score,
    get_flip_score_breakdown,
    get_hold_score_breakdown,
    property_cashflow,
)
from propfolio.models.policy import DEFAULT_SCORING_POLICY, ScoringPolicy
from propfolio.models.property import Property
from propfolio.models.scores import InvestmentMetrics, ReportIssue

FOUR_PLACES = Decimal("0.0001")


def validate_property_data(prop: Property) -> list[ReportIssue]:
    """Collect missing-input problems. Errors block a meaningful report; warnings
    mean a default was used."""
    issues: list[ReportIssue] = []

    if not prop.address:
        issues.append(ReportIssue("address", "Property address is required", "error"))
    if prop.offer_price <= 0:
        issues.append(ReportIssue("offer_price", "Valid offer price is required", "error"))
    if prop.arv <= 0:
        issues.append(ReportIssue("arv", "ARV is required for investment analysis", "error"))
    if prop.potential_rent <= 0:
        issues.append(ReportIssue("potential_rent", "Potential rent is required", "error"))

    if prop.capital_costs is None:
        issues.append(ReportIssue(
            "capital_costs", "Capital costs data missing - will use defaults", "warning"
        ))
    if prop.monthly_expenses is None:
        issues.append(ReportIssue(
            "monthly_expenses", "Monthly expenses data missing - will estimate", "warning"
        ))

    return issues


def calculate_investment_metrics(
    prop: Property, policy: ScoringPolicy = DEFAULT_SCORING_POLICY
) -> InvestmentMetrics:
    hold = get_hold_score_breakdown(prop, policy)
    flip = get_flip_score_breakdown(prop, policy)
    cashflow = property_cashflow(prop, policy)

    # Capital requirements; repairs default to the rehab estimate
    capital = prop.capital_costs
    down = capital.down_payment if capital else Decimal("0")
    closing = capital.closing_costs if capital else Decimal("0")
    repairs = capital.upfront_repairs if capital and capital.upfront_repairs else prop.rehab_costs
    other = capital.other if capital else Decimal("0")
    total_capital = down + closing + repairs + other

    annual_cashflow = cashflow * 12
    roi = Decimal("0")
    if total_capital > 0:
        roi = (annual_cashflow / total_capital).quantize(FOUR_PLACES, ROUND_HALF_UP)

    perfect_rent = None
    perfect_arv = None
    if total_investment(prop.offer_price, prop.rehab_costs) > 0:
        perfect_rent = calculate_perfect_rent_for_hold_score(
            prop.offer_price, prop.rehab_costs, prop.arv, prop.unit_count, policy
        )
        perfect_arv = calculate_perfect_arv_for_flip_score(prop.offer_price, prop.rehab_costs, policy)

    return InvestmentMetrics(
        rent_ratio=rent_ratio(prop.potential_rent, prop.offer_price, prop.rehab_costs),
        arv_ratio=arv_ratio(prop.offer_price, prop.rehab_costs, prop.arv),
        hold_score=hold.total_score,
        flip_score=flip.total_score,
        hold_score_breakdown=hold,
        flip_score_breakdown=flip,
        home_equity=home_equity(prop.offer_price, prop.rehab_costs, prop.arv, policy),
        monthly_cashflow=cashflow,
        new_loan=new_loan(prop.offer_price, prop.rehab_costs, policy),
        down_payment=down,
        closing_costs=closing,
        upfront_repairs=repairs,
        other_capital_costs=other,
        total_capital_required=total_capital,
        annual_cashflow=annual_cashflow,
        monthly_income=prop.potential_rent,
        monthly_expenses=prop.monthly_expenses.total if prop.monthly_expenses else Decimal("0"),
        roi_projection=roi,
        perfect_rent=perfect_rent,
        perfect_arv=perfect_arv,
        issues=validate_property_data(prop),
    )
