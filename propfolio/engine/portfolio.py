"""Portfolio cash-flow and asset roll-ups.

Only properties in an operational status are reported; acquisition-phase
deals (Opportunity, Soft Offer, Hard Offer) are filtered out first. A
property whose numbers cannot be computed is reported as an error entry
instead of failing the whole portfolio.
"""

import logging
from decimal import Decimal, ROUND_HALF_UP

from propfolio.engine.cashflow import monthly_property_tax, policy_mortgage
from propfolio.engine.financing import new_loan
from propfolio.models.policy import (
    DEFAULT_REPORT_POLICY,
    DEFAULT_SCORING_POLICY,
    ReportPolicy,
    ScoringPolicy,
)
from propfolio.models.portfolio import (
    AssetSummary,
    CashFlowExpenses,
    CashFlowSummary,
    PortfolioAssetReport,
    PortfolioCashFlowReport,
    PropertyAssets,
    PropertyCashFlow,
    ReportError,
    ReportGenerationResult,
)
from propfolio.models.property import BEHIND_ON_RENT, VACANT, Property

logger = logging.getLogger(__name__)

TWO_PLACES = Decimal("0.01")
EXPENSE_FIELDS = (
    "mortgage",
    "property_tax",
    "insurance",
    "property_management",
    "maintenance",
    "vacancy",
    "other",
    "total",
)


def is_operational_property(status: str, policy: ReportPolicy = DEFAULT_REPORT_POLICY) -> bool:
    return (status or "").lower() in {s.lower() for s in policy.operational_statuses}


def _scenario_expenses(
    rent: Decimal,
    mortgage: Decimal,
    property_tax: Decimal,
    insurance: Decimal,
    policy: ReportPolicy,
    scoring: ScoringPolicy,
) -> CashFlowExpenses:
    management = (rent * scoring.management_pct).quantize(TWO_PLACES, ROUND_HALF_UP)
    maintenance = (rent * policy.maintenance_pct).quantize(TWO_PLACES, ROUND_HALF_UP)
    vacancy = (rent * policy.vacancy_pct).quantize(TWO_PLACES, ROUND_HALF_UP)
    other = Decimal("0")
    return CashFlowExpenses(
        mortgage=mortgage,
        property_tax=property_tax,
        insurance=insurance,
        property_management=management,
        maintenance=maintenance,
        vacancy=vacancy,
        other=other,
        total=mortgage + property_tax + insurance + management + maintenance + vacancy + other,
    )


def calculate_property_cash_flow(
    prop: Property,
    policy: ReportPolicy = DEFAULT_REPORT_POLICY,
    scoring: ScoringPolicy = DEFAULT_SCORING_POLICY,
) -> PropertyCashFlow:
    """Monthly cash flow at actual rent (current) and at potential rent."""
    units = prop.property_units or []
    behind = sum(1 for u in units if u.status == BEHIND_ON_RENT)
    vacant = sum(1 for u in units if u.status == VACANT)
    result = PropertyCashFlow(
        id=prop.id,
        address=prop.address,
        status=prop.status,
        operational_units=len(units) - behind - vacant,
        behind_rent_units=behind,
        vacant_units=vacant,
    )
    if not is_operational_property(prop.status, policy):
        return result

    # Fixed costs are the same in both scenarios
    mortgage = policy_mortgage(new_loan(prop.offer_price, prop.rehab_costs, scoring), scoring)
    property_tax = monthly_property_tax(prop.offer_price, scoring)
    insurance = scoring.other_monthly_costs

    current_rent = prop.actual_rent or Decimal("0")
    potential_rent = prop.potential_rent or Decimal("0")
    current = _scenario_expenses(current_rent, mortgage, property_tax, insurance, policy, scoring)
    potential = _scenario_expenses(potential_rent, mortgage, property_tax, insurance, policy, scoring)

    result.is_operational = True
    result.current_rent_income = current_rent
    result.current_expenses = current
    result.current_net_cash_flow = current_rent - current.total
    result.potential_rent_income = potential_rent
    result.potential_expenses = potential
    result.potential_net_cash_flow = potential_rent - potential.total
    return result


def calculate_property_assets(
    prop: Property,
    policy: ReportPolicy = DEFAULT_REPORT_POLICY,
    scoring: ScoringPolicy = DEFAULT_SCORING_POLICY,
) -> PropertyAssets:
    """Value, debt and equity. Falls back to ARV and the modeled loan when the
    current figures have not been entered."""
    operational = is_operational_property(prop.status, policy)
    value = prop.current_house_value if prop.current_house_value > 0 else prop.arv

    if prop.current_loan_value is not None and prop.current_loan_value > 0:
        loan = prop.current_loan_value
    elif operational:
        loan = new_loan(prop.offer_price, prop.rehab_costs, scoring)
    else:
        loan = Decimal("0")

    equity = value - loan
    equity_pct = Decimal("0")
    if value > 0:
        equity_pct = (equity / value * 100).quantize(TWO_PLACES, ROUND_HALF_UP)

    return PropertyAssets(
        id=prop.id,
        address=prop.address,
        status=prop.status,
        current_value=value,
        loan_value=loan,
        equity=equity,
        equity_percent=equity_pct,
        is_operational=operational,
    )


def _sum_expenses(rows: list[CashFlowExpenses]) -> CashFlowExpenses:
    return CashFlowExpenses(**{
        name: sum((getattr(r, name) for r in rows), Decimal("0")) for name in EXPENSE_FIELDS
    })


def _report_error(prop: Property, message: str, exc: Exception) -> ReportError:
    logger.warning("%s %s (%s): %s", message, prop.id, prop.address, exc)
    return ReportError(
        message=message,
        property_id=prop.id,
        property_address=prop.address,
        details=str(exc),
    )


def aggregate_cash_flow_data(
    properties: list[Property],
    policy: ReportPolicy = DEFAULT_REPORT_POLICY,
    scoring: ScoringPolicy = DEFAULT_SCORING_POLICY,
) -> ReportGenerationResult[PortfolioCashFlowReport]:
    errors: list[ReportError] = []
    rows: list[PropertyCashFlow] = []

    for prop in properties:
        if not is_operational_property(prop.status, policy):
            continue
        try:
            rows.append(calculate_property_cash_flow(prop, policy, scoring))
        except (ArithmeticError, TypeError, ValueError) as e:
            errors.append(_report_error(prop, "Failed to calculate cash flow for property", e))

    summary = CashFlowSummary(
        current_total_rent_income=sum((r.current_rent_income for r in rows), Decimal("0")),
        current_total_expenses=_sum_expenses([r.current_expenses for r in rows]),
        current_total_net_cash_flow=sum((r.current_net_cash_flow for r in rows), Decimal("0")),
        potential_total_rent_income=sum((r.potential_rent_income for r in rows), Decimal("0")),
        potential_total_expenses=_sum_expenses([r.potential_expenses for r in rows]),
        potential_total_net_cash_flow=sum((r.potential_net_cash_flow for r in rows), Decimal("0")),
        properties_count=len(rows),
        operational_properties_count=sum(1 for r in rows if r.is_operational),
        total_operational_units=sum(r.operational_units for r in rows),
        total_behind_rent_units=sum(r.behind_rent_units for r in rows),
        total_vacant_units=sum(r.vacant_units for r in rows),
    )

    return ReportGenerationResult(
        data=PortfolioCashFlowReport(properties=rows, summary=summary),
        errors=errors,
    )


def aggregate_asset_data(
    properties: list[Property],
    policy: ReportPolicy = DEFAULT_REPORT_POLICY,
    scoring: ScoringPolicy = DEFAULT_SCORING_POLICY,
) -> ReportGenerationResult[PortfolioAssetReport]:
    errors: list[ReportError] = []
    rows: list[PropertyAssets] = []

    for prop in properties:
        if not is_operational_property(prop.status, policy):
            continue
        try:
            rows.append(calculate_property_assets(prop, policy, scoring))
        except (ArithmeticError, TypeError, ValueError) as e:
            errors.append(_report_error(prop, "Failed to calculate assets for property", e))

    total_value = sum((r.current_value for r in rows), Decimal("0"))
    total_loan = sum((r.loan_value for r in rows), Decimal("0"))
    total_equity = sum((r.equity for r in rows), Decimal("0"))
    average_pct = Decimal("0")
    if total_value > 0:
        average_pct = (total_equity / total_value * 100).quantize(TWO_PLACES, ROUND_HALF_UP)

    summary = AssetSummary(
        total_property_value=total_value,
        total_loan_value=total_loan,
        total_equity=total_equity,
        average_equity_percent=average_pct,
        properties_count=len(rows),
        operational_properties_count=sum(1 for r in rows if r.is_operational),
    )

    return ReportGenerationResult(
        data=PortfolioAssetReport(properties=rows, summary=summary),
        errors=errors,
    )
