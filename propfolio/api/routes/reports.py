"""P&L, operational and portfolio report routes.

Callers post the records to report on; nothing is read from or written to
storage here.
"""

from fastapi import APIRouter, Depends

from propfolio.api.deps import get_report_policy, get_scoring_policy
from propfolio.api.schemas import (
    AssetReportResponse,
    CashFlowReportResponse,
    OperationalRequest,
    OperationalResponse,
    PortfolioPLRequest,
    PortfolioRequest,
    PropertyPLRequest,
)
from propfolio.engine.operational import calculate_operational_metrics
from propfolio.engine.pl_report import generate_portfolio_pl_report, generate_property_pl_report
from propfolio.engine.portfolio import aggregate_asset_data, aggregate_cash_flow_data
from propfolio.models.policy import ReportPolicy, ScoringPolicy
from propfolio.models.reports import PortfolioPLReport, PropertyPLReport

router = APIRouter(prefix="/api/v1/reports", tags=["reports"])


@router.post("/property-pl", response_model=PropertyPLReport)
async def property_pl(req: PropertyPLRequest, policy: ReportPolicy = Depends(get_report_policy)):
    return generate_property_pl_report(
        req.transactions,
        req.property_id,
        req.property_address,
        months=req.months or policy.months,
        policy=policy,
    )


@router.post("/portfolio-pl", response_model=PortfolioPLReport)
async def portfolio_pl(req: PortfolioPLRequest, policy: ReportPolicy = Depends(get_report_policy)):
    return generate_portfolio_pl_report(
        req.transactions,
        req.properties,
        months=req.months or policy.months,
        policy=policy,
    )


@router.post("/operational", response_model=OperationalResponse)
async def operational(req: OperationalRequest, policy: ReportPolicy = Depends(get_report_policy)):
    """P&L for one property plus the vacancy/delinquency signals built on it."""
    prop = req.property
    report = generate_property_pl_report(
        req.transactions,
        prop.id,
        prop.address,
        months=req.months or policy.months,
        policy=policy,
    )
    return OperationalResponse(
        pl_report=report,
        metrics=calculate_operational_metrics(prop, report, policy=policy),
    )


@router.post("/cash-flow", response_model=CashFlowReportResponse)
async def cash_flow(
    req: PortfolioRequest,
    policy: ReportPolicy = Depends(get_report_policy),
    scoring: ScoringPolicy = Depends(get_scoring_policy),
):
    result = aggregate_cash_flow_data(req.properties, policy, scoring)
    return CashFlowReportResponse(data=result.data, errors=result.errors, has_warnings=result.has_warnings)


@router.post("/assets", response_model=AssetReportResponse)
async def assets(
    req: PortfolioRequest,
    policy: ReportPolicy = Depends(get_report_policy),
    scoring: ScoringPolicy = Depends(get_scoring_policy),
):
    result = aggregate_asset_data(req.properties, policy, scoring)
    return AssetReportResponse(data=result.data, errors=result.errors, has_warnings=result.has_warnings)
