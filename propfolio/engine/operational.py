"""Operational health signals for one property: vacancies, delinquencies,
loss streaks, occupancy and where the money went last month.

Reads unit status history and an existing P&L report; writes nothing.
"""

import logging
import math
from datetime import datetime, timezone
from decimal import Decimal, ROUND_HALF_UP

from propfolio.models.metrics import (
    DelinquentUnitInfo,
    ExpenseCategoryAmount,
    LastMonthSnapshot,
    OperationalMetrics,
    VacantUnitInfo,
)
from propfolio.models.policy import DEFAULT_REPORT_POLICY, ReportPolicy
from propfolio.models.property import BEHIND_ON_RENT, VACANT, Property, PropertyUnit
from propfolio.models.reports import MonthlyPLData, PropertyPLReport

logger = logging.getLogger(__name__)

SECONDS_PER_DAY = 24 * 60 * 60


def _as_naive_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def days_since_status_change(unit: PropertyUnit, as_of: datetime | None = None) -> int:
    """Whole days (rounded up) since the unit's current status began.

    0 when there is no history or the start date cannot be read.
    """
    if not unit.status_history:
        return 0

    started = unit.status_history[-1].date_start
    try:
        start = datetime.fromisoformat(started.replace("Z", "+00:00"))
    except (AttributeError, ValueError):
        logger.debug("Unreadable status start date %r", started)
        return 0

    now = _as_naive_utc(as_of or datetime.now(timezone.utc))
    elapsed = abs((now - _as_naive_utc(start)).total_seconds())
    return math.ceil(elapsed / SECONDS_PER_DAY)


def occupancy_rate(units: list[PropertyUnit]) -> int:
    """Percent of units not vacant, rounded half up. 0 for a property with no units."""
    if not units:
        return 0
    occupied = sum(1 for u in units if u.status != VACANT)
    return int((Decimal(occupied) * 100 / len(units)).quantize(Decimal("1"), ROUND_HALF_UP))


def get_vacant_units(units: list[PropertyUnit], as_of: datetime | None = None) -> list[VacantUnitInfo]:
    """Vacant units, longest vacancy first. Unit numbers are list positions."""
    vacant = [
        VacantUnitInfo(
            unit_number=index + 1,
            rent=unit.rent,
            days_vacant=days_since_status_change(unit, as_of),
            status=unit.status,
        )
        for index, unit in enumerate(units)
        if unit.status == VACANT
    ]
    return sorted(vacant, key=lambda u: u.days_vacant, reverse=True)


def get_delinquent_units(
    units: list[PropertyUnit],
    as_of: datetime | None = None,
    policy: ReportPolicy = DEFAULT_REPORT_POLICY,
) -> list[DelinquentUnitInfo]:
    """Units behind on rent, longest first, with rent owed for each full period."""
    delinquent = []
    for index, unit in enumerate(units):
        if unit.status != BEHIND_ON_RENT:
            continue
        days = days_since_status_change(unit, as_of)
        delinquent.append(DelinquentUnitInfo(
            unit_number=index + 1,
            rent=unit.rent,
            days_behind=days,
            amount_owed=unit.rent * (days // policy.days_per_rent_period),
        ))
    return sorted(delinquent, key=lambda u: u.days_behind, reverse=True)


def consecutive_months_with_losses(months: list[MonthlyPLData]) -> int:
    """Length of the run of negative-net months ending at the latest month."""
    streak = 0
    for month in reversed(months):
        if month.net_income >= 0:
            break
        streak += 1
    return streak


def find_last_active_month(months: list[MonthlyPLData]) -> MonthlyPLData | None:
    """Latest month with any income or expenses; else the latest month, if any."""
    for month in reversed(months):
        if month.has_activity:
            return month
    return months[-1] if months else None


def get_top_expense_categories(
    month: MonthlyPLData | None, limit: int = DEFAULT_REPORT_POLICY.top_expense_categories
) -> list[ExpenseCategoryAmount]:
    if month is None:
        return []
    ranked = sorted(month.expenses_by_category.items(), key=lambda item: item[1], reverse=True)
    return [ExpenseCategoryAmount(category=c, amount=a) for c, a in ranked[:limit]]


def calculate_operational_metrics(
    prop: Property,
    pl_report: PropertyPLReport,
    as_of: datetime | None = None,
    policy: ReportPolicy = DEFAULT_REPORT_POLICY,
) -> OperationalMetrics:
    units = prop.property_units or []
    last = find_last_active_month(pl_report.months)

    snapshot = LastMonthSnapshot()
    if last is not None:
        snapshot = LastMonthSnapshot(
            income=last.total_income,
            expenses=last.total_expenses,
            cashflow=last.net_income,
        )

    return OperationalMetrics(
        consecutive_months_with_losses=consecutive_months_with_losses(pl_report.months),
        vacant_units=get_vacant_units(units, as_of),
        delinquent_units=get_delinquent_units(units, as_of, policy),
        last_month=snapshot,
        occupancy_rate=occupancy_rate(units),
        top_expense_categories=get_top_expense_categories(last, policy.top_expense_categories),
    )
