"""Profit-and-loss aggregation over trailing calendar months.

Transactions are bucketed by the "YYYY-MM" prefix of their reporting date
(override date if present). Slicing the raw string instead of parsing it into
a local datetime keeps a transaction dated "2025-09-01" in September no
matter which timezone the report runs in.
"""

import logging
from collections.abc import Iterable
from datetime import date
from decimal import Decimal, ROUND_HALF_UP

from propfolio.models.policy import DEFAULT_REPORT_POLICY, ReportPolicy
from propfolio.models.property import Property
from propfolio.models.reports import (
    MonthlyPLData,
    PLSummary,
    PortfolioPLReport,
    PropertyBreakdown,
    PropertyPLReport,
)
from propfolio.models.transaction import Transaction

logger = logging.getLogger(__name__)

TWO_PLACES = Decimal("0.01")


def _month_index(day: date) -> int:
    return day.year * 12 + day.month - 1


def _month_key(index: int) -> str:
    year, month = divmod(index, 12)
    return f"{year:04d}-{month + 1:02d}"


def month_keys(months: int, today: date | None = None) -> list[str]:
    """The `months` calendar-month keys ending at today's month, oldest first."""
    current = _month_index(today or date.today())
    return [_month_key(current - offset) for offset in range(months - 1, -1, -1)]


def last_full_month_key(today: date | None = None) -> str:
    """The calendar month before the current (in-progress) one."""
    return _month_key(_month_index(today or date.today()) - 1)


def report_month_key(txn: Transaction) -> str | None:
    """'YYYY-MM' bucket for a transaction, or None if its date is unusable."""
    raw = txn.report_date
    try:
        date.fromisoformat(raw[:10])
    except (TypeError, ValueError):
        logger.debug("Skipping transaction %r with unparsable date %r", txn.id, raw)
        return None
    return raw[:7]


def _add(bucket: MonthlyPLData, txn: Transaction) -> None:
    if txn.amount > 0:
        bucket.income_by_category[txn.category] = (
            bucket.income_by_category.get(txn.category, Decimal("0")) + txn.amount
        )
        bucket.total_income += txn.amount
    elif txn.amount < 0:
        expense = abs(txn.amount)
        bucket.expenses_by_category[txn.category] = (
            bucket.expenses_by_category.get(txn.category, Decimal("0")) + expense
        )
        bucket.total_expenses += expense


def build_monthly_data(transactions: Iterable[Transaction], keys: list[str]) -> list[MonthlyPLData]:
    """One bucket per key, in key order. Months without activity stay zeroed."""
    buckets = {key: MonthlyPLData(month=key) for key in keys}
    for txn in transactions:
        bucket = buckets.get(report_month_key(txn))
        if bucket is not None:
            _add(bucket, txn)

    for bucket in buckets.values():
        bucket.net_income = bucket.total_income - bucket.total_expenses
    return list(buckets.values())


def _mean(values: Iterable[Decimal], count: int) -> Decimal:
    return (sum(values, Decimal("0")) / count).quantize(TWO_PLACES, ROUND_HALF_UP)


def trailing_average(months: list[MonthlyPLData]) -> PLSummary:
    """Mean of every bucket, empty months included. Each figure is its own
    rounded mean, net income included."""
    if not months:
        return PLSummary()
    count = len(months)
    return PLSummary(
        total_income=_mean((m.total_income for m in months), count),
        total_expenses=_mean((m.total_expenses for m in months), count),
        net_income=_mean((m.net_income for m in months), count),
    )


def _summary_for(months: list[MonthlyPLData], key: str) -> PLSummary:
    for m in months:
        if m.month == key:
            return PLSummary(
                total_income=m.total_income,
                total_expenses=m.total_expenses,
                net_income=m.net_income,
            )
    return PLSummary()


def generate_property_pl_report(
    transactions: Iterable[Transaction],
    property_id: str,
    property_address: str,
    months: int = DEFAULT_REPORT_POLICY.months,
    today: date | None = None,
    policy: ReportPolicy = DEFAULT_REPORT_POLICY,
) -> PropertyPLReport:
    """P&L for one property's operating transactions over the last `months` months."""
    today = today or date.today()
    filtered = [
        t for t in transactions
        if t.property_id == property_id and t.expense_type == policy.operating_expense_type
    ]
    monthly = build_monthly_data(filtered, month_keys(months, today))

    return PropertyPLReport(
        property_id=property_id,
        property_address=property_address,
        months=monthly,
        six_month_average=trailing_average(monthly),
        last_full_month=_summary_for(monthly, last_full_month_key(today)),
    )


def reportable_properties(
    properties: Iterable[Property], policy: ReportPolicy = DEFAULT_REPORT_POLICY
) -> dict[str, str]:
    """id -> address for properties that belong in portfolio reports."""
    excluded = {s.lower() for s in policy.excluded_statuses}
    return {
        p.id: p.address
        for p in properties
        if not p.archived and (p.status or "").lower() not in excluded
    }


def _is_business(property_id: str | None, policy: ReportPolicy) -> bool:
    return property_id is None or property_id == policy.business_key


def _breakdowns(
    transactions: list[Transaction],
    addresses: dict[str, str],
    window: set[str],
    last_month: str,
    policy: ReportPolicy,
) -> list[PropertyBreakdown]:
    by_property: dict[str, PropertyBreakdown] = {}

    for txn in transactions:
        key = report_month_key(txn)
        if key not in window:
            continue

        prop_id = policy.business_key if _is_business(txn.property_id, policy) else txn.property_id
        row = by_property.get(prop_id)
        if row is None:
            address = (
                policy.business_label if prop_id == policy.business_key
                else addresses.get(prop_id, prop_id)
            )
            row = by_property[prop_id] = PropertyBreakdown(prop_id, address)

        is_last_month = key == last_month
        if txn.amount > 0:
            row.total_income += txn.amount
            if is_last_month:
                row.last_month_income += txn.amount
        elif txn.amount < 0:
            row.total_expenses += abs(txn.amount)
            if is_last_month:
                row.last_month_expenses += abs(txn.amount)

    for row in by_property.values():
        row.net_income = row.total_income - row.total_expenses
        row.last_month_net_income = row.last_month_income - row.last_month_expenses

    return sorted(by_property.values(), key=lambda r: r.net_income, reverse=True)


def generate_portfolio_pl_report(
    transactions: Iterable[Transaction],
    properties: Iterable[Property],
    months: int = DEFAULT_REPORT_POLICY.months,
    today: date | None = None,
    policy: ReportPolicy = DEFAULT_REPORT_POLICY,
) -> PortfolioPLReport:
    """P&L across all active properties plus business (no-property) transactions.

    Archived properties and properties still in acquisition are left out.
    """
    today = today or date.today()
    addresses = reportable_properties(properties, policy)
    filtered = [
        t for t in transactions
        if t.expense_type == policy.operating_expense_type
        and (_is_business(t.property_id, policy) or t.property_id in addresses)
    ]

    keys = month_keys(months, today)
    last_month = last_full_month_key(today)
    monthly = build_monthly_data(filtered, keys)

    return PortfolioPLReport(
        months=monthly,
        six_month_average=trailing_average(monthly),
        last_full_month=_summary_for(monthly, last_month),
        property_breakdowns=_breakdowns(filtered, addresses, set(keys), last_month, policy),
    )


def get_income_categories(report: PropertyPLReport | PortfolioPLReport) -> list[str]:
    return sorted({cat for m in report.months for cat in m.income_by_category})


def get_expense_categories(report: PropertyPLReport | PortfolioPLReport) -> list[str]:
    return sorted({cat for m in report.months for cat in m.expenses_by_category})
