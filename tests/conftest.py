"""Shared fixtures for engine and API tests.

Typical deal: $100K offer + $20K rehab, $180K ARV, $1,500/mo rent, one unit.
With the default policy that is a $100K buffer-model loan ($665.30/mo at 7%),
$208.33/mo tax, $180 management and $130 fixed costs: $316.37/mo cashflow.

Reports run as of 2025-10-18, so the six-month window is 2025-05..2025-10
and the last full month is 2025-09.
"""

import pytest
from datetime import date, datetime
from dataclasses import replace
from decimal import Decimal

from propfolio.models.property import (
    BEHIND_ON_RENT,
    OCCUPIED,
    VACANT,
    CapitalCosts,
    Property,
    PropertyUnit,
    StatusChange,
)
from propfolio.models.transaction import Transaction


@pytest.fixture
def today() -> date:
    return date(2025, 10, 18)


@pytest.fixture
def as_of() -> datetime:
    return datetime(2025, 10, 18)


@pytest.fixture
def typical_property() -> Property:
    return Property(
        id="p1",
        address="1 Main St",
        status="Operational",
        offer_price=Decimal("100000"),
        rehab_costs=Decimal("20000"),
        arv=Decimal("180000"),
        potential_rent=Decimal("1500"),
        actual_rent=Decimal("1400"),
    )


@pytest.fixture
def typical_with_capital(typical_property) -> Property:
    """Typical deal with capital costs entered but no upfront repairs."""
    return replace(
        typical_property,
        capital_costs=CapitalCosts(
            down_payment=Decimal("30000"),
            closing_costs=Decimal("3000"),
        ),
    )


@pytest.fixture
def poor_property() -> Property:
    """Overpriced deal: negative cashflow, ARV ratio of 100%."""
    return Property(
        id="p2",
        address="2 Oak Ave",
        offer_price=Decimal("200000"),
        arv=Decimal("200000"),
        potential_rent=Decimal("500"),
    )


@pytest.fixture
def empty_property() -> Property:
    return Property()


@pytest.fixture
def mixed_units() -> list[PropertyUnit]:
    """Five units: two occupied, two vacant, one behind on rent."""
    return [
        PropertyUnit(OCCUPIED, Decimal("1100"), [StatusChange(OCCUPIED, "2024-01-01")]),
        PropertyUnit(VACANT, Decimal("1000"), [
            StatusChange(OCCUPIED, "2024-01-01"),
            StatusChange(VACANT, "2025-09-18"),
        ]),
        PropertyUnit(BEHIND_ON_RENT, Decimal("1200"), [StatusChange(BEHIND_ON_RENT, "2025-08-14")]),
        PropertyUnit(VACANT, Decimal("950"), [StatusChange(VACANT, "2025-10-08T00:00:00Z")]),
        PropertyUnit(OCCUPIED, Decimal("1050")),
    ]


@pytest.fixture
def p1_transactions() -> list[Transaction]:
    return [
        Transaction("2025-09-01", Decimal("1500"), "Rent", property_id="p1", id="t1"),
        Transaction("2025-09-05", Decimal("-200"), "Repairs", property_id="p1", id="t2"),
        Transaction("2025-09-10", Decimal("-100"), "Utilities", property_id="p1", id="t3"),
        Transaction("2025-08-01", Decimal("1500"), "Rent", property_id="p1", id="t4"),
        Transaction(
            "2025-08-15", Decimal("-15000"), "Roof", expense_type="Capital", property_id="p1", id="t5"
        ),
        Transaction("2024-12-01", Decimal("1500"), "Rent", property_id="p1", id="t6"),
        Transaction("2025-09-01", Decimal("900"), "Rent", property_id="p2", id="t7"),
    ]
