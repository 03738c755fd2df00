"""Hold and flip investment scores.

Hold score (1-10) = cashflow-per-unit band (0-8) + rent ratio band (0-2).
Flip score (1-10) = ARV ratio band (0-10) + equity band (0-2).

The perfect-input solvers invert those bands: they return the smallest rent,
or the ARV, that lands a property on the top score with everything else held
fixed. Results are rounded up to the cent so they survive a round trip
through the forward formulas.
"""

import math
import warnings
from decimal import Decimal, ROUND_CEILING

from propfolio.engine.cashflow import monthly_cashflow, monthly_property_tax, policy_mortgage
from propfolio.engine.financing import (
    arv_ratio,
    home_equity,
    new_loan,
    rent_ratio,
    total_investment,
)
from propfolio.models.policy import DEFAULT_SCORING_POLICY, ScoringPolicy
from propfolio.models.property import Property
from propfolio.models.scores import FlipScoreBreakdown, HoldScoreBreakdown

TWO_PLACES = Decimal("0.01")


def _banded(value: Decimal, bands: tuple[tuple[Decimal, int], ...]) -> int:
    for floor, points in bands:
        if value >= floor:
            return points
    return 0


def _clamp(score: int, policy: ScoringPolicy) -> int:
    return min(policy.max_score, max(policy.min_score, score))


def _round_up_cents(value: Decimal) -> Decimal:
    return value.quantize(TWO_PLACES, ROUND_CEILING)


# ── Sub-scores ───────────────────────────────────────────────────────────────

def hold_cashflow_score(
    cashflow: Decimal, units: int | None = 1, policy: ScoringPolicy = DEFAULT_SCORING_POLICY
) -> int:
    """0-8 points by monthly cashflow per unit. Negative cashflow scores 0."""
    per_unit = cashflow / (units if units and units > 0 else 1)
    return _banded(per_unit, policy.cashflow_bands)


def hold_rent_ratio_score(ratio: Decimal, policy: ScoringPolicy = DEFAULT_SCORING_POLICY) -> int:
    """2 points at 1% or better, 1 point at 0.8%, else 0."""
    return _banded(ratio, policy.rent_ratio_bands)


def flip_arv_ratio_score(ratio: Decimal, policy: ScoringPolicy = DEFAULT_SCORING_POLICY) -> int:
    """Full points at or below 65%, minus one per full 3.5 points above it."""
    pct = ratio * 100
    if pct <= policy.flip_arv_threshold_pct:
        return policy.flip_arv_max_points
    deductions = math.floor((pct - policy.flip_arv_threshold_pct) / policy.flip_arv_step_pct)
    return max(0, policy.flip_arv_max_points - deductions)


def flip_equity_score(equity: Decimal, policy: ScoringPolicy = DEFAULT_SCORING_POLICY) -> int:
    """2 points at $75K+ of equity, 1 point at $60K+, else 0."""
    return _banded(equity, policy.equity_bands)


def calculate_hold_arv_ratio_score(ratio: Decimal) -> int:
    """Deprecated: ARV ratio no longer contributes to the hold score. Always 0."""
    warnings.warn(
        "calculate_hold_arv_ratio_score is deprecated; the hold score ignores ARV ratio",
        DeprecationWarning,
        stacklevel=2,
    )
    return 0


# ── Property scores ──────────────────────────────────────────────────────────

def property_cashflow(prop: Property, policy: ScoringPolicy = DEFAULT_SCORING_POLICY) -> Decimal:
    """Monthly cashflow at potential rent, financed with the buffer-model loan."""
    loan = new_loan(prop.offer_price, prop.rehab_costs, policy)
    return monthly_cashflow(prop.potential_rent, prop.offer_price, loan, policy)


def get_hold_score_breakdown(
    prop: Property, policy: ScoringPolicy = DEFAULT_SCORING_POLICY
) -> HoldScoreBreakdown:
    cashflow_score = hold_cashflow_score(property_cashflow(prop, policy), prop.unit_count, policy)
    rent_ratio_score = hold_rent_ratio_score(
        rent_ratio(prop.potential_rent, prop.offer_price, prop.rehab_costs), policy
    )
    return HoldScoreBreakdown(
        cashflow_score=cashflow_score,
        rent_ratio_score=rent_ratio_score,
        total_score=_clamp(cashflow_score + rent_ratio_score, policy),
    )


def get_flip_score_breakdown(
    prop: Property, policy: ScoringPolicy = DEFAULT_SCORING_POLICY
) -> FlipScoreBreakdown:
    arv_score = flip_arv_ratio_score(
        arv_ratio(prop.offer_price, prop.rehab_costs, prop.arv), policy
    )
    equity_score = flip_equity_score(
        home_equity(prop.offer_price, prop.rehab_costs, prop.arv, policy), policy
    )
    return FlipScoreBreakdown(
        arv_ratio_score=arv_score,
        equity_score=equity_score,
        total_score=_clamp(arv_score + equity_score, policy),
    )


def calculate_hold_score(prop: Property, policy: ScoringPolicy = DEFAULT_SCORING_POLICY) -> int:
    return get_hold_score_breakdown(prop, policy).total_score


def calculate_flip_score(prop: Property, policy: ScoringPolicy = DEFAULT_SCORING_POLICY) -> int:
    return get_flip_score_breakdown(prop, policy).total_score


def calculate_legacy_score(prop: Property, policy: ScoringPolicy = DEFAULT_SCORING_POLICY) -> int:
    """Single blended score used before the hold/flip split.

    Rent ratio (3) + ARV ratio (3) + equity (1) + whole-property cashflow (3),
    clamped to 1-10. Kept for callers that still store the old score.
    """
    ratio = rent_ratio(prop.potential_rent, prop.offer_price, prop.rehab_costs)
    arv = arv_ratio(prop.offer_price, prop.rehab_costs, prop.arv)
    equity = home_equity(prop.offer_price, prop.rehab_costs, prop.arv, policy)
    cashflow = property_cashflow(prop, policy)

    score = 0
    if ratio >= Decimal("0.01"):
        score += 3
    elif ratio >= Decimal("0.008"):
        score += 2
    elif ratio >= Decimal("0.006"):
        score += 1

    if arv <= Decimal("0.75"):
        score += 3
    elif arv <= Decimal("0.80"):
        score += 2
    elif arv <= Decimal("0.85"):
        score += 1

    if equity >= Decimal("60000"):
        score += 1

    if cashflow >= Decimal("200"):
        score += 3
    elif cashflow >= Decimal("100"):
        score += 2
    elif cashflow >= Decimal("0"):
        score += 1

    return _clamp(score, policy)


# ── Solvers ──────────────────────────────────────────────────────────────────

def calculate_perfect_rent_for_hold_score(
    offer_price: Decimal,
    rehab_costs: Decimal,
    arv: Decimal,
    units: int | None = 1,
    policy: ScoringPolicy = DEFAULT_SCORING_POLICY,
) -> Decimal:
    """Total monthly rent, to the cent, that earns both top hold bands.

    The cashflow band needs rent * (1 - management) to cover the top
    per-unit threshold for every unit plus taxes, fixed costs and mortgage.
    The rent ratio band needs rent >= top ratio * (offer + rehab). ARV does
    not enter the hold score; it is accepted so callers can pass a full
    property's inputs.

    With nothing invested the rent ratio is 0 by definition and no rent can
    earn its band, so the result is the cashflow requirement alone.
    """
    unit_count = units if units and units > 0 else 1
    top_cashflow = policy.cashflow_bands[0][0]
    top_ratio = policy.rent_ratio_bands[0][0]

    loan = new_loan(offer_price, rehab_costs, policy)
    required_cashflow = (
        top_cashflow * unit_count
        + monthly_property_tax(offer_price, policy)
        + policy.other_monthly_costs
        + policy_mortgage(loan, policy)
    )
    for_cashflow = _round_up_cents(required_cashflow / (1 - policy.management_pct))
    invested = total_investment(offer_price, rehab_costs)
    if invested <= 0:
        return for_cashflow
    for_ratio = _round_up_cents(top_ratio * invested)
    return max(for_cashflow, for_ratio)


def calculate_perfect_arv_for_flip_score(
    offer_price: Decimal,
    rehab_costs: Decimal,
    policy: ScoringPolicy = DEFAULT_SCORING_POLICY,
) -> Decimal:
    """ARV that puts the deal at the full-points ARV ratio with top-band equity."""
    invested = total_investment(offer_price, rehab_costs)
    for_ratio = _round_up_cents(invested * 100 / policy.flip_arv_threshold_pct)
    for_equity = _round_up_cents(
        new_loan(offer_price, rehab_costs, policy) + policy.equity_bands[0][0]
    )
    return max(for_ratio, for_equity, Decimal("0"))
