"""Purchase ratios and the two refinance models.

The buffer model sizes the post-rehab loan so that a fixed cash cushion stays
in the deal; the refinancing model is a flat percentage of ARV. Both are used
by different reports and must not be merged.

Pure functions: Decimal in, Decimal out. No I/O.
"""

from decimal import Decimal

from propfolio.models.policy import DEFAULT_SCORING_POLICY, ScoringPolicy


def total_investment(offer_price: Decimal, rehab_costs: Decimal) -> Decimal:
    return offer_price + rehab_costs


def rent_ratio(rent: Decimal, offer_price: Decimal, rehab_costs: Decimal) -> Decimal:
    """Monthly rent / (offer + rehab). 0 when nothing is invested."""
    invested = total_investment(offer_price, rehab_costs)
    if invested == 0:
        return Decimal("0")
    return rent / invested


def arv_ratio(offer_price: Decimal, rehab_costs: Decimal, arv: Decimal) -> Decimal:
    """(offer + rehab) / ARV. 0 when ARV is unknown."""
    if arv == 0:
        return Decimal("0")
    return total_investment(offer_price, rehab_costs) / arv


# ── Buffer model ─────────────────────────────────────────────────────────────

def down_payment(
    offer_price: Decimal, rehab_costs: Decimal, policy: ScoringPolicy = DEFAULT_SCORING_POLICY
) -> Decimal:
    return total_investment(offer_price, rehab_costs) * policy.down_payment_pct


def loan_amount(
    offer_price: Decimal, rehab_costs: Decimal, policy: ScoringPolicy = DEFAULT_SCORING_POLICY
) -> Decimal:
    return total_investment(offer_price, rehab_costs) - down_payment(offer_price, rehab_costs, policy)


def cash_remaining(policy: ScoringPolicy = DEFAULT_SCORING_POLICY) -> Decimal:
    return policy.cash_remaining


def new_loan(
    offer_price: Decimal, rehab_costs: Decimal, policy: ScoringPolicy = DEFAULT_SCORING_POLICY
) -> Decimal:
    """Post-refinance balance that returns everything but the cash buffer.

    new loan = loan amount + (down payment - cash remaining)
    """
    return loan_amount(offer_price, rehab_costs, policy) + cash_to_pull_out(
        offer_price, rehab_costs, policy
    )


def new_loan_percent_of_arv(
    offer_price: Decimal,
    rehab_costs: Decimal,
    arv: Decimal,
    policy: ScoringPolicy = DEFAULT_SCORING_POLICY,
) -> Decimal:
    if arv == 0:
        return Decimal("0")
    return new_loan(offer_price, rehab_costs, policy) / arv


def cash_to_pull_out(
    offer_price: Decimal, rehab_costs: Decimal, policy: ScoringPolicy = DEFAULT_SCORING_POLICY
) -> Decimal:
    return down_payment(offer_price, rehab_costs, policy) - cash_remaining(policy)


def home_equity(
    offer_price: Decimal,
    rehab_costs: Decimal,
    arv: Decimal,
    policy: ScoringPolicy = DEFAULT_SCORING_POLICY,
) -> Decimal:
    return arv - new_loan(offer_price, rehab_costs, policy)


# ── Refinancing model ────────────────────────────────────────────────────────

def refinancing_new_loan(arv: Decimal, policy: ScoringPolicy = DEFAULT_SCORING_POLICY) -> Decimal:
    return arv * policy.refinance_ltv


def refinancing_home_equity(arv: Decimal, policy: ScoringPolicy = DEFAULT_SCORING_POLICY) -> Decimal:
    return arv - refinancing_new_loan(arv, policy)
