"""Monthly cash flow for a rental at a given loan size.

Pure functions: Decimal in, Decimal out. No I/O.
"""

from decimal import Decimal, ROUND_HALF_UP

from propfolio.engine.debt import monthly_payment
from propfolio.engine.financing import refinancing_new_loan
from propfolio.models.policy import DEFAULT_SCORING_POLICY, ScoringPolicy
from propfolio.models.portfolio import CashFlowExpenses

TWO_PLACES = Decimal("0.01")


def policy_mortgage(loan: Decimal, policy: ScoringPolicy = DEFAULT_SCORING_POLICY) -> Decimal:
    return monthly_payment(loan, policy.interest_rate, policy.loan_term_years)


def monthly_property_tax(offer_price: Decimal, policy: ScoringPolicy = DEFAULT_SCORING_POLICY) -> Decimal:
    return (offer_price * policy.annual_tax_pct / 12).quantize(TWO_PLACES, ROUND_HALF_UP)


def cashflow_breakdown(
    rent: Decimal,
    offer_price: Decimal,
    loan: Decimal,
    policy: ScoringPolicy = DEFAULT_SCORING_POLICY,
) -> CashFlowExpenses:
    """Itemized monthly carrying costs. Every line is rounded to the cent."""
    management = (rent * policy.management_pct).quantize(TWO_PLACES, ROUND_HALF_UP)
    taxes = monthly_property_tax(offer_price, policy)
    other = policy.other_monthly_costs
    mortgage = policy_mortgage(loan, policy)
    return CashFlowExpenses(
        mortgage=mortgage,
        property_tax=taxes,
        property_management=management,
        other=other,
        total=management + taxes + other + mortgage,
    )


def monthly_cashflow(
    rent: Decimal,
    offer_price: Decimal,
    loan: Decimal,
    policy: ScoringPolicy = DEFAULT_SCORING_POLICY,
) -> Decimal:
    """Cashflow = rent - (management + taxes + other fixed costs + mortgage)."""
    return rent - cashflow_breakdown(rent, offer_price, loan, policy).total


def refinancing_cashflow(
    rent: Decimal,
    offer_price: Decimal,
    arv: Decimal,
    policy: ScoringPolicy = DEFAULT_SCORING_POLICY,
) -> Decimal:
    """Cashflow when the refinance is a flat percentage of ARV."""
    return monthly_cashflow(rent, offer_price, refinancing_new_loan(arv, policy), policy)
