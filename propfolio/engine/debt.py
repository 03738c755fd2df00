"""Fixed-rate mortgage payment.

Pure functions: Decimal in, Decimal out. No I/O.
"""

from decimal import Decimal, ROUND_HALF_UP

TWO_PLACES = Decimal("0.01")
DEFAULT_ANNUAL_RATE = Decimal("0.07")
DEFAULT_TERM_YEARS = 30


def monthly_payment(
    principal: Decimal,
    annual_rate: Decimal = DEFAULT_ANNUAL_RATE,
    term_years: int = DEFAULT_TERM_YEARS,
) -> Decimal:
    """Calculate fixed monthly mortgage payment."""
    if principal <= 0 or term_years <= 0:
        return Decimal("0")
    if annual_rate <= 0:
        return (principal / (term_years * 12)).quantize(TWO_PLACES, ROUND_HALF_UP)

    r = annual_rate / 12
    n = term_years * 12
    # M = P * [r(1+r)^n] / [(1+r)^n - 1]
    factor = (1 + r) ** n
    payment = principal * (r * factor) / (factor - 1)
    return payment.quantize(TWO_PLACES, ROUND_HALF_UP)
