"""Fixed monthly payment calculation for amortizing loans"""

from decimal import Decimal
from typing import Union

from loan_intake.domain.money import MoneyAmount, to_decimal


def calculate_monthly_payment(
    principal: MoneyAmount,
    annual_interest_rate: Union[Decimal, float, int],
    term_months: int,
) -> MoneyAmount:
    """
    Compute the fixed payment that fully amortizes a loan over its term.

    Formula:
        PMT = P * (r * (1 + r)^n) / ((1 + r)^n - 1)

    where r is the monthly rate (annual percent / 12 / 100) and n the term in
    months. A zero rate is straight-line division: P / n.

    Inputs are expected to be pre-validated (term 1-360, rate 0-100). The
    only rounding happens when the result is wrapped in a MoneyAmount.

    Args:
        principal: Amount borrowed
        annual_interest_rate: Annual rate as a percentage (5.25 means 5.25%)
        term_months: Number of monthly payments

    Returns:
        Monthly payment in the principal's currency

    Example:
        10000 USD at 5.25% over 36 months -> 300.82 USD
        (figures quoted elsewhere as ~300.69 are approximate; 300.82 is exact)
    """
    monthly_rate = to_decimal(annual_interest_rate) / 12 / 100

    if monthly_rate == 0:
        return MoneyAmount(principal.amount / term_months, principal.currency_code)

    growth = (1 + monthly_rate) ** term_months
    payment = principal.amount * (monthly_rate * growth) / (growth - 1)

    return MoneyAmount(payment, principal.currency_code)
