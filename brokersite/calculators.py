from __future__ import annotations
from typing import Tuple

import pandas as pd

from brokersite.models import (
    AffordabilityInputs,
    AffordabilityResult,
    MortgagePaymentInputs,
    MortgagePaymentResult,
    nz,
)
from brokersite.presets import PAYMENTS_PER_YEAR, TDS_RATIO


def monthly_payment(principal, annual_rate_pct, term_years):
    """Calculate the fully amortizing monthly payment for a loan.

    ``principal`` is the starting loan amount, ``annual_rate_pct`` is the
    nominal yearly interest rate (e.g. ``5.0`` for 5%), and ``term_years`` is
    the amortization period in years.  A zero rate falls back to straight-line
    repayment so the compound formula never divides by zero.  Discounting with
    ``(1 + r) ** -n`` lets extreme rates or terms settle on the interest-only
    payment instead of overflowing.
    """

    L = nz(principal)
    r = nz(annual_rate_pct) / 100 / 12
    n = int(nz(term_years) * 12)
    if n <= 0:
        return 0.0
    if r == 0:
        return L / n
    return (r * L) / (1 - (1 + r) ** (-n))


def principal_from_payment(payment, annual_rate_pct, term_years):
    """Reverse amortization to find the loan amount for a given payment.

    This is the present-value dual of :func:`monthly_payment`: given a payment
    target, rate and term, determine the maximum principal that fits.  A
    negative rate has no meaningful answer and yields ``0``.
    """

    P = nz(payment)
    r = nz(annual_rate_pct) / 100 / 12
    n = int(nz(term_years) * 12)
    if n <= 0:
        return 0.0
    if r == 0:
        return P * n
    if r < 0:
        return 0.0
    return P * (1 - (1 + r) ** (-n)) / r


def compute_payment(inputs: MortgagePaymentInputs) -> MortgagePaymentResult:
    """Periodic payment, total interest and total cost for the payment calculator.

    ``bi-weekly`` spreads twelve monthly payments over 26 periods so the
    annual total is unchanged; ``accelerated-bi-weekly`` pays half the
    monthly amount 26 times a year, which repays the loan faster.
    """

    principal = inputs.price - inputs.down_payment
    if principal <= 0 or inputs.amortization_years <= 0:
        return MortgagePaymentResult()

    base = monthly_payment(principal, inputs.annual_rate_percent, inputs.amortization_years)
    freq = inputs.payment_frequency
    if freq == "bi-weekly":
        payment = base * 12 / 26
    elif freq == "accelerated-bi-weekly":
        payment = base / 2
    else:
        payment = base
    total_cost = payment * PAYMENTS_PER_YEAR[freq] * inputs.amortization_years
    return MortgagePaymentResult(
        periodic_payment=payment,
        total_interest=total_cost - principal,
        total_cost=total_cost,
    )


def sync_down_payment(inputs: MortgagePaymentInputs, field: str, value) -> MortgagePaymentInputs:
    """Apply one edit to the payment calculator inputs.

    Price, down payment and down payment percent are bound together: the
    edited field wins and the dependent field is recomputed from it.
    """

    if field in ("payment_frequency", "amortization_years"):
        # validate through the model so frequency names and year coercion stay in one place
        checked = MortgagePaymentInputs(**{field: value})
        return inputs.model_copy(update={field: getattr(checked, field)})

    val = nz(value)
    if field == "price":
        return inputs.model_copy(
            update={"price": val, "down_payment": val * inputs.down_payment_percent / 100}
        )
    if field == "down_payment":
        pct = val / inputs.price * 100 if inputs.price > 0 else 0.0
        return inputs.model_copy(update={"down_payment": val, "down_payment_percent": pct})
    if field == "down_payment_percent":
        return inputs.model_copy(
            update={"down_payment_percent": val, "down_payment": inputs.price * val / 100}
        )
    if field == "annual_rate_percent":
        return inputs.model_copy(update={"annual_rate_percent": val})
    raise KeyError(field)


def guideline_payment(annual_income, monthly_debts, tds_ratio=TDS_RATIO):
    """Housing payment left under the TDS ratio once existing debts are paid."""

    return max(0.0, nz(annual_income) / 12 * tds_ratio - nz(monthly_debts))


def compute_affordability(
    inputs: AffordabilityInputs,
) -> Tuple[AffordabilityResult, AffordabilityInputs]:
    """Solve for the largest mortgage a monthly payment supports.

    Until the user edits the desired payment it tracks the guideline payment,
    so the returned inputs may carry a refreshed ``desired_monthly_payment``.
    After an override the stored value is used verbatim.
    """

    guideline = guideline_payment(inputs.annual_income, inputs.monthly_debts)

    payment_to_use = inputs.desired_monthly_payment
    if not inputs.user_has_overridden_payment and inputs.desired_monthly_payment != guideline:
        inputs = inputs.model_copy(update={"desired_monthly_payment": round(guideline, 2)})
        payment_to_use = guideline

    max_mortgage = principal_from_payment(
        payment_to_use, inputs.annual_rate_percent, inputs.amortization_years
    )
    return (
        AffordabilityResult(
            max_mortgage=max_mortgage,
            max_purchase_price=max_mortgage + inputs.down_payment,
            guideline_payment=guideline,
        ),
        inputs,
    )


def edit_affordability(inputs: AffordabilityInputs, field: str, value) -> AffordabilityInputs:
    """Apply one edit; touching the desired payment marks it as overridden for good."""

    if field not in AffordabilityInputs.model_fields or field == "user_has_overridden_payment":
        raise KeyError(field)
    update = AffordabilityInputs(**{field: value}).model_dump(include={field})
    if field == "desired_monthly_payment":
        update["user_has_overridden_payment"] = True
    return inputs.model_copy(update=update)


def amortization_schedule(principal, annual_rate_pct, term_years) -> pd.DataFrame:
    """Month-by-month amortization aggregated by year.

    Columns are ``Year``, ``Interest``, ``Principal`` and ``Ending Balance``.
    An empty frame is returned when there is nothing to amortize.
    """

    L = nz(principal)
    n = int(nz(term_years) * 12)
    cols = ["Year", "Interest", "Principal", "Ending Balance"]
    if L <= 0 or n <= 0:
        return pd.DataFrame(columns=cols)
    r = nz(annual_rate_pct) / 100 / 12
    pmt = monthly_payment(L, annual_rate_pct, term_years)

    rows = []
    bal = L
    interest_ytd = 0.0
    principal_ytd = 0.0
    for m in range(1, n + 1):
        interest = bal * r
        paid = min(pmt - interest, bal)
        bal -= paid
        interest_ytd += interest
        principal_ytd += paid
        if m % 12 == 0 or m == n:
            rows.append(
                {
                    "Year": (m - 1) // 12 + 1,
                    "Interest": interest_ytd,
                    "Principal": principal_ytd,
                    "Ending Balance": max(bal, 0.0),
                }
            )
            interest_ytd = 0.0
            principal_ytd = 0.0
    return pd.DataFrame(rows, columns=cols)
