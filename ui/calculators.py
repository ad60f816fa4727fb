import streamlit as st

from brokersite.calculators import (
    amortization_schedule,
    compute_affordability,
    compute_payment,
    edit_affordability,
    sync_down_payment,
)
from brokersite.presets import DISCLAIMER, FREQUENCY_LABELS, PAYMENT_FREQUENCIES
from core.state import (
    get_affordability_inputs,
    get_payment_inputs,
    set_affordability_inputs,
    set_payment_inputs,
)

PAYMENT_FIELDS = [
    "price",
    "down_payment",
    "down_payment_percent",
    "annual_rate_percent",
    "amortization_years",
    "payment_frequency",
]
AFFORD_FIELDS = [
    "annual_income",
    "monthly_debts",
    "down_payment",
    "annual_rate_percent",
    "amortization_years",
    "desired_monthly_payment",
]


def _pay_key(field: str) -> str:
    return f"pay_{field}"


def _afford_key(field: str) -> str:
    return f"afford_{field}"


def _push_payment_widgets(inputs) -> None:
    for f in PAYMENT_FIELDS:
        st.session_state[_pay_key(f)] = getattr(inputs, f)


def _on_payment_edit(field: str) -> None:
    inputs = sync_down_payment(get_payment_inputs(), field, st.session_state[_pay_key(field)])
    set_payment_inputs(inputs)
    _push_payment_widgets(inputs)


def _on_afford_edit(field: str) -> None:
    inputs = edit_affordability(get_affordability_inputs(), field, st.session_state[_afford_key(field)])
    set_affordability_inputs(inputs)


def render_payment_calculator():
    """Mortgage payment calculator with bound price / down payment fields."""
    inputs = get_payment_inputs()
    _push_payment_widgets(inputs)

    st.subheader("Mortgage Payment Calculator")
    left, right = st.columns(2)
    with left:
        st.number_input(
            "Purchase Price ($)", min_value=0.0, step=1000.0,
            key=_pay_key("price"), on_change=_on_payment_edit, args=("price",),
        )
        c1, c2 = st.columns([2, 1])
        c1.number_input(
            "Down Payment ($)", min_value=0.0, step=1000.0,
            key=_pay_key("down_payment"), on_change=_on_payment_edit, args=("down_payment",),
        )
        c2.number_input(
            "Down Payment (%)", min_value=0.0, step=1.0,
            key=_pay_key("down_payment_percent"), on_change=_on_payment_edit, args=("down_payment_percent",),
        )
        st.number_input(
            "Interest Rate (%)", min_value=0.0, step=0.01,
            key=_pay_key("annual_rate_percent"), on_change=_on_payment_edit, args=("annual_rate_percent",),
        )
        st.number_input(
            "Amortization (years)", min_value=1, max_value=40, step=1,
            key=_pay_key("amortization_years"), on_change=_on_payment_edit, args=("amortization_years",),
        )
        st.selectbox(
            "Payment Frequency", PAYMENT_FREQUENCIES, format_func=FREQUENCY_LABELS.get,
            key=_pay_key("payment_frequency"), on_change=_on_payment_edit, args=("payment_frequency",),
        )

    res = compute_payment(inputs)
    with right:
        st.metric(f"{FREQUENCY_LABELS[inputs.payment_frequency]} Payment", f"${res.periodic_payment:,.2f}")
        st.caption(f"Total Interest: ${res.total_interest:,.2f}")
        st.caption(f"Total Cost: ${res.total_cost:,.2f}")
        st.caption(f"Mortgage Amount: ${max(inputs.price - inputs.down_payment, 0.0):,.2f}")

    schedule = amortization_schedule(
        inputs.price - inputs.down_payment, inputs.annual_rate_percent, inputs.amortization_years
    )
    if not schedule.empty:
        with st.expander("Amortization schedule (monthly payments, by year)"):
            st.dataframe(schedule.round(2), hide_index=True)
    return res


def render_affordability_calculator():
    """Affordability solver; the desired payment follows the guideline until edited."""
    result, inputs = compute_affordability(get_affordability_inputs())
    set_affordability_inputs(inputs)
    for f in AFFORD_FIELDS:
        if f == "desired_monthly_payment" and inputs.user_has_overridden_payment:
            st.session_state.setdefault(_afford_key(f), inputs.desired_monthly_payment)
            continue
        st.session_state[_afford_key(f)] = getattr(inputs, f)

    st.subheader("Affordability Calculator")
    left, right = st.columns(2)
    with left:
        st.number_input(
            "Annual Household Income ($)", min_value=0.0, step=1000.0,
            key=_afford_key("annual_income"), on_change=_on_afford_edit, args=("annual_income",),
        )
        st.number_input(
            "Monthly Debts ($)", min_value=0.0, step=50.0,
            key=_afford_key("monthly_debts"), on_change=_on_afford_edit, args=("monthly_debts",),
        )
        st.number_input(
            "Down Payment ($)", min_value=0.0, step=1000.0,
            key=_afford_key("down_payment"), on_change=_on_afford_edit, args=("down_payment",),
        )
        st.number_input(
            "Interest Rate (%)", min_value=0.0, step=0.01,
            key=_afford_key("annual_rate_percent"), on_change=_on_afford_edit, args=("annual_rate_percent",),
        )
        st.number_input(
            "Amortization (years)", min_value=1, max_value=40, step=1,
            key=_afford_key("amortization_years"), on_change=_on_afford_edit, args=("amortization_years",),
        )
        st.number_input(
            "Desired Monthly Payment ($)", min_value=0.0, step=50.0,
            key=_afford_key("desired_monthly_payment"),
            on_change=_on_afford_edit, args=("desired_monthly_payment",),
            help="Default is estimated based on standard debt service ratios.",
        )
        st.caption(
            f"Based on your income, lenders typically allow up to ${result.guideline_payment:,.0f}."
        )

    with right:
        st.metric("Maximum Purchase Price", f"${result.max_purchase_price:,.0f}")
        st.caption(f"Max Mortgage Amount: ${result.max_mortgage:,.0f}")
        st.caption(f"Down Payment: + ${inputs.down_payment:,.0f}")
        st.caption(
            f"Based on a {inputs.amortization_years}-year amortization at {inputs.annual_rate_percent}% interest."
        )
        st.info(DISCLAIMER)
    return result


def render_calculators_view():
    render_payment_calculator()
    st.divider()
    render_affordability_calculator()
