"""Per-visit session state.

Everything the site knows about a visitor lives in ``st.session_state`` and
disappears with the browser session; nothing is written to disk.
"""

import streamlit as st

from brokersite.models import AffordabilityInputs, MortgagePaymentInputs
from brokersite.presets import AFFORDABILITY_DEFAULTS, PAYMENT_DEFAULTS
from core.wizard import WizardState, new_wizard

PAYMENT_KEY = "payment_inputs"
AFFORDABILITY_KEY = "affordability_inputs"
WIZARD_KEY = "wizard"


def get_payment_inputs() -> MortgagePaymentInputs:
    val = st.session_state.get(PAYMENT_KEY)
    if not isinstance(val, MortgagePaymentInputs):
        val = MortgagePaymentInputs(**(val or PAYMENT_DEFAULTS))
        st.session_state[PAYMENT_KEY] = val
    return val


def set_payment_inputs(inputs: MortgagePaymentInputs) -> None:
    st.session_state[PAYMENT_KEY] = inputs


def get_affordability_inputs() -> AffordabilityInputs:
    val = st.session_state.get(AFFORDABILITY_KEY)
    if not isinstance(val, AffordabilityInputs):
        val = AffordabilityInputs(**(val or AFFORDABILITY_DEFAULTS))
        st.session_state[AFFORDABILITY_KEY] = val
    return val


def set_affordability_inputs(inputs: AffordabilityInputs) -> None:
    st.session_state[AFFORDABILITY_KEY] = inputs


def get_wizard() -> WizardState:
    val = st.session_state.get(WIZARD_KEY)
    if not isinstance(val, WizardState):
        val = new_wizard()
        st.session_state[WIZARD_KEY] = val
    return val


def set_wizard(state: WizardState) -> None:
    st.session_state[WIZARD_KEY] = state


def reset_wizard() -> WizardState:
    for key in [k for k in st.session_state.keys() if str(k).startswith("wiz_")]:
        del st.session_state[key]
    state = new_wizard()
    st.session_state[WIZARD_KEY] = state
    return state
