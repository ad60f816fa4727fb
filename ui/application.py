import asyncio

import streamlit as st

from brokersite.presets import (
    HOME_OWNER_OPTIONS,
    LAST_STAGE,
    OCCUPANCY_OPTIONS,
    PROPERTY_USE_OPTIONS,
    STAGE_LABELS,
)
from core import wizard
from core.config import get_settings
from core.integrations import AcknowledgingSubmissionSink, LoggingDocumentUploader
from core.state import get_wizard, reset_wizard, set_wizard
from ui.documents import render_documents_stage

ROLE_TITLES = {"principal": "Principal Applicant", "co_applicant": "Co-Applicant"}


def _on_field(key: str, mutator, args: tuple) -> None:
    set_wizard(mutator(get_wizard(), *args, st.session_state[key]))


def _bind(key: str, value) -> None:
    # the wizard state is authoritative; widgets are refreshed from it every run
    st.session_state[key] = value


def field_input(label, key, value, mutator, *args, widget="text", **kw):
    """Render one form control bound to a wizard mutator."""
    _bind(key, value)
    common = dict(key=key, on_change=_on_field, args=(key, mutator, args))
    if widget == "area":
        return st.text_area(label, **common, **kw)
    if widget == "select":
        return st.selectbox(label, format_func=lambda v: v.title() if v else "Select", **common, **kw)
    return st.text_input(label, **common, **kw)


def render_progress(state):
    st.progress(state.stage / LAST_STAGE)
    marks = []
    for s, label in STAGE_LABELS.items():
        if s < state.stage:
            marks.append(f"✓ {label}")
        elif s == state.stage:
            marks.append(f"**{s}. {label}**")
        else:
            marks.append(f"{s}. {label}")
    st.markdown(" · ".join(marks))


def render_errors(state):
    if state.errors:
        st.error("Please fix the following:\n\n" + "\n".join(f"- {e}" for e in state.errors))


def render_address(state, role: str):
    if role == "subject_property":
        addr = state.application.subject_property.address
    else:
        addr = getattr(state.application, role).personal.address
    key = f"wiz_{role}_addr"
    c = st.columns([1, 1, 2, 1, 1])
    with c[0]:
        field_input("Unit #", f"{key}_unit", addr.unit, wizard.update_address, role, "unit")
    with c[1]:
        field_input("Street #", f"{key}_street_number", addr.street_number, wizard.update_address, role, "street_number")
    with c[2]:
        field_input("Street Name", f"{key}_street_name", addr.street_name, wizard.update_address, role, "street_name")
    with c[3]:
        field_input("Street Type", f"{key}_street_type", addr.street_type, wizard.update_address, role, "street_type", placeholder="Rd, St, Ave")
    with c[4]:
        field_input("Dir.", f"{key}_street_dir", addr.street_dir, wizard.update_address, role, "street_dir", placeholder="NW, S")
    c = st.columns([2, 1, 1])
    with c[0]:
        field_input("City", f"{key}_city", addr.city, wizard.update_address, role, "city")
    with c[1]:
        field_input("Prov.", f"{key}_province", addr.province, wizard.update_address, role, "province")
    with c[2]:
        field_input("Postal Code", f"{key}_postal_code", addr.postal_code, wizard.update_address, role, "postal_code")
    if role == "subject_property":
        return
    c = st.columns(4)
    with c[0]:
        field_input("Years There", f"{key}_years_there", addr.years_there, wizard.update_address, role, "years_there")
    with c[1]:
        field_input("Months", f"{key}_months_there", addr.months_there, wizard.update_address, role, "months_there")
    with c[2]:
        field_input(
            "Own / Rent", f"{key}_status", addr.status, wizard.update_address, role, "status",
            widget="select", options=OCCUPANCY_OPTIONS,
        )
    with c[3]:
        field_input("Monthly Pmt ($)", f"{key}_monthly_payment", addr.monthly_payment, wizard.update_address, role, "monthly_payment")


def render_initial(state):
    st.header("Initial Questions")
    init = state.application.initial
    up = wizard.update_initial
    field_input(
        "What type of mortgage application is this?", "wiz_initial_mortgage_type", init.mortgage_type,
        up, "mortgage_type", placeholder="e.g. Pre-approval, Purchase, Refinance",
    )
    field_input(
        "What is the purpose of this mortgage request?", "wiz_initial_purpose", init.purpose,
        up, "purpose", placeholder="e.g. Buying first home, Lowering rate",
    )
    field_input(
        "Property use", "wiz_initial_property_use", init.property_use, up, "property_use",
        widget="select", options=[""] + PROPERTY_USE_OPTIONS,
    )
    field_input(
        "Do you currently own your own home?", "wiz_initial_current_home_owner", init.current_home_owner,
        up, "current_home_owner", widget="select", options=[""] + HOME_OWNER_OPTIONS,
    )


PERSONAL_LAYOUT = [
    [("first_name", "First Name"), ("middle_name", "Middle Name"), ("last_name", "Last Name")],
    [("dob", "Birthdate (YYYY-MM-DD)"), ("sin", "SIN")],
    [("marital_status", "Marital Status"), ("dependants", "Dependants")],
]
CONTACT_LAYOUT = [
    [("phone_primary", "Primary Phone"), ("phone_cell", "Cell Phone"), ("phone_work", "Work Phone"), ("phone_ext", "Ext.")],
    [("fax", "Fax"), ("email", "Email")],
]
REQUIRED_PERSONAL = {"first_name", "last_name", "phone_primary", "email"}


def _render_grid(state, role, layout, mutator, section):
    record = getattr(getattr(state.application, role), section)
    for line in layout:
        cols = st.columns(len(line))
        for col, (field, label) in zip(cols, line):
            if role == "principal" and section == "personal" and field in REQUIRED_PERSONAL:
                label = f"{label} *"
            with col:
                field_input(label, f"wiz_{role}_{section}_{field}", getattr(record, field), mutator, role, field)


def render_personal(state):
    st.header("Personal Information")
    for role, title in ROLE_TITLES.items():
        st.subheader(title if role == "principal" else f"{title} (optional)")
        _render_grid(state, role, PERSONAL_LAYOUT, wizard.update_personal, "personal")
        render_address(state, role)
        _render_grid(state, role, CONTACT_LAYOUT, wizard.update_personal, "personal")


EMPLOYMENT_LAYOUT = [
    [("employer", "Current Employer"), ("address", "Employer Address")],
    [("city_province", "City/Province"), ("phone", "Phone Number")],
    [("position", "Position"), ("years_employed", "Years Employed")],
    [("income_type", "Income Type"), ("income_level", "Income Level"), ("annual_income", "Annual Income ($)")],
    [("other_source_desc", "Other Income Description"), ("other_source_amount", "Other Income Amount ($)")],
]


def render_employment(state):
    st.header("Employment Information")
    for role, title in ROLE_TITLES.items():
        st.subheader(title)
        _render_grid(state, role, EMPLOYMENT_LAYOUT, wizard.update_employment, "employment")


ASSET_LAYOUT = [
    [("savings", "Savings ($)"), ("chequing", "Chequing ($)"), ("rrsp", "RRSP ($)")],
    [("stocks", "Stocks/Bonds ($)"), ("vehicles", "Vehicle Value ($)"), ("residence", "Residence Value ($)")],
    [("other_real_estate", "Other Real Estate ($)"), ("other", "Other Assets ($)"), ("bank_name", "Name of Bank")],
    [("other_properties_count", "Number of Other Properties"), ("other_properties_details", "Other Property Details")],
]
LIABILITY_LABELS = {"loans": "Loan", "credit_cards": "Credit", "mortgages": "Mtg", "other": "Other"}


def render_assets(state):
    st.header("Assets & Liabilities")
    for role, title in ROLE_TITLES.items():
        st.subheader(title)
        fin = getattr(state.application, role).financials
        st.markdown("**Assets**")
        for line in ASSET_LAYOUT:
            cols = st.columns(len(line))
            for col, (field, label) in zip(cols, line):
                with col:
                    field_input(label, f"wiz_{role}_asset_{field}", getattr(fin.assets, field), wizard.update_asset, role, field)
        st.markdown("**Liabilities**")
        for category, short in LIABILITY_LABELS.items():
            for idx, row in enumerate(getattr(fin.liabilities, category)):
                cols = st.columns([2, 1, 1])
                for col, (field, label) in zip(cols, [("company", "Company"), ("balance", "Balance ($)"), ("payment", "Payment ($)")]):
                    with col:
                        field_input(
                            f"{short} {idx + 1} {label}", f"wiz_{role}_liab_{category}_{idx}_{field}",
                            getattr(row, field), wizard.update_liability, role, category, idx, field,
                        )


def render_subject_property(state):
    st.header("Subject Property Information")
    st.caption("(Fill out only if applicable)")
    render_address(state, "subject_property")
    prop = state.application.subject_property
    up = wizard.update_subject_property
    c1, c2 = st.columns(2)
    with c1:
        field_input("Sale Price ($)", "wiz_property_sale_price", prop.sale_price, up, "sale_price")
    with c2:
        field_input("Mortgage Amount ($)", "wiz_property_mortgage_amount", prop.mortgage_amount, up, "mortgage_amount")
    field_input("Property Description", "wiz_property_description", prop.description, up, "description")
    field_input("Notes / Description", "wiz_property_notes", prop.notes, up, "notes", widget="area")


STAGE_VIEWS = {
    1: render_initial,
    2: render_personal,
    3: render_employment,
    4: render_assets,
    5: render_subject_property,
    6: render_documents_stage,
}


def _on_back():
    set_wizard(wizard.retreat(get_wizard()))


def _on_next():
    set_wizard(wizard.advance(get_wizard()))


def _submit(state):
    settings = get_settings()
    return asyncio.run(
        wizard.submit(
            state,
            LoggingDocumentUploader(),
            AcknowledgingSubmissionSink(settings.SUBMISSION_DELAY_SECONDS),
        )
    )


def render_success(state):
    st.success("Application Received!")
    st.write(
        "We have received your detailed application and documents. "
        f"{get_settings().BROKER_NAME} will review your information and get back to you shortly."
    )
    if state.submission_reference:
        st.caption(f"Reference: {state.submission_reference}")
    st.button("Start a new application", key="wiz_restart", on_click=reset_wizard)


def render_application_view():
    """Six-stage mortgage application wizard."""
    state = get_wizard()
    if state.submitted:
        render_success(state)
        return state

    render_progress(state)
    render_errors(state)
    STAGE_VIEWS[state.stage](state)

    left, right = st.columns(2)
    if state.stage > 1:
        left.button("Back", key="wiz_back", on_click=_on_back)
    if state.stage < LAST_STAGE:
        right.button("Next Step", key="wiz_next", on_click=_on_next)
    else:
        agreed = st.session_state.get("wiz_terms", False)
        if right.button("Submit Application", key="wiz_submit", disabled=not agreed):
            with st.spinner("Submitting..."):
                set_wizard(_submit(get_wizard()))
            st.rerun()
    return state
