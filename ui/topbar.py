import streamlit as st

from core.config import get_settings
from core.version import __version__

VIEWS = {"calculators": "Calculators", "apply": "Apply Now"}


def render_topbar():
    """Render the header with broker contact details and return the selected view."""
    settings = get_settings()
    left, right = st.columns([2, 1])
    with left:
        st.markdown(f"**{settings.BROKER_NAME}**")
        contact = []
        if settings.BROKER_EMAIL:
            contact.append(f"[{settings.BROKER_EMAIL}](mailto:{settings.BROKER_EMAIL})")
        if settings.BROKER_PHONE:
            contact.append(f"[{settings.BROKER_PHONE}](tel:{settings.BROKER_PHONE})")
        if contact:
            st.caption(" • ".join(contact))
    with right:
        view = st.radio(
            "View",
            list(VIEWS.keys()),
            format_func=VIEWS.get,
            horizontal=True,
            key="view_mode",
            label_visibility="collapsed",
        )
        st.caption(f"v{__version__}")
    return view
