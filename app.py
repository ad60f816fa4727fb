import logging

import streamlit as st

from core.config import get_settings
from ui.application import render_application_view
from ui.calculators import render_calculators_view
from ui.topbar import render_topbar


def main():
    settings = get_settings()
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    st.set_page_config(page_title=settings.APP_NAME, layout="wide")
    view = render_topbar()
    st.title(settings.APP_NAME)
    if view == "apply":
        render_application_view()
    else:
        render_calculators_view()


if __name__ == "__main__":
    main()
