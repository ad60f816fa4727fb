"""Document upload stage of the application wizard."""
from __future__ import annotations
import streamlit as st

from brokersite.models import DocumentRef
from brokersite.presets import TERMS_TEXT
from core import wizard
from core.checklist import suggested_documents
from core.state import get_wizard, set_wizard
from core.utils import format_kb
from export.pdf_export import build_application_pdf

NONCE_KEY = "wiz_upload_nonce"


def _uploader_key() -> str:
    return f"wiz_upload_{st.session_state.get(NONCE_KEY, 0)}"


def _on_files_selected(key: str) -> None:
    selected = st.session_state.get(key) or []
    refs = [DocumentRef(name=f.name, size_bytes=f.size, content=f.getvalue()) for f in selected]
    if refs:
        set_wizard(wizard.add_files(get_wizard(), refs))
    # a fresh key empties the uploader so the same files are not attached twice
    st.session_state[NONCE_KEY] = st.session_state.get(NONCE_KEY, 0) + 1


def _on_remove(index: int) -> None:
    set_wizard(wizard.remove_file(get_wizard(), index))


def render_documents_stage(state):
    st.header("Document Upload")
    docs = suggested_documents(state.application)
    st.markdown("Please upload " + ", ".join(docs) + ". Multiple files can be selected.")

    key = _uploader_key()
    st.file_uploader(
        "Upload Required Documents",
        accept_multiple_files=True,
        key=key,
        on_change=_on_files_selected,
        args=(key,),
    )

    files = state.application.documents
    if files:
        st.markdown(f"**Attached Files ({len(files)})**")
        for idx, doc in enumerate(files):
            c1, c2 = st.columns([4, 1])
            c1.write(f"{doc.name} ({format_kb(doc.size_bytes)})")
            c2.button("Remove", key=f"wiz_remove_{idx}", on_click=_on_remove, args=(idx,))

    st.download_button(
        "Download application summary (PDF)",
        data=build_application_pdf(state.application),
        file_name="mortgage-application.pdf",
        mime="application/pdf",
        key="wiz_summary_pdf",
    )

    st.markdown("**Terms & Conditions:**")
    st.caption(TERMS_TEXT)
    st.caption(
        "Online Applications: Please read the paragraph above prior to sending completed application. "
        "By transmitting the online mortgage application you are accepting the terms of the paragraph noted above."
    )
    st.checkbox("I have read and agree to the terms above.", key="wiz_terms")
