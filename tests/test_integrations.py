import asyncio
import logging

from brokersite.models import ApplicantPersonal, DocumentRef, MortgageApplication
from core.integrations import AcknowledgingSubmissionSink, LoggingDocumentUploader
from core.utils import client_display_name, format_kb


def test_uploader_logs_intent(caplog):
    files = [DocumentRef(name="noa.pdf", size_bytes=1), DocumentRef(name="id.png", size_bytes=2)]
    with caplog.at_level(logging.INFO, logger="core.integrations"):
        LoggingDocumentUploader().upload("Jane Doe", files)
    assert "[UPLOAD STARTED] Client: Jane Doe" in caplog.text
    assert "noa.pdf" in caplog.text and "id.png" in caplog.text


def test_acknowledging_sink_returns_success():
    result = asyncio.run(AcknowledgingSubmissionSink(delay_seconds=0).submit(MortgageApplication()))
    assert result.ok
    assert result.reference and len(result.reference) == 8


def test_client_display_name():
    assert client_display_name(ApplicantPersonal(first_name="Jane", last_name="Doe")) == "Jane Doe"
    assert client_display_name(ApplicantPersonal(first_name="Jane")) == "Jane"
    assert client_display_name(ApplicantPersonal(first_name=" ", last_name="")) == "Unknown Client"


def test_format_kb():
    assert format_kb(2048) == "2.0 KB"
    assert format_kb(1536) == "1.5 KB"
    assert format_kb(None) == "0.0 KB"
