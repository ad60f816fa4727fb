"""External collaborators for application hand-off.

Neither collaborator stores anything: the uploader only records intent and
the submission sink acknowledges after a fixed delay.  A production site
swaps in implementations that talk to real document storage and intake
services.
"""

from __future__ import annotations

import asyncio
import logging
import uuid
from typing import Optional, Protocol, Sequence

from pydantic import BaseModel

from brokersite.models import DocumentRef, MortgageApplication
from export.pdf_export import build_application_pdf

logger = logging.getLogger(__name__)


class SubmissionResult(BaseModel):
    ok: bool
    message: str = ""
    reference: Optional[str] = None


class DocumentUploader(Protocol):
    def upload(self, client_name: str, files: Sequence[DocumentRef]) -> None:
        ...


class SubmissionSink(Protocol):
    async def submit(self, application: MortgageApplication) -> SubmissionResult:
        ...


class LoggingDocumentUploader:
    """Logs the intent to file documents under a per-client folder."""

    def upload(self, client_name: str, files: Sequence[DocumentRef]) -> None:
        logger.info("[UPLOAD STARTED] Client: %s", client_name)
        logger.info("Files to upload: %s", [f.name for f in files])
        logger.info(
            "Intent: save %d files to client folder %r (requires storage integration)",
            len(files),
            client_name,
        )


class AcknowledgingSubmissionSink:
    """Renders the application summary and acknowledges after ``delay_seconds``."""

    def __init__(self, delay_seconds: float = 2.0) -> None:
        self.delay_seconds = delay_seconds

    async def submit(self, application: MortgageApplication) -> SubmissionResult:
        summary = build_application_pdf(application)
        reference = uuid.uuid4().hex[:8].upper()
        logger.info(
            "Handing off application %s (%d documents, %d byte summary)",
            reference,
            len(application.documents),
            len(summary),
        )
        await asyncio.sleep(self.delay_seconds)
        return SubmissionResult(ok=True, message="Application received.", reference=reference)
