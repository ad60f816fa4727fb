"""Application wizard state machine.

The wizard walks a single :class:`MortgageApplication` through six stages.
Every function here is pure: it takes a :class:`WizardState` and returns a
new one, leaving rendering to ``ui.application``.  Mutators replace only
the targeted leaf record and clear any displayed validation messages;
messages come back only on the next advance or submit attempt.
"""

from __future__ import annotations

import logging
from typing import Iterable, Tuple

from pydantic import BaseModel, ConfigDict, Field

from brokersite.models import DocumentRef, MortgageApplication
from brokersite.presets import FIRST_STAGE, LAST_STAGE
from core.integrations import DocumentUploader, SubmissionSink
from core.rules import evaluate_stage, has_blocking
from core.utils import client_display_name

logger = logging.getLogger(__name__)

ROLES = ("principal", "co_applicant")
# address lines that only describe where an applicant lives
OCCUPANCY_FIELDS = ("years_there", "months_there", "status", "monthly_payment")


class WizardClosedError(RuntimeError):
    """Raised when a submitted wizard is asked to change."""


class WizardState(BaseModel):
    model_config = ConfigDict(frozen=True)

    stage: int = FIRST_STAGE
    application: MortgageApplication = Field(default_factory=MortgageApplication)
    errors: Tuple[str, ...] = ()
    submitted: bool = False
    submission_reference: str = ""


def new_wizard() -> WizardState:
    return WizardState()


def _ensure_open(state: WizardState) -> None:
    if state.submitted:
        raise WizardClosedError("application already submitted; start a new wizard")


def _replace(record, field: str, value):
    if field not in type(record).model_fields:
        raise KeyError(field)
    return record.model_copy(update={field: value})


def _check_role(role: str) -> str:
    if role not in ROLES:
        raise KeyError(role)
    return role


def _edit(state: WizardState, application: MortgageApplication) -> WizardState:
    return state.model_copy(update={"application": application, "errors": ()})


def validate(state: WizardState) -> Tuple[str, ...]:
    """Ordered validation messages blocking the current stage (empty when valid)."""
    res = evaluate_stage(state.stage, state.application)
    if not has_blocking(res):
        return ()
    return tuple(r.message for r in res if r.severity == "critical")


# ---------------------------------------------------------------------------
# Navigation
# ---------------------------------------------------------------------------


def advance(state: WizardState) -> WizardState:
    _ensure_open(state)
    errors = validate(state)
    if errors:
        logger.debug("stage %d blocked: %s", state.stage, errors)
        return state.model_copy(update={"errors": errors})
    return state.model_copy(update={"stage": min(state.stage + 1, LAST_STAGE), "errors": ()})


def retreat(state: WizardState) -> WizardState:
    _ensure_open(state)
    return state.model_copy(update={"stage": max(state.stage - 1, FIRST_STAGE), "errors": ()})


# ---------------------------------------------------------------------------
# Field mutators
# ---------------------------------------------------------------------------


def update_initial(state: WizardState, field: str, value: str) -> WizardState:
    _ensure_open(state)
    app = state.application
    return _edit(state, app.model_copy(update={"initial": _replace(app.initial, field, value)}))


def _update_applicant(state: WizardState, role: str, applicant) -> WizardState:
    return _edit(state, state.application.model_copy(update={role: applicant}))


def update_personal(state: WizardState, role: str, field: str, value: str) -> WizardState:
    _ensure_open(state)
    applicant = getattr(state.application, _check_role(role))
    if field == "address":
        raise KeyError("use update_address for address fields")
    personal = _replace(applicant.personal, field, value)
    return _update_applicant(state, role, applicant.model_copy(update={"personal": personal}))


def update_employment(state: WizardState, role: str, field: str, value: str) -> WizardState:
    _ensure_open(state)
    applicant = getattr(state.application, _check_role(role))
    employment = _replace(applicant.employment, field, value)
    return _update_applicant(state, role, applicant.model_copy(update={"employment": employment}))


def update_address(state: WizardState, role: str, field: str, value: str) -> WizardState:
    """Edit an address line for an applicant or, with ``subject_property``, the property."""
    _ensure_open(state)
    app = state.application
    if field == "status" and value not in ("own", "rent", ""):
        raise ValueError(f"unknown occupancy status: {value!r}")
    if role == "subject_property":
        if field in OCCUPANCY_FIELDS:
            raise KeyError(f"subject property address has no {field}")
        prop = app.subject_property
        address = _replace(prop.address, field, value)
        return _edit(state, app.model_copy(update={"subject_property": prop.model_copy(update={"address": address})}))
    applicant = getattr(app, _check_role(role))
    address = _replace(applicant.personal.address, field, value)
    personal = applicant.personal.model_copy(update={"address": address})
    return _update_applicant(state, role, applicant.model_copy(update={"personal": personal}))


def update_asset(state: WizardState, role: str, field: str, value: str) -> WizardState:
    _ensure_open(state)
    applicant = getattr(state.application, _check_role(role))
    fin = applicant.financials
    financials = fin.model_copy(update={"assets": _replace(fin.assets, field, value)})
    return _update_applicant(state, role, applicant.model_copy(update={"financials": financials}))


def update_liability(
    state: WizardState, role: str, category: str, index: int, field: str, value: str
) -> WizardState:
    _ensure_open(state)
    applicant = getattr(state.application, _check_role(role))
    fin = applicant.financials
    if category not in type(fin.liabilities).model_fields:
        raise KeyError(category)
    rows = list(getattr(fin.liabilities, category))
    if not 0 <= index < len(rows):
        raise IndexError(f"{category} has no row {index}")
    rows[index] = _replace(rows[index], field, value)
    liabilities = fin.liabilities.model_copy(update={category: tuple(rows)})
    financials = fin.model_copy(update={"liabilities": liabilities})
    return _update_applicant(state, role, applicant.model_copy(update={"financials": financials}))


def update_subject_property(state: WizardState, field: str, value: str) -> WizardState:
    _ensure_open(state)
    app = state.application
    if field == "address":
        raise KeyError("use update_address for address fields")
    prop = _replace(app.subject_property, field, value)
    return _edit(state, app.model_copy(update={"subject_property": prop}))


def add_files(state: WizardState, files: Iterable[DocumentRef]) -> WizardState:
    _ensure_open(state)
    app = state.application
    return _edit(state, app.model_copy(update={"documents": app.documents + tuple(files)}))


def remove_file(state: WizardState, index: int) -> WizardState:
    _ensure_open(state)
    docs = state.application.documents
    if not 0 <= index < len(docs):
        raise IndexError(f"no document at position {index}")
    return _edit(state, state.application.model_copy(update={"documents": docs[:index] + docs[index + 1 :]}))


# ---------------------------------------------------------------------------
# Submission
# ---------------------------------------------------------------------------


async def submit(state: WizardState, uploader: DocumentUploader, sink: SubmissionSink) -> WizardState:
    """Validate the current stage, hand off documents and the application.

    The uploader is called once with the client's display name and the
    ordered document list before the sink is awaited.  A failed
    :class:`SubmissionResult` keeps the wizard editable and surfaces the
    sink's message; exceptions from either collaborator propagate.
    """

    _ensure_open(state)
    errors = validate(state)
    if errors:
        return state.model_copy(update={"errors": errors})

    app = state.application
    uploader.upload(client_display_name(app.principal.personal), list(app.documents))
    result = await sink.submit(app)
    if not result.ok:
        logger.warning("submission rejected: %s", result.message)
        return state.model_copy(update={"errors": (result.message or "Submission failed. Please try again.",)})
    logger.info("application submitted (reference %s)", result.reference)
    return state.model_copy(
        update={"submitted": True, "errors": (), "submission_reference": result.reference or ""}
    )
