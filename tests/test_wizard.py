import asyncio

import pytest

from brokersite.models import DocumentRef
from core import wizard
from core.integrations import SubmissionResult
from core.wizard import WizardClosedError, WizardState


class RecordingUploader:
    def __init__(self):
        self.calls = []

    def upload(self, client_name, files):
        self.calls.append((client_name, list(files)))


class StubSink:
    def __init__(self, result=None):
        self.result = result or SubmissionResult(ok=True, message="ok", reference="REF123")
        self.seen = []

    async def submit(self, application):
        self.seen.append(application)
        return self.result


def _filled(state=None):
    state = state or wizard.new_wizard()
    state = wizard.update_personal(state, "principal", "first_name", "Jane")
    state = wizard.update_personal(state, "principal", "last_name", "Doe")
    state = wizard.update_personal(state, "principal", "phone_primary", "306-555-0100")
    return wizard.update_personal(state, "principal", "email", "jane@example.com")


def _at_stage(stage, state=None):
    state = state or wizard.new_wizard()
    return state.model_copy(update={"stage": stage})


def test_new_wizard_starts_blank_at_stage_one():
    state = wizard.new_wizard()
    assert state.stage == 1
    assert state.errors == ()
    assert not state.submitted
    liab = state.application.principal.financials.liabilities
    assert (len(liab.loans), len(liab.credit_cards), len(liab.mortgages), len(liab.other)) == (2, 2, 1, 1)


def test_retreat_from_first_stage_is_noop():
    state = wizard.retreat(wizard.new_wizard())
    assert state.stage == 1


def test_blank_stages_advance_freely():
    state = wizard.advance(wizard.new_wizard())
    assert state.stage == 2
    state = wizard.advance(_at_stage(3))
    assert state.stage == 4


def test_personal_stage_blocks_without_email():
    state = _at_stage(2, _filled())
    state = wizard.update_personal(state, "principal", "email", "   ")
    blocked = wizard.advance(state)
    assert blocked.stage == 2
    assert blocked.errors == ("Principal Email is required.",)


def test_personal_stage_advances_when_complete():
    state = wizard.advance(_at_stage(2, _filled()))
    assert state.stage == 3
    assert state.errors == ()


def test_co_applicant_is_optional():
    state = _at_stage(2, _filled())
    state = wizard.update_personal(state, "co_applicant", "first_name", "")
    assert wizard.advance(state).stage == 3


def test_advance_caps_at_last_stage():
    assert wizard.advance(_at_stage(6)).stage == 6


def test_mutation_clears_errors():
    blocked = wizard.advance(_at_stage(2))
    assert len(blocked.errors) == 4
    edited = wizard.update_initial(blocked, "purpose", "First home")
    assert edited.errors == ()
    assert edited.stage == 2
    assert wizard.retreat(blocked).errors == ()


def test_mutators_replace_only_target_leaf():
    before = wizard.new_wizard()
    after = wizard.update_address(before, "co_applicant", "city", "Regina")
    assert after.application.co_applicant.personal.address.city == "Regina"
    assert after.application.principal.personal.address.city == ""
    assert before.application.co_applicant.personal.address.city == ""
    assert after.application.principal is before.application.principal

    after = wizard.update_address(after, "subject_property", "postal_code", "S4P 3Y2")
    assert after.application.subject_property.address.postal_code == "S4P 3Y2"

    after = wizard.update_employment(after, "principal", "employer", "Acme")
    after = wizard.update_asset(after, "co_applicant", "rrsp", "15000")
    after = wizard.update_subject_property(after, "sale_price", "450000")
    app = after.application
    assert app.principal.employment.employer == "Acme"
    assert app.co_applicant.financials.assets.rrsp == "15000"
    assert app.subject_property.sale_price == "450000"


def test_update_liability_row():
    state = wizard.update_liability(wizard.new_wizard(), "principal", "credit_cards", 1, "balance", "2500")
    rows = state.application.principal.financials.liabilities.credit_cards
    assert rows[1].balance == "2500"
    assert rows[0].balance == ""
    with pytest.raises(IndexError):
        wizard.update_liability(state, "principal", "mortgages", 1, "balance", "1")
    with pytest.raises(KeyError):
        wizard.update_liability(state, "principal", "leases", 0, "balance", "1")


def test_unknown_targets_raise():
    state = wizard.new_wizard()
    with pytest.raises(KeyError):
        wizard.update_initial(state, "nickname", "x")
    with pytest.raises(KeyError):
        wizard.update_personal(state, "guarantor", "first_name", "x")
    with pytest.raises(ValueError):
        wizard.update_address(state, "principal", "status", "lease")



@pytest.mark.parametrize("field", ["years_there", "months_there", "status", "monthly_payment"])
def test_subject_property_address_has_no_occupancy_fields(field):
    with pytest.raises(KeyError):
        wizard.update_address(wizard.new_wizard(), "subject_property", field, "own")


def test_files_append_and_remove_by_position():
    docs = [DocumentRef(name=n, size_bytes=i) for i, n in enumerate(["a.pdf", "b.pdf", "c.pdf"])]
    state = wizard.add_files(wizard.new_wizard(), docs[:2])
    state = wizard.add_files(state, [docs[2], docs[0]])
    assert [d.name for d in state.application.documents] == ["a.pdf", "b.pdf", "c.pdf", "a.pdf"]
    state = wizard.remove_file(state, 1)
    assert [d.name for d in state.application.documents] == ["a.pdf", "c.pdf", "a.pdf"]
    with pytest.raises(IndexError):
        wizard.remove_file(state, 3)


def test_submit_uploads_once_and_closes_wizard():
    docs = [DocumentRef(name="paystub.pdf", size_bytes=10), DocumentRef(name="t4.pdf", size_bytes=20)]
    state = _at_stage(6, wizard.add_files(_filled(), docs))
    uploader, sink = RecordingUploader(), StubSink()
    done = asyncio.run(wizard.submit(state, uploader, sink))
    assert uploader.calls == [("Jane Doe", docs)]
    assert sink.seen == [state.application]
    assert done.submitted
    assert done.submission_reference == "REF123"
    with pytest.raises(WizardClosedError):
        wizard.retreat(done)
    with pytest.raises(WizardClosedError):
        wizard.update_initial(done, "purpose", "x")


def test_submit_without_name_uses_placeholder():
    uploader = RecordingUploader()
    asyncio.run(wizard.submit(_at_stage(6), uploader, StubSink()))
    assert uploader.calls == [("Unknown Client", [])]


def test_failed_submission_keeps_wizard_open():
    sink = StubSink(SubmissionResult(ok=False, message="Intake service unavailable."))
    state = asyncio.run(wizard.submit(_at_stage(6), RecordingUploader(), sink))
    assert not state.submitted
    assert state.stage == 6
    assert state.errors == ("Intake service unavailable.",)


def test_submit_revalidates_current_stage():
    uploader = RecordingUploader()
    state = asyncio.run(wizard.submit(_at_stage(2), uploader, StubSink()))
    assert uploader.calls == []
    assert not state.submitted
    assert len(state.errors) == 4


def test_wizard_state_is_immutable():
    state = WizardState()
    with pytest.raises(Exception):
        state.stage = 3
