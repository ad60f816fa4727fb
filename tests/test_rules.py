from brokersite.models import ApplicantPersonal, Applicant, MortgageApplication
from core.rules import evaluate_stage, has_blocking


def _app(**personal):
    return MortgageApplication(principal=Applicant(personal=ApplicantPersonal(**personal)))


def _codes(stage, app):
    return [r.code for r in evaluate_stage(stage, app)]


def test_blank_principal_reports_all_fields_in_order():
    res = evaluate_stage(2, _app())
    assert [r.message for r in res] == [
        "Principal First Name is required.",
        "Principal Last Name is required.",
        "Principal Primary Phone is required.",
        "Principal Email is required.",
    ]
    assert has_blocking(res)


def test_whitespace_counts_as_blank():
    codes = _codes(2, _app(first_name="  ", last_name="Doe", phone_primary="555", email="\t"))
    assert codes == ["PRINCIPAL_FIRST_NAME", "PRINCIPAL_EMAIL"]


def test_complete_principal_passes():
    res = evaluate_stage(2, _app(first_name="Jane", last_name="Doe", phone_primary="306-555-0100", email="j@d.ca"))
    assert res == []
    assert not has_blocking(res)


def test_other_stages_accept_blank_application():
    for stage in (1, 3, 4, 5, 6):
        assert evaluate_stage(stage, MortgageApplication()) == []
