from brokersite.models import Applicant, ApplicantEmployment, InitialQuestions, MortgageApplication
from core.checklist import suggested_documents


def test_base_documents_always_listed():
    docs = suggested_documents(MortgageApplication())
    assert docs == ["Pay Stubs", "T4s", "NOAs", "Identification"]


def test_income_type_and_ownership_add_documents():
    app = MortgageApplication(
        initial=InitialQuestions(current_home_owner="Yes"),
        principal=Applicant(employment=ApplicantEmployment(income_type="Self-Employed")),
        co_applicant=Applicant(employment=ApplicantEmployment(income_type="Salaried")),
    )
    docs = suggested_documents(app)
    assert "T1 Generals (last 2 years)" in docs
    assert "Business bank statements" in docs
    assert "Employment letter" in docs
    assert docs[-1] == "Current mortgage statement"
    assert len(docs) == len(set(docs))
