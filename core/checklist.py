"""Suggested documents for the upload stage."""
from __future__ import annotations
from typing import List, Dict

from brokersite.models import MortgageApplication

BASE_DOCS: List[str] = ["Pay Stubs", "T4s", "NOAs", "Identification"]

# Extra documents keyed by a word appearing in the applicant's income type
DOCS_BY_INCOME_TYPE: Dict[str, List[str]] = {
    "self": ["T1 Generals (last 2 years)", "Business bank statements"],
    "commission": ["T1 Generals (last 2 years)"],
    "hourly": ["Employment letter"],
    "salar": ["Employment letter"],
    "pension": ["Pension statement"],
}


def _docs_for_income_type(income_type: str) -> List[str]:
    t = income_type.strip().lower()
    docs: List[str] = []
    for key, extra in DOCS_BY_INCOME_TYPE.items():
        if key in t:
            docs += extra
    return docs


def suggested_documents(app: MortgageApplication) -> List[str]:
    """Return a de-duplicated document list for the applicants on file."""
    docs: List[str] = list(BASE_DOCS)
    for applicant in (app.principal, app.co_applicant):
        for doc in _docs_for_income_type(applicant.employment.income_type):
            if doc not in docs:
                docs.append(doc)
    if app.initial.current_home_owner == "Yes":
        docs.append("Current mortgage statement")
    return docs
