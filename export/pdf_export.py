from __future__ import annotations
from io import BytesIO
from typing import List

from reportlab.lib import colors
from reportlab.lib.pagesizes import LETTER
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from brokersite.models import Applicant, MortgageApplication
from brokersite.presets import TERMS_TEXT

GRID = TableStyle(
    [
        ("BACKGROUND", (0, 0), (-1, 0), colors.lightgrey),
        ("BOX", (0, 0), (-1, -1), 1, colors.black),
        ("INNERGRID", (0, 0), (-1, -1), 0.5, colors.grey),
    ]
)


def _label(field: str) -> str:
    return field.replace("_", " ").title()


def _mask(value: str) -> str:
    digits = value.strip()
    if len(digits) <= 3:
        return digits
    return "*" * (len(digits) - 3) + digits[-3:]


def _record_rows(record, skip=()) -> List[List[str]]:
    rows = []
    for field, val in record.model_dump(exclude=set(skip)).items():
        if isinstance(val, str) and val.strip():
            rows.append([_label(field), val])
    return rows


def _section(title: str, rows: List[List[str]]) -> list:
    if not rows:
        return []
    t = Table([[title, ""]] + rows, hAlign="LEFT", colWidths=[200, 320])
    t.setStyle(GRID)
    return [t, Spacer(1, 12)]


def _applicant_story(title: str, applicant: Applicant) -> list:
    personal = applicant.personal
    rows = _record_rows(personal, skip=("address", "sin"))
    if personal.sin.strip():
        rows.append(["SIN", _mask(personal.sin)])
    rows += _record_rows(personal.address)
    story = _section(f"{title} - Personal", rows)
    story += _section(f"{title} - Employment", _record_rows(applicant.employment))
    story += _section(f"{title} - Assets", _record_rows(applicant.financials.assets))

    debt_rows = [["Category", "Company", "Balance", "Payment"]]
    for category, entries in applicant.financials.liabilities:
        for row in entries:
            if row.company.strip() or row.balance.strip() or row.payment.strip():
                debt_rows.append([_label(category), row.company, row.balance, row.payment])
    if len(debt_rows) > 1:
        t = Table(debt_rows, hAlign="LEFT")
        t.setStyle(GRID)
        story += [Paragraph(f"<b>{title} - Liabilities</b>", getSampleStyleSheet()["Heading3"]), t, Spacer(1, 12)]
    return story


def build_application_pdf(app: MortgageApplication, title: str = "Mortgage Application Summary") -> bytes:
    """Render the application aggregate as a PDF and return its bytes.

    Blank fields are left out so a sparse application stays short.  The
    SIN is masked to its last three digits and document contents are never
    embedded, only their names and sizes.
    """

    styles = getSampleStyleSheet()
    buf = BytesIO()
    doc = SimpleDocTemplate(buf, pagesize=LETTER, leftMargin=36, rightMargin=36, topMargin=36, bottomMargin=36)
    story = [Paragraph(f"<b>{title}</b>", styles["Title"]), Spacer(1, 12)]

    story += _section("Initial Questions", _record_rows(app.initial))
    story += _applicant_story("Principal Applicant", app.principal)
    story += _applicant_story("Co-Applicant", app.co_applicant)

    prop = app.subject_property
    prop_rows = _record_rows(prop, skip=("address",))
    prop_rows += _record_rows(prop.address, skip=("years_there", "months_there", "status", "monthly_payment"))
    story += _section("Subject Property", prop_rows)

    if app.documents:
        rows = [["Document", "Size (bytes)"]] + [[d.name, str(d.size_bytes)] for d in app.documents]
        t = Table(rows, hAlign="LEFT", colWidths=[360, 160])
        t.setStyle(GRID)
        story += [Paragraph("<b>Attached Documents</b>", styles["Heading3"]), Spacer(1, 6), t, Spacer(1, 12)]

    story += [Spacer(1, 12), Paragraph(f"<font size=8>{TERMS_TEXT}</font>", styles["Normal"])]
    doc.build(story)
    return buf.getvalue()
