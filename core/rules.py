from __future__ import annotations
from typing import Literal, List, Dict, Any
from pydantic import BaseModel, Field

from brokersite.models import MortgageApplication


class RuleResult(BaseModel):
    code: str
    severity: Literal["info", "warn", "critical"]
    message: str
    context: Dict[str, Any] = Field(default_factory=dict)


# (code, field on principal.personal, message) in display order
PERSONAL_REQUIRED = [
    ("PRINCIPAL_FIRST_NAME", "first_name", "Principal First Name is required."),
    ("PRINCIPAL_LAST_NAME", "last_name", "Principal Last Name is required."),
    ("PRINCIPAL_PHONE_PRIMARY", "phone_primary", "Principal Primary Phone is required."),
    ("PRINCIPAL_EMAIL", "email", "Principal Email is required."),
]


def _personal_rules(app: MortgageApplication) -> List[RuleResult]:
    res: List[RuleResult] = []
    personal = app.principal.personal
    for code, field, message in PERSONAL_REQUIRED:
        if not getattr(personal, field).strip():
            res.append(
                RuleResult(
                    code=code,
                    severity="critical",
                    message=message,
                    context={"field": field},
                )
            )
    return res


# Only the personal stage gates advancement; the rest accept any content.
STAGE_RULES = {2: _personal_rules}


def evaluate_stage(stage: int, app: MortgageApplication) -> List[RuleResult]:
    rules = STAGE_RULES.get(stage)
    if rules is None:
        return []
    return rules(app)


def has_blocking(res: List[RuleResult]) -> bool:
    return any(r.severity == "critical" for r in res)
