from __future__ import annotations
import math
from typing import Literal, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from brokersite.presets import LIABILITY_ROW_COUNTS

PaymentFrequency = Literal["monthly", "bi-weekly", "accelerated-bi-weekly"]
Role = Literal["principal", "co_applicant"]


def nz(x, default=0.0):
    """Return a float for ``x`` or a fallback value.

    Calculator fields arrive from free-form inputs where a blank or garbled
    entry shows up as ``""``, ``None`` or ``NaN``.  Rather than reject such
    input the calculators treat it as zero, so the helper mirrors the
    spreadsheet ``NZ()`` function and keeps later math from breaking.
    """

    try:
        if x is None or (isinstance(x, float) and math.isnan(x)):
            return default
        val = float(x)
        if math.isnan(val):
            return default
        return val
    except Exception:
        return default


def _coerce_money(v):
    return nz(v)


def _coerce_years(v):
    years = nz(v)
    return int(years) if math.isfinite(years) else 0


class MortgagePaymentInputs(BaseModel):
    model_config = ConfigDict(frozen=True)

    price: float = 0.0
    down_payment: float = 0.0
    down_payment_percent: float = 0.0
    annual_rate_percent: float = 0.0
    amortization_years: int = 25
    payment_frequency: PaymentFrequency = "monthly"

    @field_validator(
        "price", "down_payment", "down_payment_percent", "annual_rate_percent", mode="before"
    )
    @classmethod
    def coerce_money(cls, v):
        return _coerce_money(v)

    @field_validator("amortization_years", mode="before")
    @classmethod
    def coerce_years(cls, v):
        return _coerce_years(v)


class MortgagePaymentResult(BaseModel):
    periodic_payment: float = 0.0
    total_interest: float = 0.0
    total_cost: float = 0.0


class AffordabilityInputs(BaseModel):
    model_config = ConfigDict(frozen=True)

    annual_income: float = 0.0
    monthly_debts: float = 0.0
    down_payment: float = 0.0
    annual_rate_percent: float = 0.0
    amortization_years: int = 25
    desired_monthly_payment: float = 0.0
    user_has_overridden_payment: bool = False

    @field_validator(
        "annual_income",
        "monthly_debts",
        "down_payment",
        "annual_rate_percent",
        "desired_monthly_payment",
        mode="before",
    )
    @classmethod
    def coerce_money(cls, v):
        return _coerce_money(v)

    @field_validator("amortization_years", mode="before")
    @classmethod
    def coerce_years(cls, v):
        return _coerce_years(v)


class AffordabilityResult(BaseModel):
    max_mortgage: float = 0.0
    max_purchase_price: float = 0.0
    guideline_payment: float = 0.0


# ---------------------------------------------------------------------------
# Application aggregate. Every record is frozen; the wizard replaces records
# with ``model_copy(update=...)`` instead of mutating them in place.
# ---------------------------------------------------------------------------


class _Record(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


class AddressDetails(_Record):
    unit: str = ""
    street_number: str = ""
    street_name: str = ""
    street_type: str = ""
    street_dir: str = ""
    city: str = ""
    province: str = ""
    postal_code: str = ""
    years_there: str = ""
    months_there: str = ""
    status: Literal["own", "rent", ""] = ""
    monthly_payment: str = ""


class ApplicantPersonal(_Record):
    first_name: str = ""
    middle_name: str = ""
    last_name: str = ""
    dob: str = ""
    sin: str = ""
    marital_status: str = ""
    dependants: str = ""
    address: AddressDetails = Field(default_factory=AddressDetails)
    phone_primary: str = ""
    phone_cell: str = ""
    phone_work: str = ""
    phone_ext: str = ""
    fax: str = ""
    email: str = ""


class ApplicantEmployment(_Record):
    employer: str = ""
    address: str = ""
    city_province: str = ""
    phone: str = ""
    position: str = ""
    income_type: str = ""
    income_level: str = ""
    annual_income: str = ""
    years_employed: str = ""
    other_source_desc: str = ""
    other_source_amount: str = ""


class LiabilityRow(_Record):
    company: str = ""
    balance: str = ""
    payment: str = ""


class Assets(_Record):
    savings: str = ""
    chequing: str = ""
    rrsp: str = ""
    stocks: str = ""
    vehicles: str = ""
    residence: str = ""
    other_real_estate: str = ""
    other: str = ""
    bank_name: str = ""
    other_properties_count: str = ""
    other_properties_details: str = ""


def _blank_rows(category: str) -> Tuple[LiabilityRow, ...]:
    return tuple(LiabilityRow() for _ in range(LIABILITY_ROW_COUNTS[category]))


class Liabilities(_Record):
    loans: Tuple[LiabilityRow, ...] = Field(default_factory=lambda: _blank_rows("loans"))
    credit_cards: Tuple[LiabilityRow, ...] = Field(default_factory=lambda: _blank_rows("credit_cards"))
    mortgages: Tuple[LiabilityRow, ...] = Field(default_factory=lambda: _blank_rows("mortgages"))
    other: Tuple[LiabilityRow, ...] = Field(default_factory=lambda: _blank_rows("other"))


class ApplicantFinancials(_Record):
    assets: Assets = Field(default_factory=Assets)
    liabilities: Liabilities = Field(default_factory=Liabilities)


class Applicant(_Record):
    personal: ApplicantPersonal = Field(default_factory=ApplicantPersonal)
    employment: ApplicantEmployment = Field(default_factory=ApplicantEmployment)
    financials: ApplicantFinancials = Field(default_factory=ApplicantFinancials)


class InitialQuestions(_Record):
    mortgage_type: str = ""
    purpose: str = ""
    property_use: str = ""
    current_home_owner: str = ""


class SubjectProperty(_Record):
    address: AddressDetails = Field(default_factory=AddressDetails)
    description: str = ""
    sale_price: str = ""
    mortgage_amount: str = ""
    notes: str = ""


class DocumentRef(_Record):
    name: str
    size_bytes: int = 0
    content: bytes = b""


class MortgageApplication(_Record):
    initial: InitialQuestions = Field(default_factory=InitialQuestions)
    principal: Applicant = Field(default_factory=Applicant)
    co_applicant: Applicant = Field(default_factory=Applicant)
    subject_property: SubjectProperty = Field(default_factory=SubjectProperty)
    documents: Tuple[DocumentRef, ...] = ()
