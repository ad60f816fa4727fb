DISCLAIMER = (
    "This is an estimate only. Actual affordability depends on credit score, property taxes, "
    "heating costs, and current stress-test regulations (e.g. Rate + 2%). "
    "Contact your broker for a precise pre-approval."
)

# Total Debt Service ratio used for the affordability guideline payment.
TDS_RATIO = 0.42

PAYMENT_FREQUENCIES = ["monthly", "bi-weekly", "accelerated-bi-weekly"]
FREQUENCY_LABELS = {
    "monthly": "Monthly",
    "bi-weekly": "Bi-Weekly",
    "accelerated-bi-weekly": "Accelerated Bi-Weekly",
}
PAYMENTS_PER_YEAR = {"monthly": 12, "bi-weekly": 26, "accelerated-bi-weekly": 26}

PAYMENT_DEFAULTS = {
    "price": 500000.0,
    "down_payment": 100000.0,
    "down_payment_percent": 20.0,
    "annual_rate_percent": 5.0,
    "amortization_years": 25,
    "payment_frequency": "monthly",
}
AFFORDABILITY_DEFAULTS = {
    "annual_income": 100000.0,
    "monthly_debts": 500.0,
    "down_payment": 80000.0,
    "annual_rate_percent": 5.0,
    "amortization_years": 25,
    "desired_monthly_payment": 0.0,
    "user_has_overridden_payment": False,
}

# Blank liability rows seeded per category on a fresh application.
LIABILITY_ROW_COUNTS = {"loans": 2, "credit_cards": 2, "mortgages": 1, "other": 1}

STAGE_LABELS = {1: "Initial", 2: "Personal", 3: "Employ", 4: "Assets", 5: "Property", 6: "Docs"}
FIRST_STAGE = 1
LAST_STAGE = 6

PROPERTY_USE_OPTIONS = ["Owner Occupied", "Rental", "Second Home"]
HOME_OWNER_OPTIONS = ["Yes", "No"]
OCCUPANCY_OPTIONS = ["", "own", "rent"]

UNKNOWN_CLIENT = "Unknown Client"

TERMS_TEXT = (
    "I/We warrant and confirm that the information given in this mortgage application is true and "
    "correct and I/we understand that it is being used to determine my/our credit responsibility and "
    "will be forwarded to a financial intermediary and/or mortgage lender. I/We authorize you and any "
    "financial intermediary and/or mortgage lender to whom this application was forwarded (the "
    "\"Recipients\") to obtain any information the Recipients may require relative to this application "
    "from any sources to which the Recipients apply. The Recipients are also authorized to retain the "
    "application whether or not the relative mortgage is approved. I agree to receive email and other "
    "electronic communication from you."
)
