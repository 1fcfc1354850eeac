"""Request-scoped records flowing through the brutto-netto pipeline.

The canonical input is a plain frozen dataclass: values are carried through
from the request untouched so the calculator backend stays the single place
that judges whether a parameter combination is valid. Result entries are
Pydantic models whose aliases define the public response vocabulary.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, replace
from typing import Any

from .api import ResultEntry

__all__ = [
    "CALCULATOR_FIELD_NAMES",
    "CanonicalInput",
    "ResultEntry",
]


@dataclass(frozen=True, slots=True)
class CanonicalInput:
    """Merged, fully-defaulted calculator parameters for one gross wage.

    A template carries ``gross_wage=None``; :meth:`with_gross_wage` derives the
    per-entry record used for a calculation.
    """

    accounting_year: str
    tax_class: Any
    tax_allowance: Any
    church_tax: Any
    state: Any
    year_of_birth: Any
    children: Any
    child_tax_allowance: Any
    pkv_contribution: Any
    employer_subsidy: Any
    pension_insurance: Any
    levy_one: Any
    levy_two: Any
    activate_levy: Any
    health_insurance: Any
    additional_contribution: Any
    period: Any
    gross_wage: Any = None

    def with_gross_wage(self, amount: Any) -> CanonicalInput:
        return replace(self, gross_wage=amount)

    @property
    def is_template(self) -> bool:
        return self.gross_wage is None

    def as_calculator_input(self) -> dict[str, Any]:
        """Return the parameters keyed by the calculator's ``input*`` names."""

        values = asdict(self)
        return {CALCULATOR_FIELD_NAMES[name]: value for name, value in values.items()}


CALCULATOR_FIELD_NAMES: dict[str, str] = {
    "accounting_year": "inputAccountingYear",
    "tax_class": "inputTaxClass",
    "tax_allowance": "inputTaxAllowance",
    "church_tax": "inputChurchTax",
    "state": "inputState",
    "year_of_birth": "inputYearOfBirth",
    "children": "inputChildren",
    "child_tax_allowance": "inputChildTaxAllowance",
    "pkv_contribution": "inputPkvContribution",
    "employer_subsidy": "inputEmployerSubsidy",
    "pension_insurance": "inputPensionInsurance",
    "levy_one": "inputLevyOne",
    "levy_two": "inputLevyTwo",
    "activate_levy": "inputActivateLevy",
    "health_insurance": "inputHealthInsurance",
    "additional_contribution": "inputAdditionalContribution",
    "period": "inputPeriod",
    "gross_wage": "inputGrossWage",
}

