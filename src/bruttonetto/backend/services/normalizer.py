"""Merge the two request vocabularies into one canonical calculator input.

Every canonical field can be supplied under a localised German name or under
the calculator's generic ``input*`` name. The localised name takes precedence.
Each field declares how a candidate counts as "supplied":

``nullish``
    Anything except an absent key or JSON ``null``. ``0``, ``false`` and ``""``
    are kept.
``truthy``
    Only truthy values. ``""``, ``0``, ``false`` and ``null`` fall through to
    the next source. Arrays and objects count as supplied even when empty.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Any

from bruttonetto.backend.models import CanonicalInput

_MISSING = object()


class Resolution(str, Enum):
    """How a candidate value is judged present."""

    NULLISH = "nullish"
    TRUTHY = "truthy"


def _is_supplied(value: Any, resolution: Resolution) -> bool:
    if value is _MISSING or value is None:
        return False
    if resolution is Resolution.TRUTHY:
        return isinstance(value, (list, Mapping)) or bool(value)
    return True


def resolve(
    localized: Any,
    generic: Any,
    default: Any,
    resolution: Resolution = Resolution.NULLISH,
) -> Any:
    """Return the first supplied candidate, falling back to ``default``."""

    for candidate in (localized, generic):
        if _is_supplied(candidate, resolution):
            return candidate
    return default


def current_accounting_year() -> str:
    return str(date.today().year)


def format_accounting_year(value: Any) -> str:
    """Render the accounting year as text; integral floats lose the ``.0``.

    Arrays are joined with commas and objects render as ``[object Object]``.
    """

    if value is None:
        return ""
    if isinstance(value, list):
        return ",".join(format_accounting_year(item) for item in value)
    if isinstance(value, Mapping):
        return "[object Object]"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


@dataclass(frozen=True)
class FieldRule:
    """Resolution rule for one canonical field."""

    name: str
    localized: str
    generic: str
    default: Any
    resolution: Resolution = Resolution.NULLISH
    coerce: Callable[[Any], Any] | None = None

    def default_value(self) -> Any:
        return self.default() if callable(self.default) else self.default

    def apply(self, payload: Mapping[str, Any]) -> Any:
        value = resolve(
            payload.get(self.localized, _MISSING),
            payload.get(self.generic, _MISSING),
            _MISSING,
            self.resolution,
        )
        if value is _MISSING:
            value = self.default_value()
        return self.coerce(value) if self.coerce is not None else value


FIELD_RULES: tuple[FieldRule, ...] = (
    FieldRule(
        "accounting_year",
        "year",
        "inputAccountingYear",
        current_accounting_year,
        Resolution.TRUTHY,
        coerce=format_accounting_year,
    ),
    FieldRule("tax_class", "steuerklasse", "inputTaxClass", 1),
    FieldRule("tax_allowance", "freibetrag", "inputTaxAllowance", 0),
    FieldRule("church_tax", "kirchensteuer", "inputChurchTax", 0),
    FieldRule("state", "bundesland", "inputState", "Hamburg", Resolution.TRUTHY),
    FieldRule("year_of_birth", "jahrgang", "inputYearOfBirth", 1990),
    FieldRule("children", "kinder", "inputChildren", 0),
    FieldRule("child_tax_allowance", "kinderfreibetrag", "inputChildTaxAllowance", 0),
    FieldRule("pkv_contribution", "pkvBeitrag", "inputPkvContribution", 0),
    FieldRule("employer_subsidy", "arbeitgeberzuschuss", "inputEmployerSubsidy", 0),
    FieldRule("pension_insurance", "rentenversicherung", "inputPensionInsurance", 0),
    FieldRule("levy_one", "umlage1", "inputLevyOne", 0),
    FieldRule("levy_two", "umlage2", "inputLevyTwo", 0),
    FieldRule("activate_levy", "umlageAktiv", "inputActivateLevy", 0),
    # 0 = statutory, 1 = private, -1 = voluntary statutory
    FieldRule("health_insurance", "versicherungsart", "inputHealthInsurance", 0),
    FieldRule(
        "additional_contribution", "zusatzbeitrag", "inputAdditionalContribution", 1.7
    ),
    # 2 = monthly
    FieldRule("period", "periode", "inputPeriod", 2),
)


def build_base_input(payload: Mapping[str, Any]) -> CanonicalInput:
    """Build the canonical input template shared by every gross wage entry."""

    values = {rule.name: rule.apply(payload) for rule in FIELD_RULES}
    return CanonicalInput(**values)


__all__ = [
    "FIELD_RULES",
    "FieldRule",
    "Resolution",
    "build_base_input",
    "current_accounting_year",
    "format_accounting_year",
    "resolve",
]
