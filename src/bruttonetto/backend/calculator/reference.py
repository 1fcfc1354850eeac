"""Reference gross-to-net calculator for German payroll scenarios.

This backend implements a simplified wage tax and social insurance model on top
of the YAML year configuration. It follows the statutory structure (tax class
procedures, contribution ceilings, care insurance child adjustments, solidarity
surcharge phase-in) without replicating every detail of the official wage tax
program flow, so results are close to but not guaranteed identical with payroll
software.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from bruttonetto.backend.calculator import CalculationResult
from bruttonetto.backend.calculator.tariff import (
    SECONDARY_CLASSES,
    calculate_income_tax,
    calculate_solidarity_surcharge,
    round_currency,
)
from bruttonetto.backend.config.year_config import (
    YearConfiguration,
    load_year_configuration,
)
from bruttonetto.backend.errors import CalculationError

_LOGGER = logging.getLogger(__name__)

FEDERAL_STATES = (
    "Baden-Württemberg",
    "Bayern",
    "Berlin",
    "Brandenburg",
    "Bremen",
    "Hamburg",
    "Hessen",
    "Mecklenburg-Vorpommern",
    "Niedersachsen",
    "Nordrhein-Westfalen",
    "Rheinland-Pfalz",
    "Saarland",
    "Sachsen",
    "Sachsen-Anhalt",
    "Schleswig-Holstein",
    "Thüringen",
)
EAST_STATES = frozenset(
    {
        "Brandenburg",
        "Mecklenburg-Vorpommern",
        "Sachsen",
        "Sachsen-Anhalt",
        "Thüringen",
    }
)
SAXONY = "Sachsen"

PERIOD_YEARLY = 1
PERIOD_MONTHLY = 2

HEALTH_STATUTORY = 0
HEALTH_PRIVATE = 1
HEALTH_VOLUNTARY_STATUTORY = -1

PENSION_STATUTORY = 0
PENSION_EXEMPT = 1

SINGLE_PARENT_CLASS = 2


class GrossToNetParameters(BaseModel):
    """Validated calculator input keyed by the canonical ``input*`` names."""

    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)

    accounting_year: int = Field(alias="inputAccountingYear", ge=1900, le=2100)
    tax_class: int = Field(alias="inputTaxClass", ge=1, le=6)
    tax_allowance: float = Field(alias="inputTaxAllowance", ge=0)
    church_tax: int = Field(alias="inputChurchTax", ge=0, le=1)
    state: str = Field(alias="inputState")
    year_of_birth: int = Field(alias="inputYearOfBirth", ge=1900, le=2100)
    children: int = Field(alias="inputChildren", ge=0, le=30)
    child_tax_allowance: float = Field(
        alias="inputChildTaxAllowance", ge=0, le=10, multiple_of=0.5
    )
    pkv_contribution: float = Field(alias="inputPkvContribution", ge=0)
    employer_subsidy: float = Field(alias="inputEmployerSubsidy", ge=0)
    pension_insurance: int = Field(alias="inputPensionInsurance")
    levy_one: float = Field(alias="inputLevyOne", ge=0, le=100)
    levy_two: float = Field(alias="inputLevyTwo", ge=0, le=100)
    activate_levy: int = Field(alias="inputActivateLevy", ge=0, le=1)
    health_insurance: int = Field(alias="inputHealthInsurance")
    additional_contribution: float = Field(
        alias="inputAdditionalContribution", ge=0, le=10
    )
    period: int = Field(alias="inputPeriod")
    gross_wage: float = Field(alias="inputGrossWage", ge=0)

    @field_validator("church_tax", "activate_levy", mode="before")
    @classmethod
    def _coerce_flags(cls, value: Any) -> Any:
        if isinstance(value, bool):
            return int(value)
        return value

    @field_validator("state")
    @classmethod
    def _validate_state(cls, value: str) -> str:
        if value not in FEDERAL_STATES:
            raise ValueError(f"unknown federal state {value!r}")
        return value

    @field_validator("pension_insurance")
    @classmethod
    def _validate_pension_insurance(cls, value: int) -> int:
        if value not in (PENSION_STATUTORY, PENSION_EXEMPT):
            raise ValueError("must be 0 (statutory) or 1 (exempt)")
        return value

    @field_validator("health_insurance")
    @classmethod
    def _validate_health_insurance(cls, value: int) -> int:
        if value not in (HEALTH_STATUTORY, HEALTH_PRIVATE, HEALTH_VOLUNTARY_STATUTORY):
            raise ValueError("must be 0 (statutory), 1 (private) or -1 (voluntary)")
        return value

    @field_validator("period")
    @classmethod
    def _validate_period(cls, value: int) -> int:
        if value not in (PERIOD_YEARLY, PERIOD_MONTHLY):
            raise ValueError("must be 1 (yearly) or 2 (monthly)")
        return value

    @property
    def is_private_health(self) -> bool:
        return self.health_insurance == HEALTH_PRIVATE

    @property
    def is_east(self) -> bool:
        return self.state in EAST_STATES

    @property
    def age(self) -> int:
        return self.accounting_year - self.year_of_birth


def format_validation_error(error: ValidationError) -> str:
    """Return a concise human-readable description of validation issues."""

    messages: list[str] = []
    for issue in error.errors():
        location = ".".join(str(part) for part in issue.get("loc", ()))
        message = issue.get("msg", "Invalid value")
        if location:
            messages.append(f"{location}: {message}")
        else:
            messages.append(message)

    details = "; ".join(messages) if messages else str(error)
    return f"Invalid calculation parameters: {details}"


def parse_parameters(parameters: Mapping[str, Any]) -> GrossToNetParameters:
    try:
        return GrossToNetParameters.model_validate(dict(parameters))
    except ValidationError as error:
        raise CalculationError(format_validation_error(error)) from error


def _care_employee_rate(params: GrossToNetParameters, config: YearConfiguration) -> float:
    care = config.social_insurance.care
    rate = care.employee_rate
    if params.state == SAXONY:
        rate += care.saxony_employee_surcharge

    if params.children == 0 and params.age >= care.childless_min_age:
        rate += care.childless_surcharge
    elif params.children >= 2:
        eligible = min(params.children, care.child_reduction_max_children) - 1
        rate -= care.child_reduction * eligible
    return rate


def _care_employer_rate(params: GrossToNetParameters, config: YearConfiguration) -> float:
    care = config.social_insurance.care
    rate = care.rate - care.employee_rate
    if params.state == SAXONY:
        rate -= care.saxony_employee_surcharge
    return rate


def _taxable_income(
    params: GrossToNetParameters,
    config: YearConfiguration,
    gross_year: float,
    provision: float,
) -> float:
    tax_config = config.income_tax
    deductions = provision + params.tax_allowance

    if params.tax_class != 6:
        deductions += tax_config.employee_lump_sum + tax_config.special_expenses_lump_sum

    if params.tax_class == SINGLE_PARENT_CLASS:
        deductions += tax_config.single_parent_relief
        deductions += tax_config.single_parent_relief_per_additional_child * max(
            params.children - 1, 0
        )

    taxable = gross_year - deductions
    return taxable if taxable > 0 else 0.0


def calculate(params: GrossToNetParameters, config: YearConfiguration) -> CalculationResult:
    """Compute the gross-to-net breakdown for validated ``params``."""

    if params.period == PERIOD_MONTHLY:
        gross_month = params.gross_wage
    else:
        gross_month = params.gross_wage / 12
    gross_year = gross_month * 12

    insurance = config.social_insurance
    health_base = min(gross_year, insurance.health.ceiling)

    if params.is_private_health:
        health_year = max(params.pkv_contribution - params.employer_subsidy, 0.0) * 12
        care_year = 0.0
        employer_health_year = params.employer_subsidy * 12
        employer_care_year = 0.0
    else:
        health_rate = insurance.health.rate / 2 + params.additional_contribution / 100 / 2
        health_year = health_base * health_rate
        care_year = health_base * _care_employee_rate(params, config)
        employer_health_year = health_year
        employer_care_year = health_base * _care_employer_rate(params, config)

    if params.pension_insurance == PENSION_EXEMPT:
        pension_year = 0.0
        unemployment_year = 0.0
    else:
        pension_base = min(gross_year, insurance.pension.ceiling_for(params.is_east))
        unemployment_base = min(
            gross_year, insurance.unemployment.ceiling_for(params.is_east)
        )
        pension_year = pension_base * insurance.pension.rate / 2
        unemployment_year = unemployment_base * insurance.unemployment.rate / 2

    taxable = _taxable_income(
        params, config, gross_year, pension_year + health_year + care_year
    )
    income_tax_year = calculate_income_tax(taxable, params.tax_class, config.income_tax)

    surcharge_taxable = taxable
    if params.tax_class not in SECONDARY_CLASSES:
        surcharge_taxable = max(
            taxable - params.child_tax_allowance * config.income_tax.child_allowance, 0.0
        )
    surcharge_base = calculate_income_tax(
        surcharge_taxable, params.tax_class, config.income_tax
    )

    solidarity_year = calculate_solidarity_surcharge(
        surcharge_base, params.tax_class, config.solidarity
    )
    church_year = 0.0
    if params.church_tax:
        church_year = surcharge_base * config.church_tax.rate_for_state(params.state)

    income_tax_month = round_currency(income_tax_year / 12)
    solidarity_month = round_currency(solidarity_year / 12)
    church_month = round_currency(church_year / 12)
    health_month = round_currency(health_year / 12)
    care_month = round_currency(care_year / 12)
    pension_month = round_currency(pension_year / 12)
    unemployment_month = round_currency(unemployment_year / 12)

    total_taxes = round_currency(income_tax_month + solidarity_month + church_month)
    total_insurances = round_currency(
        health_month + care_month + pension_month + unemployment_month
    )

    annual_deductions = (
        income_tax_year
        + solidarity_year
        + church_year
        + health_year
        + care_year
        + pension_year
        + unemployment_year
    )

    levies_month = 0.0
    if params.activate_levy:
        levies_month = gross_month * (params.levy_one + params.levy_two) / 100

    employer_costs_month = (
        gross_month
        + (employer_health_year + employer_care_year + pension_year + unemployment_year) / 12
        + levies_month
    )

    return CalculationResult(
        net_wage_month=round_currency(gross_month - total_taxes - total_insurances),
        net_wage_year=round_currency(gross_year - annual_deductions),
        income_tax_month=income_tax_month,
        solidarity_surcharge_month=solidarity_month,
        church_tax_month=church_month,
        total_taxes=total_taxes,
        health_insurance_month=health_month,
        care_insurance_month=care_month,
        pension_insurance_month=pension_month,
        unemployment_insurance_month=unemployment_month,
        total_insurances=total_insurances,
        gross_wage_month=round_currency(gross_month),
        gross_wage_year=round_currency(gross_year),
        income_tax_year=round_currency(income_tax_year),
        employer_costs_month=round_currency(employer_costs_month),
    )


class ReferenceCalculator:
    """Default calculator backend driven by the bundled year configuration."""

    def validate_and_calculate(self, parameters: Mapping[str, Any]) -> CalculationResult:
        params = parse_parameters(parameters)

        try:
            config = load_year_configuration(params.accounting_year)
        except FileNotFoundError as exc:
            raise CalculationError(
                f"Accounting year {params.accounting_year} is not supported"
            ) from exc

        _LOGGER.debug(
            "Calculating gross wage %s for year %s, tax class %s",
            params.gross_wage,
            params.accounting_year,
            params.tax_class,
        )
        return calculate(params, config)


__all__ = [
    "EAST_STATES",
    "FEDERAL_STATES",
    "GrossToNetParameters",
    "ReferenceCalculator",
    "calculate",
    "format_validation_error",
    "parse_parameters",
]
