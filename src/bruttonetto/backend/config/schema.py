"""Pydantic models describing the payroll year configuration schema."""

from __future__ import annotations

from typing import Any, Mapping, Sequence

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    computed_field,
    field_validator,
    model_validator,
)


class ConfigurationError(ValueError):
    """Raised when configuration values violate schema expectations."""


class ImmutableModel(BaseModel):
    """Base class that freezes instances and rejects unknown fields."""

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)


class ProgressionZone(ImmutableModel):
    """Quadratic tariff zone of the income tax formula.

    Within the zone the tax is ``(quadratic * v + linear) * v + constant`` where
    ``v`` is one ten-thousandth of the income above the zone's lower bound.
    """

    upper_bound: float = Field(alias="upper")
    quadratic: float
    linear: float
    constant: float = 0.0

    @model_validator(mode="after")
    def _validate_values(self) -> ProgressionZone:
        if self.upper_bound <= 0:
            raise ConfigurationError("Zone upper bounds must be positive values")
        if self.quadratic < 0 or self.linear < 0 or self.constant < 0:
            raise ConfigurationError("Zone coefficients must be non-negative")
        return self


class ProportionalZone(ImmutableModel):
    """Linear tariff zone computed as ``rate * income - deduction``."""

    upper_bound: float | None = Field(default=None, alias="upper")
    rate: float
    deduction: float = 0.0

    @model_validator(mode="after")
    def _validate_values(self) -> ProportionalZone:
        if not 0 < self.rate < 1:
            raise ConfigurationError("Proportional zone rates must lie between 0 and 1")
        if self.upper_bound is not None and self.upper_bound <= 0:
            raise ConfigurationError("Upper bounds must be positive values")
        return self


class IncomeTaxConfig(ImmutableModel):
    """Income tax tariff and the lump sums applied before it."""

    basic_allowance: float
    progression_zones: Sequence[ProgressionZone]
    proportional_zones: Sequence[ProportionalZone]
    employee_lump_sum: float = 0.0
    special_expenses_lump_sum: float = 0.0
    single_parent_relief: float = 0.0
    single_parent_relief_per_additional_child: float = 0.0
    child_allowance: float = 0.0
    minimum_rate_secondary_classes: float = 0.14

    @model_validator(mode="after")
    def _validate_zones(self) -> IncomeTaxConfig:
        if self.basic_allowance < 0:
            raise ConfigurationError("The basic allowance must be non-negative")
        if not self.progression_zones:
            raise ConfigurationError("At least one progression zone must be defined")
        if not self.proportional_zones:
            raise ConfigurationError("At least one proportional zone must be defined")

        last_upper = self.basic_allowance
        for zone in self.progression_zones:
            if zone.upper_bound <= last_upper:
                raise ConfigurationError("Tariff zones must be in ascending order")
            last_upper = zone.upper_bound

        for zone in self.proportional_zones[:-1]:
            if zone.upper_bound is None or zone.upper_bound <= last_upper:
                raise ConfigurationError("Tariff zones must be in ascending order")
            last_upper = zone.upper_bound

        if self.proportional_zones[-1].upper_bound is not None:
            raise ConfigurationError("Final tariff zone must have an open upper bound")

        for value in (
            self.employee_lump_sum,
            self.special_expenses_lump_sum,
            self.single_parent_relief,
            self.single_parent_relief_per_additional_child,
            self.child_allowance,
        ):
            if value < 0:
                raise ConfigurationError("Lump sums and allowances must be non-negative")
        return self


class SolidarityConfig(ImmutableModel):
    """Solidarity surcharge rate and exemption threshold."""

    rate: float
    exemption_threshold: float = 0.0
    phase_in_rate: float | None = None

    @model_validator(mode="after")
    def _validate_rates(self) -> SolidarityConfig:
        if self.rate < 0 or self.exemption_threshold < 0:
            raise ConfigurationError("Solidarity surcharge values must be non-negative")
        if self.phase_in_rate is not None and self.phase_in_rate < 0:
            raise ConfigurationError("Solidarity phase-in rate must be non-negative")
        return self


class ChurchTaxConfig(ImmutableModel):
    """Church tax rates, with the reduced rate for selected states."""

    default_rate: float
    reduced_rate: float | None = None
    reduced_rate_states: Sequence[str] = Field(default_factory=tuple)

    @field_validator("reduced_rate_states", mode="before")
    @classmethod
    def _coerce_states(cls, value: Any) -> Sequence[str]:
        if value is None:
            return ()
        if isinstance(value, str):
            return (value,)
        return tuple(str(item) for item in value)

    def rate_for_state(self, state: str) -> float:
        if self.reduced_rate is not None and state in self.reduced_rate_states:
            return self.reduced_rate
        return self.default_rate


class InsuranceBranch(ImmutableModel):
    """Contribution rate and annual assessment ceiling of an insurance branch."""

    rate: float
    ceiling: float
    ceiling_east: float | None = None

    @model_validator(mode="after")
    def _validate_values(self) -> InsuranceBranch:
        if not 0 <= self.rate < 1:
            raise ConfigurationError("Insurance rates must lie between 0 and 1")
        if self.ceiling <= 0:
            raise ConfigurationError("Assessment ceilings must be positive")
        if self.ceiling_east is not None and self.ceiling_east <= 0:
            raise ConfigurationError("Assessment ceilings must be positive")
        return self

    def ceiling_for(self, east: bool) -> float:
        if east and self.ceiling_east is not None:
            return self.ceiling_east
        return self.ceiling


class CareInsuranceConfig(ImmutableModel):
    """Long-term care insurance rates with childless and child adjustments."""

    rate: float
    employee_rate: float
    childless_surcharge: float = 0.0
    childless_min_age: int = 23
    child_reduction: float = 0.0
    child_reduction_max_children: int = 5
    saxony_employee_surcharge: float = 0.0

    @model_validator(mode="after")
    def _validate_rates(self) -> CareInsuranceConfig:
        if self.employee_rate > self.rate:
            raise ConfigurationError("Care employee rate cannot exceed the total rate")
        if self.child_reduction_max_children < 1:
            raise ConfigurationError("Care child reduction cap must be at least one")
        return self


class SocialInsuranceConfig(ImmutableModel):
    """Statutory social insurance branches."""

    health: InsuranceBranch
    care: CareInsuranceConfig
    pension: InsuranceBranch
    unemployment: InsuranceBranch


class YearConfiguration(ImmutableModel):
    """Structured representation of a payroll year configuration."""

    year: int
    meta: Mapping[str, Any] = Field(default_factory=dict)
    income_tax: IncomeTaxConfig
    solidarity: SolidarityConfig
    church_tax: ChurchTaxConfig
    social_insurance: SocialInsuranceConfig

    @model_validator(mode="before")
    @classmethod
    def _prepare(cls, data: Any) -> Mapping[str, Any]:
        if not isinstance(data, Mapping):
            raise ConfigurationError("Configuration file must define a mapping at the top level")

        prepared = dict(data)
        meta = prepared.get("meta")
        if meta is None:
            prepared["meta"] = {}
        elif not isinstance(meta, Mapping):
            raise ConfigurationError("'meta' section must be a mapping if provided")

        for section in ("income_tax", "solidarity", "church_tax", "social_insurance"):
            if not isinstance(prepared.get(section), Mapping):
                raise ConfigurationError(f"Configuration requires a '{section}' section")
        return prepared


class TaxYearManifestEntry(ImmutableModel):
    """Entry describing a supported accounting year in the manifest."""

    year: int
    filename: str | None = None
    status: str = "active"
    notes_url: str | None = None

    @computed_field
    @property
    def resolved_filename(self) -> str:
        return self.filename or f"{self.year}.yaml"


class TaxYearManifest(ImmutableModel):
    """Manifest describing the available year configuration files."""

    years: Sequence[TaxYearManifestEntry]

    @model_validator(mode="after")
    def _validate_years(self) -> TaxYearManifest:
        seen: set[int] = set()
        for entry in self.years:
            if entry.year in seen:
                raise ConfigurationError(
                    f"Duplicate year {entry.year} declared in the configuration manifest"
                )
            seen.add(entry.year)
        return self

    def get_entry(self, year: int) -> TaxYearManifestEntry:
        for entry in self.years:
            if entry.year == year:
                return entry
        raise KeyError(year)

    @computed_field
    @property
    def supported_years(self) -> tuple[int, ...]:
        return tuple(sorted(entry.year for entry in self.years))


__all__ = [
    "CareInsuranceConfig",
    "ChurchTaxConfig",
    "ConfigurationError",
    "ImmutableModel",
    "IncomeTaxConfig",
    "InsuranceBranch",
    "ProgressionZone",
    "ProportionalZone",
    "SocialInsuranceConfig",
    "SolidarityConfig",
    "TaxYearManifest",
    "TaxYearManifestEntry",
    "ValidationError",
    "YearConfiguration",
]
