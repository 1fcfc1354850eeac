"""Pydantic models describing the public API surface."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

__all__ = ["ResultEntry"]


class ResultEntry(BaseModel):
    """Public result for one gross wage, serialised with German field names."""

    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)

    gross_wage: Any = Field(alias="brutto")
    net_wage_month: Any = Field(alias="nettoMonat")
    net_wage_year: Any = Field(alias="nettoJahr")
    income_tax_month: Any = Field(alias="lohnsteuerMonat")
    solidarity_surcharge_month: Any = Field(alias="soliMonat")
    church_tax_month: Any = Field(alias="kirchensteuerMonat")
    total_taxes: Any = Field(alias="steuernGesamt")
    health_insurance_month: Any = Field(alias="krankenversicherungMonat")
    care_insurance_month: Any = Field(alias="pflegeversicherungMonat")
    pension_insurance_month: Any = Field(alias="rentenversicherungMonat")
    unemployment_insurance_month: Any = Field(
        alias="arbeitslosenversicherungMonat"
    )
    total_insurances: Any = Field(alias="sozialabgabenGesamt")

    def as_payload(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)
