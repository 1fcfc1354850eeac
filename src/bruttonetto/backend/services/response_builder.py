"""Utilities for shaping calculator results into response payloads."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Any, Tuple

from flask import jsonify

from bruttonetto.backend.models import ResultEntry
from bruttonetto.backend.calculator import CalculationResult

ResponseTuple = Tuple[Any, int]


def shape_result(gross_wage: Any, result: CalculationResult) -> ResultEntry:
    """Select and rename the public subset of ``result``."""

    return ResultEntry(
        gross_wage=gross_wage,
        net_wage_month=result.net_wage_month,
        net_wage_year=result.net_wage_year,
        income_tax_month=result.income_tax_month,
        solidarity_surcharge_month=result.solidarity_surcharge_month,
        church_tax_month=result.church_tax_month,
        total_taxes=result.total_taxes,
        health_insurance_month=result.health_insurance_month,
        care_insurance_month=result.care_insurance_month,
        pension_insurance_month=result.pension_insurance_month,
        unemployment_insurance_month=result.unemployment_insurance_month,
        total_insurances=result.total_insurances,
    )


def shape_results(
    gross_wages: Sequence[Any], results: Iterable[CalculationResult]
) -> list[ResultEntry]:
    return [shape_result(gross, result) for gross, result in zip(gross_wages, results)]


def build_batch_response(entries: Iterable[ResultEntry]) -> ResponseTuple:
    """Return a Flask JSON response listing ``entries`` under ``results``."""

    return jsonify({"results": [entry.as_payload() for entry in entries]}), 200


__all__ = ["build_batch_response", "shape_result", "shape_results"]
