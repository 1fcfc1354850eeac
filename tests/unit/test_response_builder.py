"""Unit tests for response shaping helpers."""

from __future__ import annotations

from flask import Flask

from bruttonetto.backend.calculator import CalculationResult
from bruttonetto.backend.services.response_builder import (
    build_batch_response,
    shape_result,
    shape_results,
)

RESULT = CalculationResult(
    net_wage_month=2100.5,
    net_wage_year=25206.0,
    income_tax_month=300.25,
    solidarity_surcharge_month=0.0,
    church_tax_month=24.02,
    total_taxes=324.27,
    health_insurance_month=250.0,
    care_insurance_month=60.0,
    pension_insurance_month=279.0,
    unemployment_insurance_month=39.0,
    total_insurances=628.0,
    employer_costs_month=3650.0,
)


def test_shape_result_renames_selected_fields() -> None:
    entry = shape_result(3000, RESULT).as_payload()

    assert entry == {
        "brutto": 3000,
        "nettoMonat": 2100.5,
        "nettoJahr": 25206.0,
        "lohnsteuerMonat": 300.25,
        "soliMonat": 0.0,
        "kirchensteuerMonat": 24.02,
        "steuernGesamt": 324.27,
        "krankenversicherungMonat": 250.0,
        "pflegeversicherungMonat": 60.0,
        "rentenversicherungMonat": 279.0,
        "arbeitslosenversicherungMonat": 39.0,
        "sozialabgabenGesamt": 628.0,
    }


def test_build_batch_response_preserves_order(app: Flask) -> None:
    entries = shape_results([3000, 1000], [RESULT, RESULT])

    with app.app_context():
        response, status = build_batch_response(entries)

    assert status == 200
    assert [item["brutto"] for item in response.get_json()["results"]] == [3000, 1000]


def test_shape_result_passes_calculator_values_through_unchanged() -> None:
    result = CalculationResult(*[250] * 10, total_insurances="628.00")

    entry = shape_result("3000", result).as_payload()

    assert entry["brutto"] == "3000"
    assert entry["nettoMonat"] == 250
    assert type(entry["nettoMonat"]) is int
    assert entry["sozialabgabenGesamt"] == "628.00"
