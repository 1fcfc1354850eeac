"""REST endpoint for batch gross-to-net calculations."""

from __future__ import annotations

from typing import Any

from flask import Blueprint, current_app, request

from bruttonetto.backend.services import (
    build_base_input,
    build_batch_response,
    calculate_batch,
    extract_gross_wages,
    parse_batch_payload,
    shape_results,
)

CALCULATOR_EXTENSION = "bruttonetto.calculator"

blueprint = Blueprint("payroll", __name__)


@blueprint.post("/brutto-netto")
def create_batch_calculation() -> tuple[Any, int]:
    """Calculate net wages for every entry of ``bruttoListe``."""

    payload = parse_batch_payload(request)
    gross_wages = extract_gross_wages(payload)

    template = build_base_input(payload)
    results = calculate_batch(
        template,
        gross_wages,
        current_app.extensions[CALCULATOR_EXTENSION],
        profile=current_app.config.get("PROFILE_CALCULATIONS", False),
    )

    return build_batch_response(shape_results(gross_wages, results))
