"""Unit tests for the batch invoker."""

from __future__ import annotations

import pytest

from bruttonetto.backend.errors import CalculationError
from bruttonetto.backend.services.batch import calculate_batch
from bruttonetto.backend.services.normalizer import build_base_input


def test_calculates_each_entry_in_order(recording_calculator) -> None:
    template = build_base_input({"steuerklasse": 2})

    results = calculate_batch(template, [1000, 3000, 2000], recording_calculator)

    assert [call["inputGrossWage"] for call in recording_calculator.calls] == [
        1000,
        3000,
        2000,
    ]
    assert [result.income_tax_month for result in results] == [20.0, 60.0, 40.0]
    assert all(call["inputTaxClass"] == 2 for call in recording_calculator.calls)
    assert template.gross_wage is None


def test_failure_aborts_the_whole_batch(recording_calculator) -> None:
    recording_calculator.fail_on = 2000
    template = build_base_input({})

    with pytest.raises(CalculationError) as excinfo:
        calculate_batch(template, [1000, 2000, 3000], recording_calculator)

    assert excinfo.value.message == "Ungültige Eingabe"
    assert isinstance(excinfo.value.__cause__, ValueError)
    assert len(recording_calculator.calls) == 2


def test_calculation_errors_propagate_unchanged() -> None:
    error = CalculationError("Accounting year 1999 is not supported")

    class RejectingCalculator:
        def validate_and_calculate(self, parameters):
            raise error

    with pytest.raises(CalculationError) as excinfo:
        calculate_batch(build_base_input({}), [1000], RejectingCalculator())

    assert excinfo.value is error


def test_profiling_logs_duration(recording_calculator, caplog) -> None:
    caplog.set_level("DEBUG", logger="bruttonetto.backend.services.batch")

    calculate_batch(build_base_input({}), [1000], recording_calculator, profile=True)

    assert any("batch of 1 took" in record.getMessage() for record in caplog.records)
