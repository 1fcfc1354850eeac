"""Test configuration utilities and shared fixtures."""

import sys
from pathlib import Path

# Ensure the ``src`` directory is importable when tests are executed without an
# editable install.
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from typing import Any, Mapping  # noqa: E402

import pytest  # noqa: E402
from flask import Flask  # noqa: E402
from flask.testing import FlaskClient  # noqa: E402

from bruttonetto.backend.app import create_app  # noqa: E402
from bruttonetto.backend.calculator import CalculationResult  # noqa: E402
from bruttonetto.backend.settings import Settings  # noqa: E402


class RecordingCalculator:
    """Deterministic stand-in that records every parameter set it receives.

    Income tax scales with the tax class so tests can observe which value
    reached the calculator.
    """

    def __init__(self, fail_on: Any = None, message: str = "Ungültige Eingabe") -> None:
        self.calls: list[dict[str, Any]] = []
        self.fail_on = fail_on
        self.message = message

    def validate_and_calculate(self, parameters: Mapping[str, Any]) -> CalculationResult:
        self.calls.append(dict(parameters))
        gross = parameters["inputGrossWage"]
        if self.fail_on is not None and gross == self.fail_on:
            raise ValueError(self.message)

        income_tax = round(gross * 0.01 * parameters["inputTaxClass"], 2)
        insurances = round(gross * 0.2, 2)
        net = round(gross - income_tax - insurances, 2)
        return CalculationResult(
            net_wage_month=net,
            net_wage_year=round(net * 12, 2),
            income_tax_month=income_tax,
            solidarity_surcharge_month=0.0,
            church_tax_month=0.0,
            total_taxes=income_tax,
            health_insurance_month=round(gross * 0.08, 2),
            care_insurance_month=round(gross * 0.02, 2),
            pension_insurance_month=round(gross * 0.09, 2),
            unemployment_insurance_month=round(gross * 0.01, 2),
            total_insurances=insurances,
        )


@pytest.fixture()
def recording_calculator() -> RecordingCalculator:
    return RecordingCalculator()


@pytest.fixture()
def app() -> Flask:
    """Return an application wired to the bundled reference calculator."""

    application = create_app(settings=Settings())
    application.config.update(TESTING=True)
    return application


@pytest.fixture()
def client(app: Flask) -> FlaskClient:
    """Provide a test client bound to the configured Flask app."""

    return app.test_client()


@pytest.fixture()
def recording_app(recording_calculator: RecordingCalculator) -> Flask:
    application = create_app(calculator=recording_calculator, settings=Settings())
    application.config.update(TESTING=True)
    return application


@pytest.fixture()
def recording_client(recording_app: Flask) -> FlaskClient:
    """Test client whose calculator records the parameters it is called with."""

    return recording_app.test_client()
