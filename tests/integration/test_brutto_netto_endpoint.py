"""Integration tests for the batch gross-to-net endpoint."""

from __future__ import annotations

from http import HTTPStatus

import pytest
from flask.testing import FlaskClient

from bruttonetto.backend.errors import GROSS_WAGE_LIST_ERROR

RESULT_KEYS = {
    "brutto",
    "nettoMonat",
    "nettoJahr",
    "lohnsteuerMonat",
    "soliMonat",
    "kirchensteuerMonat",
    "steuernGesamt",
    "krankenversicherungMonat",
    "pflegeversicherungMonat",
    "rentenversicherungMonat",
    "arbeitslosenversicherungMonat",
    "sozialabgabenGesamt",
}


def test_results_follow_input_order(recording_client: FlaskClient) -> None:
    gross_wages = [4500, 1200.5, 3000, 3000]

    response = recording_client.post("/brutto-netto", json={"bruttoListe": gross_wages})

    assert response.status_code == HTTPStatus.OK
    results = response.get_json()["results"]
    assert len(results) == len(gross_wages)
    assert [entry["brutto"] for entry in results] == gross_wages
    assert all(set(entry) == RESULT_KEYS for entry in results)


@pytest.mark.parametrize(
    "body",
    [{}, {"bruttoListe": []}, {"bruttoListe": 3000}, {"bruttoListe": None}, ["not", "an", "object"]],
)
def test_missing_or_empty_list_is_rejected(
    recording_client: FlaskClient, recording_calculator, body
) -> None:
    response = recording_client.post("/brutto-netto", json=body)

    assert response.status_code == HTTPStatus.BAD_REQUEST
    assert response.get_json() == {"error": GROSS_WAGE_LIST_ERROR}
    assert recording_calculator.calls == []


def test_empty_body_is_rejected(recording_client: FlaskClient, recording_calculator) -> None:
    response = recording_client.post("/brutto-netto")

    assert response.status_code == HTTPStatus.BAD_REQUEST
    assert response.get_json()["error"] == GROSS_WAGE_LIST_ERROR
    assert recording_calculator.calls == []


@pytest.mark.parametrize(
    ("data", "content_type"),
    [
        ('{"bruttoListe": [1000]}', "text/plain"),
        ("bruttoListe=1000", "application/x-www-form-urlencoded"),
    ],
)
def test_non_json_body_is_rejected(
    recording_client: FlaskClient, recording_calculator, data: str, content_type: str
) -> None:
    response = recording_client.post(
        "/brutto-netto", data=data, content_type=content_type
    )

    assert response.status_code == HTTPStatus.BAD_REQUEST
    assert response.get_json() == {"error": GROSS_WAGE_LIST_ERROR}
    assert recording_calculator.calls == []


def test_localized_names_win(recording_client: FlaskClient, recording_calculator) -> None:
    response = recording_client.post(
        "/brutto-netto",
        json={"bruttoListe": [1000], "steuerklasse": 3, "inputTaxClass": 6},
    )

    assert response.status_code == HTTPStatus.OK
    assert recording_calculator.calls[0]["inputTaxClass"] == 3
    assert response.get_json()["results"][0]["lohnsteuerMonat"] == pytest.approx(30.0)


def test_defaults_reach_the_calculator(
    recording_client: FlaskClient, recording_calculator
) -> None:
    recording_client.post("/brutto-netto", json={"bruttoListe": [1000]})

    parameters = recording_calculator.calls[0]
    assert parameters["inputState"] == "Hamburg"
    assert parameters["inputAdditionalContribution"] == 1.7
    assert parameters["inputPeriod"] == 2
    assert isinstance(parameters["inputAccountingYear"], str)


def test_explicit_zero_is_preserved(
    recording_client: FlaskClient, recording_calculator
) -> None:
    recording_client.post("/brutto-netto", json={"bruttoListe": [1000], "steuerklasse": 0})

    assert recording_calculator.calls[0]["inputTaxClass"] == 0


def test_calculator_failure_rejects_whole_batch(
    recording_client: FlaskClient, recording_calculator
) -> None:
    recording_calculator.fail_on = 2000

    response = recording_client.post(
        "/brutto-netto", json={"bruttoListe": [1000, 2000, 3000]}
    )

    assert response.status_code == HTTPStatus.INTERNAL_SERVER_ERROR
    assert response.get_json() == {
        "error": "Interner Fehler",
        "details": "Ungültige Eingabe",
    }


def test_malformed_json_is_a_server_error(recording_client: FlaskClient) -> None:
    response = recording_client.post(
        "/brutto-netto", data="{broken", content_type="application/json"
    )

    assert response.status_code == HTTPStatus.INTERNAL_SERVER_ERROR
    payload = response.get_json()
    assert payload["error"] == "Interner Fehler"
    assert "JSON" in payload["details"]


def test_reference_calculator_end_to_end(client: FlaskClient) -> None:
    response = client.post(
        "/brutto-netto",
        json={
            "bruttoListe": [2500, 4000, 6000],
            "year": 2025,
            "steuerklasse": 1,
            "kirchensteuer": 1,
            "bundesland": "Bayern",
            "kinder": 1,
            "zusatzbeitrag": 2.5,
        },
    )

    assert response.status_code == HTTPStatus.OK
    results = response.get_json()["results"]
    nets = [entry["nettoMonat"] for entry in results]
    assert nets == sorted(nets)
    for entry in results:
        assert entry["nettoMonat"] == pytest.approx(
            entry["brutto"] - entry["steuernGesamt"] - entry["sozialabgabenGesamt"],
            abs=0.01,
        )
        assert entry["kirchensteuerMonat"] > 0


def test_reference_calculator_rejection_is_reported(client: FlaskClient) -> None:
    response = client.post(
        "/brutto-netto",
        json={"bruttoListe": [3000], "year": 2025, "bundesland": "Atlantis"},
    )

    assert response.status_code == HTTPStatus.INTERNAL_SERVER_ERROR
    payload = response.get_json()
    assert payload["error"] == "Interner Fehler"
    assert "inputState" in payload["details"]
    assert "results" not in payload
