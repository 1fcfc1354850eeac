"""Helpers for extracting batch requests from incoming HTTP requests."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from flask import Request
from werkzeug.exceptions import BadRequest

from bruttonetto.backend.errors import BatchValidationError, MalformedPayloadError

GROSS_WAGE_LIST_FIELD = "bruttoListe"


def parse_batch_payload(req: Request) -> dict[str, Any]:
    """Extract the JSON object from ``req``.

    Only bodies declared as JSON are parsed. Any other content type, an empty
    body or a JSON value that is not an object yields an empty payload so the
    gross wage check reports the problem to the client.
    """

    if not req.is_json or not req.get_data(cache=True):
        return {}

    try:
        data = req.get_json()
    except BadRequest as exc:
        raise MalformedPayloadError("Request body must be valid JSON") from exc

    if not isinstance(data, Mapping):
        return {}
    return dict(data)


def extract_gross_wages(payload: Mapping[str, Any]) -> list[Any]:
    """Return the gross wage list or raise :class:`BatchValidationError`."""

    gross_wages = payload.get(GROSS_WAGE_LIST_FIELD)
    if not isinstance(gross_wages, list) or not gross_wages:
        raise BatchValidationError()
    return gross_wages


__all__ = ["GROSS_WAGE_LIST_FIELD", "extract_gross_wages", "parse_batch_payload"]
