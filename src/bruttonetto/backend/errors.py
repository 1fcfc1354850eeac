"""Exception taxonomy shared by the request pipeline."""

from __future__ import annotations

GROSS_WAGE_LIST_ERROR = "bruttoListe (Array) fehlt oder ist leer."
INTERNAL_ERROR = "Interner Fehler"


class PayrollError(Exception):
    """Base class for failures raised while handling a payroll batch."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class BatchValidationError(PayrollError):
    """Raised when the gross wage list is absent, not a list, or empty."""

    def __init__(self, message: str = GROSS_WAGE_LIST_ERROR) -> None:
        super().__init__(message)


class CalculationError(PayrollError):
    """Raised when the gross-to-net calculator rejects or fails an input."""


class MalformedPayloadError(PayrollError):
    """Raised when the request body cannot be decoded as JSON."""


__all__ = [
    "BatchValidationError",
    "CalculationError",
    "GROSS_WAGE_LIST_ERROR",
    "INTERNAL_ERROR",
    "MalformedPayloadError",
    "PayrollError",
]
