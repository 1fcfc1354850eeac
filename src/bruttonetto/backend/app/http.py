"""HTTP helper utilities shared across Flask blueprints."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from flask import jsonify


@dataclass(frozen=True)
class ProblemResponse:
    """Error payload with a fixed message and optional diagnostic details."""

    error: str
    status: int
    details: str | None = None

    def as_dict(self) -> dict[str, Any]:
        """Return the serialisable payload for this problem response."""

        payload: dict[str, Any] = {"error": self.error}
        if self.details is not None:
            payload["details"] = self.details
        return payload

    def to_response(self) -> tuple[Any, int]:
        """Convert the problem payload into a Flask response tuple."""

        return jsonify(self.as_dict()), self.status


def problem_response(error: str, *, status: int, details: str | None = None) -> ProblemResponse:
    """Convenience factory mirroring Flask's ``jsonify`` interface."""

    return ProblemResponse(error=error, status=status, details=details)


__all__ = ["ProblemResponse", "problem_response"]
