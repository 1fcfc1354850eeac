"""Application factory for the brutto-netto backend."""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from flask import Flask, jsonify, request
from flask_cors import CORS
from werkzeug.exceptions import HTTPException

from bruttonetto.backend.calculator import GrossToNetCalculator, load_calculator
from bruttonetto.backend.errors import (
    INTERNAL_ERROR,
    BatchValidationError,
    PayrollError,
)
from bruttonetto.backend.settings import Settings
from bruttonetto.backend.version import get_project_version

from .http import problem_response
from .routes import register_routes
from .routes.payroll import CALCULATOR_EXTENSION

_LOGGER = logging.getLogger(__name__)


def _utc_timestamp() -> str:
    """Return the current time as an ISO-8601 string with a ``Z`` suffix."""

    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _internal_error(error: Exception, details: str):
    _LOGGER.error(
        "Fehler bei %s %s: %s", request.method, request.path, details, exc_info=error
    )
    return problem_response(INTERNAL_ERROR, status=500, details=details).to_response()


def create_app(
    calculator: GrossToNetCalculator | None = None,
    settings: Settings | None = None,
) -> Flask:
    """Create and configure the Flask application instance."""

    settings = settings or Settings.from_environ()

    app = Flask(__name__)
    app.config.update(PROFILE_CALCULATIONS=settings.profile_calculations)
    app.extensions[CALCULATOR_EXTENSION] = calculator or load_calculator(
        settings.calculator
    )

    origins = settings.allowed_origins
    allow_any_origin = "*" in origins
    CORS(
        app,
        origins="*" if allow_any_origin else list(origins),
        send_wildcard=allow_any_origin,
        supports_credentials=False,
        methods=["GET", "OPTIONS", "POST"],
        allow_headers=["Content-Type"],
    )

    register_routes(app)

    @app.route("/health", methods=["GET"])
    def health_check():
        """Simple health check endpoint for infrastructure monitoring."""

        payload = {
            "status": "ok",
            "timestamp": _utc_timestamp(),
            "version": get_project_version(),
        }
        return jsonify(payload)

    @app.errorhandler(BatchValidationError)
    def handle_batch_validation_error(error: BatchValidationError):
        """Reject requests without a usable gross wage list."""

        return problem_response(error.message, status=400).to_response()

    @app.errorhandler(PayrollError)
    def handle_payroll_error(error: PayrollError):
        """Surface calculation and payload failures as server errors."""

        return _internal_error(error, error.message)

    @app.errorhandler(Exception)
    def handle_unexpected_error(error: Exception):
        """Report anything unforeseen with its message for diagnostics."""

        if isinstance(error, HTTPException):
            return error
        return _internal_error(error, str(error) or type(error).__name__)

    return app
