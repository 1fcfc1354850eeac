"""Blueprint registrations for application routes."""

from flask import Flask

from .payroll import blueprint as payroll_blueprint


def register_routes(app: Flask) -> None:
    """Register all Flask blueprints with the provided application."""

    app.register_blueprint(payroll_blueprint)
