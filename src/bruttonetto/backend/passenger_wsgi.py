"""WSGI entrypoint for deploying the brutto-netto backend behind Passenger."""

from bruttonetto.backend.app import create_app

# Passenger expects a module-level variable named ``application``.
application = create_app()
