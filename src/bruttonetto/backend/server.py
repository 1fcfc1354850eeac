"""Development server entry point."""

from __future__ import annotations

import logging
from typing import Sequence

from bruttonetto.backend.app import create_app
from bruttonetto.backend.settings import Settings

_LOGGER = logging.getLogger(__name__)


def main(argv: Sequence[str] | None = None) -> int:
    """Run the Flask development server on the configured port."""

    settings = Settings.from_environ()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = create_app(settings=settings)
    _LOGGER.info("Brutto-Netto-Rechner läuft auf Port %s", settings.port)
    app.run(host=settings.host, port=settings.port)
    return 0


if __name__ == "__main__":  # pragma: no cover - CLI invocation
    raise SystemExit(main())
