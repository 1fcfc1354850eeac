#!/usr/bin/env python3
"""Check the bundled payroll year files from a plain checkout.

Runs the same checks as ``bruttonetto-validate-config``; pass accounting years
as arguments to limit the run.
"""

from __future__ import annotations

import sys
from pathlib import Path

SRC_DIR = Path(__file__).resolve().parents[1] / "src"
sys.path.insert(0, str(SRC_DIR))

from bruttonetto.backend.config.validator import main  # noqa: E402


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
