"""Expose the project version for health checks and logs."""

from __future__ import annotations

import tomllib
from functools import lru_cache
from importlib import metadata
from pathlib import Path
from typing import Final

DISTRIBUTION_NAME: Final = "bruttonetto"
PYPROJECT_PATH: Final = Path(__file__).resolve().parents[3] / "pyproject.toml"
UNKNOWN_VERSION: Final = "0+unknown"


@lru_cache(maxsize=1)
def get_project_version() -> str:
    """Return the installed distribution version, else the one in ``pyproject.toml``."""

    try:
        return metadata.version(DISTRIBUTION_NAME)
    except metadata.PackageNotFoundError:
        return _version_from_pyproject(PYPROJECT_PATH)


def _version_from_pyproject(path: Path) -> str:
    # Source checkouts without an install still carry the project metadata.
    if not path.exists():
        return UNKNOWN_VERSION

    with path.open("rb") as handle:
        project = tomllib.load(handle).get("project", {})
    return str(project.get("version") or UNKNOWN_VERSION)


__all__ = ["get_project_version"]
