"""Runtime settings resolved from environment variables."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

DEFAULT_PORT = 3000
DEFAULT_HOST = "0.0.0.0"
DEFAULT_CALCULATOR = "bruttonetto.backend.calculator.reference:ReferenceCalculator"

_TRUTHY = {"1", "true", "yes", "on"}


def parse_allowed_origins(raw: str | None) -> list[str]:
    """Convert an environment variable into a sorted list of origins.

    An unset or blank value allows every origin.
    """

    if not raw or not raw.strip():
        return ["*"]

    origins = {origin.strip() for origin in raw.split(",") if origin.strip()}
    return sorted(origins) or ["*"]


def _parse_port(raw: str | None) -> int:
    if raw is None or not raw.strip():
        return DEFAULT_PORT
    try:
        port = int(raw)
    except ValueError as exc:
        raise ValueError(f"PORT must be an integer, got {raw!r}") from exc
    if not 0 < port < 65536:
        raise ValueError(f"PORT must be between 1 and 65535, got {port}")
    return port


@dataclass(frozen=True)
class Settings:
    """Process-level configuration for the HTTP service."""

    port: int = DEFAULT_PORT
    host: str = DEFAULT_HOST
    allowed_origins: tuple[str, ...] = ("*",)
    calculator: str = DEFAULT_CALCULATOR
    log_level: str = "INFO"
    profile_calculations: bool = False

    @classmethod
    def from_environ(cls, environ: Mapping[str, str] | None = None) -> "Settings":
        env = os.environ if environ is None else environ
        return cls(
            port=_parse_port(env.get("PORT")),
            host=env.get("HOST") or DEFAULT_HOST,
            allowed_origins=tuple(
                parse_allowed_origins(env.get("BRUTTONETTO_ALLOWED_ORIGINS"))
            ),
            calculator=env.get("BRUTTONETTO_CALCULATOR") or DEFAULT_CALCULATOR,
            log_level=(env.get("BRUTTONETTO_LOG_LEVEL") or "INFO").upper(),
            profile_calculations=(
                env.get("BRUTTONETTO_PROFILE_CALCULATIONS", "").strip().lower()
                in _TRUTHY
            ),
        )


__all__ = [
    "DEFAULT_CALCULATOR",
    "DEFAULT_HOST",
    "DEFAULT_PORT",
    "Settings",
    "parse_allowed_origins",
]
