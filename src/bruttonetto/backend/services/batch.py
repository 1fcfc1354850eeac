"""Run the gross-to-net calculator once per gross wage entry."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from contextlib import contextmanager
from time import perf_counter
from typing import Any, Iterator

from bruttonetto.backend.models import CanonicalInput
from bruttonetto.backend.calculator import CalculationResult, GrossToNetCalculator
from bruttonetto.backend.errors import CalculationError, PayrollError

_LOGGER = logging.getLogger(__name__)


@contextmanager
def _profile_section(name: str, enabled: bool) -> Iterator[None]:
    """Log the duration of a named section when profiling is enabled."""

    if not enabled:
        yield
        return

    start = perf_counter()
    try:
        yield
    finally:
        _LOGGER.debug("%s took %.3f ms", name, (perf_counter() - start) * 1000)


def calculate_batch(
    template: CanonicalInput,
    gross_wages: Sequence[Any],
    calculator: GrossToNetCalculator,
    *,
    profile: bool = False,
) -> list[CalculationResult]:
    """Calculate every gross wage in order, aborting on the first failure."""

    results: list[CalculationResult] = []
    with _profile_section(f"batch of {len(gross_wages)}", profile):
        for index, amount in enumerate(gross_wages):
            parameters = template.with_gross_wage(amount).as_calculator_input()
            try:
                results.append(calculator.validate_and_calculate(parameters))
            except PayrollError:
                raise
            except Exception as exc:
                _LOGGER.debug("Calculator failed for entry %d (%r)", index, amount)
                raise CalculationError(str(exc) or type(exc).__name__) from exc
    return results


__all__ = ["calculate_batch"]
