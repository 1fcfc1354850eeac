"""Utilities for validating year configuration data and surfacing issues."""

from __future__ import annotations

import argparse
from datetime import date
from typing import Sequence

from .schema import ConfigurationError
from .year_config import (
    CareInsuranceConfig,
    IncomeTaxConfig,
    InsuranceBranch,
    SolidarityConfig,
    YearConfiguration,
    available_years,
    load_year_configuration,
)


def _format_scope(scope: str, message: str) -> str:
    return f"{scope}: {message}"


def _validate_income_tax(scope: str, income_tax: IncomeTaxConfig) -> list[str]:
    errors: list[str] = []

    rates = [zone.rate for zone in income_tax.proportional_zones]
    if rates != sorted(rates):
        errors.append(_format_scope(scope, "proportional zone rates must not decrease"))

    if income_tax.basic_allowance == 0:
        errors.append(_format_scope(scope, "basic allowance is zero"))

    if not 0 < income_tax.minimum_rate_secondary_classes < 1:
        errors.append(
            _format_scope(scope, "secondary class minimum rate must lie between 0 and 1")
        )

    return errors


def _validate_solidarity(scope: str, solidarity: SolidarityConfig) -> list[str]:
    errors: list[str] = []
    if solidarity.rate > 1:
        errors.append(_format_scope(scope, f"rate {solidarity.rate} looks like a percentage"))
    if solidarity.phase_in_rate is not None and solidarity.phase_in_rate <= solidarity.rate:
        errors.append(
            _format_scope(scope, "phase-in rate should exceed the surcharge rate")
        )
    return errors


def _validate_branch(scope: str, branch: InsuranceBranch) -> list[str]:
    errors: list[str] = []
    if branch.rate == 0:
        errors.append(_format_scope(scope, "contribution rate is zero"))
    if branch.ceiling_east is not None and branch.ceiling_east > branch.ceiling:
        errors.append(
            _format_scope(scope, "eastern ceiling should not exceed the general ceiling")
        )
    return errors


def _validate_care(scope: str, care: CareInsuranceConfig) -> list[str]:
    errors: list[str] = []
    max_reduction = care.child_reduction * (care.child_reduction_max_children - 1)
    if max_reduction >= care.employee_rate:
        errors.append(
            _format_scope(scope, "child reductions would eliminate the employee share")
        )
    if care.employee_rate + care.saxony_employee_surcharge > care.rate:
        errors.append(
            _format_scope(scope, "Saxony employee share exceeds the total care rate")
        )
    return errors


def validate_year_configuration(config: YearConfiguration) -> list[str]:
    """Return human-readable issues detected in ``config``."""

    errors: list[str] = []
    insurance = config.social_insurance

    errors.extend(_validate_income_tax("income_tax", config.income_tax))
    errors.extend(_validate_solidarity("solidarity", config.solidarity))
    errors.extend(_validate_branch("social_insurance.health", insurance.health))
    errors.extend(_validate_branch("social_insurance.pension", insurance.pension))
    errors.extend(
        _validate_branch("social_insurance.unemployment", insurance.unemployment)
    )
    errors.extend(_validate_care("social_insurance.care", insurance.care))

    return errors


def validate_all_years(years: Sequence[int] | None = None) -> dict[int, list[str]]:
    """Validate all configured years and return issues keyed by year."""

    targets = years or available_years()
    results: dict[int, list[str]] = {}

    for year in targets:
        config = load_year_configuration(year)
        results[int(year)] = validate_year_configuration(config)

    return results


def _current_year() -> int:
    return date.today().year


def _build_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Validate configured accounting years and report issues."
    )
    parser.add_argument(
        "years",
        nargs="*",
        type=int,
        help="Specific years to validate (defaults to all configured years)",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point for running validations from the command line."""

    parser = _build_argument_parser()
    args = parser.parse_args(argv)
    years = args.years or available_years()

    if not years:
        parser.print_help()
        return 1

    exit_code = 0

    current_year = _current_year()
    if not args.years and current_year not in years:
        # Requests without an explicit year default to the current one.
        print(f"[{current_year}] not declared in manifest; add its configuration")
        exit_code = 1

    for year in years:
        try:
            config = load_year_configuration(year)
        except (FileNotFoundError, ConfigurationError) as error:
            print(f"[{year}] failed to load configuration: {error}")
            exit_code = 1
            continue

        issues = validate_year_configuration(config)
        if issues:
            exit_code = 1
            print(f"[{year}] {len(issues)} issue(s) detected:")
            for issue in issues:
                print(f"  - {issue}")
        else:
            print(f"[{year}] OK")

    return exit_code


if __name__ == "__main__":  # pragma: no cover - CLI invocation
    raise SystemExit(main())
