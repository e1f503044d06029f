from __future__ import annotations

from ..contracts.openapi import SpecIndex
from ..contracts.validator import Outcome, ValidationReport
from ..exit_codes import ERR_VALIDATION, OK

HEADER = "Contract Test: KrakenD vs OpenAPI Specs"


def render_header() -> list[str]:
    return [HEADER, "=" * 40]


def render_spec_loaded(hostname: str, spec: SpecIndex, verbose: bool = False) -> list[str]:
    lines: list[str] = []
    if verbose:
        if spec.base_path:
            lines.append(f"    base path: {spec.base_path}")
        lines.extend(f"    spec: {key}" for key in spec.operations)
    lines.append(f"  {hostname}: OK ({spec.operation_count} operations)")
    return lines


def render_validating(route_count: int, health_skipped: int) -> str:
    skip_msg = f" ({health_skipped} health routes skipped)" if health_skipped > 0 else ""
    return f"\nValidating {route_count} backend routes{skip_msg}..."


def render_results(report: ValidationReport) -> list[str]:
    lines: list[str] = []
    for result in report.results:
        r = result.route
        label = "PASS" if result.outcome is Outcome.PASS else "FAIL"
        lines.append(f"  {label}  {r.method:<6} {r.path:<45} -> {r.hostname}")
        if result.reason:
            lines.append(f"        {result.reason}")
    return lines


def render_warnings(report: ValidationReport) -> list[str]:
    lines = [""]
    for warning in report.warnings:
        lines.append(f"  WARN  spec path {warning.path:<45} in {warning.hostname} not covered by any gateway route")
    return lines


def render_summary(report: ValidationReport) -> str:
    verdict = "PASS" if report.ok else "FAIL"
    return f"\nResult: {verdict} ({report.passed} passed, {report.failed} failed)"


def exit_code_for(report: ValidationReport) -> int:
    return OK if report.ok else ERR_VALIDATION
