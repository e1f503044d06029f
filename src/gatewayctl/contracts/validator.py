"""Cross-reference gateway backend routes against documented operations.

Route failures are collected as values so that one bad route never hides the
others; only loading problems abort a run.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from enum import Enum

from ..gateway.routes import BackendRoute
from .openapi import SpecIndex
from .paths import normalize_gateway_path, route_key

REASON_NOT_DOCUMENTED = "not found in OpenAPI spec"


class Outcome(str, Enum):
    PASS = "pass"
    FAIL = "fail"
    WARN = "warn"


@dataclass(frozen=True)
class RouteResult:
    route: BackendRoute
    outcome: Outcome
    key: str
    reason: str = ""


@dataclass(frozen=True)
class CoverageWarning:
    hostname: str
    path: str
    outcome: Outcome = Outcome.WARN


@dataclass(frozen=True)
class ValidationReport:
    results: tuple[RouteResult, ...]
    warnings: tuple[CoverageWarning, ...] = ()

    @property
    def passed(self) -> int:
        return sum(1 for r in self.results if r.outcome is Outcome.PASS)

    @property
    def failed(self) -> int:
        return sum(1 for r in self.results if r.outcome is Outcome.FAIL)

    @property
    def ok(self) -> bool:
        return self.failed == 0


def no_spec_reason(hostname: str) -> str:
    return f'no spec configured for hostname "{hostname}"'


def validate_route(route: BackendRoute, spec: SpecIndex | None, strict_base_path: bool = False) -> tuple[RouteResult, str | None]:
    """Validate one route; also return the documented path it covers, if any."""
    normalized = normalize_gateway_path(route.path)
    key = route_key(route.method, normalized)
    if spec is None:
        return RouteResult(route, Outcome.FAIL, key, no_spec_reason(route.hostname)), None
    if spec.has_operation(key):
        return RouteResult(route, Outcome.PASS, key), normalized
    if not strict_base_path and key in spec.relative_operations:
        full_path = spec.relative_operations[key]
        return RouteResult(route, Outcome.PASS, key, f"matched relative to base path {spec.base_path}"), full_path
    return RouteResult(route, Outcome.FAIL, key, REASON_NOT_DOCUMENTED), None


def uncovered_paths(specs: Mapping[str, SpecIndex], covered: Mapping[str, set[str]]) -> list[CoverageWarning]:
    warnings: list[CoverageWarning] = []
    for hostname, spec in specs.items():
        seen = covered.get(hostname, set())
        warnings.extend(CoverageWarning(hostname, path) for path in sorted(spec.paths - seen))
    return warnings


def validate_routes(
    routes: Iterable[BackendRoute],
    specs: Mapping[str, SpecIndex],
    warn_uncovered: bool = False,
    strict_base_path: bool = False,
) -> ValidationReport:
    covered: dict[str, set[str]] = {hostname: set() for hostname in specs}
    results: list[RouteResult] = []
    for route in routes:
        result, covered_path = validate_route(route, specs.get(route.hostname), strict_base_path)
        results.append(result)
        if covered_path is not None:
            covered[route.hostname].add(covered_path)
    warnings = uncovered_paths(specs, covered) if warn_uncovered else []
    return ValidationReport(results=tuple(results), warnings=tuple(warnings))
