from __future__ import annotations

from collections.abc import Mapping

from ..contracts.openapi import SpecIndex
from ..contracts.validator import ValidationReport


def build_report_payload(
    run_id: str,
    report: ValidationReport,
    specs: Mapping[str, SpecIndex],
    sources: Mapping[str, str],
    health_skipped: int = 0,
) -> dict[str, object]:
    return {
        "schema_name": "gatewayctl.contract-report.v1",
        "schema_version": 1,
        "tool": "gatewayctl",
        "run_id": run_id,
        "status": "pass" if report.ok else "fail",
        "summary": {
            "passed": report.passed,
            "failed": report.failed,
            "warnings": len(report.warnings),
            "health_skipped": health_skipped,
        },
        "specs": [
            {
                "hostname": hostname,
                "base_path": spec.base_path,
                "operations": spec.operation_count,
                "source": sources.get(hostname, ""),
            }
            for hostname, spec in specs.items()
        ],
        "results": [
            {
                "outcome": result.outcome.value,
                "method": result.route.method,
                "path": result.route.path,
                "hostname": result.route.hostname,
                "endpoint": result.route.endpoint,
                "key": result.key,
                "reason": result.reason,
            }
            for result in report.results
        ],
        "warnings": [{"hostname": w.hostname, "path": w.path} for w in report.warnings],
    }
