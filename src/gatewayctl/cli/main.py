from __future__ import annotations

import argparse
import sys
from dataclasses import dataclass

from .. import __version__
from ..contracts.openapi import SpecIndex, load_contract_spec
from ..contracts.validator import validate_routes
from ..core.context import DEFAULT_CONFIG_PATH, RunContext
from ..core.logging import log_event
from ..core.serialize import dumps_json, write_json
from ..errors import ScriptError, UsageError
from ..exit_codes import ERR_INTERNAL
from ..gateway.config import GatewayConfig, load_gateway_config
from ..gateway.routes import RouteFilter, extract_routes
from ..reporting import build_report_payload, exit_code_for, render_results, render_summary
from ..reporting.text import render_header, render_spec_loaded, render_validating, render_warnings


@dataclass(frozen=True)
class Override:
    hostname: str
    path: str


def parse_override(value: str) -> Override:
    hostname, sep, path = value.partition("=")
    if not sep or not hostname or not path:
        raise UsageError("Error: -override must be in format hostname=/path/to/spec.yaml")
    return Override(hostname=hostname.lower(), path=path)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="gatewayctl",
        description="Check gateway backend routes against the OpenAPI specs of their upstream services.",
        allow_abbrev=False,
    )
    p.add_argument("--version", action="version", version=f"gatewayctl {__version__}")
    p.add_argument("-config", "--config", dest="config", help=f"path to krakend.json (default: {DEFAULT_CONFIG_PATH})")
    p.add_argument(
        "-warn-uncovered",
        "--warn-uncovered",
        dest="warn_uncovered",
        action="store_true",
        help="warn about spec paths not covered by any backend route",
    )
    p.add_argument(
        "-include-health",
        "--include-health",
        dest="include_health",
        action="store_true",
        help="include health check routes in validation",
    )
    p.add_argument(
        "-override",
        "--override",
        dest="overrides",
        action="append",
        default=[],
        metavar="HOST=PATH",
        help="override a service spec with local file: hostname=/path/to/spec.yaml (repeatable)",
    )
    p.add_argument("-service", "--service", dest="service", default="", help="only validate routes for this service hostname")
    p.add_argument(
        "-strict-base-path",
        "--strict-base-path",
        dest="strict_base_path",
        action="store_true",
        help="require backend url patterns to include the spec server base path",
    )
    p.add_argument("-format", "--format", dest="format", choices=["text", "json"], default="text", help="output format")
    p.add_argument("-out-file", "--out-file", dest="out_file", help="also write the JSON report to this path")
    p.add_argument("-run-id", "--run-id", dest="run_id", help="run identifier used in logs and reports")
    p.add_argument("-log-json", "--log-json", dest="log_json", action="store_true", help="emit lifecycle logs as JSON lines")
    vg = p.add_mutually_exclusive_group()
    vg.add_argument("-verbose", "--verbose", dest="verbose", action="store_true", help="verbose output")
    vg.add_argument("-quiet", "--quiet", dest="quiet", action="store_true", help="only emit errors on stderr")
    return p


def _out(ctx: RunContext, *lines: str) -> None:
    if ctx.output_format == "text":
        for line in lines:
            print(line)


def load_specs(
    ctx: RunContext,
    config: GatewayConfig,
    route_filter: RouteFilter,
    overrides: dict[str, str],
) -> tuple[dict[str, SpecIndex], dict[str, str]]:
    specs: dict[str, SpecIndex] = {}
    sources: dict[str, str] = {}
    _out(ctx, "Downloading specs...")
    for hostname, contract in config.contract_specs.items():
        if not route_filter.wants_service(hostname):
            if ctx.verbose:
                _out(ctx, f"  {hostname}: skipped (filtering for {route_filter.service})")
            continue
        override = overrides.get(hostname)
        if override is not None:
            _out(ctx, f"  {hostname}: loading from local file {override}")
        spec = load_contract_spec(hostname, contract.openapi_url, override=override, base_dir=config.base_dir)
        _out(ctx, *render_spec_loaded(hostname, spec, ctx.verbose))
        specs[hostname] = spec
        sources[hostname] = override if override is not None else contract.openapi_url
        log_event(ctx, "info", "specs", "loaded", hostname=hostname, operations=spec.operation_count)
    return specs, sources


def run(ctx: RunContext, ns: argparse.Namespace) -> int:
    overrides = {o.hostname: o.path for o in (parse_override(v) for v in ns.overrides)}
    config = load_gateway_config(ctx.config_path)
    log_event(
        ctx,
        "info",
        "config",
        "loaded",
        path=ctx.config_path,
        endpoints=len(config.endpoints),
        specs=len(config.contract_specs),
    )
    for hostname in sorted(set(overrides) - set(config.contract_specs)):
        log_event(ctx, "warn", "specs", "override_ignored", hostname=hostname)

    route_filter = RouteFilter(include_health=ns.include_health, service=ns.service)
    _out(ctx, *render_header())
    specs, sources = load_specs(ctx, config, route_filter, overrides)

    extraction = extract_routes(config, route_filter)
    _out(ctx, render_validating(len(extraction.routes), extraction.health_skipped))
    report = validate_routes(
        extraction.routes,
        specs,
        warn_uncovered=ns.warn_uncovered,
        strict_base_path=ns.strict_base_path,
    )
    _out(ctx, *render_results(report))
    if ns.warn_uncovered:
        _out(ctx, *render_warnings(report))
    _out(ctx, render_summary(report))
    log_event(
        ctx,
        "info",
        "validate",
        "done",
        passed=report.passed,
        failed=report.failed,
        warnings=len(report.warnings),
    )

    if ctx.output_format == "json" or ns.out_file:
        payload = build_report_payload(ctx.run_id, report, specs, sources, extraction.health_skipped)
        if ctx.output_format == "json":
            print(dumps_json(payload))
        if ns.out_file:
            write_json(ns.out_file, payload)
    return exit_code_for(report)


def main(argv: list[str] | None = None) -> int:
    p = build_parser()
    ns = p.parse_args(argv)
    ctx = RunContext.from_args(
        ns.run_id,
        ns.config,
        ns.format,
        ns.verbose,
        ns.quiet,
        ns.log_json,
    )
    try:
        log_event(ctx, "info", "cli", "start", config=ctx.config_path, fmt=ctx.output_format)
        return run(ctx, ns)
    except ScriptError as exc:
        if ctx.output_format == "json":
            print(
                dumps_json(
                    {
                        "schema_version": 1,
                        "tool": "gatewayctl",
                        "status": "error",
                        "error": {"message": str(exc), "code": exc.code, "kind": exc.kind},
                    }
                ),
                file=sys.stderr,
            )
        else:
            print(str(exc), file=sys.stderr)
        return exc.code
    except Exception as exc:  # pragma: no cover
        print(f"internal error: {exc}", file=sys.stderr)
        return ERR_INTERNAL


if __name__ == "__main__":
    raise SystemExit(main())
