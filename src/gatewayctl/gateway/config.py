"""Gateway configuration loading.

Only the contract-relevant subset of a KrakenD-style configuration is read:
`endpoints[].backend[]` and the `x-contract-specs` mapping from upstream
hostname to the OpenAPI document that describes it.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from ..contracts.schemas import SchemaValidationError, validate
from ..errors import ConfigError

CONTRACT_SPECS_KEY = "x-contract-specs"
DEFAULT_ENDPOINT_METHOD = "GET"


@dataclass(frozen=True)
class Backend:
    url_pattern: str
    method: str = ""
    host: tuple[str, ...] = ()


@dataclass(frozen=True)
class Endpoint:
    path: str
    method: str = DEFAULT_ENDPOINT_METHOD
    backends: tuple[Backend, ...] = ()


@dataclass(frozen=True)
class ContractSpec:
    openapi_url: str


@dataclass(frozen=True)
class GatewayConfig:
    endpoints: tuple[Endpoint, ...]
    contract_specs: dict[str, ContractSpec]
    source: Path | None = field(default=None, compare=False)

    @property
    def base_dir(self) -> Path:
        return self.source.parent if self.source is not None else Path.cwd()


def _backend_from_raw(raw: dict[str, Any]) -> Backend:
    return Backend(
        url_pattern=str(raw.get("url_pattern") or ""),
        method=str(raw.get("method") or ""),
        host=tuple(raw.get("host") or ()),
    )


def _endpoint_from_raw(raw: dict[str, Any]) -> Endpoint:
    return Endpoint(
        path=str(raw.get("endpoint") or ""),
        method=str(raw.get("method") or DEFAULT_ENDPOINT_METHOD),
        backends=tuple(_backend_from_raw(b) for b in raw.get("backend") or ()),
    )


def config_from_payload(payload: Any, source: Path | None = None) -> GatewayConfig:
    try:
        validate("gatewayctl.gateway-config.v1", payload)
    except SchemaValidationError as exc:
        raise ConfigError(f"Error parsing config: {exc}") from exc
    specs: dict[str, ContractSpec] = {}
    for name, raw in (payload.get(CONTRACT_SPECS_KEY) or {}).items():
        if name.lower() in specs:
            raise ConfigError(f'Error: duplicate {CONTRACT_SPECS_KEY} entry for hostname "{name.lower()}"')
        specs[name.lower()] = ContractSpec(openapi_url=str(raw.get("openapi_url") or ""))
    if not specs:
        raise ConfigError(f"Error: no {CONTRACT_SPECS_KEY} found in config")
    endpoints = tuple(_endpoint_from_raw(e) for e in payload.get("endpoints") or ())
    return GatewayConfig(endpoints=endpoints, contract_specs=specs, source=source)


def load_gateway_config(path: str | Path) -> GatewayConfig:
    config_path = Path(path)
    try:
        text = config_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(f"Error reading config: {exc}") from exc
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Error parsing config: {exc}") from exc
    except RecursionError as exc:
        raise ConfigError("Error parsing config: document is nested too deeply") from exc
    return config_from_payload(payload, source=config_path)
