from __future__ import annotations

import json
from pathlib import Path
from typing import Callable

import pytest

from gatewayctl.errors import ConfigError
from gatewayctl.exit_codes import ERR_CONFIG
from gatewayctl.gateway.config import Backend, ContractSpec, load_gateway_config
from helpers import endpoint


@pytest.mark.unit
def test_load_gateway_config_builds_model(write_config: Callable[..., Path]) -> None:
    path = write_config(
        [
            endpoint("/users/{id}", "/v1/users/{id}"),
            {
                "endpoint": "/fanout",
                "backend": [
                    {"url_pattern": "/a", "method": "post", "host": ["https://a.example"]},
                    {"url_pattern": "/b", "host": []},
                ],
            },
        ],
        {"SVC.example": {"openapi_url": "https://svc.example/openapi.yaml"}},
    )
    config = load_gateway_config(path)
    assert len(config.endpoints) == 2
    assert config.endpoints[0].backends[0] == Backend("/v1/users/{id}", "", ("https://svc.example",))
    assert config.endpoints[1].method == "GET"
    assert config.endpoints[1].backends[1].host == ()
    assert config.contract_specs == {"svc.example": ContractSpec("https://svc.example/openapi.yaml")}
    assert config.base_dir == path.parent


@pytest.mark.unit
def test_contract_specs_keep_declaration_order(write_config: Callable[..., Path]) -> None:
    specs = {name: {"openapi_url": f"https://{name}/o.yaml"} for name in ("b.example", "a.example", "c.example")}
    config = load_gateway_config(write_config([], specs))
    assert list(config.contract_specs) == ["b.example", "a.example", "c.example"]


@pytest.mark.unit
def test_zero_contract_specs_is_config_error(write_config: Callable[..., Path]) -> None:
    path = write_config([endpoint("/x", "/x")], {})
    with pytest.raises(ConfigError, match="no x-contract-specs found in config") as exc:
        load_gateway_config(path)
    assert exc.value.code == ERR_CONFIG


@pytest.mark.unit
def test_missing_contract_specs_key_is_config_error(tmp_path: Path) -> None:
    path = tmp_path / "krakend.json"
    path.write_text(json.dumps({"endpoints": []}), encoding="utf-8")
    with pytest.raises(ConfigError, match="no x-contract-specs"):
        load_gateway_config(path)


@pytest.mark.unit
def test_unreadable_config(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="Error reading config"):
        load_gateway_config(tmp_path / "missing.json")


@pytest.mark.unit
def test_invalid_json_config(tmp_path: Path) -> None:
    path = tmp_path / "krakend.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(ConfigError, match="Error parsing config"):
        load_gateway_config(path)


@pytest.mark.unit
@pytest.mark.parametrize(
    "payload",
    [
        [],
        {"endpoints": {"not": "a list"}, "x-contract-specs": {"a": {"openapi_url": "u"}}},
        {"endpoints": [{"backend": [{"host": "https://not-a-list"}]}], "x-contract-specs": {"a": {}}},
        {"x-contract-specs": {"a": {"openapi_url": 3}}},
    ],
)
def test_config_shape_violations(tmp_path: Path, payload: object) -> None:
    path = tmp_path / "krakend.json"
    path.write_text(json.dumps(payload), encoding="utf-8")
    with pytest.raises(ConfigError, match="schema validation failed"):
        load_gateway_config(path)


@pytest.mark.unit
def test_deeply_nested_config_is_parse_error(tmp_path: Path) -> None:
    path = tmp_path / "krakend.json"
    path.write_text("[" * 100000, encoding="utf-8")
    with pytest.raises(ConfigError, match="Error parsing config") as exc:
        load_gateway_config(path)
    assert exc.value.code == ERR_CONFIG


@pytest.mark.unit
def test_contract_spec_keys_differing_only_in_case_are_rejected(write_config: Callable[..., Path]) -> None:
    path = write_config(
        [endpoint("/users", "/users")],
        {
            "Svc.example": {"openapi_url": "https://svc.example/a.yaml"},
            "svc.example": {"openapi_url": "https://svc.example/b.yaml"},
        },
    )
    with pytest.raises(ConfigError, match='duplicate x-contract-specs entry for hostname "svc.example"'):
        load_gateway_config(path)
