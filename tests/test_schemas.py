from __future__ import annotations

import pytest

from gatewayctl.contracts.schemas import SchemaValidationError, load_catalog, schemas_root, validate


@pytest.mark.unit
def test_all_catalog_schemas_have_files() -> None:
    catalog = load_catalog()
    assert set(catalog) == {"gatewayctl.gateway-config.v1", "gatewayctl.contract-report.v1"}
    for entry in catalog.values():
        assert (schemas_root() / entry.file).is_file(), entry.file


@pytest.mark.unit
def test_validation_error_reports_location() -> None:
    with pytest.raises(SchemaValidationError) as exc:
        validate("gatewayctl.gateway-config.v1", {"endpoints": [{"backend": [{"host": [1]}]}]})
    assert exc.value.location == "endpoints/0/backend/0/host/0"


@pytest.mark.unit
def test_unknown_schema_name() -> None:
    with pytest.raises(KeyError):
        validate("gatewayctl.nope.v1", {})
