"""Bundled JSON Schemas and catalog access."""

from __future__ import annotations

import json
from dataclasses import dataclass
from importlib import resources
from pathlib import Path
from typing import Any

import jsonschema


@dataclass(frozen=True)
class CatalogEntry:
    name: str
    version: int
    file: str


class SchemaValidationError(ValueError):
    def __init__(self, schema_name: str, location: str, message: str) -> None:
        super().__init__(f"schema validation failed for {schema_name} at {location}: {message}")
        self.schema_name = schema_name
        self.location = location


def schemas_root() -> Path:
    """Return the packaged schema directory path."""
    return Path(str(resources.files(__package__)))


def load_catalog() -> dict[str, CatalogEntry]:
    raw = json.loads((schemas_root() / "catalog.json").read_text(encoding="utf-8"))
    entries: dict[str, CatalogEntry] = {}
    for row in raw.get("schemas", []):
        entry = CatalogEntry(name=row["name"], version=int(row["version"]), file=row["file"])
        entries[entry.name] = entry
    return entries


def load_schema(schema_name: str) -> dict[str, Any]:
    entry = load_catalog().get(schema_name)
    if entry is None:
        raise KeyError(f"unknown schema: {schema_name}")
    return json.loads((schemas_root() / entry.file).read_text(encoding="utf-8"))


def validate(schema_name: str, payload: Any) -> None:
    schema = load_schema(schema_name)
    try:
        jsonschema.validate(payload, schema)
    except jsonschema.ValidationError as exc:
        pointer = "/".join(str(p) for p in exc.absolute_path)
        raise SchemaValidationError(schema_name, pointer or "<root>", exc.message) from exc
