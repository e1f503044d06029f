"""OpenAPI document loading and indexing.

A document is reduced to a `SpecIndex`: the set of `"METHOD /normalized/path"`
keys it documents (server base path included) and the distinct normalized
paths, which the validator uses for coverage warnings.
"""

from __future__ import annotations

import http.client
import urllib.error
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any
from urllib.parse import unquote, urlsplit

import yaml

from ..core.network import http_get
from ..core.yaml_utils import parse_yaml
from ..errors import SpecLoadError
from .paths import normalize_path, route_key

HTTP_METHODS = ("get", "post", "put", "patch", "delete", "head", "options", "trace")


@dataclass(frozen=True)
class SpecIndex:
    base_path: str
    operations: tuple[str, ...]
    paths: frozenset[str]
    relative_operations: dict[str, str] = field(default_factory=dict)
    operation_keys: frozenset[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "operation_keys", frozenset(self.operations))

    @property
    def operation_count(self) -> int:
        return len(self.operations)

    def has_operation(self, key: str) -> bool:
        return key in self.operation_keys


def resolve_base_path(servers: Any) -> str:
    if not servers:
        return ""
    first = servers[0]
    url = str(first.get("url") or "") if isinstance(first, dict) else ""
    if "://" in url:
        # server urls may carry template variables in the scheme or host
        rest = url.split("://", 1)[1]
        slash = rest.find("/")
        path = rest[slash:].split("?", 1)[0].split("#", 1)[0] if slash >= 0 else ""
    else:
        path = url
    return path.rstrip("/")


def parse_spec(data: str | bytes) -> SpecIndex:
    try:
        doc = parse_yaml(data)
    except yaml.YAMLError as exc:
        raise SpecLoadError(f"parse YAML: {exc}") from exc
    except RecursionError as exc:
        raise SpecLoadError("parse YAML: document is nested too deeply") from exc
    if not isinstance(doc, dict):
        raise SpecLoadError("parse YAML: document root must be a mapping")
    servers = doc.get("servers") or []
    if not isinstance(servers, list):
        raise SpecLoadError("parse YAML: `servers` must be a list")
    raw_paths = doc.get("paths") or {}
    if not isinstance(raw_paths, dict):
        raise SpecLoadError("parse YAML: `paths` must be a mapping")

    base_path = resolve_base_path(servers)
    operations: list[str] = []
    seen: set[str] = set()
    all_paths: set[str] = set()
    relative: dict[str, str] = {}
    for template, item in raw_paths.items():
        if item is None:
            item = {}
        if not isinstance(item, dict):
            raise SpecLoadError(f"parse YAML: path item `{template}` must be a mapping")
        full_path = normalize_path(base_path + str(template))
        all_paths.add(full_path)
        for method in item:
            if str(method).lower() not in HTTP_METHODS:
                continue
            key = route_key(str(method), full_path)
            if key not in seen:
                seen.add(key)
                operations.append(key)
            if base_path:
                relative.setdefault(route_key(str(method), normalize_path(str(template))), full_path)
    return SpecIndex(
        base_path=base_path,
        operations=tuple(operations),
        paths=frozenset(all_paths),
        relative_operations=relative,
    )


def fetch_spec(url: str) -> SpecIndex:
    try:
        status, body = http_get(url)
    except (urllib.error.URLError, http.client.HTTPException, OSError, ValueError) as exc:
        raise SpecLoadError(f"download failed: {exc}") from exc
    if status != 200:
        raise SpecLoadError(f"HTTP {status} from {url}")
    return parse_spec(body)


def read_spec_file(path: str | Path) -> SpecIndex:
    try:
        data = Path(path).read_bytes()
    except OSError as exc:
        raise SpecLoadError(f"read file: {exc}") from exc
    return parse_spec(data)


def local_reference(reference: str, base_dir: Path) -> Path | None:
    """Return the on-disk path for `reference`, or None when it is remote."""
    parts = urlsplit(reference)
    if parts.scheme == "file":
        return Path(unquote(parts.path))
    # single-letter schemes are windows drive letters
    if parts.scheme and len(parts.scheme) > 1:
        return None
    path = Path(reference)
    return path if path.is_absolute() else base_dir / path


def load_contract_spec(
    hostname: str,
    reference: str,
    override: str | Path | None = None,
    base_dir: Path | None = None,
) -> SpecIndex:
    """Load the OpenAPI document declared for `hostname`.

    An override file wins over the declared reference. Any failure is raised
    as a SpecLoadError naming the hostname.
    """
    try:
        if override is not None:
            return read_spec_file(override)
        if not reference:
            raise SpecLoadError("no openapi_url declared")
        local = local_reference(reference, base_dir or Path.cwd())
        if local is not None:
            return read_spec_file(local)
        return fetch_spec(reference)
    except SpecLoadError as exc:
        raise SpecLoadError(f"{hostname}: FAILED ({exc.message})", hostname=hostname) from exc
