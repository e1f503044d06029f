"""Path template normalization.

OpenAPI documents name parameters `{userId}` while gateway routes may say
`{id}` or `:id`. Both sides are reduced to the same wildcard token before
comparison.
"""

from __future__ import annotations

import re

WILDCARD = "{_}"

_BRACE_PARAM_RE = re.compile(r"\{[^}/]+\}")
_COLON_PARAM_RE = re.compile(r"(^|/):[^/]+")


def normalize_path(path: str) -> str:
    """Collapse every `{name}` placeholder in `path` to the wildcard token."""
    return _BRACE_PARAM_RE.sub(WILDCARD, path)


def normalize_gateway_path(path: str) -> str:
    """Like `normalize_path`, also collapsing whole `:name` segments."""
    return normalize_path(_COLON_PARAM_RE.sub(lambda m: m.group(1) + WILDCARD, path))


def route_key(method: str, normalized_path: str) -> str:
    return f"{method.upper()} {normalized_path}"
