"""JSON rendering for reports and error payloads."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any


def dumps_json(payload: Any, pretty: bool = False) -> str:
    return json.dumps(payload, indent=2 if pretty else None, sort_keys=True)


def write_json(path: str | Path, payload: Any) -> Path:
    """Write `payload` as pretty JSON, creating parent directories."""
    out_path = Path(path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(dumps_json(payload, pretty=True) + "\n", encoding="utf-8")
    return out_path
