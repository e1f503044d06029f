from __future__ import annotations

from typing import Any

import yaml


def parse_yaml(text: str | bytes) -> Any:
    return yaml.safe_load(text)
