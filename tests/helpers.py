from __future__ import annotations

import os
import subprocess
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]

USERS_SPEC = """\
openapi: 3.0.3
info:
  title: users
  version: "1"
servers:
  - url: https://svc.example/v1
paths:
  /users/{userId}:
    parameters:
      - name: userId
        in: path
        required: true
        schema: {type: string}
    get:
      responses:
        "200": {description: ok}
    x-internal: true
  /users:
    post:
      responses:
        "201": {description: created}
"""


def endpoint(path: str, url_pattern: str, host: str = "https://svc.example", method: str = "GET", **backend: object) -> dict[str, object]:
    return {
        "endpoint": path,
        "method": method,
        "backend": [{"url_pattern": url_pattern, "host": [host], **backend}],
    }


def run_gatewayctl(*args: str, cwd: Path | None = None) -> subprocess.CompletedProcess[str]:
    env = os.environ.copy()
    env["PYTHONPATH"] = str(ROOT / "src")
    env.setdefault("RUN_ID", "pytest-run")
    return subprocess.run(
        [sys.executable, "-m", "gatewayctl.cli", *args],
        cwd=(cwd or ROOT),
        env=env,
        text=True,
        capture_output=True,
        check=False,
    )
