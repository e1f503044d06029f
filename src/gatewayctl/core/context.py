from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Literal

OutputFormat = Literal["text", "json"]

DEFAULT_CONFIG_PATH = "config/krakend.json"


@dataclass(frozen=True)
class RunContext:
    run_id: str
    config_path: str
    output_format: OutputFormat
    verbose: bool
    quiet: bool
    log_json: bool

    @classmethod
    def from_args(
        cls,
        run_id: str | None,
        config_path: str | None,
        output_format: OutputFormat = "text",
        verbose: bool = False,
        quiet: bool = False,
        log_json: bool = False,
    ) -> "RunContext":
        default_run = f"gatewayctl-{datetime.now(timezone.utc).strftime('%Y%m%d-%H%M%S')}"
        resolved_run_id = run_id or os.environ.get("RUN_ID", default_run)
        resolved_config = config_path or os.environ.get("GATEWAYCTL_CONFIG", DEFAULT_CONFIG_PATH)
        return cls(
            run_id=resolved_run_id,
            config_path=resolved_config,
            output_format=output_format,
            verbose=verbose,
            quiet=quiet,
            log_json=log_json,
        )
