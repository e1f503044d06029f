from __future__ import annotations

from dataclasses import dataclass

from .exit_codes import ERR_CONFIG, ERR_SPEC_LOAD, ERR_USAGE


@dataclass
class ScriptError(Exception):
    message: str
    code: int
    kind: str = "generic_error"

    def __str__(self) -> str:
        return self.message


class UsageError(ScriptError):
    def __init__(self, message: str) -> None:
        super().__init__(message, ERR_USAGE, "usage_error")


class ConfigError(ScriptError):
    def __init__(self, message: str) -> None:
        super().__init__(message, ERR_CONFIG, "config_error")


class SpecLoadError(ScriptError):
    """Raised when an OpenAPI document cannot be fetched, read or parsed."""

    def __init__(self, message: str, hostname: str = "") -> None:
        super().__init__(message, ERR_SPEC_LOAD, "spec_load_error")
        self.hostname = hostname
