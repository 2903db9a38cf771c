"""Custom exceptions for build tools."""

from __future__ import annotations


class BuildError(Exception):
    """Raised when a workflow step fails.

    ``returncode`` is the exit status the dispatcher should exit with; for a
    failed external tool this is the tool's own exit status.
    """

    def __init__(self, message: str, returncode: int = 1) -> None:
        self.returncode = returncode
        super().__init__(message)


class ConfigError(BuildError):
    """Raised when ``build.yaml`` cannot be read or is malformed."""

    def __init__(self, message: str, config_path: str | None = None) -> None:
        self.config_path = config_path
        full_message = f"{message}" if not config_path else f"[{config_path}] {message}"
        super().__init__(full_message)
