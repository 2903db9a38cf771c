"""Shared utilities for build tools."""

from .commands import (
    COMMAND_NOT_FOUND,
    CommandSpec,
    exit_status,
    format_command,
    literal,
    run_command,
)
from .config import (
    BuildConfig,
    find_root,
    load_config,
)
from .errors import (
    BuildError,
    ConfigError,
)
from .steps import (
    BuildStep,
    run_build_steps,
)
from .trace import (
    configure_logging,
    get_logger,
)

__all__ = [
    # Commands
    "COMMAND_NOT_FOUND",
    "CommandSpec",
    "exit_status",
    "format_command",
    "literal",
    "run_command",
    # Configuration
    "BuildConfig",
    "find_root",
    "load_config",
    # Errors
    "BuildError",
    "ConfigError",
    # Steps
    "BuildStep",
    "run_build_steps",
    # Logging
    "configure_logging",
    "get_logger",
]
