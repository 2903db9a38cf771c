#!/usr/bin/env python3
"""
Serve target/generated with simple-http-server.

Only .wasm, .html and .js files are served; directory indexes are enabled.
Runs until interrupted with Ctrl+C.
"""

from __future__ import annotations

from typing import Final

from rend3_tools.shared import (
    BuildConfig,
    CommandSpec,
    get_logger,
    literal,
    load_config,
    run_command,
)

logger = get_logger("serve")

SERVED_EXTENSIONS: Final[tuple[str, ...]] = ("wasm", "html", "js")


def server_spec(config: BuildConfig) -> CommandSpec:
    """simple-http-server rooted at the generated-output directory."""
    return CommandSpec(
        "simple-http-server",
        (
            literal(config.generated_dir),
            "-c",
            ",".join(SERVED_EXTENSIONS),
            "-i",
        ),
    )


def serve(config: BuildConfig) -> None:
    """Run the static file server in the foreground until it exits."""
    logger.info("Serving %s, press Ctrl+C to stop", config.output_dir)
    run_command(server_spec(config), config.root)


def main(argv: list[str] | None = None) -> None:
    # Extra arguments are accepted and ignored
    serve(load_config())
