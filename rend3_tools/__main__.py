#!/usr/bin/env python3
"""
Development task runner for the rend3 workspace.

Usage:
    python -m rend3_tools <command> [args]

Commands:
    help             Print the usage banner
    update-readme    Rebuild README.md from the rend3 crate docs
    download-assets  Download the scenes used by the examples and tests
    web-bin          Build an example binary as wasm and run wasm-bindgen
    serve            Serve target/generated with simple-http-server
    ci               Run the continuous integration checks

Examples:
    python -m rend3_tools web-bin release scene-viewer
    python -m rend3_tools serve
    python -m rend3_tools ci --check
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Callable

# Ensure rend3_tools is importable when run from a checkout
PACKAGE_DIR = Path(__file__).parent
if str(PACKAGE_DIR.parent) not in sys.path:
    sys.path.insert(0, str(PACKAGE_DIR.parent))

from rend3_tools.shared import BuildError, configure_logging, get_logger  # noqa: E402

logger = get_logger()

USAGE_HEADER = """\
rend3 build script

Contains helpful sets of commands for rend3's development.
Building rend3 does not require any of these. Just use cargo as normal.

Subcommands:"""


def _run_workflow(main: Callable[[list[str]], None], args: list[str]) -> int:
    try:
        main(args)
        return 0
    except SystemExit as e:
        if e.code is None:
            return 0
        return e.code if isinstance(e.code, int) else 1
    except BuildError as e:
        logger.error("error: %s", e)
        return e.returncode


def cmd_help(args: list[str]) -> int:
    """Print the usage banner."""
    print(USAGE_HEADER)
    for name, (_, desc) in COMMANDS.items():
        print(f"{_usage(name):<29}{desc}")
    return 0


def cmd_update_readme(args: list[str]) -> int:
    """Rebuild README.md from the crate docs."""
    from rend3_tools import update_readme
    return _run_workflow(update_readme.main, args)


def cmd_download_assets(args: list[str]) -> int:
    """Download example assets."""
    from rend3_tools import download_assets
    return _run_workflow(download_assets.main, args)


def cmd_web_bin(args: list[str]) -> int:
    """Build a binary for the web."""
    from rend3_tools import web_bin
    return _run_workflow(web_bin.main, args)


def cmd_serve(args: list[str]) -> int:
    """Serve the generated output."""
    from rend3_tools import serve
    return _run_workflow(serve.main, args)


def cmd_ci(args: list[str]) -> int:
    """Run the CI checks."""
    from rend3_tools import ci
    return _run_workflow(ci.main, args)


COMMANDS: dict[str, tuple[Callable[[list[str]], int], str]] = {
    "help": (cmd_help, "This message."),
    "update-readme": (cmd_update_readme, "Rebuilds the README.md file from the rend3 crate docs."),
    "download-assets": (cmd_download_assets, "Downloads the assets used in the examples/tests."),
    "web-bin": (cmd_web_bin, "Builds BINARY as wasm, and runs wasm-bindgen on the result."),
    "serve": (cmd_serve, "Serve a web server from target/generated using simple-http-server."),
    "ci": (cmd_ci, "Runs the continuous integration checks."),
}

USAGES = {
    "web-bin": "web-bin [release] <BINARY>",
}


def _usage(name: str) -> str:
    return USAGES.get(name, name)


def main(argv: list[str] | None = None) -> int:
    args = sys.argv[1:] if argv is None else argv
    command = args[0] if args else "help"

    # Unknown commands (and -h/--help) fall through to help, untraced
    if command not in COMMANDS or command == "help":
        return cmd_help([])

    configure_logging(trace=True)
    handler, _ = COMMANDS[command]
    try:
        return handler(args[1:])
    except KeyboardInterrupt:
        print("\n\nInterrupted.")
        return 130


if __name__ == "__main__":
    sys.exit(main())
