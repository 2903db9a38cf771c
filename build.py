#!/usr/bin/env python3
"""
Build script wrapper for rend3.

This is a convenience wrapper that forwards to the rend3_tools module.
Run with help to see available commands.

Usage:
    python build.py <command> [args]
    ./build.py <command> [args]  (on Unix with execute permission)

Commands:
    help             This message
    update-readme    Rebuild README.md from the rend3 crate docs
    download-assets  Download the assets used in the examples/tests
    web-bin          Build a binary as wasm and run wasm-bindgen on it
    serve            Serve target/generated using simple-http-server
    ci               Run the continuous integration checks

Examples:
    python build.py web-bin release scene-viewer
    python build.py serve
    python build.py ci
"""

import os
import subprocess
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parent


def main() -> int:
    """Forward all arguments to rend3_tools module."""
    return subprocess.call(
        [sys.executable, "-m", "rend3_tools"] + sys.argv[1:],
        cwd=ROOT,
        env={**os.environ, "REND3_ROOT": str(ROOT)},
    )


if __name__ == "__main__":
    sys.exit(main())
