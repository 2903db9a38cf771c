#!/usr/bin/env python3
"""
Rebuild README.md from the rend3 crate documentation.

Installs cargo-readme if needed, then renders README.tpl with the crate's
doc comments into the top-level README.md.
"""

from __future__ import annotations

import argparse
import sys

from rend3_tools.shared import (
    BuildConfig,
    BuildStep,
    CommandSpec,
    load_config,
    run_build_steps,
    run_command,
)


def install_spec(config: BuildConfig) -> CommandSpec:
    return CommandSpec("cargo", ("install", "cargo-readme"), cwd=config.readme_crate)


def readme_spec(config: BuildConfig) -> CommandSpec:
    """cargo readme, run inside the crate and writing one level above it."""
    return CommandSpec(
        "cargo",
        ("readme", "-t", "../README.tpl", "-o", "../README.md"),
        cwd=config.readme_crate,
    )


def update_readme(config: BuildConfig) -> None:
    steps = [
        BuildStep("Install cargo-readme", lambda: run_command(install_spec(config), config.root)),
        BuildStep("Generate README.md", lambda: run_command(readme_spec(config), config.root)),
    ]
    run_build_steps(steps, summary=False)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="update-readme",
        description=__doc__,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.parse_args(sys.argv[1:] if argv is None else argv)
    update_readme(load_config())
