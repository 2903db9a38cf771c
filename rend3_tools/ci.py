#!/usr/bin/env python3
"""
Continuous integration checks for the rend3 workspace.

Runs, in order, stopping at the first failure:
1. cargo fmt
2. cargo clippy
3. cargo test
4. cargo rend3-doc
5. cargo clippy for wasm32 (unstable web-sys APIs enabled)
6. cargo deny
"""

from __future__ import annotations

import argparse
import sys

from rend3_tools.shared import (
    BuildConfig,
    BuildStep,
    CommandSpec,
    literal,
    load_config,
    run_build_steps,
    run_command,
)

CLIPPY = CommandSpec("cargo", ("clippy",))
TEST = CommandSpec("cargo", ("test",))
DOCS = CommandSpec("cargo", ("rend3-doc",))
DENY = CommandSpec("cargo", ("deny", "--all-features", "check"))


def fmt_spec(*, check: bool = False) -> CommandSpec:
    return CommandSpec("cargo", ("fmt", "--check") if check else ("fmt",))


def web_clippy_spec(config: BuildConfig) -> CommandSpec:
    """Workspace-wide clippy for the wasm target, minus the native-only crates."""
    args = ["clippy", "--target", literal(config.wasm_target), "--workspace"]
    for package in config.web_lint_excludes:
        args.extend(["--exclude", literal(package)])
    return CommandSpec("cargo", tuple(args), env=config.web_env)


def ci_steps(config: BuildConfig, *, check: bool = False) -> list[BuildStep]:
    specs = [
        ("Format", fmt_spec(check=check)),
        ("Clippy", CLIPPY),
        ("Test", TEST),
        ("Docs", DOCS),
        ("Clippy (wasm32)", web_clippy_spec(config)),
        ("Cargo Deny", DENY),
    ]
    return [
        BuildStep(name, lambda spec=spec: run_command(spec, config.root))
        for name, spec in specs
    ]


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="ci",
        description=__doc__,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--check",
        action="store_true",
        help="Check formatting instead of rewriting files",
    )
    args = parser.parse_args(sys.argv[1:] if argv is None else argv)

    config = load_config()
    run_build_steps(ci_steps(config, check=args.check))
