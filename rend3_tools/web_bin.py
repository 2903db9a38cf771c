#!/usr/bin/env python3
"""
Build an example binary for the web.

Steps:
1. Compile the binary for wasm32 with unstable web-sys APIs enabled
2. Reset target/generated
3. Copy the example's resources directory, if it has one
4. Render index.html from the shared template
5. Run wasm-bindgen on the compiled module

Usage:
    python -m rend3_tools web-bin [release] <BINARY> [cargo args...]
"""

from __future__ import annotations

import argparse
import enum
import shutil
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Final

from rend3_tools.shared import (
    BuildConfig,
    BuildError,
    BuildStep,
    CommandSpec,
    get_logger,
    literal,
    load_config,
    run_build_steps,
    run_command,
)

logger = get_logger("web_bin")

RELEASE_TOKEN: Final[str] = "release"
EXAMPLE_PLACEHOLDER: Final[str] = "{{example}}"


class BuildProfile(enum.Enum):
    """Cargo build profile and the target subdirectory it writes to."""

    DEBUG = "debug"
    RELEASE = "release"

    @property
    def cargo_flags(self) -> tuple[str, ...]:
        return ("--release",) if self is BuildProfile.RELEASE else ()

    @property
    def output_label(self) -> str:
        return self.value


class CopyOutcome(enum.Enum):
    """Result of copying an example's optional resources directory."""

    COPIED = "copied"
    SKIPPED_NOT_FOUND = "skipped-not-found"
    FAILED = "failed"


@dataclass(frozen=True)
class WebBinOptions:
    """Parsed ``web-bin`` arguments."""

    profile: BuildProfile
    name: str
    cargo_args: tuple[str, ...] = ()


def cargo_build_spec(config: BuildConfig, profile: BuildProfile) -> CommandSpec:
    return CommandSpec(
        "cargo",
        ("build", "--target", literal(config.wasm_target), *profile.cargo_flags, "--bin", "{name}"),
        env=config.web_env,
    )


def wasm_bindgen_spec(config: BuildConfig) -> CommandSpec:
    return CommandSpec(
        "wasm-bindgen",
        ("--out-dir", literal(config.generated_dir), "--target", "web", "{module}"),
    )


def compiled_module_path(config: BuildConfig, options: WebBinOptions) -> Path:
    """Location cargo writes the wasm module to for the selected profile."""
    return (
        Path("target")
        / config.wasm_target
        / options.profile.output_label
        / f"{options.name}.wasm"
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="web-bin",
        description=__doc__,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "tokens",
        nargs=argparse.REMAINDER,
        metavar="[release] BINARY [cargo args...]",
        help="Optional 'release', the binary to build, then extra cargo arguments",
    )
    return parser


def parse_args(argv: list[str]) -> WebBinOptions:
    """Split ``[release] <name> [extra...]``.

    Only a leading ``release`` selects the release profile; it is consumed
    and never treated as the binary name.
    """
    parser = build_parser()
    tokens = list(parser.parse_args(argv).tokens)

    profile = BuildProfile.DEBUG
    if tokens and tokens[0] == RELEASE_TOKEN:
        profile = BuildProfile.RELEASE
        tokens = tokens[1:]

    if not tokens or not tokens[0]:
        parser.error("the following arguments are required: BINARY")

    return WebBinOptions(profile=profile, name=tokens[0], cargo_args=tuple(tokens[1:]))


def compile_binary(config: BuildConfig, options: WebBinOptions) -> None:
    """Compile the binary for the wasm target."""
    run_command(
        cargo_build_spec(config, options.profile),
        config.root,
        *options.cargo_args,
        name=options.name,
    )


def reset_directory(path: Path) -> None:
    """Remove ``path`` and everything under it, then recreate it empty."""
    if path.exists():
        logger.info("$ rm -rf %s", path)
        try:
            shutil.rmtree(path)
        except OSError as e:
            raise BuildError(f"Failed to clear {path}: {e}") from e
    path.mkdir(parents=True, exist_ok=True)


def copy_resources(config: BuildConfig, name: str) -> CopyOutcome:
    """Copy ``examples/<name>/resources`` into the output directory.

    A missing source is expected for most examples and only logged. Any
    other I/O error is reported as ``FAILED``.
    """
    source = config.path(config.examples_dir) / name / "resources"
    destination = config.output_dir / "resources"

    if not source.is_dir():
        logger.info("No resources for %s at %s, skipping", name, source)
        return CopyOutcome.SKIPPED_NOT_FOUND

    logger.info("$ cp -r %s %s", source, config.output_dir)
    try:
        shutil.copytree(source, destination, dirs_exist_ok=True)
    except FileNotFoundError:
        # Removed between the check and the copy
        logger.info("No resources for %s at %s, skipping", name, source)
        return CopyOutcome.SKIPPED_NOT_FOUND
    except OSError as e:
        logger.error("Failed to copy %s: %s", source, e)
        return CopyOutcome.FAILED
    return CopyOutcome.COPIED


def render_index(template: str, name: str) -> str:
    """Substitute every placeholder occurrence with the example name."""
    return template.replace(EXAMPLE_PLACEHOLDER, name)


def write_index(config: BuildConfig, name: str) -> Path:
    """Render the shared index.html template into the output directory."""
    template_path = config.path(config.index_template)
    try:
        template = template_path.read_text(encoding="utf-8")
    except OSError as e:
        raise BuildError(f"Failed to read index template {template_path}: {e}") from e

    index_path = config.output_dir / "index.html"
    try:
        index_path.write_text(render_index(template, name), encoding="utf-8")
    except OSError as e:
        raise BuildError(f"Failed to write {index_path}: {e}") from e
    logger.info("Wrote %s", index_path)
    return index_path


def bind_module(config: BuildConfig, options: WebBinOptions) -> None:
    """Generate the JS glue for the compiled module."""
    run_command(
        wasm_bindgen_spec(config),
        config.root,
        module=str(compiled_module_path(config, options)),
    )


def stage_resources(config: BuildConfig, name: str) -> CopyOutcome:
    outcome = copy_resources(config, name)
    if outcome is CopyOutcome.FAILED:
        raise BuildError(f"Failed to copy resources for {name}")
    return outcome


def build_web_binary(config: BuildConfig, options: WebBinOptions) -> None:
    """Run the whole web-bin workflow."""
    steps = [
        BuildStep("Compile", lambda: compile_binary(config, options)),
        BuildStep("Reset Output Directory", lambda: reset_directory(config.output_dir)),
        BuildStep("Copy Resources", lambda: stage_resources(config, options.name)),
        BuildStep("Render index.html", lambda: write_index(config, options.name)),
        BuildStep("Run wasm-bindgen", lambda: bind_module(config, options)),
    ]
    run_build_steps(steps)


def main(argv: list[str] | None = None) -> None:
    options = parse_args(sys.argv[1:] if argv is None else argv)
    build_web_binary(load_config(), options)
