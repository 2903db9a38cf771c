"""Project layout and tool settings, with optional ``build.yaml`` overrides."""

from __future__ import annotations

import os
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Final

import yaml

from .errors import ConfigError

ROOT_ENV_VAR: Final[str] = "REND3_ROOT"
CONFIG_FILE_NAME: Final[str] = "build.yaml"

DEFAULT_ASSET_URLS: Final[tuple[str, ...]] = (
    "https://cdn.cwfitz.com/scenes/rend3-default-scene.tar",
    "https://cdn.cwfitz.com/scenes/bistro-full.zip",
)

# Keys whose values are paths relative to the project root
_PATH_KEYS: Final[frozenset[str]] = frozenset({
    "generated_dir",
    "examples_dir",
    "index_template",
    "asset_dir",
    "readme_crate",
})


@dataclass(frozen=True)
class BuildConfig:
    """Everything the workflows need to know about the workspace."""

    root: Path = field(default_factory=lambda: find_root())
    generated_dir: Path = Path("target/generated")
    examples_dir: Path = Path("examples")
    index_template: Path = Path("examples/resources/index.html")
    wasm_target: str = "wasm32-unknown-unknown"
    unstable_rustflags: str = "--cfg=web_sys_unstable_apis"
    asset_dir: Path = Path("examples/src/scene_viewer/resources")
    asset_urls: tuple[str, ...] = DEFAULT_ASSET_URLS
    web_lint_excludes: tuple[str, ...] = ("rend3-imgui", "rend3-imgui-example")
    readme_crate: Path = Path("rend3")

    def path(self, relative: Path) -> Path:
        """Resolve a configured path against the project root."""
        return relative if relative.is_absolute() else self.root / relative

    @property
    def output_dir(self) -> Path:
        return self.path(self.generated_dir)

    @property
    def web_env(self) -> dict[str, str]:
        """Environment overrides enabling unstable web-sys APIs."""
        return {"RUSTFLAGS": self.unstable_rustflags}


def _coerce(key: str, value: Any, config_path: Path) -> Any:
    if key in _PATH_KEYS:
        if not isinstance(value, str):
            raise ConfigError(f"'{key}' must be a path string", str(config_path))
        return Path(value)
    if key in {"asset_urls", "web_lint_excludes"}:
        if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
            raise ConfigError(f"'{key}' must be a list of strings", str(config_path))
        return tuple(value)
    if not isinstance(value, str):
        raise ConfigError(f"'{key}' must be a string", str(config_path))
    return value


def find_root() -> Path:
    """Workspace root for this invocation.

    ``REND3_ROOT`` wins when set, otherwise the current directory. The
    location of the installed package is never used.
    """
    override = os.environ.get(ROOT_ENV_VAR)
    return Path(override).resolve() if override else Path.cwd()


def load_config(root: Path | None = None) -> BuildConfig:
    """Load the build configuration for the workspace at ``root``.

    ``root`` defaults to ``find_root()``. A missing ``build.yaml`` simply
    yields the defaults.

    Raises:
        ConfigError: If the file cannot be read, is not a mapping, or
            contains unknown keys.
    """
    if root is None:
        root = find_root()
    config = BuildConfig(root=root)
    config_path = root / CONFIG_FILE_NAME
    if not config_path.exists():
        return config

    try:
        content = config_path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Failed to read config file: {e}", str(config_path)) from e

    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML: {e}", str(config_path)) from e

    if data is None:
        return config
    if not isinstance(data, dict):
        raise ConfigError("Config root must be a mapping", str(config_path))

    known = {f.name for f in fields(BuildConfig)} - {"root"}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ConfigError(f"Unknown key(s): {', '.join(unknown)}", str(config_path))

    overrides = {key: _coerce(key, value, config_path) for key, value in data.items()}
    return replace(config, **overrides)
