import os
import subprocess
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from rend3_tools.shared.commands import (
    COMMAND_NOT_FOUND,
    CommandSpec,
    exit_status,
    format_command,
    literal,
    run_command,
)
from rend3_tools.shared.errors import BuildError


class TestCommandSpec:
    def test_command_formats_templates(self):
        spec = CommandSpec("cargo", ("build", "--bin", "{name}"))
        assert spec.command(name="scene-viewer") == ["cargo", "build", "--bin", "scene-viewer"]

    def test_command_appends_extra_verbatim(self):
        spec = CommandSpec("cargo", ("build", "--bin", "{name}"))
        assert spec.command("--features", "{x}", name="cube") == [
            "cargo", "build", "--bin", "cube", "--features", "{x}",
        ]

    def test_working_dir_defaults_to_root(self, tmp_path):
        assert CommandSpec("cargo").working_dir(tmp_path) == tmp_path

    def test_working_dir_relative(self, tmp_path):
        spec = CommandSpec("cargo", cwd=Path("rend3"))
        assert spec.working_dir(tmp_path) == tmp_path / "rend3"


class TestLiteral:
    def test_braces_survive_formatting(self):
        spec = CommandSpec("wasm-bindgen", ("--out-dir", literal(Path("target/gen{1}")), "{module}"))
        assert spec.command(module="x.wasm") == ["wasm-bindgen", "--out-dir", "target/gen{1}", "x.wasm"]

    def test_named_braces(self):
        spec = CommandSpec("cargo", ("--target", literal("{name}")))
        assert spec.command(name="cube") == ["cargo", "--target", "{name}"]

    def test_plain_value_unchanged(self):
        assert literal("wasm32-unknown-unknown") == "wasm32-unknown-unknown"


class TestExitStatus:
    def test_normal_exit(self):
        assert exit_status(101) == 101

    def test_killed_by_signal(self):
        assert exit_status(-2) == 130
        assert exit_status(-9) == 137


class TestFormatCommand:
    def test_plain(self):
        assert format_command(["cargo", "test"]) == "cargo test"

    def test_env_prefix(self):
        line = format_command(["cargo", "clippy"], {"RUSTFLAGS": "--cfg=web_sys_unstable_apis"})
        assert line == "RUSTFLAGS=--cfg=web_sys_unstable_apis cargo clippy"

    def test_quotes_spaces(self):
        assert format_command(["echo", "a b"]) == "echo 'a b'"


class TestRunCommand:
    @patch("subprocess.run")
    def test_success(self, mock_run, tmp_path):
        mock_process = MagicMock()
        mock_run.return_value = mock_process

        spec = CommandSpec("cargo", ("fmt",))
        assert run_command(spec, tmp_path) == mock_process

        args, kwargs = mock_run.call_args
        assert args[0] == ["cargo", "fmt"]
        assert kwargs["cwd"] == tmp_path
        assert kwargs["check"] is True
        assert "timeout" not in kwargs

    @patch("subprocess.run")
    def test_env_overrides_are_merged(self, mock_run, tmp_path):
        spec = CommandSpec("cargo", ("build",), env={"RUSTFLAGS": "--cfg=web_sys_unstable_apis"})
        run_command(spec, tmp_path)

        env = mock_run.call_args.kwargs["env"]
        assert env["RUSTFLAGS"] == "--cfg=web_sys_unstable_apis"
        assert env.get("PATH") == os.environ.get("PATH")

    @patch("subprocess.run")
    def test_env_override_does_not_leak(self, mock_run, tmp_path):
        spec = CommandSpec("cargo", env={"RUSTFLAGS": "--cfg=web_sys_unstable_apis"})
        run_command(spec, tmp_path)
        assert os.environ.get("RUSTFLAGS") != "--cfg=web_sys_unstable_apis"

    @patch("subprocess.run")
    def test_failure_keeps_exit_status(self, mock_run, tmp_path):
        mock_run.side_effect = subprocess.CalledProcessError(101, "cargo")

        with pytest.raises(BuildError) as exc_info:
            run_command(CommandSpec("cargo", ("test",)), tmp_path)

        assert exc_info.value.returncode == 101
        assert "cargo test" in str(exc_info.value)

    @patch("subprocess.run")
    def test_killed_by_signal(self, mock_run, tmp_path):
        mock_run.side_effect = subprocess.CalledProcessError(-15, "cargo")

        with pytest.raises(BuildError) as exc_info:
            run_command(CommandSpec("cargo", ("build",)), tmp_path)

        assert exc_info.value.returncode == 143

    @patch("subprocess.run")
    def test_not_found(self, mock_run, tmp_path):
        mock_run.side_effect = FileNotFoundError(2, "No such file", "wasm-bindgen")

        with pytest.raises(BuildError) as exc_info:
            run_command(CommandSpec("wasm-bindgen"), tmp_path)

        assert exc_info.value.returncode == COMMAND_NOT_FOUND
        assert "wasm-bindgen" in str(exc_info.value)

    @patch("subprocess.run")
    def test_cwd_from_spec(self, mock_run, tmp_path):
        run_command(CommandSpec("cargo", ("readme",), cwd=Path("rend3")), tmp_path)
        assert mock_run.call_args.kwargs["cwd"] == tmp_path / "rend3"
