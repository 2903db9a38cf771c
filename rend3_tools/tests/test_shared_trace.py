import logging
from pathlib import Path
from unittest.mock import patch

import pytest

from rend3_tools.shared.commands import CommandSpec, run_command
from rend3_tools.shared.trace import configure_logging, get_logger


@pytest.fixture(autouse=True)
def reset_logger():
    yield
    logger = get_logger()
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


class TestGetLogger:
    def test_package_logger(self):
        assert get_logger().name == "rend3_tools"

    def test_child_logger(self):
        assert get_logger("web_bin").name == "rend3_tools.web_bin"


class TestConfigureLogging:
    def test_trace_level(self):
        logger = configure_logging(trace=True)
        assert logger.level == logging.INFO
        assert len(logger.handlers) == 1

    def test_quiet_level(self):
        assert configure_logging(trace=False).level == logging.WARNING

    def test_no_duplicate_handlers(self):
        configure_logging()
        logger = configure_logging()
        assert len(logger.handlers) == 1

    @patch("subprocess.run")
    def test_commands_are_echoed(self, mock_run, capsys, tmp_path):
        configure_logging(trace=True)

        run_command(
            CommandSpec("cargo", ("readme",), cwd=Path("rend3"), env={"RUSTFLAGS": "--cfg=x"}),
            tmp_path,
        )

        assert "$ RUSTFLAGS=--cfg=x cargo readme" in capsys.readouterr().err

    @patch("subprocess.run")
    def test_quiet_does_not_echo(self, mock_run, capsys, tmp_path):
        configure_logging(trace=False)

        run_command(CommandSpec("cargo", ("test",)), tmp_path)

        assert "cargo test" not in capsys.readouterr().err
