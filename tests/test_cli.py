"""Tests for CLI commands."""

import io
import logging
from pathlib import Path

import pytest
import yaml

from promptline.cli import main

ENV_VARS = (
    "PROMPTLINE_CI_MODE",
    "PROMPTLINE_UNICODE",
    "PROMPTLINE_COLOR",
    "PROMPTLINE_ESCAPE_TIMEOUT",
    "PROMPTLINE_WITH_GUIDE",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path: Path) -> None:
    """Keep the user's settings file and environment out of CLI tests."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr("promptline.config.DEFAULT_CONFIG_PATH", tmp_path / "absent.yaml")


class TestMain:
    """Tests for argument handling."""

    def test_no_command_prints_help(self, capsys) -> None:
        """Should print usage when no command is given."""
        main([])

        assert "usage: promptline" in capsys.readouterr().out

    def test_missing_config_file(self, tmp_path: Path, capsys) -> None:
        """Should exit with an error for an explicit file that does not exist."""
        with pytest.raises(SystemExit) as exc_info:
            main(["-c", str(tmp_path / "missing.yaml"), "config"])

        assert exc_info.value.code == 1
        assert "Error:" in capsys.readouterr().out

    def test_invalid_config_file(self, tmp_path: Path, capsys) -> None:
        """Should exit with an error for a malformed settings file."""
        path = tmp_path / "bad.yaml"
        path.write_text("color: sometimes\n")

        with pytest.raises(SystemExit) as exc_info:
            main(["-c", str(path), "config"])

        assert exc_info.value.code == 1

    def test_verbose_enables_debug_logging(self, capsys) -> None:
        main(["-v"])

        assert logging.getLogger("promptline").level == logging.DEBUG


class TestCmdConfig:
    """Tests for the config command."""

    def test_yaml_output(self, tmp_path: Path, capsys) -> None:
        """Should print the effective settings as YAML."""
        path = tmp_path / "config.yaml"
        path.write_text("color: false\naliases:\n  ctrl+n: down\n")

        main(["-c", str(path), "config", "--yaml"])
        data = yaml.safe_load(capsys.readouterr().out)

        assert data["color"] is False
        assert data["unicode"] == "auto"
        assert data["aliases"] == {"ctrl+n": "down"}

    def test_environment_overrides_file(self, tmp_path: Path, monkeypatch, capsys) -> None:
        path = tmp_path / "config.yaml"
        path.write_text("unicode: true\n")
        monkeypatch.setenv("PROMPTLINE_UNICODE", "false")

        main(["-c", str(path), "config", "--yaml"])
        data = yaml.safe_load(capsys.readouterr().out)

        assert data["unicode"] is False

    def test_tables(self, capsys) -> None:
        """Should print settings and alias tables."""
        main(["config"])
        out = capsys.readouterr().out

        assert "Settings" in out
        assert "Key aliases" in out
        assert "escape_timeout" in out


class TestCmdEnv:
    """Tests for the env command."""

    def test_env_table(self, capsys) -> None:
        main(["env"])
        out = capsys.readouterr().out

        assert "Terminal" in out
        assert "CI mode active" in out


class TestCmdKeys:
    """Tests for the keys command."""

    def test_requires_terminal(self, monkeypatch, capsys) -> None:
        """Should refuse to run when stdin is not a terminal."""
        monkeypatch.setattr("sys.stdin", io.StringIO())

        with pytest.raises(SystemExit) as exc_info:
            main(["keys"])

        assert exc_info.value.code == 1
        assert "not a terminal" in capsys.readouterr().out
