"""Tests for sollint CLI utility functions."""

from __future__ import annotations

from pathlib import Path

import pytest
import typer
from typer.testing import CliRunner

from sollint.cli_utils import (
    EXIT_SUCCESS,
    EXIT_SYSTEM_ERROR,
    EXIT_USER_ERROR,
    error,
    info,
    success,
    warning,
    wire_config,
)

# Default CliRunner - note that stderr is mixed into output
runner = CliRunner()


class TestErrorFormatting:
    """Tests for error formatting helpers."""

    def test_error_exits_with_user_error_code_by_default(self) -> None:
        """Test that error() exits with EXIT_USER_ERROR by default."""
        app = typer.Typer()

        @app.command()
        def cmd() -> None:
            error("Test error message")

        result = runner.invoke(app, [])
        assert result.exit_code == EXIT_USER_ERROR
        assert "Error:" in result.output
        assert "Test error message" in result.output

    def test_error_exits_with_custom_exit_code(self) -> None:
        """Test that error() can use a custom exit code."""
        app = typer.Typer()

        @app.command()
        def cmd() -> None:
            error("Disk full", exit_code=EXIT_SYSTEM_ERROR)

        result = runner.invoke(app, [])
        assert result.exit_code == EXIT_SYSTEM_ERROR

    def test_message_helpers(self) -> None:
        """Test warning, success and info output."""
        app = typer.Typer()

        @app.command()
        def cmd() -> None:
            warning("careful")
            success("done")
            info("plain")

        result = runner.invoke(app, [])
        assert result.exit_code == EXIT_SUCCESS
        assert "Warning: careful" in result.output
        assert "Success: done" in result.output
        assert "plain" in result.output


class TestWireConfig:
    """Tests for wire_config."""

    def test_defaults(self, tmp_path: Path) -> None:
        """Test wiring with no options."""
        assert wire_config(start_dir=tmp_path).formatter == "stylish"

    def test_formatter_override(self, tmp_path: Path) -> None:
        """Test the formatter option overrides config files."""
        (tmp_path / ".sollintrc").write_text('formatter = "unix"\n')
        assert wire_config(formatter="json", start_dir=tmp_path).formatter == "json"

    def test_config_file(self, tmp_path: Path) -> None:
        """Test an explicit config file path is loaded."""
        path = tmp_path / "custom.toml"
        path.write_text("max_line_length = 80\n")
        config = wire_config(config_file=str(path), start_dir=tmp_path)
        assert config.max_line_length == 80

    def test_missing_config_file_exits(self, tmp_path: Path) -> None:
        """Test a missing config file exits with the user error code."""
        with pytest.raises(typer.Exit) as exc_info:
            wire_config(config_file=str(tmp_path / "nope.toml"), start_dir=tmp_path)
        assert exc_info.value.exit_code == EXIT_USER_ERROR

    def test_invalid_config_exits(self, tmp_path: Path) -> None:
        """Test invalid values exit with the user error code."""
        (tmp_path / ".sollintrc").write_text('formatter = ""\n')
        with pytest.raises(typer.Exit) as exc_info:
            wire_config(start_dir=tmp_path)
        assert exc_info.value.exit_code == EXIT_USER_ERROR
