"""CLI utility functions for sollint.

Provides helper functions for:
- Config wiring: Extracting Typer CLI options and passing to load_config
- Error formatting: Consistent user-friendly error messages with exit codes
- Option factories shared by several commands
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, NoReturn

import typer

from sollint.config import ConfigFileError, SollintConfig, load_config

# Exit code conventions
EXIT_SUCCESS = 0
EXIT_LINT_FAILURE = 1  # Errors remain, or too many warnings
EXIT_USER_ERROR = 1  # User error (bad option, missing file, invalid config)
EXIT_SYSTEM_ERROR = 2  # System error (permissions, I/O, etc.)


# -----------------------------------------------------------------------------
# Error Formatting Helpers
# -----------------------------------------------------------------------------


def error(msg: str, *, exit_code: int = EXIT_USER_ERROR) -> NoReturn:
    """Print an error message and exit with the given exit code.

    Args:
        msg: The error message to display.
        exit_code: Exit code to use (default: EXIT_USER_ERROR=1).

    Raises:
        typer.Exit: Always raises to exit the program.
    """
    styled_prefix = typer.style("Error:", fg=typer.colors.RED, bold=True)
    typer.echo(f"{styled_prefix} {msg}", err=True)
    raise typer.Exit(code=exit_code)


def warning(msg: str) -> None:
    """Print a warning message to stderr."""
    styled_prefix = typer.style("Warning:", fg=typer.colors.YELLOW, bold=True)
    typer.echo(f"{styled_prefix} {msg}", err=True)


def success(msg: str) -> None:
    """Print a success message to stderr, keeping stdout for reports."""
    styled_prefix = typer.style("Success:", fg=typer.colors.GREEN, bold=True)
    typer.echo(f"{styled_prefix} {msg}", err=True)


def info(msg: str) -> None:
    """Print an info message to stdout."""
    typer.echo(msg)


# -----------------------------------------------------------------------------
# Config Wiring Helper
# -----------------------------------------------------------------------------


def wire_config(
    config_file: str | None = None,
    formatter: str | None = None,
    start_dir: Path | None = None,
) -> SollintConfig:
    """Wire CLI options to load_config with appropriate overrides.

    Args:
        config_file: Explicit config file to use instead of .sollintrc.
        formatter: Override for the report formatter.
        start_dir: Directory to start searching for config files.

    Returns:
        Fully resolved SollintConfig instance.

    Raises:
        typer.Exit: If configuration is missing or invalid.
    """
    cli_overrides: dict[str, Any] = {}

    if formatter is not None:
        cli_overrides["formatter"] = formatter

    try:
        return load_config(
            cli_overrides=cli_overrides,
            start_dir=start_dir,
            config_file=Path(config_file) if config_file is not None else None,
        )
    except ConfigFileError as e:
        error(f"Cannot load configuration: {e}", exit_code=EXIT_USER_ERROR)
    except ValueError as e:
        error(f"Invalid configuration: {e}", exit_code=EXIT_USER_ERROR)


# -----------------------------------------------------------------------------
# Typer Option Factory Functions
# -----------------------------------------------------------------------------
# Typer consumes Option objects when decorating commands, so each command
# needs a fresh instance.


def config_option() -> Any:
    """Create a Typer Option for --config / -c."""
    return typer.Option(
        None,
        "--config",
        "-c",
        help="Configuration file to use instead of .sollintrc.",
    )


def formatter_option() -> Any:
    """Create a Typer Option for --formatter / -f."""
    return typer.Option(
        None,
        "--formatter",
        "-f",
        help="Report formatter: stylish, table, tap, unix or json.",
        envvar="SOLLINT_FORMATTER",
    )


def quiet_option() -> Any:
    """Create a Typer Option for --quiet / -q."""
    return typer.Option(
        False,
        "--quiet",
        "-q",
        help="Report errors only.",
    )
