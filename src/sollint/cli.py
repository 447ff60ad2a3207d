"""sollint CLI - Main entry point."""

from __future__ import annotations

import sys
from collections.abc import Sequence
from pathlib import Path

import typer
from rich.console import Console, RenderableType
from rich.text import Text

from sollint import __version__
from sollint.analyzer import LintRunner, Report, UnknownRuleError, collect_files
from sollint.cli_utils import (
    EXIT_LINT_FAILURE,
    EXIT_SYSTEM_ERROR,
    config_option,
    error,
    formatter_option,
    info,
    quiet_option,
    success,
    warning,
    wire_config,
)
from sollint.config import (
    ConfigFileError,
    SollintConfig,
    load_ignore_patterns,
    write_sample_config,
)
from sollint.fixers import FileFixResult, fix_reports
from sollint.formatters import Formatter, UnknownFormatterError, get_formatter, summarize

app = typer.Typer(
    name="sollint",
    help="Linter for the Solidity programming language, with automatic fixes.",
    add_completion=False,
)

# Rich consoles for output
console = Console()
err_console = Console(stderr=True)


# -----------------------------------------------------------------------------
# Output Helpers
# -----------------------------------------------------------------------------


def _render(renderable: RenderableType) -> None:
    """Print a formatter's output without markup interpretation."""
    if isinstance(renderable, str):
        if renderable:
            console.print(renderable, markup=False, highlight=False, soft_wrap=True)
    elif isinstance(renderable, Text):
        console.print(renderable, soft_wrap=True)
    else:
        console.print(renderable)


def _load_formatter(config: SollintConfig) -> Formatter:
    try:
        return get_formatter(config.formatter)
    except UnknownFormatterError as e:
        error(f"There was a problem loading formatter option: {e}")


def _create_runner(config: SollintConfig) -> LintRunner:
    try:
        return LintRunner(config)
    except UnknownRuleError as e:
        error(f"Invalid configuration: {e}")


def _exit_with_status(reports: Sequence[Report], max_warnings: int | None) -> None:
    """Exit non-zero when errors remain or warnings exceed the maximum.

    Counts are taken from the reports as given: after --fix, fixed
    diagnostics have been pruned; after --dry-run, nothing has.
    """
    summary = summarize(reports)
    if summary.errors:
        raise typer.Exit(code=EXIT_LINT_FAILURE)
    if max_warnings is not None and summary.warnings > max_warnings:
        err_console.print(
            "sollint found more warnings than the maximum specified "
            f"(maximum: {max_warnings})",
            markup=False,
        )
        raise typer.Exit(code=EXIT_LINT_FAILURE)


def _print_fix_results(
    results: Sequence[FileFixResult], *, dry_run: bool, verbose: bool
) -> None:
    """Print what the autofix pipeline did, file by file."""
    fixed = 0
    files_changed = 0

    for result in results:
        if result.error:
            warning(f"{result.file_path}: {result.error}")
            continue

        fixed += result.fixed_count
        if result.changed:
            files_changed += 1

        if dry_run and result.changed:
            _render(result.diff())

        if verbose and (result.accepted or result.rejected):
            err_console.print(
                f"  [dim]{result.file_path}:[/dim] "
                f"{len(result.accepted)} fixed, {len(result.rejected)} deferred",
                highlight=False,
            )

    if fixed == 0:
        return
    verb = "Would fix" if dry_run else "Fixed"
    success(f"{verb} {fixed} problem(s) in {files_changed} file(s)")


# -----------------------------------------------------------------------------
# Version and Main Callbacks
# -----------------------------------------------------------------------------


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"sollint version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-v",
        help="Show version and exit.",
        callback=version_callback,
        is_eager=True,
    ),
) -> None:
    """Linter for the Solidity programming language, with automatic fixes."""
    pass


# -----------------------------------------------------------------------------
# Lint Command
# -----------------------------------------------------------------------------


@app.command()
def lint(
    paths: list[str] | None = typer.Argument(
        None,
        help="Files, directories or glob patterns to lint.",
    ),
    fix: bool = typer.Option(
        False,
        "--fix",
        help="Automatically fix problems.",
    ),
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        "-n",
        help="Show the fixes as a diff without writing files.",
    ),
    formatter: str | None = formatter_option(),
    max_warnings: int | None = typer.Option(
        None,
        "--max-warnings",
        "-w",
        min=0,
        help="Number of warnings allowed before exiting with an error.",
    ),
    config_file: str | None = config_option(),
    quiet: bool = quiet_option(),
    ignore_path: str | None = typer.Option(
        None,
        "--ignore-path",
        help="File to use as your .sollintignore.",
    ),
    init: bool = typer.Option(
        False,
        "--init",
        help="Create a configuration file before linting.",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        help="Show per-file fix details.",
    ),
) -> None:
    """Lint Solidity sources and optionally fix them.

    With --fix, every fixable problem whose edit does not overlap an
    earlier edit is applied in a single pass and the file is rewritten.
    Problems whose edits overlap stay reported; run the command again to
    fix them against the updated text. With --dry-run the fixes are only
    shown as a diff; the report and exit code describe the file as it is.

    Exit codes:
      0 - No errors, and warnings within --max-warnings
      1 - Errors remain, too many warnings, or invalid usage
      2 - A file could not be read or written
    """
    if init:
        _write_sample_config()
        if not paths:
            raise typer.Exit()

    if not paths:
        error("No files specified. Usage: sollint lint [OPTIONS] PATHS...")

    config = wire_config(config_file=config_file, formatter=formatter)
    formatter_fn = _load_formatter(config)

    try:
        ignore_patterns = load_ignore_patterns(
            Path(ignore_path) if ignore_path is not None else None
        )
    except ConfigFileError as e:
        error(f"{e.path} is not a valid path.")

    runner = _create_runner(config)
    files = collect_files(paths, config, ignore_patterns)
    if not files:
        error(f"No files matching: {' '.join(paths)}")

    try:
        reports = runner.lint_paths(files)
    except (OSError, UnicodeDecodeError) as e:
        error(f"Cannot read source file: {e}", exit_code=EXIT_SYSTEM_ERROR)

    if fix or dry_run:
        try:
            results = fix_reports(reports, dry_run=dry_run)
        except OSError as e:
            error(f"Cannot write fixed file: {e}", exit_code=EXIT_SYSTEM_ERROR)
        _print_fix_results(results, dry_run=dry_run, verbose=verbose)
        # Nothing was written on a dry run, so every problem is still there
        if not dry_run:
            reports = [result.report for result in results]

    shown = [report.errors_only() for report in reports] if quiet else reports
    _render(formatter_fn(shown))
    _exit_with_status(reports, max_warnings)


# -----------------------------------------------------------------------------
# Stdin Command
# -----------------------------------------------------------------------------


@app.command()
def stdin(
    filename: str | None = typer.Option(
        None,
        "--filename",
        help="Name of the file received on standard input.",
    ),
    formatter: str | None = formatter_option(),
    config_file: str | None = config_option(),
    quiet: bool = quiet_option(),
) -> None:
    """Lint source code provided on standard input."""
    config = wire_config(config_file=config_file, formatter=formatter)
    formatter_fn = _load_formatter(config)
    runner = _create_runner(config)

    report = runner.lint_source(sys.stdin.read(), filename or "stdin")

    _render(formatter_fn([report.errors_only() if quiet else report]))
    _exit_with_status([report], None)


# -----------------------------------------------------------------------------
# Init-Config Command
# -----------------------------------------------------------------------------


def _write_sample_config() -> None:
    try:
        created = write_sample_config()
    except OSError as e:
        error(f"Cannot write configuration file: {e}", exit_code=EXIT_SYSTEM_ERROR)
    if created is None:
        info("Configuration file already exists")
    else:
        info("Configuration file created!")


@app.command("init-config")
def init_config() -> None:
    """Create a sample .sollintrc in the current directory."""
    _write_sample_config()
