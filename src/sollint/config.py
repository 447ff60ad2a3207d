"""Configuration management for sollint.

Handles configuration loading from multiple sources with precedence:
CLI args > environment variables > .sollintrc (or --config) > pyproject.toml > defaults

Configuration is resolved once at startup into an immutable SollintConfig
that is passed explicitly to everything that needs it.
"""

from __future__ import annotations

import os
import sys
from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from pathlib import Path
from types import MappingProxyType
from typing import Any

# tomllib is only available in Python 3.11+
if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib  # type: ignore[import-not-found]

CONFIG_FILENAME = ".sollintrc"
IGNORE_FILENAME = ".sollintignore"

RULE_LEVELS = ("off", "warn", "error")

SAMPLE_CONFIG = """\
# sollint configuration
formatter = "stylish"
max_line_length = 120
max_empty_lines = 1
excluded_files = []

[rules]
no-trailing-whitespace = "warn"
eol-last = "warn"
no-tabs-indent = "warn"
no-multiple-empty-lines = "warn"
max-line-length = "error"
"""


class ConfigFileError(ValueError):
    """Raised when an explicitly requested config or ignore file is unusable."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"{path}: {reason}")


@dataclass(frozen=True)
class SollintConfig:
    """Configuration for the sollint CLI tool.

    Attributes:
        rules: Rule id to level ("off", "warn" or "error"). Rules not listed
            run at their default severity.
        excluded_files: Glob patterns of files never linted.
        extensions: File suffixes collected when a directory is linted.
        max_line_length: Limit used by the max-line-length rule.
        max_empty_lines: Consecutive blank lines allowed by
            no-multiple-empty-lines.
        formatter: Default report formatter name.
    """

    rules: Mapping[str, str] = field(default_factory=dict)
    excluded_files: tuple[str, ...] = ()
    extensions: tuple[str, ...] = (".sol",)
    max_line_length: int = 120
    max_empty_lines: int = 1
    formatter: str = "stylish"

    def __post_init__(self) -> None:
        """Normalize and validate configuration after initialization."""
        if not isinstance(self.rules, Mapping):
            raise ValueError("rules must be a table of rule id to level")
        for name in ("excluded_files", "extensions"):
            if isinstance(getattr(self, name), str):
                raise ValueError(f"{name} must be a list of strings")
        object.__setattr__(self, "rules", MappingProxyType(dict(self.rules)))
        object.__setattr__(self, "excluded_files", tuple(self.excluded_files))
        object.__setattr__(self, "extensions", tuple(self.extensions))
        self._validate()

    def _validate(self) -> None:
        """Validate configuration values.

        Raises:
            ValueError: If any configuration value is invalid.
        """
        for rule_id, level in self.rules.items():
            if level not in RULE_LEVELS:
                raise ValueError(
                    f"rule '{rule_id}' has invalid level '{level}' "
                    f"(expected one of: {', '.join(RULE_LEVELS)})"
                )

        if not all(isinstance(p, str) and p for p in self.excluded_files):
            raise ValueError("excluded_files must be a list of non-empty strings")

        if not self.extensions:
            raise ValueError("extensions must not be empty")
        if not all(isinstance(e, str) and e.startswith(".") for e in self.extensions):
            raise ValueError("extensions must be strings starting with '.'")

        if isinstance(self.max_line_length, bool) or not isinstance(self.max_line_length, int):
            raise ValueError("max_line_length must be an integer")
        if self.max_line_length < 1:
            raise ValueError("max_line_length must be positive")

        if isinstance(self.max_empty_lines, bool) or not isinstance(self.max_empty_lines, int):
            raise ValueError("max_empty_lines must be an integer")
        if self.max_empty_lines < 0:
            raise ValueError("max_empty_lines must not be negative")

        if not self.formatter or not isinstance(self.formatter, str):
            raise ValueError("formatter must be a non-empty string")

    def rule_level(self, rule_id: str, default: str) -> str:
        """Get the configured level for a rule.

        Args:
            rule_id: Rule identifier.
            default: Level to use when the rule is not configured.

        Returns:
            "off", "warn" or "error".
        """
        return self.rules.get(rule_id, default)


def _get_config_field_names() -> set[str]:
    """Get the set of valid configuration field names.

    Returns:
        Set of field names from SollintConfig.
    """
    return {f.name for f in fields(SollintConfig)}


def find_config_file(filename: str = CONFIG_FILENAME, start_dir: Path | None = None) -> Path | None:
    """Find a configuration file by traversing up the directory tree.

    Searches for the specified file starting from start_dir (or current directory)
    and traversing up to the filesystem root.

    Args:
        filename: Name of the config file to find.
        start_dir: Directory to start searching from. Defaults to current directory.

    Returns:
        Path to the config file if found, None otherwise.
    """
    current = start_dir or Path.cwd()
    current = current.resolve()

    while True:
        config_path = current / filename
        if config_path.is_file():
            return config_path

        parent = current.parent
        if parent == current:
            # Reached filesystem root
            return None
        current = parent


def _load_toml_file(path: Path) -> dict[str, Any]:
    """Load a TOML file and return its contents.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        tomllib.TOMLDecodeError: If the file is not valid TOML.
    """
    with open(path, "rb") as f:
        result: dict[str, Any] = tomllib.load(f)
        return result


def _filter_fields(data: dict[str, Any]) -> dict[str, Any]:
    valid_fields = _get_config_field_names()
    return {k: v for k, v in data.items() if k in valid_fields}


def _load_from_rc(start_dir: Path | None = None) -> dict[str, Any]:
    """Load configuration from the nearest .sollintrc file.

    Returns:
        Configuration from .sollintrc, or empty dict if not found or unreadable.
    """
    config_path = find_config_file(CONFIG_FILENAME, start_dir)
    if config_path is None:
        return {}

    try:
        return _filter_fields(_load_toml_file(config_path))
    except (tomllib.TOMLDecodeError, OSError):
        return {}


def _load_from_explicit_file(path: Path) -> dict[str, Any]:
    """Load configuration from a file named on the command line.

    Raises:
        ConfigFileError: If the file is missing or not valid TOML.
    """
    if not path.is_file():
        raise ConfigFileError(path, "config file does not exist")
    try:
        return _filter_fields(_load_toml_file(path))
    except tomllib.TOMLDecodeError as e:
        raise ConfigFileError(path, f"invalid TOML: {e}") from e
    except OSError as e:
        raise ConfigFileError(path, f"cannot read config file: {e}") from e


def _load_from_pyproject(start_dir: Path | None = None) -> dict[str, Any]:
    """Load configuration from pyproject.toml [tool.sollint] section.

    Returns:
        Configuration from pyproject.toml, or empty dict if not found.
    """
    config_path = find_config_file("pyproject.toml", start_dir)
    if config_path is None:
        return {}

    try:
        data = _load_toml_file(config_path)
        tool_section = data.get("tool", {})
        return _filter_fields(tool_section.get("sollint", {}))
    except (tomllib.TOMLDecodeError, OSError):
        return {}


def _load_from_env() -> dict[str, Any]:
    """Load configuration from environment variables.

    Supported: SOLLINT_FORMATTER, SOLLINT_MAX_LINE_LENGTH.

    Raises:
        ValueError: If SOLLINT_MAX_LINE_LENGTH is not an integer.
    """
    result: dict[str, Any] = {}

    formatter = os.environ.get("SOLLINT_FORMATTER")
    if formatter is not None:
        result["formatter"] = formatter

    max_line_length = os.environ.get("SOLLINT_MAX_LINE_LENGTH")
    if max_line_length is not None:
        try:
            result["max_line_length"] = int(max_line_length)
        except ValueError as e:
            raise ValueError(
                f"SOLLINT_MAX_LINE_LENGTH must be an integer, got '{max_line_length}'"
            ) from e

    return result


def _merge_configs(*configs: dict[str, Any]) -> dict[str, Any]:
    """Merge multiple configuration dictionaries.

    Later dictionaries take precedence over earlier ones. The ``rules``
    tables are merged key by key rather than replaced.
    """
    result: dict[str, Any] = {}
    for config in configs:
        for key, value in config.items():
            if value is None:
                continue
            if key == "rules" and isinstance(value, dict):
                result["rules"] = {**result.get("rules", {}), **value}
            else:
                result[key] = value
    return result


def load_config(
    cli_overrides: dict[str, Any] | None = None,
    start_dir: Path | None = None,
    config_file: Path | None = None,
) -> SollintConfig:
    """Load configuration with full precedence chain.

    Precedence (highest to lowest):
    1. CLI arguments (cli_overrides)
    2. Environment variables (SOLLINT_*)
    3. config_file if given, otherwise the nearest .sollintrc
    4. pyproject.toml [tool.sollint] section
    5. Default values

    Args:
        cli_overrides: Configuration overrides from CLI arguments.
        start_dir: Directory to start searching for config files.
        config_file: Explicit config file replacing .sollintrc discovery.

    Returns:
        Fully resolved SollintConfig instance.

    Raises:
        ConfigFileError: If config_file is missing or malformed.
        ValueError: If the resulting configuration is invalid.
    """
    pyproject_config = _load_from_pyproject(start_dir)
    if config_file is not None:
        rc_config = _load_from_explicit_file(config_file)
    else:
        rc_config = _load_from_rc(start_dir)
    env_config = _load_from_env()
    cli_config = _filter_fields(cli_overrides or {})

    merged = _merge_configs(
        pyproject_config,
        rc_config,
        env_config,
        cli_config,
    )

    return SollintConfig(**merged)


def load_ignore_patterns(
    ignore_path: Path | None = None,
    start_dir: Path | None = None,
) -> tuple[str, ...]:
    """Read ignore patterns, one glob per line.

    Blank lines and lines starting with ``#`` are skipped.

    Args:
        ignore_path: Explicit ignore file. Defaults to .sollintignore in
            start_dir (or the current directory).
        start_dir: Directory holding the default ignore file.

    Returns:
        Tuple of patterns. Empty when the default file does not exist.

    Raises:
        ConfigFileError: If an explicit ignore_path does not exist, or an
            ignore file exists but cannot be read.
    """
    path = ignore_path or (start_dir or Path.cwd()) / IGNORE_FILENAME

    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        if ignore_path is not None:
            raise ConfigFileError(path, "ignore file does not exist") from e
        return ()
    except OSError as e:
        raise ConfigFileError(path, f"cannot read ignore file: {e}") from e

    patterns = (line.strip() for line in text.splitlines())
    return tuple(p for p in patterns if p and not p.startswith("#"))


def write_sample_config(directory: Path | None = None) -> Path | None:
    """Create a sample .sollintrc unless one already exists.

    Args:
        directory: Target directory. Defaults to current directory.

    Returns:
        Path to the created file, or None if it already existed.
    """
    path = (directory or Path.cwd()) / CONFIG_FILENAME
    if path.exists():
        return None
    path.write_text(SAMPLE_CONFIG, encoding="utf-8")
    return path
