"""Path filtering utilities for sollint.

Expands command line targets (files, directories, glob patterns) into the
list of files to lint, filtering out paths that should not be scanned.
"""

from __future__ import annotations

import fnmatch
import glob
from collections.abc import Iterable, Sequence
from pathlib import Path

from sollint.config import SollintConfig

# Directories to exclude when scanning a directory target
IGNORED_DIRS = frozenset(
    {
        ".venv",
        "venv",
        "node_modules",
        "__pycache__",
        ".git",
        "dist",
        "build",
        "artifacts",
        "cache",
        ".tox",
        ".nox",
    }
)


def _should_skip_dir(path: Path) -> bool:
    """Check if any directory component of a path is ignored."""
    return bool(set(path.parts[:-1]) & IGNORED_DIRS)


def is_excluded(path: Path, patterns: Iterable[str], base_dir: Path) -> bool:
    """Check a file against exclusion globs.

    A pattern matches either the path relative to base_dir (POSIX form) or
    the bare file name.

    Args:
        path: File to check.
        patterns: Glob patterns from excluded_files and the ignore file.
        base_dir: Directory relative paths are computed from.

    Returns:
        True if the file is excluded.
    """
    try:
        rel = path.resolve().relative_to(base_dir.resolve()).as_posix()
    except ValueError:
        rel = path.as_posix()

    for pattern in patterns:
        pattern = pattern.rstrip("/")
        if fnmatch.fnmatch(rel, pattern) or fnmatch.fnmatch(path.name, pattern):
            return True
        # "dir" or "dir/**" excludes everything below dir
        prefix = pattern[:-3] if pattern.endswith("/**") else pattern
        if rel.startswith(prefix + "/"):
            return True
    return False


def _expand_directory(directory: Path, extensions: tuple[str, ...]) -> list[Path]:
    found: list[Path] = []
    for path in directory.rglob("*"):
        if not path.is_file() or path.suffix not in extensions:
            continue
        if _should_skip_dir(path.relative_to(directory)):
            continue
        found.append(path)
    return sorted(found)


def collect_files(
    targets: Sequence[str],
    config: SollintConfig,
    ignore_patterns: Sequence[str] = (),
    base_dir: Path | None = None,
) -> list[Path]:
    """Expand CLI targets into the files to lint.

    Filters out:
    - Files matching configured excluded_files or ignore-file patterns
    - Files in .git/, node_modules/, build/ and similar when a directory
      is scanned
    - Files without a configured extension when a directory or glob is
      expanded (explicit file targets are always linted)

    Args:
        targets: File paths, directory paths or glob patterns.
        config: Resolved configuration.
        ignore_patterns: Patterns read from the ignore file.
        base_dir: Directory relative paths and patterns refer to.
            Defaults to current directory.

    Returns:
        Files to lint, without duplicates, in target order.
    """
    base = base_dir or Path.cwd()
    patterns = (*config.excluded_files, *ignore_patterns)
    files: list[Path] = []
    seen: set[Path] = set()

    for target in targets:
        target_path = Path(target)
        if base_dir is not None and not target_path.is_absolute():
            target_path = base_dir / target_path

        if target_path.is_file():
            candidates = [target_path]
        elif target_path.is_dir():
            candidates = _expand_directory(target_path, config.extensions)
        else:
            matches = glob.glob(str(target_path), recursive=True)
            candidates = sorted(
                Path(m) for m in matches if Path(m).is_file() and Path(m).suffix in config.extensions
            )

        for path in candidates:
            key = path.resolve()
            if key in seen or is_excluded(path, patterns, base):
                continue
            seen.add(key)
            files.append(path)

    return files
