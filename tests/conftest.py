"""Pytest configuration and fixtures for sollint tests."""

import os

import pytest

# Fixed terminal size so stylish and table output never wraps.
# Must be set before any Rich imports
os.environ.setdefault("COLUMNS", "200")
os.environ.setdefault("LINES", "50")
# No colors or cursor control in captured output
os.environ.setdefault("TERM", "dumb")

SOLLINT_ENV_VARS = ("SOLLINT_FORMATTER", "SOLLINT_MAX_LINE_LENGTH")


@pytest.fixture(autouse=True)
def _clean_sollint_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep SOLLINT_* variables from the outer environment out of tests."""
    for name in SOLLINT_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
