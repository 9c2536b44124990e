"""Exception hierarchy for the coverage engine.

Missing test coverage is never an exception; it is reported as a diagnostic.
These cover the cases where the analysis itself cannot proceed.
"""

from __future__ import annotations


class RequireTestError(Exception):
    """Base class for engine failures."""


class GrammarUnavailableError(RequireTestError):
    """No tree-sitter grammar is available for a file."""


class TestFileReadError(RequireTestError):
    """A test file could not be read while fail_on_unreadable is set."""

    __test__ = False  # keep pytest from collecting this as a test class

    def __init__(self, path: str, cause: Exception) -> None:
        super().__init__(f"Cannot read test file {path}: {cause}")
        self.path = path
        self.cause = cause


__all__ = ["GrammarUnavailableError", "RequireTestError", "TestFileReadError"]
