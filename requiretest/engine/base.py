"""Shared data types for the coverage engine."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field

from requiretest.enums import DeclarationKind, Severity


@dataclass(frozen=True)
class ExportedFunction:
    """An exported function found in a module."""
    name: str
    kind: DeclarationKind
    line: int
    column: int


@dataclass(frozen=True)
class UncheckedExport:
    """An export whose shape the check cannot verify (default, destructured)."""
    label: str
    reason: str
    line: int
    column: int


@dataclass(frozen=True)
class ImportFact:
    """One relative import statement of a test file.

    ``names`` holds only the individually named bindings; default and
    namespace bindings are kept for reporting but never establish coverage.
    """
    specifier: str
    names: frozenset[str] = field(default_factory=frozenset)
    default_name: str | None = None
    namespace_name: str | None = None


@dataclass(frozen=True)
class Diagnostic:
    rule_id: str
    severity: Severity
    message: str
    file: str
    line: int
    column: int
    name: str = ""
    kind: str = ""

    def as_dict(self) -> dict:
        data = asdict(self)
        data["severity"] = str(self.severity)
        return data
