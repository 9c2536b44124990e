"""Diagnostic records for uncovered and unchecked exports."""

from __future__ import annotations

from requiretest.enums import Severity
from requiretest.rule import RULE_ID, UNCHECKED_RULE_ID, message_for

from .base import Diagnostic, ExportedFunction, UncheckedExport


def make_missing_test_diagnostic(
    fact: ExportedFunction, file: str, *, locale: str = "en"
) -> Diagnostic:
    return Diagnostic(
        rule_id=RULE_ID,
        severity=Severity.ERROR,
        message=message_for("missing_test", locale),
        file=file,
        line=fact.line,
        column=fact.column,
        name=fact.name,
        kind=str(fact.kind),
    )


def make_unchecked_diagnostic(
    export: UncheckedExport, file: str, *, locale: str = "en"
) -> Diagnostic:
    return Diagnostic(
        rule_id=UNCHECKED_RULE_ID,
        severity=Severity.WARNING,
        message=message_for("unchecked_export", locale),
        file=file,
        line=export.line,
        column=export.column,
        name=export.label,
        kind=export.reason,
    )


def sort_diagnostics(diagnostics: list[Diagnostic]) -> list[Diagnostic]:
    return sorted(diagnostics, key=lambda d: (d.file, d.line, d.column, d.name))


__all__ = ["make_missing_test_diagnostic", "make_unchecked_diagnostic", "sort_diagnostics"]
