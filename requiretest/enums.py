"""Canonical enums for export facts and diagnostics.

StrEnum values compare equal to their string values (Severity.ERROR == "error"),
so JSON payloads and config values can use the raw strings.
"""

from __future__ import annotations

import enum


class Severity(enum.StrEnum):
    ERROR = "error"
    WARNING = "warning"


class DeclarationKind(enum.StrEnum):
    """How an exported function was declared."""

    NAMED_FUNCTION = "named_function_declaration"
    ARROW_CONST = "named_arrow_const_binding"
    RE_EXPORTED = "re_exported_binding"


class BindingKind(enum.StrEnum):
    """What a top-level name is bound to."""

    FUNCTION = "function"
    ARROW_FUNCTION = "arrow_function"
    VARIABLE = "variable"
