"""Grammar specs for the JavaScript family of languages."""

from __future__ import annotations

from . import TreeSitterLangSpec

# Side-effect imports (`import "./setup"`) are matched too; they bind no names.
_IMPORT_QUERY = """
    (import_statement
        source: (string (string_fragment) @path)) @import
"""

TYPESCRIPT_SPEC = TreeSitterLangSpec(
    grammar="typescript",
    extensions=(".ts", ".mts", ".cts"),
    import_query=_IMPORT_QUERY,
)

# JSX in .ts files would conflict with `<T>expr` casts, so .tsx gets its own grammar.
TSX_SPEC = TreeSitterLangSpec(
    grammar="tsx",
    extensions=(".tsx",),
    import_query=_IMPORT_QUERY,
)

JS_SPEC = TreeSitterLangSpec(
    grammar="javascript",
    extensions=(".js", ".jsx", ".mjs", ".cjs"),
    import_query=_IMPORT_QUERY,
)

TREESITTER_SPECS: dict[str, TreeSitterLangSpec] = {
    "typescript": TYPESCRIPT_SPEC,
    "tsx": TSX_SPEC,
    "javascript": JS_SPEC,
}


def spec_for_path(filepath: str) -> TreeSitterLangSpec | None:
    """Pick the grammar spec for a file by its extension."""
    lowered = filepath.lower()
    for spec in TREESITTER_SPECS.values():
        if lowered.endswith(spec.extensions):
            return spec
    return None


__all__ = [
    "JS_SPEC",
    "TREESITTER_SPECS",
    "TSX_SPEC",
    "TYPESCRIPT_SPEC",
    "spec_for_path",
]
