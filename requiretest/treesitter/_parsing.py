"""Thin wrappers over the tree-sitter parser, query and node APIs."""

from __future__ import annotations

from functools import lru_cache

from requiretest.core.errors import GrammarUnavailableError

from . import PARSE_INIT_ERRORS, TreeSitterLangSpec


@lru_cache(maxsize=8)
def _get_parser(grammar: str):
    """Get a tree-sitter parser and language for the given grammar."""
    from tree_sitter_language_pack import get_language, get_parser

    try:
        parser = get_parser(grammar)
        language = get_language(grammar)
    except PARSE_INIT_ERRORS as exc:
        raise GrammarUnavailableError(f"tree-sitter grammar {grammar!r} unavailable: {exc}") from exc
    return parser, language


def _make_query(language, source: str):
    """Create a tree-sitter Query."""
    from tree_sitter import Query
    return Query(language, source)


@lru_cache(maxsize=8)
def import_query_for(spec: TreeSitterLangSpec):
    """Compiled import query for a grammar spec."""
    _parser, language = _get_parser(spec.grammar)
    return _make_query(language, spec.import_query)


def _run_query(query, root_node) -> list[tuple[int, dict]]:
    """Run a query and return matches."""
    from tree_sitter import QueryCursor
    cursor = QueryCursor(query)
    return cursor.matches(root_node)


def _unwrap_node(node):
    """Unwrap a capture that may be a list of nodes."""
    if isinstance(node, list):
        return node[0] if node else None
    return node


def node_text(node) -> str:
    """Get text from a node as a str."""
    text = node.text
    if isinstance(text, bytes):
        return text.decode("utf-8", errors="replace")
    return str(text)


def node_position(node) -> tuple[int, int]:
    """1-based (line, column) of a node's start."""
    row, column = node.start_point[0], node.start_point[1]
    return row + 1, column + 1


__all__ = [
    "import_query_for",
    "node_position",
    "node_text",
]
