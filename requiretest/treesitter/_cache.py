"""Run-scoped tree-sitter parse tree cache."""

from __future__ import annotations

from pathlib import Path

from ._parsing import _get_parser


class ParseTreeCache:
    """Cache parsed tree-sitter trees during one analysis run.

    Key: (filepath, grammar_name) -> (source_bytes, parsed_tree)
    Stores source_bytes so callers can use them without re-reading.
    Read errors propagate; callers decide whether to skip or abort.
    """

    def __init__(self) -> None:
        self._trees: dict[tuple[str, str], tuple[bytes, object]] = {}

    def __len__(self) -> int:
        return len(self._trees)

    def clear(self) -> None:
        self._trees = {}

    def get_or_parse(self, filepath: str, grammar: str) -> tuple[bytes, object]:
        """Read file and parse, returning (source_bytes, tree)."""
        key = (filepath, grammar)
        if key in self._trees:
            return self._trees[key]

        source = Path(filepath).read_bytes()
        parser, _language = _get_parser(grammar)
        tree = parser.parse(source)
        self._trees[key] = (source, tree)
        return self._trees[key]

    def release(self, filepath: str, grammar: str) -> None:
        """Drop one cached tree; a later get_or_parse re-reads the file."""
        self._trees.pop((filepath, grammar), None)

    def parse_source(self, source: bytes, grammar: str):
        """Parse in-memory source without caching (host-provided buffers)."""
        parser, _language = _get_parser(grammar)
        return parser.parse(source)


__all__ = ["ParseTreeCache"]
