"""Tree-sitter integration for JavaScript/TypeScript parsing.

Install with: pip install tree-sitter-language-pack
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

logger = logging.getLogger(__name__)

_AVAILABLE = False
try:
    import tree_sitter_language_pack  # noqa: F401

    _AVAILABLE = True
except ImportError:
    logger.debug("tree-sitter-language-pack not installed; parsing disabled")


def is_available() -> bool:
    """Return True if tree-sitter-language-pack is installed."""
    return _AVAILABLE


@dataclass(frozen=True)
class TreeSitterLangSpec:
    """Per-grammar tree-sitter configuration.

    Fields:
        grammar: tree-sitter grammar name ("typescript", "tsx", "javascript")
        extensions: file extensions parsed with this grammar
        import_query: S-expression query capturing @import and @path
    """

    grammar: str
    extensions: tuple[str, ...]
    import_query: str


# Common exception tuple for tree-sitter parser/query initialisation failures.
PARSE_INIT_ERRORS: tuple[type[Exception], ...] = (
    ImportError, OSError, ValueError, RuntimeError, LookupError
)

__all__ = [
    "PARSE_INIT_ERRORS",
    "TreeSitterLangSpec",
    "is_available",
]
