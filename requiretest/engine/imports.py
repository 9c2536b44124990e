"""Import extraction for test files.

Only relative specifiers are kept; a bare specifier names an installed
package and can never point at a project module under test.
"""

from __future__ import annotations

import logging

from requiretest.core.errors import GrammarUnavailableError
from requiretest.treesitter._cache import ParseTreeCache
from requiretest.treesitter._parsing import _run_query, _unwrap_node, import_query_for, node_text
from requiretest.treesitter._specs import spec_for_path

from .base import ImportFact
from .paths import is_relative_specifier

logger = logging.getLogger(__name__)


def is_dependency_import(specifier: str) -> bool:
    """True when the specifier refers to an installed dependency.

    Path aliases (``@/foo``) look like packages and are treated as such.
    """
    return not is_relative_specifier(specifier)


def _specifier_name(node) -> str:
    text = node_text(node)
    if node.type == "string":
        return text[1:-1]
    return text


def _import_clause_bindings(import_node) -> tuple[frozenset[str], str | None, str | None]:
    """Return (named imports, default binding, namespace binding)."""
    names: set[str] = set()
    default_name = None
    namespace_name = None
    for clause in import_node.named_children:
        if clause.type != "import_clause":
            continue
        for part in clause.named_children:
            if part.type == "identifier":
                default_name = node_text(part)
            elif part.type == "namespace_import":
                idents = [c for c in part.named_children if c.type == "identifier"]
                namespace_name = node_text(idents[0]) if idents else None
            elif part.type == "named_imports":
                for specifier in part.named_children:
                    if specifier.type != "import_specifier":
                        continue
                    # `import { a as b }` imports the module's `a`.
                    name = specifier.child_by_field_name("name")
                    if name is not None:
                        names.add(_specifier_name(name))
    return frozenset(names), default_name, namespace_name


def extract_import_facts(root_node, spec) -> list[ImportFact]:
    """One ImportFact per relative import statement under *root_node*."""
    facts: list[ImportFact] = []
    for _pattern_idx, captures in _run_query(import_query_for(spec), root_node):
        import_node = _unwrap_node(captures.get("import"))
        path_node = _unwrap_node(captures.get("path"))
        if import_node is None or path_node is None:
            continue
        specifier = node_text(path_node)
        if is_dependency_import(specifier):
            continue
        names, default_name, namespace_name = _import_clause_bindings(import_node)
        facts.append(ImportFact(specifier, names, default_name, namespace_name))
    return facts


def read_import_facts(filepath: str, cache: ParseTreeCache) -> list[ImportFact]:
    """Parse a test file and return its relative import facts.

    Raises OSError when the file cannot be read and GrammarUnavailableError
    when no grammar matches its extension.
    """
    spec = spec_for_path(filepath)
    if spec is None:
        raise GrammarUnavailableError(f"no JavaScript/TypeScript grammar for {filepath}")
    _source, tree = cache.get_or_parse(filepath, spec.grammar)
    try:
        if tree.root_node.has_error:
            logger.warning("Syntax errors in %s; using the import statements that parsed", filepath)
        facts = extract_import_facts(tree.root_node, spec)
    finally:
        # Facts are memoized by the caller; the tree is not needed again.
        cache.release(filepath, spec.grammar)
    logger.debug("%s: %d relative import(s)", filepath, len(facts))
    return facts


__all__ = ["extract_import_facts", "is_dependency_import", "read_import_facts"]
