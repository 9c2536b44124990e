"""Export extraction: which exported bindings of a module are functions.

Three shapes are recognized on top-level ``export_statement`` nodes:

- ``export function f() {}`` (and generator functions)
- ``export const f = () => {}`` with exactly one declarator bound to an identifier
- ``export { a, b as c }`` where the local name resolves to a function or an
  arrow-function binding in the module's top-level symbol table

Default exports and destructuring targets are not checked; they are returned
separately as :class:`UncheckedExport` so callers can surface them.
"""

from __future__ import annotations

from requiretest.enums import BindingKind, DeclarationKind
from requiretest.treesitter._parsing import node_position, node_text

from .base import ExportedFunction, UncheckedExport

_FUNCTION_DECLARATIONS = frozenset({"function_declaration", "generator_function_declaration"})
_VARIABLE_DECLARATIONS = frozenset({"lexical_declaration", "variable_declaration"})
_DESTRUCTURING_PATTERNS = frozenset({"object_pattern", "array_pattern"})


def _unwrap_parens(node):
    while node is not None and node.type == "parenthesized_expression":
        inner = [c for c in node.named_children if c.type != "comment"]
        node = inner[0] if inner else None
    return node


def _declarators(declaration) -> list:
    return [c for c in declaration.named_children if c.type == "variable_declarator"]


def _declarator_kind(declarator) -> BindingKind:
    value = _unwrap_parens(declarator.child_by_field_name("value"))
    if value is not None and value.type == "arrow_function":
        return BindingKind.ARROW_FUNCTION
    return BindingKind.VARIABLE


def _export_name(node) -> str:
    """Identifier text, or the unquoted content of a string export name."""
    text = node_text(node)
    if node.type == "string":
        return text[1:-1]
    return text


def _collect_bindings(declaration, symbols: dict[str, BindingKind]) -> None:
    if declaration.type in _FUNCTION_DECLARATIONS:
        name = declaration.child_by_field_name("name")
        if name is not None:
            symbols[node_text(name)] = BindingKind.FUNCTION
    elif declaration.type in _VARIABLE_DECLARATIONS:
        for declarator in _declarators(declaration):
            name = declarator.child_by_field_name("name")
            if name is not None and name.type == "identifier":
                symbols[node_text(name)] = _declarator_kind(declarator)


def build_symbol_table(program) -> dict[str, BindingKind]:
    """Map every top-level binding name to what it is bound to.

    Declarations nested directly in ``export`` statements count as top-level.
    Destructured bindings are left out; a re-export of one never resolves to
    a function anyway.
    """
    symbols: dict[str, BindingKind] = {}
    for child in program.named_children:
        if child.type == "export_statement":
            declaration = child.child_by_field_name("declaration")
            if declaration is not None:
                _collect_bindings(declaration, symbols)
        else:
            _collect_bindings(child, symbols)
    return symbols


def is_default_export(export_node) -> bool:
    return any(child.type == "default" for child in export_node.children)


def has_ignore_marker(export_node, marker: str) -> bool:
    """True when a comment carrying *marker* sits on the line(s) right above.

    The comment must start on its own line; a trailing comment belongs to
    the statement it follows.
    """
    if not marker:
        return False
    previous = export_node.prev_named_sibling
    if previous is None or previous.type != "comment":
        return False
    if previous.end_point[0] < export_node.start_point[0] - 1:
        return False
    before = previous.prev_sibling
    if before is not None and before.end_point[0] >= previous.start_point[0]:
        return False
    return marker in node_text(previous)


def _from_declaration(declaration, line: int, column: int):
    facts: list[ExportedFunction] = []
    unchecked: list[UncheckedExport] = []

    if declaration.type in _FUNCTION_DECLARATIONS:
        name = declaration.child_by_field_name("name")
        if name is not None:
            facts.append(ExportedFunction(node_text(name), DeclarationKind.NAMED_FUNCTION, line, column))
        return facts, unchecked

    if declaration.type not in _VARIABLE_DECLARATIONS:
        return facts, unchecked

    declarators = _declarators(declaration)
    if len(declarators) == 1:
        target = declarators[0].child_by_field_name("name")
        if target is not None and target.type == "identifier":
            if _declarator_kind(declarators[0]) is BindingKind.ARROW_FUNCTION:
                facts.append(ExportedFunction(node_text(target), DeclarationKind.ARROW_CONST, line, column))
            return facts, unchecked

    for declarator in declarators:
        target = declarator.child_by_field_name("name")
        if target is not None and target.type in _DESTRUCTURING_PATTERNS:
            unchecked.append(UncheckedExport(node_text(target), "destructured export", line, column))
        elif len(declarators) > 1 and _declarator_kind(declarator) is BindingKind.ARROW_FUNCTION:
            unchecked.append(UncheckedExport(
                node_text(declarator.child_by_field_name("name")),
                "multi-declarator export", line, column,
            ))
    return facts, unchecked


def _from_export_clause(export_node, symbols: dict[str, BindingKind], line: int, column: int):
    facts: list[ExportedFunction] = []
    unchecked: list[UncheckedExport] = []
    # `export { a } from "./x"` binds nothing locally.
    if export_node.child_by_field_name("source") is not None:
        return facts, unchecked
    for clause in export_node.named_children:
        if clause.type != "export_clause":
            continue
        for specifier in clause.named_children:
            if specifier.type != "export_specifier":
                continue
            local = specifier.child_by_field_name("name")
            if local is None:
                continue
            alias = specifier.child_by_field_name("alias")
            exported = _export_name(alias if alias is not None else local)
            if exported == "default":
                unchecked.append(UncheckedExport(_export_name(local), "default export", line, column))
                continue
            kind = symbols.get(_export_name(local))
            if exported and kind in (BindingKind.FUNCTION, BindingKind.ARROW_FUNCTION):
                facts.append(ExportedFunction(exported, DeclarationKind.RE_EXPORTED, line, column))
    return facts, unchecked


def extract_export(
    export_node, symbols: dict[str, BindingKind]
) -> tuple[list[ExportedFunction], list[UncheckedExport]]:
    """Return (exported functions, unchecked exports) for one export statement."""
    line, column = node_position(export_node)
    declaration = export_node.child_by_field_name("declaration")

    if is_default_export(export_node):
        label = "default"
        target = declaration if declaration is not None else export_node.child_by_field_name("value")
        name = target.child_by_field_name("name") if target is not None else None
        if name is not None:
            label = node_text(name)
        return [], [UncheckedExport(label, "default export", line, column)]

    if declaration is not None:
        return _from_declaration(declaration, line, column)

    return _from_export_clause(export_node, symbols, line, column)


def extract_exported_functions(
    program, *, ignore_marker: str = ""
) -> tuple[list[ExportedFunction], list[UncheckedExport]]:
    """Collect exported functions (and unchecked exports) of a whole module."""
    symbols = build_symbol_table(program)
    facts: list[ExportedFunction] = []
    unchecked: list[UncheckedExport] = []
    for child in program.named_children:
        if child.type != "export_statement" or has_ignore_marker(child, ignore_marker):
            continue
        node_facts, node_unchecked = extract_export(child, symbols)
        facts.extend(node_facts)
        unchecked.extend(node_unchecked)
    return facts, unchecked


__all__ = [
    "build_symbol_table",
    "extract_export",
    "extract_exported_functions",
    "has_ignore_marker",
    "is_default_export",
]
