"""Tests for relative import extraction from test files."""

from __future__ import annotations

import pytest

from requiretest.core.errors import GrammarUnavailableError
from requiretest.engine.imports import extract_import_facts, is_dependency_import, read_import_facts
from requiretest.treesitter import is_available
from requiretest.treesitter._cache import ParseTreeCache
from requiretest.treesitter._specs import JS_SPEC, TYPESCRIPT_SPEC

pytestmark = pytest.mark.skipif(
    not is_available(), reason="tree-sitter-language-pack not installed"
)


def _facts(code: str, spec=TYPESCRIPT_SPEC):
    from requiretest.treesitter._parsing import _get_parser

    parser, _language = _get_parser(spec.grammar)
    tree = parser.parse(code.encode("utf-8"))
    return extract_import_facts(tree.root_node, spec)


def test_named_imports():
    (fact,) = _facts('import { bar, baz } from "../index";\n')
    assert fact.specifier == "../index"
    assert fact.names == frozenset({"bar", "baz"})


def test_package_imports_are_dropped():
    code = (
        'import { describe, it } from "vitest";\n'
        'import { bar } from "bar";\n'
        'import { helper } from "@/helpers";\n'
        "import { local } from './local';\n"
    )
    facts = _facts(code)
    assert [f.specifier for f in facts] == ["./local"]


def test_aliased_import_records_source_name():
    (fact,) = _facts('import { bar as renamed } from "./mod";\n')
    assert fact.names == frozenset({"bar"})


def test_default_and_namespace_imports_bind_no_names():
    code = (
        'import mod from "./mod";\n'
        'import * as ns from "./ns";\n'
        'import def, { named } from "./both";\n'
    )
    mod, ns, both = _facts(code)
    assert mod.names == frozenset() and mod.default_name == "mod"
    assert ns.names == frozenset() and ns.namespace_name == "ns"
    assert both.names == frozenset({"named"}) and both.default_name == "def"


def test_type_only_import_counts_as_named():
    (fact,) = _facts('import type { Shape } from "./shapes";\n')
    assert fact.names == frozenset({"Shape"})


def test_side_effect_import_has_no_names():
    (fact,) = _facts('import "./setup";\n')
    assert fact.specifier == "./setup"
    assert fact.names == frozenset()


def test_require_calls_are_not_imports():
    assert _facts("const { bar } = require('./bar');\n", spec=JS_SPEC) == []


def test_is_dependency_import():
    assert is_dependency_import("react")
    assert is_dependency_import("@scope/pkg")
    assert not is_dependency_import("./x")
    assert not is_dependency_import("..")


def test_read_import_facts_from_disk(tmp_path):
    f = tmp_path / "a.test.ts"
    f.write_text('import { a } from "./a";\n')
    cache = ParseTreeCache()
    facts = read_import_facts(str(f), cache)
    assert [(x.specifier, x.names) for x in facts] == [("./a", frozenset({"a"}))]
    # The tree is dropped once its imports are read.
    assert len(cache) == 0


def test_read_import_facts_tolerates_syntax_errors(tmp_path):
    f = tmp_path / "broken.test.ts"
    f.write_text('import { a } from "./a";\nfunction (( {\n')
    facts = read_import_facts(str(f), ParseTreeCache())
    assert facts[0].names == frozenset({"a"})


def test_read_import_facts_unknown_extension(tmp_path):
    f = tmp_path / "a.test.vue"
    f.write_text("<template></template>")
    with pytest.raises(GrammarUnavailableError):
        read_import_facts(str(f), ParseTreeCache())


def test_read_import_facts_missing_file(tmp_path):
    with pytest.raises(OSError):
        read_import_facts(str(tmp_path / "gone.test.ts"), ParseTreeCache())
