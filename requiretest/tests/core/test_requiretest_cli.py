"""Tests for the requiretest command-line adapter."""

from __future__ import annotations

import json

import pytest

from requiretest.cli import create_parser, main
from requiretest.config import config_path_for, load_config
from requiretest.treesitter import is_available


def _write(root, rel_path, text):
    p = root / rel_path
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(text)
    return p


def _exit_code(argv) -> int:
    with pytest.raises(SystemExit) as excinfo:
        main(argv)
    return excinfo.value.code


def test_parser_requires_command():
    with pytest.raises(SystemExit):
        create_parser().parse_args([])


# ── config ────────────────────────────────────────────────


def test_config_set_and_unset(tmp_path):
    assert _exit_code(["--root", str(tmp_path), "config", "set", "locale", "ja"]) == 0
    assert load_config(config_path_for(tmp_path))["locale"] == "ja"
    assert _exit_code(["--root", str(tmp_path), "config", "unset", "locale"]) == 0
    assert load_config(config_path_for(tmp_path))["locale"] == "en"


def test_config_set_bad_value(tmp_path, capsys):
    assert _exit_code(["--root", str(tmp_path), "config", "set", "fail_on_unreadable", "maybe"]) == 2
    assert "Expected true/false" in capsys.readouterr().err


def test_config_show(tmp_path, capsys):
    assert _exit_code(["--root", str(tmp_path), "config", "show"]) == 0
    assert json.loads(capsys.readouterr().out)["index_name"] == "index"


# ── check ─────────────────────────────────────────────────


@pytest.mark.skipif(not is_available(), reason="tree-sitter-language-pack not installed")
def test_check_json_reports_untested_exports(tmp_path, capsys):
    _write(tmp_path, "src/foo/index.ts", "export function bar() {}\nexport function qux() {}\n")
    _write(tmp_path, "src/foo/__tests__/index.test.ts", 'import { bar } from "../index";\n')
    code = _exit_code(["--root", str(tmp_path), "check", str(tmp_path / "src"), "--json"])
    payload = json.loads(capsys.readouterr().out)
    assert code == 1
    assert payload["count"] == 1
    (diag,) = payload["diagnostics"]
    assert diag["name"] == "qux"
    assert diag["severity"] == "error"
    assert diag["rule_id"] == "require-test"
    assert (diag["file"], diag["line"], diag["column"]) == ("src/foo/index.ts", 2, 1)


@pytest.mark.skipif(not is_available(), reason="tree-sitter-language-pack not installed")
def test_check_clean_project_exits_zero(tmp_path, capsys):
    _write(tmp_path, "m.ts", "export const f = () => 1;\n")
    _write(tmp_path, "m.test.ts", "import { f } from './m';\n")
    _write(tmp_path, "node_modules/dep/index.ts", "export function untested() {}\n")
    assert _exit_code(["--root", str(tmp_path), "check"]) == 0
    assert "Every exported function" in capsys.readouterr().out


def test_check_without_parser_exits_two(tmp_path, capsys, monkeypatch):
    import requiretest.treesitter as ts_mod

    monkeypatch.setattr(ts_mod, "_AVAILABLE", False)
    assert _exit_code(["--root", str(tmp_path), "check"]) == 2
    assert "tree-sitter-language-pack" in capsys.readouterr().err
