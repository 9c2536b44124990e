"""Coverage matching: is each exported function imported by some test file?

A :class:`CoverageRun` is scoped to one lint invocation. It walks the project
for test files once, parses each test file's imports once, and reuses both
for every export it checks. Nothing is shared between runs.
"""

from __future__ import annotations

import logging
import os
from fnmatch import fnmatch
from pathlib import Path

from requiretest.config import config_path_for, load_config
from requiretest.core.errors import GrammarUnavailableError, TestFileReadError
from requiretest.core.fallbacks import warn_skipped
from requiretest.treesitter._cache import ParseTreeCache
from requiretest.treesitter._specs import spec_for_path
from requiretest.utils import rel, resolve_path

from .base import Diagnostic, ExportedFunction, ImportFact
from .discovery import find_test_files, is_test_file
from .exports import build_symbol_table, extract_export, extract_exported_functions, has_ignore_marker
from .imports import read_import_facts
from .paths import paths_equal, relative_module_path, to_module_path
from .report import make_missing_test_diagnostic, make_unchecked_diagnostic

logger = logging.getLogger(__name__)


def _program_of(node):
    while node.parent is not None:
        node = node.parent
    return node


class CoverageRun:
    """Per-run state: project root, config, test file set and import memo."""

    def __init__(self, root: str | Path | None = None, config: dict | None = None) -> None:
        self.root = Path(resolve_path(root or "."))
        self.config = config if config is not None else load_config(config_path_for(self.root))
        self._test_files: tuple[str, ...] | None = None
        self._import_facts: dict[str, tuple[ImportFact, ...]] = {}
        self._parse_cache = ParseTreeCache()

    # ── Test files and their imports ──────────────────────

    @property
    def test_files(self) -> tuple[str, ...]:
        """All test files under the root; computed on first use, then fixed."""
        if self._test_files is None:
            self._test_files = find_test_files(
                self.root,
                suffixes=self.config["test_suffixes"],
                exclusions=frozenset(self.config["exclude"]),
            )
        return self._test_files

    def import_facts(self, test_file: str) -> tuple[ImportFact, ...]:
        cached = self._import_facts.get(test_file)
        if cached is not None:
            return cached
        try:
            facts = tuple(read_import_facts(test_file, self._parse_cache))
        except (OSError, GrammarUnavailableError) as exc:
            if self.config["fail_on_unreadable"]:
                raise TestFileReadError(test_file, exc) from exc
            warn_skipped(logger, f"read test file {test_file}", exc)
            facts = ()
        self._import_facts[test_file] = facts
        return facts

    # ── Matching ──────────────────────────────────────────

    def target_module_path(self, test_file: str, module_file: str) -> str:
        return to_module_path(
            relative_module_path(test_file, module_file),
            extensions=self.config["extensions"],
            index_name=self.config["index_name"],
        )

    def is_covered(self, fact: ExportedFunction, module_file: str) -> bool:
        """True as soon as one test file imports ``fact.name`` from the module."""
        module_file = resolve_path(module_file, self.root)
        index_name = self.config["index_name"]
        for test_file in self.test_files:
            target = self.target_module_path(test_file, module_file)
            for imported in self.import_facts(test_file):
                if not paths_equal(imported.specifier, target, index_name=index_name):
                    continue
                if fact.name in imported.names:
                    logger.debug("%s covered by %s", fact.name, test_file)
                    return True
        return False

    # ── Host entry points ─────────────────────────────────

    def should_check(self, module_file: str) -> bool:
        if is_test_file(module_file, self.config["test_suffixes"]):
            return False
        rel_path = rel(module_file, self.root)
        return not any(fnmatch(rel_path, pattern) for pattern in self.config["ignore"])

    def _diagnose(self, facts, unchecked, module_file: str) -> list[Diagnostic]:
        file = rel(module_file, self.root)
        locale = self.config["locale"]
        diagnostics = [
            make_missing_test_diagnostic(fact, file, locale=locale)
            for fact in facts
            if not self.is_covered(fact, module_file)
        ]
        if self.config["report_unchecked_exports"]:
            diagnostics.extend(make_unchecked_diagnostic(u, file, locale=locale) for u in unchecked)
        return diagnostics

    def check_export(self, export_node, module_file: str, symbols=None) -> list[Diagnostic]:
        """Diagnostics for one ``export_statement`` node of *module_file*."""
        module_file = resolve_path(module_file, self.root)
        if has_ignore_marker(export_node, self.config["ignore_marker"]):
            return []
        if symbols is None:
            symbols = build_symbol_table(_program_of(export_node))
        facts, unchecked = extract_export(export_node, symbols)
        return self._diagnose(facts, unchecked, module_file)

    def check_module(self, module_file: str, source: bytes | None = None) -> list[Diagnostic]:
        """Diagnostics for every export statement of one module.

        *source* lets a host pass an in-memory buffer instead of the file on disk.
        """
        module_file = resolve_path(module_file, self.root)
        if not self.should_check(module_file):
            return []
        spec = spec_for_path(module_file)
        if spec is None:
            raise GrammarUnavailableError(f"no JavaScript/TypeScript grammar for {module_file}")
        if source is None:
            source = Path(module_file).read_bytes()
        program = self._parse_cache.parse_source(source, spec.grammar).root_node

        facts, unchecked = extract_exported_functions(program, ignore_marker=self.config["ignore_marker"])
        diagnostics = self._diagnose(facts, unchecked, module_file)
        logger.debug("%s: %d diagnostic(s)", module_file, len(diagnostics))
        return diagnostics


def check_module(
    module_file: str,
    *,
    root: str | Path | None = None,
    config: dict | None = None,
) -> list[Diagnostic]:
    """One-shot check of a single module with a fresh run."""
    return CoverageRun(root, config).check_module(os.fspath(module_file))


__all__ = ["CoverageRun", "check_module"]
