"""CLI entry point: argparse, subcommand routing, output."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from .config import CONFIG_SCHEMA, config_path_for, load_config, save_config, set_config_value, unset_config_value
from .core.errors import RequireTestError
from .core.fallbacks import print_error
from .enums import Severity
from .rule import RULE_ID, RULE_META
from .utils import PROJECT_ROOT, colorize, find_source_files, log, print_table

USAGE_EXAMPLES = """
examples:
  requiretest check                      Check every module under the project root
  requiretest check src/foo src/bar.ts   Check selected directories or files
  requiretest check --json               Machine-readable diagnostics
  requiretest config show
  requiretest config set locale ja
  requiretest config set test_suffixes .spec.ts
  requiretest config unset test_suffixes
"""


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="requiretest",
        description="Report exported functions that no test file imports",
        epilog=USAGE_EXAMPLES,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--root", type=str, default=None,
                        help="Project root to scan for test files (default: cwd)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    p_check = sub.add_parser("check", help="Check exported functions for test imports")
    p_check.add_argument("paths", nargs="*", help="Files or directories (default: project root)")
    p_check.add_argument("--json", action="store_true")

    p_config = sub.add_parser("config", help="Show or change .requiretest/config.json")
    config_sub = p_config.add_subparsers(dest="config_action", required=True)
    config_sub.add_parser("show", help="Print the effective config")
    p_set = config_sub.add_parser("set", help="Set a key (list keys append)")
    p_set.add_argument("key", choices=sorted(CONFIG_SCHEMA))
    p_set.add_argument("value")
    p_unset = config_sub.add_parser("unset", help="Reset a key to its default")
    p_unset.add_argument("key", choices=sorted(CONFIG_SCHEMA))

    return parser


def _module_files(paths: list[str], root: Path, config: dict) -> list[str]:
    exclusions = frozenset(config["exclude"])
    files: list[str] = []
    for raw in paths or [str(root)]:
        target = Path(raw)
        if not target.is_absolute():
            target = Path.cwd() / target
        files.extend(find_source_files(target, config["extensions"], exclusions))
    return sorted(set(files))


def cmd_check(args: argparse.Namespace, root: Path) -> int:
    from .engine.coverage import CoverageRun
    from .engine.report import sort_diagnostics
    from .treesitter import is_available

    if not is_available():
        print_error("tree-sitter-language-pack is not installed (pip install tree-sitter-language-pack)")
        return 2

    config = load_config(config_path_for(root))
    run = CoverageRun(root, config)
    modules = [f for f in _module_files(args.paths, root, config) if run.should_check(f)]
    log(f"Checking {len(modules)} module(s) against {len(run.test_files)} test file(s)...")

    diagnostics = []
    for module_file in modules:
        diagnostics.extend(run.check_module(module_file))
    diagnostics = sort_diagnostics(diagnostics)

    if args.json:
        print(json.dumps({"rule": {"id": RULE_ID, **RULE_META},
                          "count": len(diagnostics),
                          "diagnostics": [d.as_dict() for d in diagnostics]},
                         indent=2, ensure_ascii=False))
    elif not diagnostics:
        print(colorize("Every exported function is imported by a test.", "green"))
    else:
        print(colorize(f"\nUntested exports: {len(diagnostics)}\n", "bold"))
        rows = [[f"{d.file}:{d.line}:{d.column}", str(d.severity), d.name, d.message]
                for d in diagnostics]
        print_table(["Location", "Severity", "Name", "Message"], rows)

    return 1 if any(d.severity == Severity.ERROR for d in diagnostics) else 0


def cmd_config(args: argparse.Namespace, root: Path) -> int:
    path = config_path_for(root)
    config = load_config(path)
    if args.config_action == "show":
        print(json.dumps(config, indent=2, ensure_ascii=False))
        return 0
    try:
        if args.config_action == "set":
            set_config_value(config, args.key, args.value)
        else:
            unset_config_value(config, args.key)
    except (KeyError, ValueError) as exc:
        print_error(str(exc))
        return 2
    save_config(config, path)
    print(colorize(f"Updated {args.key} in {path}", "green"))
    return 0


def main(argv: list[str] | None = None):
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    root = Path(args.root).resolve() if args.root else PROJECT_ROOT
    commands = {"check": cmd_check, "config": cmd_config}

    try:
        code = commands[args.command](args, root)
    except RequireTestError as exc:
        print_error(str(exc))
        code = 2
    except KeyboardInterrupt:
        print("\nInterrupted.")
        code = 1
    sys.exit(code)


if __name__ == "__main__":
    main()
