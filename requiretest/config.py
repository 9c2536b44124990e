"""Project-wide configuration management (.requiretest/config.json).

Keys cover test-file discovery, module path normalization, diagnostic
locale and the opt-in strictness switches.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path

from .core.fallbacks import log_best_effort_failure
from .utils import PROJECT_ROOT, safe_write_text

CONFIG_DIR_NAME = ".requiretest"
CONFIG_FILE = PROJECT_ROOT / CONFIG_DIR_NAME / "config.json"

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ConfigKey:
    type: type
    default: object
    description: str


CONFIG_SCHEMA: dict[str, ConfigKey] = {
    "test_suffixes": ConfigKey(list, [
        ".test.ts", ".test.tsx", ".test.mts", ".test.cts",
        ".test.js", ".test.jsx", ".test.mjs", ".test.cjs",
    ], "File name suffixes that mark a test file"),
    "exclude": ConfigKey(list, ["node_modules", ".git", ".hg", ".svn"],
        "Directory names never descended into (dependency and VCS dirs)"),
    "extensions": ConfigKey(list, [
        ".ts", ".tsx", ".mts", ".cts", ".js", ".jsx", ".mjs", ".cjs",
    ], "Source file extensions stripped when building module paths"),
    "index_name": ConfigKey(str, "index",
        "Directory-index module name folded into its directory path"),
    "ignore_marker": ConfigKey(str, "test-ignore",
        "Comment text that exempts the following export from the check"),
    "locale": ConfigKey(str, "en",
        "Diagnostic message locale (en, ja)"),
    "fail_on_unreadable": ConfigKey(bool, False,
        "Abort the pass when a test file cannot be read (default: skip with warning)"),
    "report_unchecked_exports": ConfigKey(bool, False,
        "Emit a warning for default and destructured exports the check cannot verify"),
    "ignore": ConfigKey(list, [],
        "Glob patterns of module files that are never checked"),
}


def default_config() -> dict:
    """Return a config dict with all keys set to their defaults."""
    return {k: (list(v.default) if isinstance(v.default, list) else v.default)
            for k, v in CONFIG_SCHEMA.items()}


def config_path_for(root: Path) -> Path:
    """Return the config file location for a project root."""
    return Path(root) / CONFIG_DIR_NAME / "config.json"


def load_config(path: Path | None = None) -> dict:
    """Load config from disk, filling missing keys with defaults.

    A missing or unreadable file yields the defaults.
    """
    p = path or CONFIG_FILE
    config: dict = {}
    if p.exists():
        try:
            loaded = json.loads(p.read_text())
        except (json.JSONDecodeError, UnicodeDecodeError, OSError) as exc:
            log_best_effort_failure(logger, f"read config file {p}", exc)
            loaded = {}
        if isinstance(loaded, dict):
            config = loaded

    for key, schema in CONFIG_SCHEMA.items():
        if key not in config:
            config[key] = (list(schema.default) if isinstance(schema.default, list)
                           else schema.default)

    return config


def save_config(config: dict, path: Path | None = None) -> None:
    """Save config to disk atomically."""
    p = path or CONFIG_FILE
    safe_write_text(p, json.dumps(config, indent=2, ensure_ascii=False) + "\n")


def set_config_value(config: dict, key: str, raw: str) -> None:
    """Parse and set a config value from a raw string.

    Handles special cases:
    - "true"/"false" for bools
    - list keys append the value (deduplicated)
    """
    if key not in CONFIG_SCHEMA:
        raise KeyError(f"Unknown config key: {key}")

    schema = CONFIG_SCHEMA[key]

    if schema.type is bool:
        if raw.lower() in ("true", "1", "yes"):
            config[key] = True
        elif raw.lower() in ("false", "0", "no"):
            config[key] = False
        else:
            raise ValueError(f"Expected true/false for {key}, got: {raw}")
    elif schema.type is list:
        config.setdefault(key, [])
        if raw not in config[key]:
            config[key].append(raw)
    else:
        config[key] = raw


def unset_config_value(config: dict, key: str) -> None:
    """Reset a config key to its default value."""
    if key not in CONFIG_SCHEMA:
        raise KeyError(f"Unknown config key: {key}")
    default = CONFIG_SCHEMA[key].default
    config[key] = list(default) if isinstance(default, list) else default
