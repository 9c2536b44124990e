"""Shared utilities: paths, colors, output formatting, file discovery."""

from __future__ import annotations

import os
import sys
import tempfile
from pathlib import Path

PROJECT_ROOT = Path(os.environ.get("REQUIRETEST_ROOT", Path.cwd())).resolve()

# Directories that never hold project modules or their tests.
DEFAULT_EXCLUSIONS = frozenset({"node_modules", ".git", ".hg", ".svn"})


# ── Atomic file writes ─────────────────────────────────────


def safe_write_text(filepath: str | Path, content: str) -> None:
    """Atomically write text to a file using temp+rename."""
    p = Path(filepath)
    p.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp = tempfile.mkstemp(dir=p.parent, suffix=".tmp")
    try:
        with os.fdopen(fd, "w") as f:
            f.write(content)
        os.replace(tmp, str(p))
    except BaseException:
        try:
            os.unlink(tmp)
        except OSError:
            pass
        raise


# ── Terminal output ────────────────────────────────────────

COLORS = {
    "reset": "\033[0m",
    "bold": "\033[1m",
    "dim": "\033[2m",
    "red": "\033[31m",
    "green": "\033[32m",
    "yellow": "\033[33m",
    "cyan": "\033[36m",
}

NO_COLOR = os.environ.get("NO_COLOR") is not None


def colorize(text: str, color: str) -> str:
    if NO_COLOR or not sys.stdout.isatty():
        return str(text)
    return f"{COLORS.get(color, '')}{text}{COLORS['reset']}"


def log(msg: str):
    """Print a dim status message to stderr."""
    print(colorize(msg, "dim"), file=sys.stderr)


def print_table(headers: list[str], rows: list[list[str]], widths: list[int] | None = None):
    if not rows:
        return
    if not widths:
        widths = [max(len(str(h)), *(len(str(r[i])) for r in rows)) for i, h in enumerate(headers)]
    header_line = "  ".join(h.ljust(w) for h, w in zip(headers, widths))
    print(colorize(header_line, "bold"))
    print(colorize("─" * (sum(widths) + 2 * (len(widths) - 1)), "dim"))
    for row in rows:
        print("  ".join(str(v).ljust(w) for v, w in zip(row, widths)))


# ── Paths ──────────────────────────────────────────────────


def rel(path: str | Path, root: str | Path | None = None) -> str:
    """Return *path* relative to *root* (default: PROJECT_ROOT) with ``/`` separators."""
    base = Path(root).resolve() if root is not None else PROJECT_ROOT
    resolved = Path(path).resolve()
    try:
        return str(resolved.relative_to(base)).replace("\\", "/")
    except ValueError:
        # Path outside the root: normalize to consistent relative form
        return os.path.relpath(str(resolved), str(base)).replace("\\", "/")


def resolve_path(filepath: str | Path, root: str | Path | None = None) -> str:
    """Resolve a filepath to absolute, handling both relative and absolute."""
    p = Path(filepath)
    if p.is_absolute():
        return str(p.resolve())
    base = Path(root) if root is not None else PROJECT_ROOT
    return str((base / p).resolve())


def find_source_files(
    path: str | Path,
    extensions: list[str] | tuple[str, ...],
    exclusions: frozenset[str] | set[str] = DEFAULT_EXCLUSIONS,
) -> list[str]:
    """Find all files with given extensions under a path, pruning excluded dirs.

    Returns absolute paths, sorted.
    """
    root = Path(path).resolve()
    if root.is_file():
        return [str(root)] if root.name.endswith(tuple(extensions)) else []
    files: list[str] = []
    for dirpath, dirnames, filenames in os.walk(root):
        # Prune excluded directories in-place (prevents descending into them)
        dirnames[:] = sorted(d for d in dirnames if d not in exclusions)
        for fname in filenames:
            if fname.endswith(tuple(extensions)):
                files.append(os.path.join(dirpath, fname))
    return sorted(files)
