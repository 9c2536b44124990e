"""Module path normalization for comparing import specifiers across directories.

Normalized paths are only ever compared, never used for I/O. Two spellings are
equal when they differ by a trailing directory-index segment (``./foo/index``
vs ``./foo/``) or by one trailing separator (``./foo`` vs ``./foo/``). No ``..``
collapsing, symlink resolution or case folding is done.
"""

from __future__ import annotations

import os

DEFAULT_EXTENSIONS: tuple[str, ...] = (
    ".ts", ".tsx", ".mts", ".cts", ".js", ".jsx", ".mjs", ".cjs",
)
DEFAULT_INDEX_NAME = "index"


def to_posix(path: str) -> str:
    return path.replace("\\", "/")


def is_relative_specifier(specifier: str) -> bool:
    """True for ``.``, ``..``, ``./x`` and ``../x``; bare package names are not."""
    spec = to_posix(specifier)
    return spec in (".", "..") or spec.startswith(("./", "../"))


def _strip_extension(basename: str, extensions) -> str:
    for ext in sorted(extensions, key=len, reverse=True):
        if basename.endswith(ext) and len(basename) > len(ext):
            return basename[: -len(ext)]
    return basename


def to_module_path(
    relative_path: str,
    *,
    extensions=DEFAULT_EXTENSIONS,
    index_name: str = DEFAULT_INDEX_NAME,
) -> str:
    """Spell a file path (relative to a test file's directory) as an import specifier.

    ``foo/bar/index.ts`` -> ``./foo/bar/``, ``foo/bar.ts`` -> ``./foo/bar``,
    ``../index.ts`` -> ``../``.
    """
    path = to_posix(relative_path)
    directory, _, basename = path.rpartition("/")
    prefix = f"{directory}/" if directory else ""
    stem = _strip_extension(basename, extensions)
    module_path = prefix if stem == index_name else prefix + stem
    if not is_relative_specifier(module_path):
        module_path = f"./{module_path}"
    return module_path


def _strip_index_segment(specifier: str, index_name: str) -> str:
    if specifier.endswith(f"/{index_name}"):
        return specifier[: -len(index_name)]
    return specifier


def paths_equal(a: str, b: str, *, index_name: str = DEFAULT_INDEX_NAME) -> bool:
    """Compare two specifiers modulo index segment and one trailing separator."""
    a = _strip_index_segment(to_posix(a), index_name)
    b = _strip_index_segment(to_posix(b), index_name)
    return a == b or a == f"{b}/" or f"{a}/" == b


def relative_module_path(test_file: str, module_file: str) -> str:
    """Path from the test file's directory to the module, with ``/`` separators."""
    return to_posix(os.path.relpath(module_file, os.path.dirname(test_file)))


__all__ = [
    "DEFAULT_EXTENSIONS",
    "DEFAULT_INDEX_NAME",
    "is_relative_specifier",
    "paths_equal",
    "relative_module_path",
    "to_module_path",
    "to_posix",
]
