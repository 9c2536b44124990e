"""Cross-file resolution engine: exports, test discovery, imports, coverage."""

from .base import Diagnostic, ExportedFunction, ImportFact, UncheckedExport
from .coverage import CoverageRun, check_module

__all__ = [
    "CoverageRun",
    "Diagnostic",
    "ExportedFunction",
    "ImportFact",
    "UncheckedExport",
    "check_module",
]
