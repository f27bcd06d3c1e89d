"""
els-finder: search text for equidistant letter sequences.

Lays a document's letters out on a square-ish grid and looks for phrases
spelled at a fixed letter spacing in any of eight directions, reporting the
hidden paragraph and original-text context around each finding.
"""

__version__ = "0.1.0"

from elsfinder.core import (
    EmptyInputError,
    ExitCode,
    MatchRecord,
    ScanResult,
    SearchParameters,
    scan_file,
    search,
)
from elsfinder.locator import SearchCancelled

__all__ = [
    "search",
    "scan_file",
    "MatchRecord",
    "ScanResult",
    "SearchParameters",
    "EmptyInputError",
    "SearchCancelled",
    "ExitCode",
    "__version__",
]
