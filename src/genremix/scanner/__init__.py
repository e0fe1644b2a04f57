"""
genremix.scanner - Declaration Scanner

Recovers exported value and type names from .d.ts declaration text.
"""

from genremix.scanner.declarations import (
    ScanResult,
    scan,
    scan_file,
    split_clauses,
    resolve_entry,
)

__all__ = [
    "ScanResult",
    "scan",
    "scan_file",
    "split_clauses",
    "resolve_entry",
]
