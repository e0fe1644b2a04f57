"""
gen-remix - Package re-export generator

Scans the TypeScript declarations of installed packages and writes one
module that re-exports them, resolving name collisions and overrides.
"""

__version__ = "0.1.0"
__author__ = "gen-remix contributors"

from genremix.scanner import scan, scan_file
from genremix.aggregator import aggregate, parse_overrides, PackageExportSet
