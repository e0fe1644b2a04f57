"""
genremix.aggregator - Export merging and override resolution

Combines scanned package exports into one collision-free set of
export statements. The first package to export a name wins; overrides
re-route specific names to another package.
"""

from genremix.aggregator.overrides import (
    OverrideSpec,
    TargetOverrides,
    OriginalOverrides,
    parse_overrides,
)
from genremix.aggregator.merge import (
    PackageExportSet,
    ExportSpecifier,
    ExportStatement,
    ImportStatement,
    Collision,
    GeneratedOutput,
    apply_overrides,
    aggregate,
)

__all__ = [
    # Overrides
    "OverrideSpec",
    "TargetOverrides",
    "OriginalOverrides",
    "parse_overrides",
    # Merge
    "PackageExportSet",
    "ExportSpecifier",
    "ExportStatement",
    "ImportStatement",
    "Collision",
    "GeneratedOutput",
    "apply_overrides",
    "aggregate",
]
