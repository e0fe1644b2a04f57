"""
Export Aggregator

Merges the scanned export lists of several packages into one set of
export statements with no duplicate public names.

Resolution runs in three phases, in this order:

Phase A - Override pre-pass (only when overrides are configured)
    Collect the names imported from each target package, and mark the
    names each package must leave out of its own export statement.

Phase B - Per-package emission (caller order)
    Values, then types, for each package. A name already exported by an
    earlier package is dropped: first package wins. Values and types
    share one namespace.

Phase C - Combined override export
    One trailing statement re-exporting every overridden name under its
    original name.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Set, Tuple

from genremix.aggregator.overrides import OverrideSpec
from genremix.config import ConfigError

logger = logging.getLogger(__name__)


@dataclass
class PackageExportSet:
    """Exports scanned from one package."""
    name: str
    version: str = ""
    values: List[str] = field(default_factory=list)
    types: List[str] = field(default_factory=list)

    # Names left out of this package's own statements (set in Phase A)
    overrides: Set[str] = field(default_factory=set)


@dataclass
class ExportSpecifier:
    """One entry of an export clause. ``local`` is set for ``local as name``."""
    name: str
    local: Optional[str] = None

    def render(self) -> str:
        if self.local and self.local != self.name:
            return f"{self.local} as {self.name}"
        return self.name


@dataclass
class ExportStatement:
    """``export { ... } from "source"``; no source for the override statement."""
    source: Optional[str]
    specifiers: List[ExportSpecifier] = field(default_factory=list)
    type_only: bool = False

    @property
    def names(self) -> List[str]:
        """Public names exported by this statement."""
        return [spec.name for spec in self.specifiers]


@dataclass
class ImportStatement:
    """``import { ... } from "source"`` for override sources."""
    source: str
    names: List[str] = field(default_factory=list)


@dataclass
class Collision:
    """A name dropped from ``dropped_from`` because ``kept_from`` already exports it."""
    name: str
    kept_from: str
    dropped_from: str


@dataclass
class GeneratedOutput:
    """Everything needed to render the aggregation document."""
    packages: List[Tuple[str, str]] = field(default_factory=list)  # (name, version)
    imports: List[ImportStatement] = field(default_factory=list)
    statements: List[ExportStatement] = field(default_factory=list)
    override_statement: Optional[ExportStatement] = None
    collisions: List[Collision] = field(default_factory=list)

    @property
    def has_overrides(self) -> bool:
        return self.override_statement is not None

    def exported_names(self) -> List[str]:
        """Every public name, in output order."""
        names = [name for stmt in self.statements for name in stmt.names]
        if self.override_statement is not None:
            names.extend(self.override_statement.names)
        return names


# =============================================================================
# PHASE A - OVERRIDES
# =============================================================================

def _check_references(by_name: Dict[str, PackageExportSet], overrides: OverrideSpec) -> None:
    for name in overrides.package_names():
        if name not in by_name:
            raise ConfigError(
                f"Override references package {name!r}, which is not in the export list",
                package=name,
            )


def _resolve_pairs(overrides: OverrideSpec) -> List[Tuple[str, str, str]]:
    """
    Flatten overrides into (original_name, new_name, target) triples.

    When an original name is listed more than once the last entry wins.
    """
    resolved: List[Tuple[str, str, str]] = []
    for original_name, new_name, target in overrides.pairs():
        for earlier in [r for r in resolved if r[0] == original_name]:
            if earlier[1:] != (new_name, target):
                logger.warning(
                    f"Override for {original_name!r} from {target!r} "
                    f"replaces earlier override from {earlier[2]!r}"
                )
            resolved.remove(earlier)
        resolved.append((original_name, new_name, target))
    return resolved


def _import_names(pairs: Sequence[Tuple[str, str, str]], target: str) -> List[str]:
    """New names a target still supplies after resolution, first occurrence kept."""
    names: List[str] = []
    for _, new_name, source in pairs:
        if source == target and new_name not in names:
            names.append(new_name)
    return names


def apply_overrides(
    packages: Sequence[PackageExportSet],
    overrides: OverrideSpec,
) -> Tuple[List[ImportStatement], List[Tuple[str, str, str]]]:
    """
    Phase A: annotate each package's ``overrides`` set.

    Returns the import statements for the target packages and the
    ordered (original_name, new_name, target) triples for Phase C.

    Raises:
        ConfigError: if an override names a package that was not scanned
    """
    by_name = {package.name: package for package in packages}
    _check_references(by_name, overrides)

    pairs = _resolve_pairs(overrides)

    # Imports cover the surviving pairs only
    imports: List[ImportStatement] = []
    for target in overrides.targets:
        imports.append(ImportStatement(source=target.package, names=_import_names(pairs, target.package)))

        by_name[target.package].overrides.update(target.identity_names())
        for original in target.originals:
            by_name[original.package].overrides.update(original.original_names)

    return imports, pairs


# =============================================================================
# PHASE B - PER-PACKAGE EMISSION
# =============================================================================

def _select(
    package: PackageExportSet,
    names: Sequence[str],
    owners: Dict[str, str],
    reserved: Dict[str, str],
    collisions: List[Collision],
) -> List[str]:
    """Filter names for one statement and claim the survivors in ``owners``."""
    selected = []
    for name in names:
        if name in package.overrides:
            continue
        if name in owners:
            if owners[name] != package.name:
                collisions.append(Collision(name, owners[name], package.name))
                logger.warning(f"{package.name}: {name!r} already exported from {owners[name]}, skipping")
            continue
        if name in reserved:
            collisions.append(Collision(name, reserved[name], package.name))
            logger.warning(f"{package.name}: {name!r} is overridden from {reserved[name]}, skipping")
            continue
        owners[name] = package.name
        selected.append(name)
    return selected


def aggregate(
    packages: Sequence[PackageExportSet],
    overrides: Optional[OverrideSpec] = None,
) -> GeneratedOutput:
    """
    Merge package exports into one GeneratedOutput.

    Args:
        packages: Scanned packages, in priority order (first wins)
        overrides: Parsed override spec, or None

    Raises:
        ConfigError: if an override references an unknown package
    """
    unique: List[PackageExportSet] = []
    for package in packages:
        if any(p.name == package.name for p in unique):
            logger.warning(f"Package {package.name} listed more than once, keeping the first")
            continue
        unique.append(package)

    output = GeneratedOutput(packages=[(p.name, p.version) for p in unique])

    pairs: List[Tuple[str, str, str]] = []
    if overrides is not None and not overrides.is_empty:
        output.imports, pairs = apply_overrides(unique, overrides)

    # Public names claimed by the override statement -> target package
    reserved = {original: target for original, _, target in pairs}
    owners: Dict[str, str] = {}

    for package in unique:
        values = _select(package, package.values, owners, reserved, output.collisions)
        output.statements.append(ExportStatement(
            source=package.name,
            specifiers=[ExportSpecifier(name) for name in values],
        ))

        # No type statement at all when the package declares no types
        if package.types:
            types = _select(package, package.types, owners, reserved, output.collisions)
            output.statements.append(ExportStatement(
                source=package.name,
                specifiers=[ExportSpecifier(name) for name in types],
                type_only=True,
            ))

    if overrides is not None and not overrides.is_empty:
        output.override_statement = ExportStatement(
            source=None,
            specifiers=[ExportSpecifier(original, local=new) for original, new, _ in pairs],
        )

    logger.debug(
        f"Aggregated {len(output.exported_names())} names from {len(unique)} packages "
        f"({len(output.collisions)} collisions)"
    )
    return output
