"""
Override Specification

The configuration describes overrides as nested mappings:

    overrides = {
        "<target-package>": {
            "<original-package>": {
                "<original-export>": "<new-export>",
                ...
            },
        },
    }

Meaning: ``original-export`` of ``original-package`` is taken from
``target-package`` instead, where it is called ``new-export``, and is
re-exported under its original name.

Iteration order decides emission order, so the mappings are converted
into ordered lists once, at parse time.
"""

from dataclasses import dataclass, field
from typing import Any, List, Mapping, Optional, Tuple

from genremix.config import ConfigError


@dataclass
class OriginalOverrides:
    """Renames taken away from one original package."""
    package: str
    renames: List[Tuple[str, str]] = field(default_factory=list)  # (original_name, new_name)

    @property
    def original_names(self) -> List[str]:
        return [original for original, _ in self.renames]


@dataclass
class TargetOverrides:
    """All overrides sourced from one target package."""
    package: str
    originals: List[OriginalOverrides] = field(default_factory=list)

    def identity_names(self) -> List[str]:
        """New names that equal their original name (no rename needed)."""
        return [
            new
            for original in self.originals
            for original_name, new in original.renames
            if original_name == new
        ]


@dataclass
class OverrideSpec:
    """Parsed override configuration, in configuration order."""
    targets: List[TargetOverrides] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.targets

    def package_names(self) -> List[str]:
        """All target and original packages referenced, in order."""
        names: List[str] = []
        for target in self.targets:
            for name in [target.package] + [o.package for o in target.originals]:
                if name not in names:
                    names.append(name)
        return names

    def pairs(self) -> List[Tuple[str, str, str]]:
        """Flat (original_name, new_name, target) sequence: targets, then originals, then entries."""
        return [
            (original_name, new_name, target.package)
            for target in self.targets
            for original in target.originals
            for original_name, new_name in original.renames
        ]


def _check_name(value: Any, where: str) -> str:
    if not isinstance(value, str) or not value:
        raise ConfigError(f"Invalid override {where}: expected a non-empty string, got {value!r}")
    return value


def _check_mapping(value: Any, where: str) -> Mapping:
    if not isinstance(value, Mapping):
        raise ConfigError(f"Invalid override {where}: expected a mapping, got {type(value).__name__}")
    return value


def parse_overrides(raw: Optional[Mapping[str, Any]]) -> OverrideSpec:
    """
    Convert the raw ``overrides`` mapping into an OverrideSpec.

    Raises:
        ConfigError: if any level has the wrong shape
    """
    spec = OverrideSpec()
    if not raw:
        return spec

    for target_name, originals in _check_mapping(raw, "section").items():
        target = TargetOverrides(package=_check_name(target_name, "target package"))
        for original_name, renames in _check_mapping(originals, f"entry for {target_name!r}").items():
            original = OriginalOverrides(package=_check_name(original_name, "original package"))
            where = f"entry {target_name!r} -> {original_name!r}"
            for export_name, new_name in _check_mapping(renames, where).items():
                original.renames.append((
                    _check_name(export_name, f"export name in {where}"),
                    _check_name(new_name, f"new name in {where}"),
                ))
            target.originals.append(original)
        spec.targets.append(target)

    return spec
