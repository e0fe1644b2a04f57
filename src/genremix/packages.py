"""
Package Metadata Lookup

Reads ``node_modules/<name>/package.json`` and the declaration document
it points at. The typings path comes from ``typings``, then ``types``,
then falls back to ``index.d.ts`` next to the ``main`` entry point.
"""

import json
import logging
import posixpath
from pathlib import Path
from typing import Any, Dict, List, Sequence, Union

from genremix.aggregator.merge import PackageExportSet
from genremix.config import ConfigError, DEFAULT_NODE_MODULES
from genremix.scanner import scan_file

logger = logging.getLogger(__name__)


def package_dir(name: str, node_modules: Union[str, Path] = DEFAULT_NODE_MODULES) -> Path:
    """Install directory of a package (scoped names nest: ``@scope/pkg``)."""
    return Path(node_modules) / name


def read_package_json(directory: Path) -> Dict[str, Any]:
    """Parse ``package.json`` in a package directory."""
    path = directory / "package.json"
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except OSError as e:
        raise ConfigError(f"Cannot read package metadata {path}: {e}", path=path) from e
    except json.JSONDecodeError as e:
        raise ConfigError(f"Malformed package metadata {path}: {e}", path=path) from e

    if not isinstance(data, dict):
        raise ConfigError(f"Package metadata {path} must be an object", path=path)
    return data


def resolve_typings(package_json: Dict[str, Any]) -> str:
    """
    Path of the declaration document, relative to the package directory.

    Raises:
        ConfigError: if no typings path can be derived
    """
    name = package_json.get("name", "<unknown>")
    for key in ("typings", "types", "main"):
        value = package_json.get(key)
        if value is not None and not isinstance(value, str):
            raise ConfigError(
                f"Package {name!r}: '{key}' must be a string, got {type(value).__name__}",
                package=package_json.get("name"),
            )

    for key in ("typings", "types"):
        if package_json.get(key):
            return package_json[key].lstrip("/")

    main = package_json.get("main")
    if not main:
        raise ConfigError(
            f"Package {name!r} has no typings, types or main entry",
            package=package_json.get("name"),
        )
    return posixpath.join(posixpath.dirname(main), "index.d.ts").lstrip("/")


def load_package(name: str, node_modules: Union[str, Path] = DEFAULT_NODE_MODULES) -> PackageExportSet:
    """
    Read metadata and scan the declarations of one installed package.

    Raises:
        ConfigError: on missing metadata, no typings, or an unreadable document
    """
    logger.info(f"📦 {name}")
    directory = package_dir(name, node_modules)
    package_json = read_package_json(directory)

    typings = directory / resolve_typings(package_json)
    try:
        result = scan_file(typings)
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"Cannot read typings for {name}: {e}", path=typings, package=name) from e

    if result.is_empty:
        logger.debug(f"{name}: no export clauses found in {typings}")

    return PackageExportSet(
        name=name,
        version=str(package_json.get("version", "")),
        values=result.values,
        types=result.types,
    )


def load_packages(names: Sequence[str], node_modules: Union[str, Path] = DEFAULT_NODE_MODULES) -> List[PackageExportSet]:
    """Load packages sequentially, in order. Stops at the first failure."""
    return [load_package(name, node_modules) for name in names]
