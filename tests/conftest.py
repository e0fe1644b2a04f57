"""
Pytest configuration and shared fixtures.
"""

import json
import sys
from pathlib import Path

import pytest

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from genremix.aggregator import PackageExportSet


# =============================================================================
# DECLARATION FIXTURES
# =============================================================================

PKG_A_DTS = """
import type { Helper } from "./helper";
export { Foo, Bar } from "./components";
export type {
    T1,
} from "./types";
"""

PKG_B_DTS = """
export {
    Bar,
    internalBaz as Baz
} from "./lib";
export declare const ignored: number;
"""


# =============================================================================
# NODE_MODULES FIXTURES
# =============================================================================

def make_package(node_modules: Path, name: str, dts: str, **package_json) -> Path:
    """
    Write a fake installed package.

    ``package_json`` keys go into package.json; when no typings/types/main
    key is given, ``typings`` defaults to ``index.d.ts``.
    """
    directory = node_modules / name
    directory.mkdir(parents=True, exist_ok=True)

    meta = {"name": name, "version": "1.0.0"}
    meta.update(package_json)
    if not any(key in meta for key in ("typings", "types", "main")):
        meta["typings"] = "index.d.ts"
    (directory / "package.json").write_text(json.dumps(meta), encoding="utf-8")

    if "typings" in meta or "types" in meta:
        typings = directory / (meta.get("typings") or meta["types"])
    else:
        typings = directory / Path(meta["main"]).parent / "index.d.ts"
    typings.parent.mkdir(parents=True, exist_ok=True)
    typings.write_text(dts, encoding="utf-8")
    return directory


@pytest.fixture
def node_modules(tmp_path):
    """Empty node_modules directory."""
    path = tmp_path / "node_modules"
    path.mkdir()
    return path


@pytest.fixture
def make_pkg(node_modules):
    """Factory fixture: make_pkg(name, dts, **package_json) inside node_modules."""
    def _make(name: str, dts: str, **package_json) -> Path:
        return make_package(node_modules, name, dts, **package_json)
    return _make


@pytest.fixture
def installed(node_modules):
    """node_modules with pkgA and pkgB installed."""
    make_package(node_modules, "pkgA", PKG_A_DTS, version="1.2.0")
    make_package(node_modules, "pkgB", PKG_B_DTS, version="2.0.1", typings="dist/index.d.ts")
    return node_modules


# =============================================================================
# EXPORT SET FIXTURES
# =============================================================================

@pytest.fixture
def pkg_a():
    return PackageExportSet(name="pkgA", version="1.2.0", values=["Foo", "Bar"], types=["T1"])


@pytest.fixture
def pkg_b():
    return PackageExportSet(name="pkgB", version="2.0.1", values=["Bar", "Baz"], types=[])
