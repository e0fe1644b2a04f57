"""
gen-remix Configuration

Loads the export list and override map from a JSON or YAML file.
Defaults can be overridden with environment variables, and explicit
command-line flags win over both.
"""

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml


DEFAULT_CONFIG_PATH = "gen-remix.config.json"
DEFAULT_OUTPUT_PATH = "./app/remix.ts"
DEFAULT_NODE_MODULES = "node_modules"

# Environment variable -> setting name
ENV_MAPPINGS = {
    "GEN_REMIX_CONFIG": "config_path",
    "GEN_REMIX_OUTPUT": "output_path",
    "GEN_REMIX_NODE_MODULES": "node_modules",
}

YAML_SUFFIXES = {".yaml", ".yml"}


class ConfigError(Exception):
    """Fatal configuration problem. Aborts the run before anything is written."""
    def __init__(self, message: str, path: Optional[Path] = None, package: Optional[str] = None):
        self.path = path
        self.package = package
        super().__init__(message)


@dataclass
class RemixConfig:
    """The export list and raw override map for one run."""
    exports: List[str] = field(default_factory=list)
    overrides: Dict[str, Any] = field(default_factory=dict)

    @property
    def has_overrides(self) -> bool:
        return bool(self.overrides)


def default_settings() -> Dict[str, str]:
    """Default paths, with environment overrides applied."""
    settings = {
        "config_path": DEFAULT_CONFIG_PATH,
        "output_path": DEFAULT_OUTPUT_PATH,
        "node_modules": DEFAULT_NODE_MODULES,
    }
    for env_var, key in ENV_MAPPINGS.items():
        if os.environ.get(env_var):
            settings[key] = os.environ[env_var]
    return settings


def _read_document(path: Path) -> Any:
    try:
        with open(path, "r", encoding="utf-8") as f:
            if path.suffix.lower() in YAML_SUFFIXES:
                return yaml.safe_load(f)
            return json.load(f)
    except OSError as e:
        raise ConfigError(f"Cannot read config {path}: {e}", path=path) from e
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise ConfigError(f"Malformed config {path}: {e}", path=path) from e


def load_config(path: Path) -> RemixConfig:
    """
    Load a configuration document.

    The file must hold a mapping with an ``exports`` list of package
    names and an optional ``overrides`` mapping.

    Raises:
        ConfigError: if the file is unreadable or has the wrong shape
    """
    path = Path(path)
    data = _read_document(path)

    if not isinstance(data, dict):
        raise ConfigError(f"Config {path} must be a mapping", path=path)

    exports = data.get("exports")
    if not isinstance(exports, list) or not all(isinstance(e, str) and e for e in exports):
        raise ConfigError(f"Config {path}: 'exports' must be a list of package names", path=path)

    overrides = data.get("overrides") or {}
    if not isinstance(overrides, dict):
        raise ConfigError(f"Config {path}: 'overrides' must be a mapping", path=path)

    return RemixConfig(exports=list(exports), overrides=overrides)


def config_from_packages(packages: List[str]) -> RemixConfig:
    """Build a config from a bare package list (no overrides)."""
    return RemixConfig(exports=list(packages), overrides={})
