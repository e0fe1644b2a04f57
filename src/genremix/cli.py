"""
CLI entry point for gen-remix.

Usage:
    gen-remix                                  Use ./gen-remix.config.json
    gen-remix --config remix.yaml              Use another config file
    gen-remix --packages pkg-a pkg-b           No config file, no overrides
    gen-remix --output app/remix.ts            Choose the output path
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from genremix import __version__
from genremix.aggregator import GeneratedOutput, aggregate, parse_overrides
from genremix.config import (
    ConfigError,
    RemixConfig,
    config_from_packages,
    default_settings,
    load_config,
)
from genremix.exporter import render, write_output
from genremix.packages import load_packages

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    settings = default_settings()
    parser = argparse.ArgumentParser(
        prog="gen-remix",
        description="Generate one module re-exporting selected packages",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    gen-remix
    gen-remix --config gen-remix.config.json --output ./app/remix.ts
    gen-remix --packages @remix-run/react @remix-run/node
"""
    )
    parser.add_argument('--version', action='version', version=f'gen-remix {__version__}')
    parser.add_argument('--config', default=settings["config_path"],
                        help=f'Config path (default: {settings["config_path"]})')
    parser.add_argument('--packages', nargs='+', default=[], metavar='PACKAGE',
                        help='Packages to export (used when the config file does not exist)')
    parser.add_argument('--output', default=settings["output_path"],
                        help=f'Output path (default: {settings["output_path"]})')
    parser.add_argument('--node-modules', default=settings["node_modules"],
                        help=f'Package install directory (default: {settings["node_modules"]})')

    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument('-v', '--verbose', action='store_true', help='Debug output')
    verbosity.add_argument('-q', '--quiet', action='store_true', help='Warnings and errors only')
    return parser


def setup_logging(verbose: bool = False, quiet: bool = False) -> None:
    level = logging.INFO
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    logging.basicConfig(level=level, format='%(message)s')


def resolve_config(config_path: Path, packages: List[str]) -> Optional[RemixConfig]:
    """Config file if it exists, else the package list, else None."""
    if config_path.exists():
        return load_config(config_path)
    if packages:
        return config_from_packages(packages)
    return None


def generate(config: RemixConfig, output_path: Path, node_modules: Path) -> GeneratedOutput:
    """
    Scan, aggregate, render and write.

    Nothing is written unless every step before the write succeeds.
    """
    overrides = parse_overrides(config.overrides) if config.has_overrides else None
    logger.info("🚀 Generating remix exports...")

    packages = load_packages(config.exports, node_modules)
    output = aggregate(packages, overrides)
    write_output(output_path, render(output))

    logger.info("🏁 Done!")
    return output


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.verbose, args.quiet)

    try:
        config = resolve_config(Path(args.config), args.packages)
        if config is None:
            parser.print_help()
            return 0
        generate(config, Path(args.output), Path(args.node_modules))
    except ConfigError as e:
        logger.error(f"Error: {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
