"""
Command-line interface for the root zone RDAP generator.

Usage:
    rootrdap [DIRECTORY]

DIRECTORY is where the cached whois text, the reference documents and the
finished ``.json`` files are written. It defaults to the current directory
and must already exist.

Exit codes: 0 on success (fetch failures are only warnings), 1 on a bad
directory, a write failure, an unknown whois key or status, or a TLD list
that can be neither fetched nor read from cache.
"""

import argparse
import asyncio
import sys
from pathlib import Path
from typing import Optional

from . import __version__
from .audit_logger import OUTPUT_FORMATS, AuditLogger
from .config import GeneratorConfig, load_config_from_env
from .enums import LogLevel
from .exceptions import RootRDAPError
from .generator import RootZoneGenerator


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="rootrdap",
        description=(
            "Generate RDAP responses for every TLD in the root zone from the "
            "IANA whois service."
        ),
    )
    parser.add_argument(
        "directory",
        nargs="?",
        help="Directory to write files to (default: current directory)",
    )
    parser.add_argument(
        "--workers", "-w",
        type=int,
        help="Number of concurrent whois queries",
    )
    parser.add_argument(
        "--log-format",
        choices=list(OUTPUT_FORMATS),
        help="Log output format (default: text)",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug output",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    return parser


def build_config(args: argparse.Namespace) -> GeneratorConfig:
    """Merge command-line arguments over the environment configuration."""
    config = load_config_from_env()
    config.output_dir = Path(args.directory) if args.directory else Path.cwd()
    if args.workers is not None:
        config.workers = args.workers
    if args.log_format:
        config.logging.output_format = args.log_format
    if args.verbose:
        config.logging.level = LogLevel.DEBUG.value
    return config


def main(argv: Optional[list[str]] = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    config = build_config(args)
    errors = config.validate()
    if errors:
        for error in errors:
            print(f"Error: {error}", file=sys.stderr)
        return 1

    logger = AuditLogger(
        output_format=config.logging.output_format,
        min_level=config.logging.log_level,
    )
    generator = RootZoneGenerator(config, logger=logger)

    try:
        generator.check_output_dir()
        asyncio.run(generator.run())
    except RootRDAPError as e:
        logger.log_error("cli", e.message, e, e.details)
        print(f"Error: {e.message}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
