"""
Scaling Projects - CLI.

Loads project descriptors, assembles them against the chain and token
lists and prints the canonical projects as JSON.

USAGE
    python -m scaling_projects projects.json
    python -m scaling_projects projects.json --collect-errors --indent 2
    python -m scaling_projects projects.json --chains chains.json --tokens tokens.json
"""

import argparse
import json
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import List, Optional

from .assembler import assemble_projects
from .config import NormalizerConfig, get_config
from .exceptions import ProjectConfigError
from .loader import load_context, load_projects


logger = logging.getLogger(__name__)


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="scaling-projects",
        description="Normalize scaling project descriptors into canonical projects",
    )

    parser.add_argument(
        "projects",
        type=Path,
        help="JSON file with a top-level 'projects' list",
    )
    parser.add_argument(
        "--chains",
        type=Path,
        default=None,
        metavar="PATH",
        help="Chain list JSON (default: SCALING_PROJECTS_CHAINS_PATH or bundled list)",
    )
    parser.add_argument(
        "--tokens",
        type=Path,
        default=None,
        metavar="PATH",
        help="Token list JSON (default: SCALING_PROJECTS_TOKENS_PATH or bundled list)",
    )
    parser.add_argument(
        "--collect-errors",
        action="store_true",
        help="Skip failing projects and report them instead of aborting",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: SCALING_PROJECTS_LOG_LEVEL or INFO)",
    )
    parser.add_argument(
        "--indent",
        type=int,
        default=None,
        help="Indent the JSON output",
    )

    return parser


def build_config(args: argparse.Namespace) -> NormalizerConfig:
    """Overlay CLI arguments on the environment configuration."""
    config = get_config()
    overrides = {}
    if args.chains is not None:
        overrides["chains_path"] = args.chains
    if args.tokens is not None:
        overrides["tokens_path"] = args.tokens
    if args.collect_errors:
        overrides["fail_fast"] = False
    if args.log_level is not None:
        overrides["log_level"] = args.log_level
    return replace(config, **overrides)


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main CLI entry point.

    Returns:
        0 when every project assembled, 1 otherwise
    """
    args = create_parser().parse_args(argv)
    config = build_config(args)

    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        stream=sys.stderr,
    )

    try:
        context = load_context(config)
        descriptors = load_projects(args.projects)
        result = assemble_projects(descriptors, context, fail_fast=config.fail_fast)
    except ProjectConfigError as e:
        logger.error(f"Fatal error: {e}")
        return 1

    output = {
        "projects": [p.to_dict() for p in result.projects],
        "errors": [e.to_dict() for e in result.errors],
    }
    json.dump(output, sys.stdout, indent=args.indent)
    sys.stdout.write("\n")

    return 0 if result.ok else 1


if __name__ == "__main__":
    sys.exit(main())
