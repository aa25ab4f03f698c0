#!/usr/bin/env python3
"""
CLI entry point for the Term Reference Resolution Tool.

Usage:
    trrt -s ./scope -o ./out "docs/**/*.md"      # resolve term refs
    trrt -c trrt.yaml                            # options from a config file
    python -m trrt -s ./scope -o ./out -int alt  # alternate syntax
"""

import argparse
import logging
import sys
from typing import List, Optional

from .engine import ResolutionEngine
from .exceptions import TermResolverError
from .glossary import GlossaryIndex
from .matcher import TermPatternMatcher
from .renderer import TemplateRenderer
from .report import ResolutionReport
from .settings import load_settings

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="trrt",
        description="The CLI for the Term Reference Resolution Tool",
    )
    parser.add_argument("glob", nargs="?", default=None,
                        help="Glob pattern of the (input) files to process (default: *)")
    parser.add_argument("-c", "--config", help="Path of the tool's (YAML) configuration file")
    parser.add_argument("-o", "--output", help="(Root) directory for output files to be written")
    parser.add_argument("-s", "--scopedir", help="Path of the scope directory where the SAF is located")
    parser.add_argument("-v", "--vsntag",
                        help="Default version to use when no version is set in term ref (default: latest)")
    parser.add_argument("-int", "--interpreter",
                        help="Term ref syntax: default, alt, or a custom regex")
    parser.add_argument("-con", "--converter",
                        help="Output template: default, markdown, http, essif, or a custom template")
    parser.add_argument("--verbose", action="store_true", help="Log every term ref")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = load_settings(
            args.config,
            scopedir=args.scopedir,
            output=args.output,
            glob=args.glob,
            vsntag=args.vsntag,
            interpreter=args.interpreter,
            converter=args.converter,
            log_level="DEBUG" if args.verbose else None,
        )
        settings.require_paths()
    except TermResolverError as e:
        parser.print_help(sys.stderr)
        print(f"\nERROR: {e}", file=sys.stderr)
        return 1

    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)-7s %(name)s: %(message)s",
    )

    report = ResolutionReport()
    try:
        engine = ResolutionEngine(
            glossary=GlossaryIndex(settings.scopedir.resolve(), report=report),
            matcher=TermPatternMatcher(settings.interpreter),
            renderer=TemplateRenderer(settings.converter),
            output_dir=settings.output.resolve(),
            vsntag=settings.vsntag,
            glob_pattern=settings.glob,
            report=report,
        )
        engine.resolve()
    except TermResolverError as e:
        logger.error(f"Failed to resolve terms: {e}")
        print(report.summary())
        return 1

    print(report.summary())
    return 0


if __name__ == "__main__":
    sys.exit(main())
