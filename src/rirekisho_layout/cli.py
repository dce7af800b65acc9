#!/usr/bin/env python
"""Command line entry point: solve the rirekisho layout for a résumé data file.

Usage:
    rirekisho-layout --input resume.yaml --paper-size a4
    rirekisho-layout -i resume.json -p b5 --hide-motivation --config rirekisho.yaml
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

from rirekisho_layout.config import load_config
from rirekisho_layout.dimensions import PaperSize
from rirekisho_layout.errors import ConfigError, LayoutOverflowError, ResumeDataError
from rirekisho_layout.loaders import load_resume_sections
from rirekisho_layout.logger import get_logger, init_logger
from rirekisho_layout.paths import LOG_DIR
from rirekisho_layout.pipeline import prepare_layout

logger = get_logger("cli")

EXIT_OK = 0
EXIT_OVERFLOW = 1
EXIT_INPUT_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rirekisho-layout",
        description="Calculate the two-page rirekisho layout for a résumé and print it as JSON.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # A4 layout with the default settings
  rirekisho-layout --input resume.yaml --paper-size a4

  # More room for history and licenses
  rirekisho-layout -i resume.yaml -p b5 --hide-motivation
        """
    )
    parser.add_argument(
        "-i", "--input",
        required=True,
        type=str,
        help="Résumé data file (.yaml, .yml or .json)",
    )
    parser.add_argument(
        "-p", "--paper-size",
        choices=[size.value for size in PaperSize],
        type=str.lower,
        default=None,
        help="Paper size (default: a4, or the config file value)",
    )
    parser.add_argument(
        "--hide-motivation",
        action="store_true",
        default=None,
        help="Hide the motivation box (leaves more room for history/license rows)",
    )
    parser.add_argument(
        "--order",
        choices=["asc", "desc"],
        default=None,
        help="Chronological order of history rows (default: asc)",
    )
    parser.add_argument(
        "-c", "--config",
        type=str,
        default=None,
        help="Configuration file (YAML)",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        type=str.upper,
        default=None,
        help="Logging level (default: INFO, or LOG_LEVEL)",
    )
    parser.add_argument(
        "--no-log-file",
        action="store_true",
        help="Log to the console only",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Run the layout CLI and return the process exit code."""
    args = build_parser().parse_args(argv)

    try:
        config = load_config(Path(args.config) if args.config else None)
        config = config.merged(
            paper_size=args.paper_size,
            hide_motivation=args.hide_motivation,
            chronological_order=args.order,
            log_level=args.log_level,
        )
    except ConfigError as e:
        print(str(e), file=sys.stderr)
        return EXIT_INPUT_ERROR

    init_logger(LOG_DIR, log_level=config.log_level, log_to_file=not args.no_log_file)

    try:
        sections = load_resume_sections(Path(args.input))
        prepared = prepare_layout(sections, config)
    except ResumeDataError as e:
        logger.error(str(e))
        return EXIT_INPUT_ERROR
    except LayoutOverflowError as e:
        print(str(e), file=sys.stderr)
        return EXIT_OVERFLOW

    print(json.dumps(prepared.model_dump(mode="json"), indent=2, ensure_ascii=False))
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
