#!/usr/bin/env python3
"""CLI interface for the review pipeline."""

import argparse
from pathlib import Path

from rich.markup import escape

from common.env import env
from common.logger import get_logger, setup_logging

from .adjudicator import OracleAdjudicator
from .clients import MissingCredentialError, OpenAIClient
from .config import ConfigError
from .ranker import OracleRanker
from .reporters import ReviewReporter
from .runner import run_review

logger = get_logger(__name__)


def cmd_review(args):
    """Review the pending changes of a repository against its quality snippets.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 when no file is rejected, 1 otherwise or on setup errors)
    """
    repo_root = args.repo.resolve()
    if not repo_root.is_dir():
        logger.error(f"{escape(str(args.repo))} is not a directory")
        return 1

    logger.info("Initializing QA Kit...")

    client = OpenAIClient.from_env(env)
    try:
        outcome = run_review(
            repo_root,
            OracleRanker(client),
            OracleAdjudicator(client),
            config_path=args.config,
            quality_dir=args.quality_dir,
        )
    except ConfigError as e:
        logger.error(f"Invalid configuration: {escape(str(e))}")
        return 1
    except MissingCredentialError as e:
        logger.error(escape(str(e)))
        return 1

    reporter = ReviewReporter()
    if args.format == "json":
        output = reporter.report_json(outcome)
        if args.output:
            args.output.write_text(output, encoding="utf-8")
            logger.info(f"Review results written to {escape(str(args.output))}")
        else:
            print(output)
        return outcome.exit_code

    exit_code = reporter.report_console(outcome)
    logger.info("\nQuality checks completed.")
    return exit_code


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="qa-kit",
        description="Review pending git changes against curated quality snippets",
    )
    parser.add_argument(
        "--repo",
        type=Path,
        default=Path("."),
        help="Repository to review (default: current directory)",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Configuration file (default: <repo>/qa.json)",
    )
    parser.add_argument(
        "--quality-dir",
        type=Path,
        default=None,
        help="Directory of reference snippets (default: <repo>/quality)",
    )
    parser.add_argument(
        "--format",
        choices=["console", "json"],
        default="console",
        help="Output format (default: console)",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Write JSON results to this file instead of stdout",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (default: LOG_LEVEL environment variable or INFO)",
    )
    parser.add_argument(
        "--log-file",
        default=None,
        help="Also write log records to this file",
    )
    parser.set_defaults(func=cmd_review)
    return parser


def main(argv=None):
    """Main entry point for the CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(level=args.log_level or env.log_level(), log_file=args.log_file)
    logger.debug(f"Detected args: {escape(repr(args))}")

    return args.func(args)


if __name__ == "__main__":
    exit(main())
