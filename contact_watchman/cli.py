#!/usr/bin/env python3
"""Command-line entrypoint for the contact CSV watcher.

Watches an input directory for new CSV files of contacts and writes JSON
translations to an output directory, with rejected rows going to an error
directory. Directories may also come from ``CONTACT_WATCHMAN_*`` environment
variables; command-line values take precedence.
"""

from __future__ import annotations

import argparse
import signal
import sys
import threading
from pathlib import Path
from typing import Optional

from loguru import logger
from pydantic import ValidationError

from contact_watchman.utils.config import Settings, get_settings
from contact_watchman.utils.logging import configure_logging
from contact_watchman.watchers.filesystem import ContactWatcher

HELP_INPUT_DIR = "Full directory path to watch for new input CSV files."
HELP_OUTPUT_DIR = "Full directory path where output JSON translations will be written."
HELP_ERROR_DIR = "Full directory path where output error files will be written."


def build_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser."""

    parser = argparse.ArgumentParser(
        prog="contact-watchman",
        description="Watch a directory for contact CSV files and convert them to JSON.",
    )
    parser.add_argument("-i", "--input-dir", type=Path, default=None, help=HELP_INPUT_DIR)
    parser.add_argument("-o", "--output-dir", type=Path, default=None, help=HELP_OUTPUT_DIR)
    parser.add_argument("-e", "--error-dir", type=Path, default=None, help=HELP_ERROR_DIR)
    parser.add_argument(
        "--extension",
        default=None,
        help="Input file extension to process (default: .csv).",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Number of files processed concurrently (default: 4).",
    )
    parser.add_argument(
        "--release-on-success",
        action="store_true",
        default=None,
        help="Allow a file name to be processed again after it produced output.",
    )
    parser.add_argument(
        "--delete-processed",
        action="store_true",
        default=None,
        help="Remove input files once their output has been written.",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Log level (default: INFO).",
    )
    return parser


def resolve_settings(args: argparse.Namespace, base: Optional[Settings] = None) -> Settings:
    """Overlay command-line values on top of environment settings."""

    base = base or get_settings()
    overrides = {
        "input_dir": args.input_dir,
        "output_dir": args.output_dir,
        "error_dir": args.error_dir,
        "input_extension": args.extension,
        "max_workers": args.workers,
        "release_on_success": args.release_on_success,
        "delete_processed_input": args.delete_processed,
        "log_level": args.log_level,
    }
    return base.model_copy(update={k: v for k, v in overrides.items() if v is not None})


def missing_directory(settings: Settings) -> Optional[str]:
    """Return an error message for the first directory not configured."""
    for role, path in settings.get_directories().items():
        if path is None:
            return f"An {role} directory must be supplied."
    return None


def absent_directory(settings: Settings) -> Optional[str]:
    """Return an error message for the first configured directory that doesn't exist."""
    for role, path in settings.get_directories().items():
        if path is not None and not path.is_dir():
            return f"{role.capitalize()} directory [ {path} ] doesn't exist."
    return None


def main(argv: Optional[list[str]] = None) -> int:
    """Entry point for the CLI."""

    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        settings = resolve_settings(args)
        configure_logging(settings.log_level)
    except (ValidationError, ValueError) as e:
        logger.error(f"Invalid configuration: {e}")
        return 1

    problem = missing_directory(settings)
    if problem is not None:
        logger.error(problem)
        print(file=sys.stderr)
        parser.print_usage(sys.stderr)
        return 1

    problem = absent_directory(settings)
    if problem is not None:
        logger.error(problem)
        return 1

    if settings.max_workers < 1:
        logger.error("At least one worker is required.")
        return 1

    watcher = ContactWatcher(settings)
    stop_event = threading.Event()

    def _signal_handler(signum, frame):  # noqa: D401
        logger.info(f"Received signal {signum}, shutting down.")
        stop_event.set()

    signal.signal(signal.SIGINT, _signal_handler)
    signal.signal(signal.SIGTERM, _signal_handler)

    try:
        watcher.run(stop_event)
    except OSError as e:
        logger.error(f"Error trying to watch input directory: {e}")
        return 1

    logger.info("Exiting...")
    return 0


if __name__ == "__main__":  # pragma: no cover - CLI bridge
    sys.exit(main())
