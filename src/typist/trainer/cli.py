"""CLI entry point for the typist typing test."""

from __future__ import annotations

import argparse
import asyncio
import logging
import os
import sys
from typing import Any

from typist import __version__
from typist.trainer.app import run_app
from typist.trainer.core.config import Difficulty, Quote, Timed, Words, mode_to_dict
from typist.trainer.core.session import Session
from typist.trainer.core.settings import SettingsManager, default_config_dir
from typist.trainer.core.themes import THEME_NAMES

logger = logging.getLogger(__name__)

LOG_FILE_NAME = "typist.log"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_LEVELS = ("debug", "info", "warning", "error", "off")


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not a number: {value!r}") from None
    if number <= 0:
        raise argparse.ArgumentTypeError(f"must be positive: {number}")
    return number


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="typist",
        description="Terminal typing-speed test",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--config", metavar="DIR", help="Settings directory (default: $TYPIST_DIR or ~/.typist)")

    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("-t", "--time", type=_positive_int, metavar="SECONDS", help="Timed test of this length")
    mode.add_argument("-w", "--words", type=_positive_int, metavar="COUNT", help="Word-count test of this length")
    mode.add_argument("-q", "--quote", action="store_true", help="Type a quote")

    parser.add_argument(
        "-d",
        "--difficulty",
        choices=[d.value for d in Difficulty],
        help="Word-list difficulty",
    )
    parser.add_argument("--theme", choices=THEME_NAMES, help="Color theme")
    parser.add_argument("--log-file", help="Log file (default: <settings dir>/typist.log)")
    parser.add_argument("--log-level", choices=LOG_LEVELS, default="info", help="Logging level (default: info)")
    return parser.parse_args(argv)


def overrides_from_args(args: argparse.Namespace) -> dict[str, Any]:
    """Settings overrides for this run only; they are never saved."""
    overrides: dict[str, Any] = {}
    if args.time is not None:
        overrides["testMode"] = mode_to_dict(Timed(args.time))
    elif args.words is not None:
        overrides["testMode"] = mode_to_dict(Words(args.words))
    elif args.quote:
        overrides["testMode"] = mode_to_dict(Quote())
    if args.difficulty is not None:
        overrides["difficulty"] = args.difficulty
    if args.theme is not None:
        overrides["theme"] = args.theme
    return overrides


def setup_logging(level: str, log_file: str) -> None:
    """Send log records to *log_file*; the terminal belongs to the UI."""
    if level == "off":
        logging.basicConfig(handlers=[logging.NullHandler()], force=True)
        return
    os.makedirs(os.path.dirname(os.path.abspath(log_file)), exist_ok=True)
    logging.basicConfig(
        filename=log_file,
        level=getattr(logging, level.upper()),
        format=LOG_FORMAT,
        force=True,
    )


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    config_dir = os.path.expanduser(args.config) if args.config else default_config_dir()
    setup_logging(args.log_level, args.log_file or os.path.join(config_dir, LOG_FILE_NAME))

    settings = SettingsManager.create(config_dir)
    settings.apply_overrides(overrides_from_args(args))
    session = Session(settings=settings)

    try:
        asyncio.run(run_app(session))
    except KeyboardInterrupt:
        logger.info("interrupted")
        return 130
    return 0


if __name__ == "__main__":
    sys.exit(main())
