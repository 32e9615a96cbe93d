#!/usr/bin/env python3
"""Command-line front end for ndate.

Examples::

    ndate 2024-10-25
    ndate "10-25 3:03"
    ndate -- -3
    ndate -l 2-30
    ndate -s "meet on 10-25 14:00, ship by 11/2"

"""
from __future__ import annotations

import argparse
import logging
import sys
from datetime import date, datetime
from importlib.metadata import PackageNotFoundError, version
from typing import Optional, Sequence

from ndate.config import ResolverConfig
from ndate.errors import DateResolutionError
from ndate.logging_setup import level_for_verbosity, setup_logging
from ndate.resolver import DatePhraseResolver

logger = logging.getLogger(__name__)

INPUT_HELP = """The string to parse. Supports multiple formats:

- Absolute date: "2024-10-25", "24-10-25", "2024/10/25 9:30"
- Relative date: "+1"/"1" (1 day later), "-3" (3 days ago), "-1 18:00"
- Partial date: "10-25" (month-day, automatically infer the year)"""

NO_NEXT_HELP = """For partial dates (MM-DD), disable automatically using the next year
Default behavior: if the date has passed in the current year, use the next year"""


def _version() -> str:
    try:
        return version("ndate")
    except PackageNotFoundError:
        return "unknown"


def _parse_today(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"expected YYYY-MM-DD, got {value!r}") from e


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ndate",
        description="Resolve short date phrases into full calendar dates",
        formatter_class=argparse.RawTextHelpFormatter,
    )
    parser.add_argument("date_input", help=INPUT_HELP)
    parser.add_argument("-l", "--lunar_date", action="store_true",
                        help="Treat the input as a lunar date for processing")
    parser.add_argument("-f", "--format", default=None,
                        help="Custom date format string (strftime tokens, default: %%Y-%%m-%%d %%H:%%M)")
    parser.add_argument("--no-next", action="store_true", help=NO_NEXT_HELP)
    parser.add_argument("-s", "--substitute", action="store_true",
                        help="Replace every date phrase found in the input text")
    parser.add_argument("--today", type=_parse_today, default=None,
                        help="Pretend today is this date (YYYY-MM-DD)")
    parser.add_argument("-v", "--verbose", action="count", default=0,
                        help="Log to stderr (-v info, -vv debug)")
    parser.add_argument("--log-file", default=None,
                        help="Also write full debug logs to this file (rotated)")
    parser.add_argument("--version", action="version", version=f"%(prog)s {_version()}")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    parsed = build_parser().parse_args(argv)

    setup_logging(
        level=level_for_verbosity(parsed.verbose),
        log_file=parsed.log_file,
        file_level=logging.DEBUG if parsed.log_file else None,
    )

    config = ResolverConfig.from_env(lunar=parsed.lunar_date, infer_next=not parsed.no_next)
    clock = None
    if parsed.today is not None:
        pinned = datetime.combine(parsed.today, datetime.min.time())
        clock = lambda: pinned  # noqa: E731
        logger.info("🕰️ clock pinned to %s", pinned.date())

    resolver = DatePhraseResolver(config, clock=clock)
    try:
        if parsed.substitute:
            output = resolver.substitute(parsed.date_input, parsed.format)
        else:
            output = resolver.resolve(parsed.date_input, parsed.format)
    except DateResolutionError as e:
        logger.debug("resolution failed", exc_info=True)
        print(f"error: {e}", file=sys.stderr)
        return 1

    print(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
