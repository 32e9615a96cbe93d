import logging
import re
from typing import Iterator, Optional

from ndate.errors import FormatError
from ndate.types.date_types import DateMatch, DeltaMatch, RawMatch

logger = logging.getLogger(__name__)

# [YY- | YYYY-]M-D[ h:mm], separators '/' or '-'
DATE_TIME_PAT = re.compile(
    r"(?:(?P<year>\d{2}(?:\d{2})?)[/-])?"
    r"(?P<month>\d{1,2})[/-](?P<day>\d{1,2})"
    r"(?: (?P<hour>\d{1,2}):(?P<minute>\d{2}))?"
)

# [+|-]N[ h:mm], always matched against the whole trimmed input
DELTA_TIME_PAT = re.compile(
    r"(?P<days>[+-]?\d+)(?: (?P<hour>\d{1,2}):(?P<minute>\d{2}))?"
)


def _to_date_match(m: re.Match) -> DateMatch:
    return DateMatch(
        month=m.group("month"),
        day=m.group("day"),
        year=m.group("year"),
        hour=m.group("hour"),
        minute=m.group("minute"),
        span=m.span(),
    )


def match_delta(text: str) -> Optional[DeltaMatch]:
    m = DELTA_TIME_PAT.fullmatch(text.strip())
    if not m:
        return None
    return DeltaMatch(days=m.group("days"), hour=m.group("hour"), minute=m.group("minute"))


def match_date(text: str) -> Optional[DateMatch]:
    """First absolute/partial date phrase found anywhere in `text`."""
    m = DATE_TIME_PAT.search(text)
    return _to_date_match(m) if m else None


def iter_date_matches(text: str) -> Iterator[DateMatch]:
    """Every non-overlapping absolute/partial phrase, left to right."""
    for m in DATE_TIME_PAT.finditer(text):
        yield _to_date_match(m)


def match_phrase(text: str) -> RawMatch:
    """
    Pick the phrase family for a single-value input.

    A bare (signed) integer, optionally followed by a clock time, is a
    relative delta. Anything else must contain an absolute/partial date.
    """
    delta = match_delta(text)
    if delta is not None:
        logger.debug("🔎 match_phrase: %r → delta %s", text, delta)
        return delta

    date = match_date(text)
    if date is not None:
        logger.debug("🔎 match_phrase: %r → date %s", text, date)
        return date

    logger.debug("🔎 match_phrase: %r matched no grammar", text)
    raise FormatError("unrecognised date format", text)
