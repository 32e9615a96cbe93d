import logging
from datetime import MAXYEAR, date, datetime, timedelta, timezone
from typing import Optional, Tuple

from ndate.errors import (
    ArithmeticOverflow,
    FormatError,
    InvalidCalendarDate,
    InvalidLunarDate,
    InvalidTimeComponent,
    UnresolvedNextOccurrence,
)
from ndate.types.date_types import DateMatch, DeltaMatch
from ndate.utils.lunar_utils import in_lunar_range, lunar_coordinate_for, solar_date_for

logger = logging.getLogger(__name__)

'''
Resolution of matched date phrases into aware datetimes.

Every resolver receives `today`: the start of the current day at the fixed
local offset, read once per top-level call. Results carry that same tzinfo
and never have seconds or microseconds.

  - resolve_year:  4-digit year as-is, 2-digit year n -> 2000 + n,
                   missing year -> today's year (rolled later, see below)
  - resolve_date:  solar or lunar; when the year was missing and infer_next
                   is set, a result strictly before `today` moves to the
                   next year (lunar: next lunar year, re-converted)
  - resolve_delta: today 00:00 + N days, then hour/minute overwritten
'''

# Clock oracle

def fixed_offset(hours: int) -> timezone:
    return timezone(timedelta(hours=hours))


def now_at_offset(hours: int) -> datetime:
    return datetime.now(fixed_offset(hours))


def start_of_day(dt: datetime) -> datetime:
    return dt.replace(hour=0, minute=0, second=0, microsecond=0)

# Field parsing

def _parse_int(token: Optional[str], field: str, default: int = 0) -> int:
    if token is None:
        return default
    t = token.strip()
    if not t.lstrip("+-").isdigit():
        raise FormatError(f"{field} is not a number", token)
    try:
        return int(t)
    except ValueError as e:
        # digit strings past the interpreter's int conversion limit
        raise ArithmeticOverflow(f"{field} has too many digits ({len(t)})") from e


def resolve_time(hour: Optional[str], minute: Optional[str]) -> Tuple[int, int]:
    h = _parse_int(hour, "hour")
    m = _parse_int(minute, "minute")
    if not 0 <= h <= 23:
        raise InvalidTimeComponent(f"hour {h} out of range 0-23")
    if not 0 <= m <= 59:
        raise InvalidTimeComponent(f"minute {m} out of range 0-59")
    return h, m


def resolve_year(year: Optional[str], today: datetime) -> Tuple[int, bool]:
    """Return (year, explicit). A missing year starts at today's year."""
    if year is None:
        return today.year, False
    y = _parse_int(year, "year")
    if len(year) == 2:
        return 2000 + y, True
    if len(year) == 4:
        return y, True
    raise FormatError("year must have 2 or 4 digits", year)

# Solar

def _build_solar(year: int, month: int, day: int, hour: int, minute: int, tz) -> datetime:
    try:
        return datetime(year, month, day, hour, minute, tzinfo=tz)
    except ValueError as e:
        raise InvalidCalendarDate(f"{year:04d}-{month:02d}-{day:02d} is not a valid date: {e}") from e


def _next_year(year: int) -> int:
    if year >= MAXYEAR:
        raise ArithmeticOverflow(f"cannot move past year {MAXYEAR}")
    return year + 1


def resolve_solar(
    year: int, month: int, day: int, hour: int, minute: int,
    today: datetime, roll_forward: bool,
) -> datetime:
    result = _build_solar(year, month, day, hour, minute, today.tzinfo)
    if roll_forward and result < today:
        rolled = _next_year(year)
        logger.debug("📅 resolve_solar: %s is before %s → %s", result.date(), today.date(), rolled)
        result = _build_solar(rolled, month, day, hour, minute, today.tzinfo)
    return result

# Lunar

def _lunar_to_datetime(year: int, month: int, day: int, hour: int, minute: int, tz) -> datetime:
    coord = lunar_coordinate_for(year, month, day)
    solar: date = solar_date_for(coord.year, coord.month, coord.is_leap, coord.day)
    return datetime(solar.year, solar.month, solar.day, hour, minute, tzinfo=tz)


def resolve_lunar(
    year: int, month: int, day: int, hour: int, minute: int,
    today: datetime, roll_forward: bool, max_search: int = 50,
) -> datetime:
    """
    Convert a lunar date to solar, searching later lunar years while the
    result lies before `today`.

    Leap-month composition differs per year, so each candidate year is
    converted from scratch. A candidate year in which the day does not exist
    is skipped; only the first candidate is allowed to fail outright.
    """
    if not roll_forward:
        return _lunar_to_datetime(year, month, day, hour, minute, today.tzinfo)

    candidate = year
    for attempt in range(max_search):
        try:
            result = _lunar_to_datetime(candidate, month, day, hour, minute, today.tzinfo)
        except InvalidLunarDate as e:
            if attempt == 0:
                raise
            if not in_lunar_range(candidate):
                raise UnresolvedNextOccurrence(
                    f"no occurrence of lunar {month:02d}-{day:02d} on or after {today.date()} "
                    f"within the supported lunar years"
                ) from e
            logger.debug("🌙 resolve_lunar: year %s skipped (%s)", candidate, e)
            candidate += 1
            continue

        if result >= today:
            if candidate != year:
                logger.debug("🌙 resolve_lunar: rolled %s → %s (%s attempt(s))", year, candidate, attempt + 1)
            return result
        candidate += 1

    raise UnresolvedNextOccurrence(
        f"no occurrence of lunar {month:02d}-{day:02d} on or after {today.date()} "
        f"within {max_search} year(s)"
    )

# Entry points

def resolve_date(
    match: DateMatch,
    today: datetime,
    lunar: bool = False,
    infer_next: bool = True,
    max_lunar_search: int = 50,
) -> datetime:
    """Resolve an absolute/partial phrase. Only a missing year is ever rolled forward."""
    month = _parse_int(match.month, "month")
    day = _parse_int(match.day, "day")
    hour, minute = resolve_time(match.hour, match.minute)
    year, explicit = resolve_year(match.year, today)
    roll_forward = infer_next and not explicit

    logger.debug(
        "📅 resolve_date: year=%s%s month=%s day=%s %02d:%02d lunar=%s roll_forward=%s",
        year, "" if explicit else " (inferred)", month, day, hour, minute, lunar, roll_forward,
    )

    if lunar:
        return resolve_lunar(year, month, day, hour, minute, today, roll_forward, max_lunar_search)
    return resolve_solar(year, month, day, hour, minute, today, roll_forward)


def resolve_delta(match: DeltaMatch, today: datetime) -> datetime:
    days = _parse_int(match.days, "day delta")
    hour, minute = resolve_time(match.hour, match.minute)
    try:
        shifted = start_of_day(today) + timedelta(days=days)
    except OverflowError as e:
        raise ArithmeticOverflow(f"{days:+d} day(s) from {today.date()} is out of range") from e
    result = shifted.replace(hour=hour, minute=minute)
    logger.debug("➕ resolve_delta: %+d day(s) → %s", days, result.isoformat())
    return result
