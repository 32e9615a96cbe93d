import logging
from datetime import date
from typing import Optional

from zhdate import ZhDate

from ndate.errors import InvalidLunarDate
from ndate.types.date_types import LunarCoordinate

logger = logging.getLogger(__name__)

# Range covered by zhdate's year tables
LUNAR_MIN_YEAR = 1900
LUNAR_MAX_YEAR = 2100


def in_lunar_range(lunar_year: int) -> bool:
    return LUNAR_MIN_YEAR <= lunar_year <= LUNAR_MAX_YEAR


def leap_month_of(lunar_year: int) -> Optional[int]:
    """Leap month number of `lunar_year`, or None if it has none."""
    if not in_lunar_range(lunar_year):
        return None
    for month in range(1, 13):
        # validate() with leap=True only passes for the year's leap month
        if ZhDate.validate(lunar_year, month, 1, True):
            return month
    return None


def lunar_coordinate_for(lunar_year: int, lunar_month: int, lunar_day: int) -> LunarCoordinate:
    """
    Build the coordinate for a plain month number.

    When the year's leap month carries the same number, the leap occurrence
    wins; there is no way to ask for the regular month in that case.
    """
    leap = leap_month_of(lunar_year)
    is_leap = leap is not None and leap == lunar_month
    return LunarCoordinate(year=lunar_year, month=lunar_month, is_leap=is_leap, day=lunar_day)


def solar_date_for(lunar_year: int, lunar_month: int, is_leap: bool, lunar_day: int) -> date:
    """Gregorian date of a lunisolar (year, month, leap, day), or InvalidLunarDate."""
    coord = LunarCoordinate(lunar_year, lunar_month, is_leap, lunar_day)

    if not in_lunar_range(lunar_year):
        raise InvalidLunarDate(
            f"lunar year {lunar_year} outside supported range {LUNAR_MIN_YEAR}-{LUNAR_MAX_YEAR}"
        )
    if not 1 <= lunar_month <= 12:
        raise InvalidLunarDate(f"lunar month {lunar_month} out of range 1-12")
    if not 1 <= lunar_day <= 30:
        raise InvalidLunarDate(f"lunar day {lunar_day} out of range 1-30")
    if not ZhDate.validate(lunar_year, lunar_month, lunar_day, is_leap):
        raise InvalidLunarDate(f"{coord} does not exist")

    try:
        solar = ZhDate(lunar_year, lunar_month, lunar_day, leap_month=is_leap).to_datetime().date()
    except (TypeError, IndexError, ValueError) as e:
        raise InvalidLunarDate(f"{coord} rejected by converter: {e}") from e

    logger.debug("🌙 solar_date_for: %s → %s", coord, solar.isoformat())
    return solar
