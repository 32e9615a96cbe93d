# tests/test_date_utils.py
from datetime import datetime

import pytest

from ndate.errors import ArithmeticOverflow, InvalidCalendarDate, InvalidTimeComponent
from ndate.types.date_types import DateMatch, DeltaMatch
from ndate.utils.date_utils import (
    fixed_offset,
    resolve_date,
    resolve_delta,
    resolve_time,
    resolve_year,
    start_of_day,
)

TZ = fixed_offset(8)
TODAY = datetime(2025, 2, 1, tzinfo=TZ)


def _dt(*args) -> datetime:
    return datetime(*args, tzinfo=TZ)


# --------------------------- YEAR ---------------------------

@pytest.mark.parametrize(
    "year, expected",
    [
        ("2025", (2025, True)),
        ("1999", (1999, True)),
        ("24", (2024, True)),
        ("99", (2099, True)),
        ("00", (2000, True)),
        (None, (2025, False)),
    ],
)
def test_resolve_year(year, expected):
    assert resolve_year(year, TODAY) == expected


# --------------------------- TIME ---------------------------

@pytest.mark.parametrize("hour, minute, expected", [(None, None, (0, 0)), ("3", "03", (3, 3)), ("23", "59", (23, 59))])
def test_resolve_time(hour, minute, expected):
    assert resolve_time(hour, minute) == expected


@pytest.mark.parametrize("hour, minute", [("24", "00"), ("25", "00"), ("10", "60"), ("99", "99")])
def test_out_of_range_time_is_rejected_not_wrapped(hour, minute):
    with pytest.raises(InvalidTimeComponent):
        resolve_time(hour, minute)


# --------------------------- SOLAR ---------------------------

def test_explicit_year_is_identity():
    m = DateMatch(year="2025", month="10", day="25", hour="3", minute="03")
    assert resolve_date(m, TODAY) == _dt(2025, 10, 25, 3, 3)


def test_explicit_past_year_is_never_rolled():
    m = DateMatch(year="24", month="1", day="31")
    assert resolve_date(m, TODAY, infer_next=True) == _dt(2024, 1, 31)


def test_partial_date_before_today_rolls_to_next_year():
    m = DateMatch(month="1", day="31")
    assert resolve_date(m, TODAY, infer_next=True) == _dt(2026, 1, 31)
    assert resolve_date(m, TODAY, infer_next=False) == _dt(2025, 1, 31)


def test_partial_date_on_today_stays_in_current_year():
    m = DateMatch(month="2", day="1")
    assert resolve_date(m, TODAY, infer_next=True) == _dt(2025, 2, 1)


def test_partial_date_after_today_stays_in_current_year():
    m = DateMatch(month="10", day="25", hour="3", minute="03")
    assert resolve_date(m, TODAY, infer_next=True) == _dt(2025, 10, 25, 3, 3)


@pytest.mark.parametrize(
    "year, month, day",
    [("2025", "2", "29"), ("2025", "4", "31"), ("2025", "13", "1"), ("2025", "0", "10"), ("2025", "1", "0"), ("0000", "1", "1")],
)
def test_impossible_solar_dates(year, month, day):
    with pytest.raises(InvalidCalendarDate):
        resolve_date(DateMatch(year=year, month=month, day=day), TODAY)


def test_leap_day_in_leap_year():
    assert resolve_date(DateMatch(year="24", month="2", day="29"), TODAY) == _dt(2024, 2, 29)


def test_bad_time_wins_over_date_checks():
    with pytest.raises(InvalidTimeComponent):
        resolve_date(DateMatch(year="2025", month="10", day="25", hour="25", minute="00"), TODAY)


def test_results_carry_the_fixed_offset():
    result = resolve_date(DateMatch(month="10", day="25"), TODAY)
    assert result.utcoffset() == TZ.utcoffset(None)
    assert result.second == 0 and result.microsecond == 0


# --------------------------- DELTA ---------------------------

@pytest.mark.parametrize(
    "days, hour, minute, expected",
    [
        ("-1", None, None, (2025, 1, 31, 0, 0)),
        ("+1", None, None, (2025, 2, 2, 0, 0)),
        ("1", None, None, (2025, 2, 2, 0, 0)),
        ("0", "18", "30", (2025, 2, 1, 18, 30)),
        ("-365", "7", "05", (2024, 2, 2, 7, 5)),
        ("+28", None, None, (2025, 3, 1, 0, 0)),
    ],
)
def test_resolve_delta(days, hour, minute, expected):
    assert resolve_delta(DeltaMatch(days=days, hour=hour, minute=minute), TODAY) == _dt(*expected)


def test_delta_starts_from_midnight_even_if_today_has_a_time():
    afternoon = TODAY.replace(hour=15, minute=45, second=12)
    assert resolve_delta(DeltaMatch(days="1"), afternoon) == _dt(2025, 2, 2)


def test_delta_rejects_bad_time():
    with pytest.raises(InvalidTimeComponent):
        resolve_delta(DeltaMatch(days="1", hour="99", minute="99"), TODAY)


@pytest.mark.parametrize("days", ["99999999", "-99999999", "9999999999999"])
def test_delta_overflow(days):
    with pytest.raises(ArithmeticOverflow):
        resolve_delta(DeltaMatch(days=days), TODAY)


def test_start_of_day():
    assert start_of_day(_dt(2025, 2, 1, 23, 59, 59, 999)) == TODAY


def test_rolled_partial_leap_day_that_does_not_exist():
    # 2028-02-29 is past, and 2029 has no Feb 29
    m = DateMatch(month="2", day="29")
    with pytest.raises(InvalidCalendarDate):
        resolve_date(m, datetime(2028, 3, 1, tzinfo=TZ), infer_next=True)


def test_partial_leap_day_before_it_passes():
    m = DateMatch(month="2", day="29")
    assert resolve_date(m, datetime(2028, 2, 1, tzinfo=TZ)) == _dt(2028, 2, 29)


def test_roll_forward_past_max_year():
    m = DateMatch(month="1", day="1")
    with pytest.raises(ArithmeticOverflow):
        resolve_date(m, datetime(9999, 12, 31, tzinfo=TZ), infer_next=True)


def test_digit_string_over_int_limit_is_an_overflow():
    with pytest.raises(ArithmeticOverflow):
        resolve_delta(DeltaMatch(days="9" * 5000), TODAY)
