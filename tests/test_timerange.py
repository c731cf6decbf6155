from datetime import datetime, timedelta, timezone

import pytest

from fixkit.timerange import (
    TimeOfDay,
    Weekday,
    in_range,
    in_same_range,
    new_time_range_in_location,
    new_utc_time_range,
    new_utc_week_range,
    new_week_range_in_location,
    parse_time_of_day,
)

UTC = timezone.utc
MYZONE = timezone(timedelta(seconds=-60), "myzone")
PLUS_TWO = timezone(timedelta(hours=2))
MON, TUE, WED, THU = Weekday.MONDAY, Weekday.TUESDAY, Weekday.WEDNESDAY, Weekday.THURSDAY
SUN, SAT = Weekday.SUNDAY, Weekday.SATURDAY


def T(h, m=0, s=0):
    return TimeOfDay(h, m, s)


def at(y, mo, d, h=0, mi=0, s=0):
    return datetime(y, mo, d, h, mi, s, tzinfo=UTC)


def test_new_time_of_day():
    tod = TimeOfDay(12, 34, 4)
    assert (tod.hour, tod.minute, tod.second) == (12, 34, 4)
    assert tod.duration() == timedelta(seconds=45244)


def test_parse_time_of_day():
    assert parse_time_of_day("12:34:04") == TimeOfDay(12, 34, 4)


@pytest.mark.parametrize("text", ["0:0:0", "00:00", "0000:00"])
def test_parse_time_of_day_invalid(text):
    with pytest.raises(ValueError):
        parse_time_of_day(text)


def test_new_utc_time_range():
    r = new_utc_time_range(T(3), T(18), [])
    assert r.start_time == T(3)
    assert r.end_time == T(18)
    assert r.weekdays == ()
    assert r.start_day is None and r.end_day is None
    assert r.tz is UTC


def test_new_time_range_in_location():
    r = new_time_range_in_location(T(3), T(18), [], PLUS_TWO)
    assert (r.start_time, r.end_time, r.weekdays) == (T(3), T(18), ())
    assert r.start_day is None and r.end_day is None
    assert r.tz is PLUS_TWO


def test_new_time_range_missing_location():
    with pytest.raises(ValueError, match="missing location"):
        new_time_range_in_location(T(3), T(18), [], None)


def test_new_utc_week_range():
    r = new_utc_week_range(T(3), T(18), MON, WED)
    assert (r.start_time, r.end_time, r.weekdays) == (T(3), T(18), ())
    assert r.start_day is MON
    assert r.end_day is WED
    assert r.tz is UTC


def test_new_week_range_in_location():
    r = new_week_range_in_location(T(3), T(18), MON, WED, PLUS_TWO)
    assert (r.start_day, r.end_day, r.weekdays) == (MON, WED, ())
    assert r.tz is PLUS_TWO


def test_new_week_range_missing_location():
    with pytest.raises(ValueError, match="missing location"):
        new_week_range_in_location(T(3), T(18), MON, WED, None)


@pytest.mark.parametrize(
    "start, end, weekdays, tz, now, expected",
    [
        pytest.param(T(3), T(18), (), UTC, at(2016, 8, 10, 10), True, id="10AM"),
        pytest.param(T(3), T(18), (), UTC, at(2016, 8, 10, 18), True, id="6PM"),
        pytest.param(T(3), T(18), (), UTC, at(2016, 8, 10, 2), False, id="2AM"),
        pytest.param(T(3), T(18), (), UTC, at(2016, 8, 10, 19), False, id="7PM"),
        pytest.param(T(3), T(18), (), UTC, at(2016, 8, 10, 18, 1), False, id="6:01PM"),
        pytest.param(T(18), T(3), (), UTC, at(2016, 8, 10, 18), True, id="6PM-inv"),
        pytest.param(T(18), T(3), (), UTC, at(2016, 8, 10, 3), True, id="3AM-inv"),
        pytest.param(T(18), T(3), (), UTC, at(2016, 8, 10, 4), False, id="4AM-inv"),
        pytest.param(T(18), T(3), (), UTC, at(2016, 8, 10, 17), False, id="5PM-inv"),
        pytest.param(T(3), T(5), (), MYZONE, at(2016, 8, 10, 3), False, id="3AM-zone"),
        pytest.param(T(3), T(5), (), MYZONE, at(2016, 8, 10, 3, 1), True, id="3:01AM-zone"),
        pytest.param(T(0), T(0), (), UTC, at(2016, 8, 10, 18), True, id="equal"),
        pytest.param(T(3), T(18), (MON, TUE, WED, THU), UTC, at(2016, 8, 10, 10), True,
                     id="weekdays-in"),
        pytest.param(T(3), T(18), (MON, TUE), UTC, at(2016, 8, 10, 10), False,
                     id="weekdays-out"),
        pytest.param(T(3), T(18), (MON, TUE, WED), UTC, at(2016, 8, 10, 2), False,
                     id="2AM-weekdays"),
    ],
)
def test_is_in_range(start, end, weekdays, tz, now, expected):
    r = new_time_range_in_location(start, end, weekdays, tz)
    assert r.is_in_range(now) is expected


def test_in_range_none():
    assert in_range(None, at(2016, 8, 10, 18)) is True


@pytest.mark.parametrize(
    "st, et, sd, ed, now, expected",
    [
        (T(3), T(18), MON, THU, at(2004, 7, 28, 2), True),
        (T(3), T(18), MON, THU, at(2004, 7, 27, 18), True),
        (T(3), T(18), MON, THU, at(2004, 7, 27, 22), True),
        (T(3), T(18), MON, THU, at(2004, 7, 27, 3), True),
        (T(3), T(18), MON, THU, at(2004, 7, 26, 2, 59, 59), False),
        (T(3), T(18), MON, THU, at(2004, 7, 29, 18, 0, 1), False),
        (T(3), T(18), THU, MON, at(2004, 7, 24, 2), True),
        (T(3), T(18), THU, MON, at(2004, 7, 28, 2), False),
        (T(3), T(18), THU, MON, at(2004, 7, 22, 3), True),
        (T(3), T(18), THU, MON, at(2004, 7, 26, 18), True),
        (T(3), T(18), THU, MON, at(2004, 7, 22, 2, 59, 59), False),
        (T(3), T(18), THU, MON, at(2004, 7, 26, 18, 0, 1), False),
        (T(9, 1), T(8, 59), SUN, SUN, at(2006, 12, 3, 8, 59), True),
        (T(9, 1), T(8, 59), SUN, SUN, at(2006, 12, 3, 8, 59, 1), False),
        (T(9, 1), T(8, 59), SUN, SUN, at(2006, 12, 3, 9, 1), True),
        (T(9, 1), T(8, 59), SUN, SUN, at(2006, 12, 3, 9), False),
        (T(9, 1), T(8, 59), SUN, SUN, at(2006, 12, 4, 8, 59), True),
        (T(9, 1), T(8, 59), SUN, SUN, at(2006, 12, 4, 8, 59, 1), True),
        (T(9, 1), T(8, 59), SUN, SUN, at(2006, 12, 4, 9, 1), True),
        (T(9, 1), T(8, 59), SUN, SUN, at(2006, 12, 4, 9), True),
        (T(8, 59), T(9, 1), SUN, SUN, at(2006, 12, 3, 8, 59), True),
        (T(8, 59), T(9, 1), SUN, SUN, at(2006, 12, 3, 9, 1), True),
        (T(8, 59), T(9, 1), SUN, SUN, at(2006, 12, 4, 8, 59), False),
    ],
)
def test_is_in_range_with_day(st, et, sd, ed, now, expected):
    r = new_week_range_in_location(st, et, sd, ed, UTC)
    assert r.is_in_range(now) is expected


_WEEKDAYS = (MON, TUE, WED)
CUSTOM = timezone(timedelta(seconds=-60), "custom")


@pytest.mark.parametrize(
    "start, end, tz, weekdays, first, second, expected",
    [
        (T(3), T(18), UTC, (), at(2016, 8, 10, 10), at(2016, 8, 10, 10), True),
        (T(3), T(18), UTC, (), at(2016, 8, 10, 10), at(2016, 8, 10, 11), True),
        (T(3), T(18), UTC, (), at(2016, 8, 10, 19), at(2016, 8, 10, 10), False),
        (T(3), T(18), UTC, (), at(2016, 8, 10, 10), at(2016, 8, 10, 2), False),
        (T(3), T(18), UTC, (), at(2016, 8, 11, 10), at(2016, 8, 10, 10), False),
        (T(3), T(18), UTC, (), at(2016, 8, 10, 10), at(2016, 8, 11, 10), False),
        (T(3), T(18), UTC, _WEEKDAYS, at(2016, 8, 10, 10), at(2016, 8, 10, 10), True),
        (T(3), T(18), UTC, _WEEKDAYS, at(2016, 8, 11, 10), at(2016, 8, 11, 10), False),
        (T(3), T(18), UTC, _WEEKDAYS, at(2016, 8, 10, 10), at(2016, 8, 10, 11), True),
        (T(3), T(18), UTC, _WEEKDAYS, at(2016, 8, 11, 10), at(2016, 8, 11, 11), False),
        (T(18), T(3), UTC, (), at(2016, 8, 10, 19), at(2016, 8, 10, 20), True),
        (T(18), T(3), UTC, (), at(2016, 8, 10, 19), at(2016, 8, 11, 2), True),
        (T(18), T(3), UTC, (), at(2016, 8, 11, 2), at(2016, 8, 10, 19), True),
        (T(18), T(3), UTC, (), at(2016, 8, 11, 21), at(2016, 8, 10, 20), False),
        (T(6), T(6), UTC, (), at(2016, 1, 13, 19, 10), at(2016, 1, 14, 19, 6), False),
        (T(0), T(2), MYZONE, (), at(2016, 8, 10, 0, 1), at(2016, 8, 10, 0, 1), True),
        (T(2), T(0), MYZONE, (), at(2016, 8, 10, 2, 1), at(2016, 8, 10, 2, 1), True),
        (T(0), T(0), CUSTOM, (), at(2016, 8, 10), at(2016, 8, 11), False),
        (T(0), T(0), UTC, (), at(2016, 8, 10, 23, 59, 59), at(2016, 8, 11), False),
        (T(1, 49), T(1, 49), UTC, (), at(2016, 8, 16, 1, 48, 21), at(2016, 8, 16, 1, 49, 2),
         False),
        (T(1, 49), T(1, 49), UTC, (), at(2016, 8, 16, 13, 48, 21),
         at(2016, 8, 16, 13, 49, 2), True),
        (T(13, 49), T(13, 49), UTC, (), at(2016, 8, 16, 13, 48, 21),
         at(2016, 8, 16, 13, 49, 2), False),
    ],
)
def test_is_in_same_range(start, end, tz, weekdays, first, second, expected):
    if tz is UTC:
        r = new_utc_time_range(start, end, weekdays)
    else:
        r = new_time_range_in_location(start, end, weekdays, tz)
    assert r.is_in_same_range(first, second) is expected
    assert r.is_in_same_range(second, first) is expected


@pytest.mark.parametrize(
    "st, et, sd, ed, first, second, expected",
    [
        (T(3), T(18), MON, THU, at(2004, 7, 27, 3), at(2004, 7, 25, 3), False),
        (T(3), T(18), MON, THU, at(2004, 7, 31, 3), at(2004, 7, 27, 3), False),
        (T(3), T(18), MON, THU, at(2004, 7, 27, 3), at(2004, 7, 27, 3), True),
        (T(3), T(18), MON, THU, at(2004, 7, 26, 10), at(2004, 7, 27, 3), True),
        (T(3), T(18), MON, THU, at(2004, 7, 27, 10), at(2004, 7, 29, 2), True),
        (T(3), T(18), MON, THU, at(2004, 7, 27, 10), at(2004, 7, 20, 3), False),
        (T(3), T(18), MON, THU, at(2004, 7, 20, 3), at(2004, 7, 27, 10), False),
        (T(3), T(18), MON, THU, at(2004, 7, 26, 2), at(2004, 7, 19, 3), False),
        (T(0, 5), T(23, 45), SUN, SAT, at(2006, 4, 4), at(2006, 4, 3, 1), True),
        (T(0, 5), T(23, 45), SUN, SAT, at(2006, 10, 30), at(2006, 10, 31, 1), True),
        (T(0, 5), T(23, 45), SUN, SAT, at(2006, 12, 31, 10, 10, 10),
         at(2007, 1, 1, 10, 10, 10), True),
        (T(9, 1), T(8, 59), SUN, SUN, at(2006, 12, 3, 9, 1), at(2006, 12, 3, 9, 1), True),
        (T(9, 1), T(8, 59), SUN, SUN, at(2006, 12, 3, 9, 1), at(2006, 12, 10, 9, 1), False),
        (T(9, 1), T(8, 59), SUN, SUN, at(2006, 12, 3, 9, 1), at(2006, 12, 4, 9, 1), True),
    ],
)
def test_is_in_same_range_with_day(st, et, sd, ed, first, second, expected):
    r = new_utc_week_range(st, et, sd, ed)
    assert r.is_in_same_range(first, second) is expected


def test_in_same_range_none():
    moment = at(2016, 8, 10, 2, 1)
    assert in_same_range(None, moment, moment) is True