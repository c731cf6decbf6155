"""Session time windows: daily ranges and weekly ranges in a time zone."""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone, tzinfo
from enum import IntEnum
from typing import Iterable, Optional

_TIME_PATTERN = re.compile(r"(\d{1,2}):(\d{2}):(\d{2})")


class Weekday(IntEnum):
    """Day of the week, Sunday first."""

    SUNDAY = 0
    MONDAY = 1
    TUESDAY = 2
    WEDNESDAY = 3
    THURSDAY = 4
    FRIDAY = 5
    SATURDAY = 6


def _weekday(moment: datetime) -> Weekday:
    return Weekday(moment.isoweekday() % 7)


def _aware(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment


@dataclass(frozen=True)
class TimeOfDay:
    """A wall-clock time of day."""

    hour: int
    minute: int
    second: int

    @property
    def _seconds(self) -> int:
        return self.hour * 3600 + self.minute * 60 + self.second

    def duration(self) -> timedelta:
        """Time elapsed since midnight."""
        return timedelta(seconds=self._seconds)


def _clock(moment: datetime) -> TimeOfDay:
    return TimeOfDay(moment.hour, moment.minute, moment.second)


def parse_time_of_day(text: str) -> TimeOfDay:
    """Parse a time of day in the form HH:MM:SS."""
    match = _TIME_PATTERN.fullmatch(text)
    if match is None:
        raise ValueError(f"time must be in the format HH:MM:SS: {text!r}")
    hour, minute, second = (int(g) for g in match.groups())
    if hour >= 24 or minute >= 60 or second >= 60:
        raise ValueError(f"time must be in the format HH:MM:SS: {text!r}")
    return TimeOfDay(hour, minute, second)


@dataclass(frozen=True)
class TimeRange:
    """A daily or weekly time band in a given time zone."""

    start_time: TimeOfDay
    end_time: TimeOfDay
    weekdays: tuple = ()
    start_day: Optional[Weekday] = None
    end_day: Optional[Weekday] = None
    tz: tzinfo = timezone.utc

    def _is_in_time_range(self, moment: datetime) -> bool:
        local = _aware(moment).astimezone(self.tz)
        now = _clock(local)._seconds
        if self.weekdays and _weekday(local) not in self.weekdays:
            return False
        start, end = self.start_time._seconds, self.end_time._seconds
        if start < end:
            return start <= now <= end
        return not (end < now < start)

    def _is_in_week_range(self, moment: datetime) -> bool:
        local = _aware(moment).astimezone(self.tz)
        day = _weekday(local)
        start_day, end_day = self.start_day, self.end_day
        if start_day == end_day:
            if day == start_day:
                return self._is_in_time_range(local)
            return self.start_time._seconds >= self.end_time._seconds
        if start_day < end_day:
            if day < start_day or end_day < day:
                return False
        elif end_day < day < start_day:
            return False
        now = _clock(local)._seconds
        if day == start_day:
            return now >= self.start_time._seconds
        if day == end_day:
            return now <= self.end_time._seconds
        return True

    def is_in_range(self, moment: datetime) -> bool:
        """True if the moment falls within the range."""
        if self.start_day is not None:
            return self._is_in_week_range(moment)
        return self._is_in_time_range(moment)

    def is_in_same_range(self, first: datetime, second: datetime) -> bool:
        """True if both moments fall within the same occurrence of the range."""
        if not (self.is_in_range(first) and self.is_in_range(second)):
            return False
        first, second = _aware(first), _aware(second)
        if second < first:
            first, second = second, first
        local = first.astimezone(self.tz)
        now = _clock(local)._seconds
        start, end = self.start_time._seconds, self.end_time._seconds
        if self.end_day is None:
            offset = 1 if start >= end and now >= start else 0
        else:
            day = _weekday(local)
            if self.end_day < day:
                offset = 7 + (self.end_day - day)
            elif day == self.end_day:
                offset = 7 if end <= now else 0
            else:
                offset = self.end_day - day
        session_end = datetime(
            local.year,
            local.month,
            local.day,
            self.end_time.hour,
            self.end_time.minute,
            self.end_time.second,
            tzinfo=self.tz,
        ) + timedelta(days=offset)
        return second < session_end


def new_time_range_in_location(
    start: TimeOfDay, end: TimeOfDay, weekdays: Iterable[Weekday], tz: Optional[tzinfo]
) -> TimeRange:
    """A daily range, optionally limited to some weekdays, in a time zone."""
    if tz is None:
        raise ValueError("time: missing location in call to new_time_range_in_location")
    return TimeRange(start, end, tuple(Weekday(d) for d in weekdays), tz=tz)


def new_utc_time_range(
    start: TimeOfDay, end: TimeOfDay, weekdays: Iterable[Weekday]
) -> TimeRange:
    """A daily range in UTC."""
    return new_time_range_in_location(start, end, weekdays, timezone.utc)


def new_week_range_in_location(
    start_time: TimeOfDay,
    end_time: TimeOfDay,
    start_day: Weekday,
    end_day: Weekday,
    tz: Optional[tzinfo],
) -> TimeRange:
    """A weekly range from a start day and time to an end day and time."""
    base = new_time_range_in_location(start_time, end_time, (), tz)
    return TimeRange(
        base.start_time, base.end_time, (), Weekday(start_day), Weekday(end_day), base.tz
    )


def new_utc_week_range(
    start_time: TimeOfDay, end_time: TimeOfDay, start_day: Weekday, end_day: Weekday
) -> TimeRange:
    """A weekly range in UTC."""
    return new_week_range_in_location(start_time, end_time, start_day, end_day, timezone.utc)


def in_range(time_range: Optional[TimeRange], moment: datetime) -> bool:
    """True if the moment is within the range; a missing range always matches."""
    return time_range is None or time_range.is_in_range(moment)


def in_same_range(
    time_range: Optional[TimeRange], first: datetime, second: datetime
) -> bool:
    """True if both moments are in the same range; a missing range always matches."""
    return time_range is None or time_range.is_in_same_range(first, second)