# SPDX-License-Identifier: MIT

import datetime
import math
from typing import Protocol, Union

import pendulum

from togglgraph.errors import ParseError

TimezoneType = Union[str, pendulum.Timezone, pendulum.FixedTimezone]


class Clock(Protocol):
    def now(self) -> pendulum.DateTime: ...


class SystemClock:
    def now(self) -> pendulum.DateTime:
        return now_utc()


class FixedClock:
    """A clock that only moves when told to."""

    def __init__(self, now: pendulum.DateTime) -> None:
        self._now = now

    def now(self) -> pendulum.DateTime:
        return self._now

    def advance(self, **kwargs: int) -> None:
        self._now = self._now.add(**kwargs)


def now_utc() -> pendulum.DateTime:
    return pendulum.now("UTC")


def epoch_seconds(clock: Clock) -> int:
    return math.floor(clock.now().timestamp())


def datetime_to_iso_str(datetime: pendulum.DateTime) -> str:
    return datetime.in_tz("UTC").isoformat()


def datetime_from_str(datetime: str) -> pendulum.DateTime:
    try:
        parsed = pendulum.parse(datetime)
    except (TypeError, ValueError) as e:
        raise ParseError(f"Invalid timestamp: {datetime!r}") from e
    if not isinstance(parsed, pendulum.DateTime):
        raise ParseError(f"Invalid timestamp: {datetime!r}")
    return parsed


def datetime_to_local(
    datetime: pendulum.DateTime, tz: TimezoneType = "local"
) -> pendulum.DateTime:
    return datetime.in_tz(tz)


def date_from_str(date_str: str) -> pendulum.Date:
    """Parse a 'YYYY-MM-DD' string into a calendar date."""
    try:
        parsed = pendulum.parse(date_str.strip(), exact=True)
    except ValueError as e:
        raise ParseError(f"Invalid date: {date_str!r}") from e
    if isinstance(parsed, pendulum.DateTime):
        return parsed.date()
    if isinstance(parsed, pendulum.Date):
        return parsed
    raise ParseError(f"Invalid date: {date_str!r}")


def as_date(value: datetime.date) -> pendulum.Date:
    """Drop any time-of-day component and return a pendulum Date."""
    return pendulum.date(value.year, value.month, value.day)


def today_local(tz: TimezoneType = "local") -> pendulum.Date:
    return pendulum.now(tz).date()


def date_to_start_of_day(
    date: datetime.date, tz: TimezoneType = "local"
) -> pendulum.DateTime:
    return pendulum.datetime(date.year, date.month, date.day, tz=tz)


def date_to_display_str(date: datetime.date) -> str:
    return as_date(date).format("YYYY-MM-DD ddd")


def datetime_to_display_time_str(datetime: pendulum.DateTime) -> str:
    return datetime.format("HH:mm")


def minutes_to_display_str(minutes: int) -> str:
    hours, remainder = divmod(minutes, 60)
    return f"{hours}h {remainder}m"
