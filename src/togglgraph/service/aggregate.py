# SPDX-License-Identifier: MIT

import datetime
import logging
from typing import Sequence

import pendulum

from togglgraph.errors import InputError
from togglgraph.model.day_bucket import DayBucket, ResolvedEntry
from togglgraph.model.time_entry import TimeEntry
from togglgraph.time import (
    Clock,
    TimezoneType,
    as_date,
    datetime_from_str,
    datetime_to_local,
    epoch_seconds,
)

logger = logging.getLogger(__name__)


def resolve_duration_seconds(duration: int, now_epoch_seconds: int) -> int:
    """
    Elapsed seconds of an entry.

    A running entry stores the negated epoch of its start as its duration,
    so its elapsed time is ``now + duration``. Clock skew can push that below
    zero; such entries count as zero.
    """
    if duration >= 0:
        return duration
    return max(0, now_epoch_seconds + duration)


def get_days_in_range(
    start_date: datetime.date, end_date: datetime.date
) -> list[pendulum.Date]:
    """Every calendar day from start_date to end_date, both inclusive."""
    start = as_date(start_date)
    end = as_date(end_date)
    if start > end:
        raise InputError(f"Start date {start} is after end date {end}")

    days: list[pendulum.Date] = []
    current = start
    while current <= end:
        days.append(current)
        current = current.add(days=1)
    return days


def aggregate_daily(
    entries: Sequence[TimeEntry],
    start_date: datetime.date,
    end_date: datetime.date,
    clock: Clock,
    tz: TimezoneType = "local",
) -> list[DayBucket]:
    """
    Bucket time entries into one record per calendar day.

    Args:
        entries: Raw entries from the provider
        start_date: First day of the range
        end_date: Last day of the range (inclusive)
        clock: Source of "now" for running entries, read once per call
        tz: Timezone whose calendar days define the buckets

    Returns:
        One DayBucket per day in ascending order, including empty days
    """
    days = get_days_in_range(start_date, end_date)
    now_epoch_seconds = epoch_seconds(clock)

    # Parse everything up front so a bad timestamp aborts before any bucket exists
    entries_by_date: dict[pendulum.Date, list[ResolvedEntry]] = {}
    for entry in entries:
        local_start = datetime_to_local(datetime_from_str(entry["start"]), tz)
        resolved = ResolvedEntry(
            original=entry,
            start=local_start,
            duration=resolve_duration_seconds(entry["duration"], now_epoch_seconds),
            description=entry.get("description"),
            project_id=entry.get("project_id"),
        )
        entries_by_date.setdefault(local_start.date(), []).append(resolved)

    buckets: list[DayBucket] = []
    for day in days:
        day_entries = tuple(entries_by_date.get(day, []))
        buckets.append(
            DayBucket(
                date=day,
                minutes=sum(e.minutes for e in day_entries),
                entries=day_entries,
            )
        )

    logger.debug(
        "Aggregated %d entries into %d days (%s..%s)",
        len(entries),
        len(buckets),
        days[0],
        days[-1],
    )
    return buckets
