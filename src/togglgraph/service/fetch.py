# SPDX-License-Identifier: MIT

import datetime
from typing import Any, Protocol, Union

import pendulum

from togglgraph.cache import TimedCache
from togglgraph.cache_key import build_projects_key, build_time_entries_key
from togglgraph.errors import InputError
from togglgraph.model.project import Project
from togglgraph.model.time_entry import TimeEntry
from togglgraph.time import TimezoneType, as_date, date_to_start_of_day


class TimeEntrySource(Protocol):
    def get_time_entries(
        self,
        workspace_id: Union[str, int],
        start: pendulum.DateTime,
        end: pendulum.DateTime,
    ) -> list[TimeEntry]: ...

    def get_projects(self, workspace_id: Union[str, int]) -> list[Project]: ...


def get_range_instants(
    start_date: datetime.date,
    end_date: datetime.date,
    tz: TimezoneType = "local",
) -> tuple[pendulum.DateTime, pendulum.DateTime]:
    """
    Instants covering whole local days: midnight of start_date up to the
    midnight following end_date.
    """
    start = as_date(start_date)
    end = as_date(end_date)
    if start > end:
        raise InputError(f"Start date {start} is after end date {end}")
    return date_to_start_of_day(start, tz), date_to_start_of_day(end.add(days=1), tz)


def get_time_entries_with_cache(
    source: TimeEntrySource,
    cache: TimedCache[Any],
    workspace_id: Union[str, int],
    start_date: datetime.date,
    end_date: datetime.date,
    tz: TimezoneType = "local",
    refresh: bool = False,
) -> list[TimeEntry]:
    """
    Entries of the whole local-day range, fetched through the cache.

    With ``refresh`` the cached range is dropped first, forcing a new fetch.
    """
    start, end = get_range_instants(start_date, end_date, tz)
    key = build_time_entries_key(workspace_id, start, end)
    if refresh:
        cache.delete(key)
    return cache.get_or_fetch(
        key, lambda: source.get_time_entries(workspace_id, start, end)
    )


def get_projects_with_cache(
    source: TimeEntrySource,
    cache: TimedCache[Any],
    workspace_id: Union[str, int],
    refresh: bool = False,
) -> list[Project]:
    key = build_projects_key(workspace_id)
    if refresh:
        cache.delete(key)
    return cache.get_or_fetch(key, lambda: source.get_projects(workspace_id))
