# SPDX-License-Identifier: MIT

from typing import NamedTuple, Optional

import pendulum

from togglgraph.model.time_entry import TimeEntry


class ResolvedEntry(NamedTuple):
    original: TimeEntry
    start: pendulum.DateTime  # in the viewer's timezone
    duration: int  # elapsed seconds, running timers resolved, never below 0
    description: Optional[str]
    project_id: Optional[int]

    @property
    def minutes(self) -> int:
        return self.duration // 60


class DayBucket(NamedTuple):
    date: pendulum.Date
    minutes: int
    entries: tuple[ResolvedEntry, ...]
