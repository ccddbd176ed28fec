# SPDX-License-Identifier: MIT

from typing import Sequence

from togglgraph.errors import InputError
from togglgraph.model.day_bucket import DayBucket

MAX_LEVEL = 4


def get_level(minutes: int, max_minutes: int) -> int:
    """
    Map a day's minutes to an intensity level (0-4) relative to the busiest
    day of the range.

    Each band is closed on its upper side: exactly a quarter of the maximum
    is level 1, not 2.
    """
    if minutes == 0:
        return 0
    if max_minutes <= 0:
        raise InputError(
            f"Cannot compute a level for {minutes} minutes with a maximum of {max_minutes}"
        )

    ratio = minutes / max_minutes
    if ratio <= 0.25:
        return 1
    elif ratio <= 0.5:
        return 2
    elif ratio <= 0.75:
        return 3
    return MAX_LEVEL


def get_max_minutes(buckets: Sequence[DayBucket]) -> int:
    return max((bucket.minutes for bucket in buckets), default=0)


def get_levels(buckets: Sequence[DayBucket]) -> list[int]:
    """Levels for every bucket; an all-empty range is all zeros."""
    max_minutes = get_max_minutes(buckets)
    if max_minutes == 0:
        return [0] * len(buckets)
    return [get_level(bucket.minutes, max_minutes) for bucket in buckets]
