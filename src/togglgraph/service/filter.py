# SPDX-License-Identifier: MIT

from typing import Optional, Sequence

from togglgraph.model.day_bucket import DayBucket


def filter_by_project(
    buckets: Sequence[DayBucket], project_id: Optional[int] = None
) -> list[DayBucket]:
    """
    Narrow already-aggregated days to a single project.

    Totals are recomputed from the durations resolved at aggregation time,
    so running entries are not re-evaluated against a later "now". The input
    buckets are left untouched.
    """
    if project_id is None:
        return list(buckets)

    filtered: list[DayBucket] = []
    for bucket in buckets:
        entries = tuple(e for e in bucket.entries if e.project_id == project_id)
        filtered.append(
            DayBucket(
                date=bucket.date,
                minutes=sum(e.minutes for e in entries),
                entries=entries,
            )
        )
    return filtered


def get_project_ids(buckets: Sequence[DayBucket]) -> list[int]:
    """Distinct project ids seen in the buckets, in first-seen order."""
    seen: dict[int, None] = {}
    for bucket in buckets:
        for entry in bucket.entries:
            if entry.project_id is not None:
                seen.setdefault(entry.project_id, None)
    return list(seen)
