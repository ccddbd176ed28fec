# SPDX-License-Identifier: MIT

from typing import Optional, Sequence

from rich import box
from rich.console import Console
from rich.padding import Padding
from rich.table import Table
from rich.text import Text

from togglgraph.model.day_bucket import DayBucket
from togglgraph.model.project import Project
from togglgraph.service.level import get_levels, get_max_minutes
from togglgraph.time import (
    date_to_display_str,
    datetime_to_display_time_str,
    minutes_to_display_str,
)

LEVEL_COLORS = ["#ebedf0", "#9be9a8", "#40c463", "#30a14e", "#216e39"]
CELL_SYMBOL = "■"
CELL_WIDTH = 2
DAYS_IN_WEEK = 7
WEEKDAY_LABELS = ["Mon", "", "Wed", "", "Fri", "", ""]
LEFT_COLUMN_WIDTH = 4


def get_grid_positions(buckets: Sequence[DayBucket]) -> list[tuple[int, int]]:
    """
    (week column, weekday row) for every bucket.

    Rows run Monday to Sunday; the first column is padded so the first
    day lands on its own weekday.
    """
    if not buckets:
        return []
    offset = buckets[0].date.weekday()
    return [divmod(i + offset, DAYS_IN_WEEK) for i in range(len(buckets))]


def get_project_name(projects: Sequence[Project], project_id: Optional[int]) -> str:
    for project in projects:
        if project["id"] == project_id:
            return project["name"]
    return "No project"


def build_month_labels(buckets: Sequence[DayBucket], weeks: int) -> Text:
    labels = [" "] * (weeks * CELL_WIDTH)
    last_month: Optional[int] = None
    for bucket, (week, _) in zip(buckets, get_grid_positions(buckets)):
        if bucket.date.month == last_month:
            continue
        last_month = bucket.date.month
        label = bucket.date.format("MMM")
        start = week * CELL_WIDTH
        # Skip a label that would overwrite the previous one
        if any(c != " " for c in labels[max(0, start - 1) : start + len(label)]):
            continue
        for i, char in enumerate(label):
            if start + i < len(labels):
                labels[start + i] = char
    return Text(" " * LEFT_COLUMN_WIDTH + "".join(labels).rstrip(), style="dim")


def build_calendar_rows(buckets: Sequence[DayBucket]) -> list[Text]:
    positions = get_grid_positions(buckets)
    weeks = positions[-1][0] + 1 if positions else 0
    levels = get_levels(buckets)

    grid: list[list[Optional[int]]] = [[None] * weeks for _ in range(DAYS_IN_WEEK)]
    for (week, weekday), level in zip(positions, levels):
        grid[weekday][week] = level

    rows: list[Text] = [build_month_labels(buckets, weeks)]
    for weekday, cells in enumerate(grid):
        row = Text(WEEKDAY_LABELS[weekday].ljust(LEFT_COLUMN_WIDTH), style="dim")
        for level in cells:
            if level is None:
                row.append(" " * CELL_WIDTH)
            else:
                row.append(CELL_SYMBOL, style=LEVEL_COLORS[level])
                row.append(" " * (CELL_WIDTH - 1))
        rows.append(row)
    return rows


def build_legend() -> Text:
    legend = Text(" " * LEFT_COLUMN_WIDTH + "Less ", style="dim")
    for color in LEVEL_COLORS:
        legend.append(CELL_SYMBOL, style=color)
        legend.append(" ")
    legend.append("More", style="dim")
    return legend


def build_summary(buckets: Sequence[DayBucket]) -> Text:
    total = sum(bucket.minutes for bucket in buckets)
    active = sum(1 for bucket in buckets if bucket.minutes > 0)
    summary = Text(" " * LEFT_COLUMN_WIDTH)
    summary.append(f"Total: {minutes_to_display_str(total)}", style="bold")
    summary.append(f"  Active days: {active}/{len(buckets)}")

    max_minutes = get_max_minutes(buckets)
    if max_minutes > 0:
        busiest = next(b for b in buckets if b.minutes == max_minutes)
        summary.append(
            f"  Busiest: {date_to_display_str(busiest.date)} "
            f"({minutes_to_display_str(max_minutes)})"
        )
    return summary


def calendar_view(
    buckets: Sequence[DayBucket],
    projects: Sequence[Project],
    project_id: Optional[int] = None,
    workspace_name: Optional[str] = None,
    console: Optional[Console] = None,
) -> None:
    console = console if console is not None else Console()

    title = Text("togglgraph", style="dark_orange")
    if workspace_name:
        title.append(f"  {workspace_name}", style="plum1")
    if project_id is None:
        title.append("  All Projects", style="sandy_brown")
    else:
        title.append(
            f"  {get_project_name(projects, project_id)}", style="sandy_brown"
        )
    console.print(Padding(title, (1, 0, 1, 1)))

    for row in build_calendar_rows(buckets):
        console.print(row, no_wrap=True, overflow="crop")
    console.print()
    console.print(build_legend())
    console.print(build_summary(buckets))


def get_entry_rows(
    bucket: DayBucket, projects: Sequence[Project]
) -> list[tuple[str, str, str, str]]:
    """(start, project, description, duration) per entry, ordered by start time."""
    rows: list[tuple[str, str, str, str]] = []
    for entry in sorted(bucket.entries, key=lambda e: e.start):
        rows.append(
            (
                datetime_to_display_time_str(entry.start),
                get_project_name(projects, entry.project_id),
                entry.description or "No description",
                f"{entry.minutes}m",
            )
        )
    return rows


def day_view(
    bucket: DayBucket,
    projects: Sequence[Project],
    console: Optional[Console] = None,
) -> None:
    console = console if console is not None else Console()

    console.print(
        Padding(
            f"[bold]{date_to_display_str(bucket.date)}[/bold]  "
            f"Total: {minutes_to_display_str(bucket.minutes)}",
            (1, 0, 0, 1),
        )
    )
    if not bucket.entries:
        console.print(Padding("[dim]No entries[/dim]", (0, 1)))
        return

    table = Table(box=box.SIMPLE)
    table.add_column("start")
    table.add_column("project", style="sandy_brown")
    table.add_column("description")
    table.add_column("duration", justify="right")

    for row in get_entry_rows(bucket, projects):
        table.add_row(*row)
    console.print(table)
