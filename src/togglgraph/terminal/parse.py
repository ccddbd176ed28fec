# SPDX-License-Identifier: MIT

import re
from typing import Optional, TypedDict

import pendulum
import typer

from togglgraph.errors import ParseError
from togglgraph.time import TimezoneType, date_from_str, today_local


class GraphBlock(TypedDict):
    start: pendulum.Date
    end: pendulum.Date
    project_id: Optional[int]


def parse_date(
    date_param: Optional[str], tz: TimezoneType = "local"
) -> Optional[pendulum.Date]:
    if date_param is None:
        return None

    date = date_param.strip()

    if re.match(r"^\d{4}-\d{2}-\d{2}$", date):
        try:
            return date_from_str(date)
        except ParseError as e:
            raise typer.BadParameter(str(e))

    # Relative day offsets, e.g. "-365" or "0"
    if re.match(r"^-?\d+$", date):
        return today_local(tz).add(days=int(date))

    if date == "today" or date == "t":
        return today_local(tz)
    if date == "yesterday" or date == "y":
        return today_local(tz).subtract(days=1)
    raise typer.BadParameter("Incorrect date format, expected YYYY-MM-DD")


def parse_graph_block(source: str, tz: TimezoneType = "local") -> GraphBlock:
    """
    Parse a graph block of ``key: value`` lines.

    Recognised keys are ``start``, ``end`` and ``project``. Missing bounds
    default to today; unknown keys and blank lines are ignored.
    """
    block: GraphBlock = {
        "start": today_local(tz),
        "end": today_local(tz),
        "project_id": None,
    }

    for line in source.splitlines():
        if ":" not in line:
            continue
        key, value = (part.strip() for part in line.split(":", 1))
        if key == "start":
            block["start"] = date_from_str(value)
        elif key == "end":
            block["end"] = date_from_str(value)
        elif key == "project":
            if not value.isdigit():
                raise ParseError(f"Invalid project id: {value!r}")
            block["project_id"] = int(value)

    return block
