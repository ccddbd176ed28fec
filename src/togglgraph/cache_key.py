# SPDX-License-Identifier: MIT

from typing import Literal, Union

import pendulum

from togglgraph.time import datetime_to_iso_str

ResourceKind = Literal["timeEntries", "projects", "clients"]

KeyParam = Union[str, int, pendulum.DateTime]


def build_key(kind: ResourceKind, *params: KeyParam) -> str:
    """
    Build a cache key from a resource kind and every parameter that affects
    the fetched result.

    Instants are rendered as UTC ISO-8601 strings so the same moment always
    yields the same key whatever timezone it was expressed in.
    """
    parts: list[str] = [kind]
    for param in params:
        if isinstance(param, pendulum.DateTime):
            parts.append(datetime_to_iso_str(param))
        else:
            parts.append(str(param))
    return ":".join(parts)


def build_time_entries_key(
    workspace_id: Union[str, int],
    start: pendulum.DateTime,
    end: pendulum.DateTime,
) -> str:
    return build_key("timeEntries", workspace_id, start, end)


def build_projects_key(workspace_id: Union[str, int]) -> str:
    return build_key("projects", workspace_id)


def build_clients_key(workspace_id: Union[str, int]) -> str:
    return build_key("clients", workspace_id)
