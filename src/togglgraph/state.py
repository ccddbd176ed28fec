# SPDX-License-Identifier: MIT

from contextvars import ContextVar
from typing import Optional

# Project currently selected in the graph filter; None shows every project
_project_filter: ContextVar[Optional[int]] = ContextVar("project_filter", default=None)


def set_project_filter(project_id: Optional[int]) -> None:
    _project_filter.set(project_id)


def get_project_filter() -> Optional[int]:
    return _project_filter.get()


def reset_project_filter() -> None:
    _project_filter.set(None)
