# SPDX-License-Identifier: MIT

from typing import NotRequired, Optional, TypedDict


class TimeEntry(TypedDict):
    id: int
    workspace_id: int
    project_id: Optional[int]
    task_id: NotRequired[Optional[int]]
    user_id: NotRequired[int]
    description: Optional[str]
    start: str  # ISO-8601 instant as sent by the provider
    stop: NotRequired[Optional[str]]
    duration: int  # seconds; negative while the timer is running
    client_id: NotRequired[Optional[int]]
