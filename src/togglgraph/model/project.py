# SPDX-License-Identifier: MIT

from typing import NotRequired, Optional, TypedDict


class Workspace(TypedDict):
    id: int
    name: str
    organization_id: NotRequired[int]


class Project(TypedDict):
    id: int
    workspace_id: int
    client_id: NotRequired[Optional[int]]
    name: str
    active: NotRequired[bool]
    color: NotRequired[str]


class Client(TypedDict):
    id: int
    workspace_id: int
    name: str
    active: NotRequired[bool]
