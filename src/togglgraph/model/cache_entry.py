# SPDX-License-Identifier: MIT

from typing import Any, TypedDict

import pendulum


class CacheEntry(TypedDict):
    key: str
    data: Any
    stored_at: pendulum.DateTime
