# SPDX-License-Identifier: MIT

import logging
import threading
from contextlib import contextmanager
from typing import Callable, Generic, Iterator, Optional, TypeVar

from togglgraph.model.cache_entry import CacheEntry
from togglgraph.time import Clock, SystemClock

logger = logging.getLogger(__name__)

T = TypeVar("T")


class TimedCache(Generic[T]):
    """
    Key/value store whose entries expire a fixed number of minutes after
    they were stored.

    Expiry is checked lazily: an entry older than the timeout is removed by
    the ``get`` that finds it. There is no capacity bound.

    Instances are owned by whatever drives the fetches; nothing here is
    module-global.
    """

    def __init__(self, timeout_minutes: int, clock: Optional[Clock] = None) -> None:
        self.timeout_minutes = timeout_minutes
        self._clock: Clock = clock if clock is not None else SystemClock()
        self._entries: dict[str, CacheEntry] = {}
        self._lock = threading.RLock()
        # key -> (lock, callers holding or waiting on it)
        self._key_locks: dict[str, tuple[threading.Lock, int]] = {}

    def get(self, key: str) -> Optional[T]:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                logger.debug("Cache miss: %s", key)
                return None

            age = self._clock.now() - entry["stored_at"]
            if age.total_seconds() > self.timeout_minutes * 60:
                logger.debug("Cache entry expired: %s", key)
                del self._entries[key]
                return None

            logger.debug("Cache hit: %s", key)
            return entry["data"]

    def set(self, key: str, value: T) -> None:
        with self._lock:
            self._entries[key] = {
                "key": key,
                "data": value,
                "stored_at": self._clock.now(),
            }

    def delete(self, key: str) -> None:
        with self._lock:
            self._entries.pop(key, None)

    def clear(self) -> None:
        # Key locks belong to in-flight fetches and are released by them
        with self._lock:
            self._entries.clear()

    def get_or_fetch(self, key: str, fetch: Callable[[], T]) -> T:
        """
        Return the cached value for ``key``, calling ``fetch`` on a miss.

        Concurrent callers asking for the same key wait for the first fetch
        instead of issuing their own. Exceptions from ``fetch`` propagate
        and leave the cache untouched.
        """
        with self._key_lock(key):
            value = self.get(key)
            if value is None:
                value = fetch()
                self.set(key, value)
            return value

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._entries

    @contextmanager
    def _key_lock(self, key: str) -> Iterator[None]:
        with self._lock:
            lock, users = self._key_locks.get(key, (threading.Lock(), 0))
            self._key_locks[key] = (lock, users + 1)
        try:
            with lock:
                yield
        finally:
            with self._lock:
                lock, users = self._key_locks[key]
                if users == 1:
                    del self._key_locks[key]
                else:
                    self._key_locks[key] = (lock, users - 1)
