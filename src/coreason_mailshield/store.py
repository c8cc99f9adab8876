# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_mailshield

"""Keyed string cache with per-entry expiry.

`MappingStore` is the contract the vault depends on. Any host cache with
get/put/remove semantics can be plugged in; `TTLCacheStore` is the in-process
default.
"""

import threading
import time
from typing import Callable, MutableMapping, Optional, Protocol, Tuple

from cachetools import TLRUCache


class MappingStore(Protocol):
    """String key/value cache with expiry."""

    def get(self, key: str) -> Optional[str]: ...

    def put(self, key: str, value: str, ttl_seconds: float) -> None: ...

    def remove(self, key: str) -> None: ...


def _expires_at(_key: str, entry: Tuple[str, float], now: float) -> float:
    return now + entry[1]


class TTLCacheStore:
    """In-memory MappingStore backed by a cachetools TLRUCache.

    Each entry carries its own time to live. Expired entries are hidden on
    access and evicted lazily.
    """

    def __init__(
        self,
        max_size: int = 10000,
        timer: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initializes the TTLCacheStore.

        Args:
            max_size: Maximum number of items in the cache. Default 10000.
            timer: Timer function for expiry. Defaults to time.monotonic.
        """
        # Entries are stored as (value, ttl_seconds) so the ttu callback can read the ttl back.
        self._storage: MutableMapping[str, Tuple[str, float]] = TLRUCache(
            maxsize=max_size, ttu=_expires_at, timer=timer
        )
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[str]:
        with self._lock:
            entry = self._storage.get(key)
        if entry is None:
            return None
        return entry[0]

    def put(self, key: str, value: str, ttl_seconds: float) -> None:
        with self._lock:
            if ttl_seconds <= 0:
                # TLRUCache silently refuses already-expired items, which would leave a stale value behind.
                self._storage.pop(key, None)
                return
            self._storage[key] = (value, ttl_seconds)

    def remove(self, key: str) -> None:
        with self._lock:
            self._storage.pop(key, None)

    def __len__(self) -> int:
        with self._lock:
            return len(self._storage)
