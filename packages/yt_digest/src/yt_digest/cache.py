"""In-memory transcript cache keyed by video id.

Many concurrent readers, one writer at a time (the lock covers the whole
map).  Results are deep-copied on the way in and on the way out, so no
caller ever holds a reference into the cache.
"""
from __future__ import annotations

import copy
import logging
import threading
from contextlib import contextmanager
from typing import Iterator, Optional, Protocol

from .errors import CacheMiss, InvalidCacheEntry
from .models import TranscriptResult

__all__ = ["TranscriptCache", "MemoryCache", "RWLock"]

log = logging.getLogger(__name__)


class TranscriptCache(Protocol):
    def get(self, video_id: str) -> TranscriptResult: ...

    def put(self, video_id: str, result: TranscriptResult) -> None: ...

    def clear(self) -> None: ...

    def size(self) -> int: ...


class RWLock:
    """Readers share the lock; a writer waits for them and then excludes all."""

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False

    @contextmanager
    def read(self) -> Iterator[None]:
        with self._cond:
            while self._writer:
                self._cond.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if not self._readers:
                    self._cond.notify_all()

    @contextmanager
    def write(self) -> Iterator[None]:
        with self._cond:
            while self._writer or self._readers:
                self._cond.wait()
            self._writer = True
        try:
            yield
        finally:
            with self._cond:
                self._writer = False
                self._cond.notify_all()


class MemoryCache:
    """Process-lifetime cache; see :class:`TranscriptCache` for the contract."""

    def __init__(self) -> None:
        self._lock = RWLock()
        self._entries: dict[str, Optional[TranscriptResult]] = {}

    def get(self, video_id: str) -> TranscriptResult:
        if not video_id:
            raise ValueError("video ID cannot be empty")
        with self._lock.read():
            if video_id not in self._entries:
                log.debug("Cache miss %s", video_id)
                raise CacheMiss(f"transcript not found: {video_id}")
            entry = self._entries[video_id]
            if entry is None:
                log.warning("Found empty transcript in cache for %s", video_id)
                raise InvalidCacheEntry(f"invalid transcript cached for {video_id}")
            log.debug("Cache hit %s", video_id)
            return copy.deepcopy(entry)

    def put(self, video_id: str, result: TranscriptResult) -> None:
        if not video_id:
            raise ValueError("video ID cannot be empty")
        if result is None:
            raise InvalidCacheEntry("refusing to cache an empty transcript")
        snapshot = copy.deepcopy(result)
        with self._lock.write():
            self._entries[video_id] = snapshot
            log.debug("Cached transcript %s (cache size %d)", video_id, len(self._entries))

    def clear(self) -> None:
        with self._lock.write():
            self._entries = {}
        log.info("Cache cleared")

    def size(self) -> int:
        with self._lock.read():
            return len(self._entries)
