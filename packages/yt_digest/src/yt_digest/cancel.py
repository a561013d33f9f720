"""Explicit cancellation for the two-stage fetch.

A :class:`CancelToken` is a ``threading.Event`` plus an optional deadline.
The fetcher calls :meth:`CancelToken.check` before each network stage and
uses :meth:`CancelToken.timeout` to cap its per-request timeout, so a caller
can abort from another thread or simply bound the whole fetch in time.
"""
from __future__ import annotations

import threading
import time

from .errors import Cancelled

__all__ = ["CancelToken"]


class CancelToken:
    def __init__(self, deadline: float | None = None, *, clock=time.monotonic):
        self._event = threading.Event()
        self._clock = clock
        self.deadline = deadline
        self.reason = ""

    @classmethod
    def with_timeout(cls, seconds: float, *, clock=time.monotonic) -> "CancelToken":
        """Token whose deadline is *seconds* from now."""
        return cls(deadline=clock() + seconds, clock=clock)

    def cancel(self, reason: str = "cancelled") -> None:
        self.reason = reason
        self._event.set()

    def remaining(self) -> float | None:
        if self.deadline is None:
            return None
        return max(self.deadline - self._clock(), 0.0)

    @property
    def cancelled(self) -> bool:
        if self._event.is_set():
            return True
        remaining = self.remaining()
        return remaining is not None and remaining <= 0

    def check(self, stage: str = "") -> None:
        """Raise :class:`Cancelled` when the token fired or the deadline passed."""
        if not self.cancelled:
            return
        why = self.reason or "deadline exceeded"
        raise Cancelled(f"{stage}: {why}" if stage else why)

    def timeout(self, default: float, stage: str = "") -> float:
        """Per-request timeout: *default*, shortened to the time left.

        Raises :class:`Cancelled` instead of handing back a zero timeout.
        """
        self.check(stage)
        remaining = self.remaining()
        if remaining is None:
            return default
        if remaining <= 0:
            raise Cancelled(f"{stage}: deadline exceeded" if stage else "deadline exceeded")
        return min(default, remaining)
