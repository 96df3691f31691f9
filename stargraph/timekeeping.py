#!/usr/bin/env python3
"""
Frame timing and cancelable frame requests.

FrameLoop holds at most one pending callback, the way a browser's
requestAnimationFrame slot does: the host loop calls run_pending once per
displayed frame, and cancel() drops whatever is pending. Cancelling twice, or
with nothing pending, is a no-op, so mode switches and teardown can always
call it.
"""
import time
from dataclasses import dataclass, field
from typing import Callable, Optional

FrameCallback = Callable[[float], None]


@dataclass
class FrameTimer:
    """High resolution timer based on time.perf_counter."""

    last_time: float = field(default_factory=time.perf_counter)

    def tick(self) -> float:
        now = time.perf_counter()
        dt = now - self.last_time
        self.last_time = now
        return dt


class FrameLoop:
    def __init__(self):
        self._pending: Optional[FrameCallback] = None
        self._next_handle = 0
        self.handle: Optional[int] = None

    @property
    def pending(self) -> bool:
        return self._pending is not None

    def request(self, callback: FrameCallback) -> int:
        """Schedule callback for the next frame, replacing any pending request."""
        self._next_handle += 1
        self._pending = callback
        self.handle = self._next_handle
        return self.handle

    def cancel(self, handle: Optional[int] = None) -> None:
        """Drop the pending request; a stale handle leaves a newer request alone."""
        if handle is not None and handle != self.handle:
            return
        self._pending = None
        self.handle = None

    def run_pending(self, dt: float) -> bool:
        """Run and clear the pending callback; returns False if nothing was pending."""
        callback = self._pending
        if callback is None:
            return False
        self._pending = None
        self.handle = None
        callback(dt)
        return True
