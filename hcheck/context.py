# ============================================================================
# CHECK CONTEXT
# ============================================================================
# STATUS: Core - Deadline and cancellation shared by one request's tests
# PURPOSE: Cooperative cancellation signal passed to every test function
# CREATED: 18 OCT 2026
# ============================================================================
"""
Check Context

One CheckContext is created per health request and handed to every test.
It becomes done when the deadline passes, when the client disconnects, or
when the endpoint has answered. Cancellation is advisory: tests that want
to stop early poll done()/remaining() or await wait().

Usage:
    async def db_check(ctx: CheckContext):
        try:
            await asyncio.wait_for(ping(), timeout=ctx.remaining())
        except asyncio.TimeoutError:
            return Status.UNAVAILABLE, "ping timed out"
        return Status.AVAILABLE, None
"""

import asyncio
import time
from typing import Optional

DEADLINE_EXCEEDED = "deadline exceeded"
CANCELLED = "cancelled"


class CheckContext:
    """
    Deadline plus cancellation flag for one health request.

    Must be created inside a running event loop. done() and remaining()
    may be read from worker threads; cancel() and wait() belong to the loop.
    """

    def __init__(self, timeout: float):
        loop = asyncio.get_running_loop()
        self.timeout = timeout
        self.deadline = time.monotonic() + timeout
        self._done = asyncio.Event()
        self._reason: Optional[str] = None
        self._timer = loop.call_later(timeout, self._expire)

    def _expire(self) -> None:
        self._finish(DEADLINE_EXCEEDED)

    def _finish(self, reason: str) -> None:
        if self._done.is_set():
            return
        self._reason = reason
        self._timer.cancel()
        self._done.set()

    def cancel(self, reason: str = CANCELLED) -> None:
        """Mark the context done. Calling it again is a no-op."""
        self._finish(reason)

    def done(self) -> bool:
        """True once the deadline passed or the context was cancelled."""
        return self._done.is_set() or time.monotonic() >= self.deadline

    @property
    def reason(self) -> Optional[str]:
        """Why the context is done, or None while it is still live."""
        if self._reason is None and time.monotonic() >= self.deadline:
            return DEADLINE_EXCEEDED
        return self._reason

    def remaining(self) -> float:
        """Seconds left before the deadline (never negative)."""
        if self._done.is_set():
            return 0.0
        return max(0.0, self.deadline - time.monotonic())

    async def wait(self) -> None:
        """Block until the context is done."""
        await self._done.wait()

    def __repr__(self) -> str:
        return (
            f"CheckContext(timeout={self.timeout}, "
            f"remaining={self.remaining():.3f}, reason={self.reason!r})"
        )


__all__ = [
    "CheckContext",
    "DEADLINE_EXCEEDED",
    "CANCELLED",
]
