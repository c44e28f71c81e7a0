"""
Cancellation and deadline context threaded through every command run.

The execution engine only passes the context along; runners are the ones
that check it and stop the underlying process.
"""

from __future__ import annotations

import threading
import time


class ExecutionContext:
    """
    Cooperative cancellation token with an optional absolute deadline.

    Usage:
        ctx = ExecutionContext.with_timeout(600)
        with ProcessSignalHandler(ctx):
            helm_cmd.run(ctx)
    """

    def __init__(self, deadline: float | None = None) -> None:
        """
        Initialize context.

        Args:
            deadline: Absolute time.monotonic() value after which runs
                must stop, or None for no deadline
        """
        self._deadline = deadline
        self._cancelled = threading.Event()

    @classmethod
    def background(cls) -> ExecutionContext:
        """Context that is never cancelled and has no deadline."""
        return cls()

    @classmethod
    def with_timeout(cls, seconds: float | None) -> ExecutionContext:
        """Context whose deadline is `seconds` from now (None for no deadline)."""
        if seconds is None:
            return cls()
        return cls(deadline=time.monotonic() + seconds)

    @property
    def deadline(self) -> float | None:
        return self._deadline

    def cancel(self) -> None:
        """Request cancellation. Safe to call from a signal handler."""
        self._cancelled.set()

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    @property
    def expired(self) -> bool:
        return self._deadline is not None and time.monotonic() >= self._deadline

    @property
    def done(self) -> bool:
        """True once the context is cancelled or past its deadline."""
        return self.cancelled or self.expired

    def remaining(self) -> float | None:
        """Seconds left until the deadline, clamped at zero; None if unbounded."""
        if self._deadline is None:
            return None
        return max(0.0, self._deadline - time.monotonic())

    def wait(self, timeout: float | None = None) -> bool:
        """
        Block until cancelled or `timeout` elapses, never past the deadline.

        Returns:
            True if the context was cancelled
        """
        remaining = self.remaining()
        if remaining is not None:
            timeout = remaining if timeout is None else min(timeout, remaining)
        return self._cancelled.wait(timeout=timeout)
