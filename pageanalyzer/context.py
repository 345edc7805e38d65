"""Request-scoped cancellation shared by the page fetch and every probe.

A :class:`RequestContext` is a thread-safe cancellation flag with an optional
deadline.  Worker threads poll it before issuing a request, and every request
timeout is clamped to the time the context has left.
"""

from __future__ import annotations

import threading
import time

from pageanalyzer.errors import ContextCancelledError, DeadlineExceededError

# Floor for clamped timeouts; httpx treats 0 as "no wait at all".
_MIN_TIMEOUT = 0.001


class RequestContext:
    """Cancellation flag plus optional deadline shared by one analysis.

    Args:
        timeout: Seconds from now after which the context is considered done.
            ``None`` means no deadline; only :meth:`cancel` ends it.
    """

    def __init__(self, timeout: float | None = None) -> None:
        self._cancelled = threading.Event()
        self._deadline = None if timeout is None else time.monotonic() + timeout

    @property
    def deadline(self) -> float | None:
        """Monotonic deadline, or ``None``."""
        return self._deadline

    def cancel(self) -> None:
        self._cancelled.set()

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    def remaining(self) -> float | None:
        """Seconds left before the deadline (never negative), or ``None``."""
        if self._deadline is None:
            return None
        return max(0.0, self._deadline - time.monotonic())

    def done(self) -> bool:
        if self._cancelled.is_set():
            return True
        remaining = self.remaining()
        return remaining is not None and remaining <= 0.0

    def error(self) -> ContextCancelledError | None:
        """Why the context is done, or ``None`` while it is still live."""
        if self._cancelled.is_set():
            return ContextCancelledError()
        if self.done():
            return DeadlineExceededError()
        return None

    def raise_if_done(self) -> None:
        err = self.error()
        if err is not None:
            raise err

    def limit(self, timeout: float) -> float:
        """Clamp *timeout* to the time this context has left."""
        remaining = self.remaining()
        if remaining is None:
            return timeout
        return max(_MIN_TIMEOUT, min(timeout, remaining))
