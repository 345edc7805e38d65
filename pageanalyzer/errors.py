"""Exceptions raised by the analysis pipeline.

Only failures of the page fetch surface as exceptions.  Per-link probe
failures are folded into the inaccessible counts and never raised.
"""

from __future__ import annotations


class AnalysisError(Exception):
    """Base class for every error that aborts an analysis."""


class RequestConstructionError(AnalysisError):
    """The target URL could not be turned into an HTTP request."""

    def __init__(self, detail: str) -> None:
        super().__init__(f"failed to create request: {detail}")
        self.detail = detail


class TransportError(AnalysisError):
    """Network, DNS or timeout failure while fetching the page."""


class ContextCancelledError(TransportError):
    """The governing request context was cancelled."""

    def __init__(self, message: str = "context canceled") -> None:
        super().__init__(message)


class DeadlineExceededError(ContextCancelledError):
    """The governing request context ran past its deadline."""

    def __init__(self, message: str = "context deadline exceeded") -> None:
        super().__init__(message)


class StatusError(AnalysisError):
    """The page was fetched but answered outside the 2xx range."""

    def __init__(self, status_code: int) -> None:
        super().__init__(f"request failed with status code: {status_code}")
        self.status_code = status_code
