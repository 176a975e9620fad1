"""
Error taxonomy for sync, import and session start.
"""

from __future__ import annotations


class SyncError(Exception):
    """Base class for failures while fetching remote word records."""
    kind = "sync"


class NetworkError(SyncError):
    """Connection-level failure (DNS, refused, reset)."""
    kind = "network"


class RequestTimeout(SyncError):
    """A single fetch attempt exceeded its time bound and was aborted."""
    kind = "timeout"

    def __init__(self, message: str = "request timed out"):
        super().__init__(message)


class ProtocolError(SyncError):
    """Non-2xx status or a body that is not a JSON array."""
    kind = "protocol"


class OfflineError(SyncError):
    """No connectivity detected before attempting a call."""
    kind = "offline"

    def __init__(self, message: str = "currently offline"):
        super().__init__(message)


class ImportValidationError(ValueError):
    """Import payload is not a JSON array; the store was left unchanged."""


class EmptyStoreError(RuntimeError):
    """A review session was requested but the store holds no words."""


class SourceError(ProtocolError):
    """
    Failure talking to the Notion query API.

    Carries the HTTP status the proxy would answer with.
    """

    def __init__(self, status_code: int, message: str):
        super().__init__(message)
        self.status_code = status_code
