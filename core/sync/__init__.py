"""
Remote sync: fetch word records, merge them into the local store.
"""

from core.sync.fetcher import HttpSyncFetcher, RetryEvent, fetch_with_retry
from core.sync.merger import (
    SyncMerger,
    SyncResult,
    SyncState,
    SyncStatus,
    build_default_fetcher,
    merge_remote_records,
)

__all__ = [
    "HttpSyncFetcher",
    "RetryEvent",
    "fetch_with_retry",
    "SyncMerger",
    "SyncResult",
    "SyncState",
    "SyncStatus",
    "build_default_fetcher",
    "merge_remote_records",
]
