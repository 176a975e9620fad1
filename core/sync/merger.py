"""
Sync merger: fold remote word records into the local store.

Remote records own the content (word text and meta); the local store owns
review progress (box, due date, counters). A merge never touches progress.

Matching order for each remote record:
1. Local record with the same notionId
2. Local record WITHOUT a notionId whose word matches case-insensitively
   (first match wins; two different words that lowercase to the same
   text are treated as one)
3. Otherwise a new record is created and prepended
"""

from __future__ import annotations

import time
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Callable, Iterable, Optional

from core.config import (
    AUTO_RETRY_DELAY_SECONDS,
    NOTION_DB_ID,
    NOTION_ENDPOINT,
    NOTION_TOKEN,
    SYNC_MAX_RETRIES,
    SYNC_RETRY_BASE_DELAY_SECONDS,
)
from core.errors import OfflineError, SourceError, SyncError
from core.log import get_logger
from core.record_store import RecordStore
from core.schemas import RemoteWord, WordRecord, generate_record_id
from core.srs import today_date_only
from core.sync.connectivity import is_online
from core.sync.fetcher import HttpSyncFetcher, RemoteFetcher, RetryEvent, fetch_with_retry
from core.timers import RetryTimer

logger = get_logger(__name__)


# ---- Results & Status ----

@dataclass(frozen=True)
class SyncResult:
    """Aggregate counts of one merge."""
    created: int = 0
    updated: int = 0


class SyncState(str, Enum):
    NOT_CONFIGURED = "not_configured"
    OFFLINE = "offline"
    SYNCING = "syncing"
    RETRYING = "retrying"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass(frozen=True)
class SyncStatus:
    """
    A user-facing status update from the sync process.
    """
    state: SyncState
    message: str
    result: Optional[SyncResult] = None
    retry: Optional[RetryEvent] = None
    error_kind: Optional[str] = None
    timestamp: datetime = field(default_factory=datetime.now)


SyncObserver = Callable[[SyncStatus], None]


# ---- Merge ----

def _normalized_word(value: object) -> str:
    return str(value or "").strip().lower()


def find_match(records: list[dict], remote: RemoteWord) -> int:
    """
    Index of the local record a remote record should update, or -1.
    """
    if remote.notion_id:
        for idx, record in enumerate(records):
            if record.get("notionId") == remote.notion_id:
                return idx

    target = remote.word.lower()
    for idx, record in enumerate(records):
        if not record.get("notionId") and _normalized_word(record.get("word")) == target:
            return idx
    return -1


def merge_remote_records(
    records: list[dict],
    remote_items: Iterable[object],
    today: Optional[date] = None,
    now: Optional[datetime] = None,
    id_factory: Callable[[], str] = generate_record_id
) -> SyncResult:
    """
    Merge remote records into a local list (modified in place).

    Items that are not objects, or whose word is empty after trimming,
    are skipped and not counted.

    Args:
        records: Local store list
        remote_items: Decoded /sync payload elements
        today: Due date for newly created records
        now: Creation timestamp for newly created records
        id_factory: Local id generator

    Returns:
        SyncResult with created/updated counts
    """
    today = today or today_date_only()
    created = 0
    updated = 0

    for item in remote_items:
        if not isinstance(item, Mapping):
            continue
        remote = RemoteWord.model_validate(dict(item))
        if not remote.word:
            continue

        idx = find_match(records, remote)
        if idx >= 0:
            current = records[idx]
            current_meta = current.get("meta") if isinstance(current.get("meta"), dict) else {}
            records[idx] = {
                **current,
                "word": remote.word,
                "meta": {**current_meta, **remote.present_meta()},
                "notionId": remote.notion_id,
                "notionEdited": remote.edited,
            }
            updated += 1
        else:
            record = WordRecord.from_remote(remote, today=today, now=now, record_id=id_factory())
            records.insert(0, record.to_store_dict())
            created += 1

    return SyncResult(created=created, updated=updated)


# ---- Sync Process ----

def build_default_fetcher() -> Optional[RemoteFetcher]:
    """
    Pick the configured remote source.

    A Notion token means we query Notion directly; otherwise the proxy
    endpoint is used. Returns None when neither is configured.
    """
    if NOTION_TOKEN:
        from core.sync.notion_source import NotionSource

        try:
            return NotionSource.from_config().as_fetcher()
        except SourceError as exc:
            logger.error("[SYNC] Notion source misconfigured (%s): %s", exc.status_code, exc)
            return None
    if NOTION_ENDPOINT:
        return HttpSyncFetcher(NOTION_ENDPOINT, NOTION_DB_ID)
    return None


class SyncMerger:
    """
    Owns the remote fetch, the merge into the store and the standing
    auto-retry.

    The retry timer is single-slot: a new retry replaces any pending one.
    """

    def __init__(
        self,
        store: RecordStore,
        fetcher: Optional[RemoteFetcher] = None,
        retry_timer: Optional[RetryTimer] = None,
        connectivity: Optional[Callable[[], bool]] = None,
        observer: Optional[SyncObserver] = None,
        today_provider: Callable[[], date] = today_date_only,
        sleep: Callable[[float], None] = time.sleep,
        auto_retry_delay: float = AUTO_RETRY_DELAY_SECONDS,
        max_retries: int = SYNC_MAX_RETRIES,
        base_delay: float = SYNC_RETRY_BASE_DELAY_SECONDS
    ):
        self.store = store
        self.fetcher = fetcher
        self.retry_timer = retry_timer or RetryTimer()
        self.connectivity = connectivity or self._default_connectivity
        self.observer = observer
        self.today_provider = today_provider
        self.sleep = sleep
        self.auto_retry_delay = auto_retry_delay
        self.max_retries = max_retries
        self.base_delay = base_delay
        self.last_status: Optional[SyncStatus] = None

    def _default_connectivity(self) -> bool:
        if isinstance(self.fetcher, HttpSyncFetcher):
            return is_online(self.fetcher.endpoint)
        return True

    @property
    def configured(self) -> bool:
        return self.fetcher is not None

    @property
    def retry_pending(self) -> bool:
        return self.retry_timer.pending

    # ---- Status ----

    def _emit(self, status: SyncStatus) -> SyncStatus:
        self.last_status = status
        if self.observer is not None:
            self.observer(status)
        return status

    def _on_retry(self, event: RetryEvent) -> None:
        logger.warning(
            "[SYNC] Attempt %d/%d failed (%s): %s",
            event.attempt, event.max_attempts, event.error_kind, event.error
        )
        self._emit(SyncStatus(
            state=SyncState.RETRYING,
            message=(
                f"Sync failed: {event.error}, preparing retry "
                f"{min(event.next_attempt, event.max_attempts)}/{event.max_attempts}..."
            ),
            retry=event,
            error_kind=event.error_kind,
        ))

    # ---- Operations ----

    def sync_from_remote(self, fetcher: Optional[RemoteFetcher] = None) -> SyncResult:
        """
        Fetch remote records (with retries), merge them and persist once.

        Args:
            fetcher: Override the configured fetcher for this call

        Returns:
            SyncResult with created/updated counts

        Raises:
            SyncError: fetch failed on every attempt
        """
        fetcher = fetcher or self.fetcher
        if fetcher is None:
            raise SyncError("no remote endpoint configured")

        items = fetch_with_retry(
            fetcher,
            max_retries=self.max_retries,
            base_delay=self.base_delay,
            on_retry=self._on_retry,
            sleep=self.sleep,
        )
        today = self.today_provider()
        result = self.store.update(
            lambda records: merge_remote_records(records, items, today=today)
        )
        logger.info("[SYNC] Merged %d remote records: created %d, updated %d",
                    len(items), result.created, result.updated)
        return result

    def auto_sync(self) -> SyncStatus:
        """
        Run one sync round and keep the standing retry alive.

        Never raises: failures become a status message plus a scheduled
        retry after auto_retry_delay seconds.
        """
        if not self.configured:
            return self._emit(SyncStatus(
                state=SyncState.NOT_CONFIGURED,
                message="No Notion endpoint configured.",
            ))

        retry_seconds = round(self.auto_retry_delay)
        if not self.connectivity():
            logger.info("[SYNC] Offline, retrying in %ss", retry_seconds)
            self.schedule_retry()
            return self._emit(SyncStatus(
                state=SyncState.OFFLINE,
                message=f"Currently offline, retrying automatically in {retry_seconds} seconds.",
                error_kind=OfflineError.kind,
            ))

        self._emit(SyncStatus(state=SyncState.SYNCING, message="Pulling from Notion..."))
        try:
            result = self.sync_from_remote()
        except Exception as exc:
            logger.exception("[SYNC] Sync failed")
            self.schedule_retry()
            return self._emit(SyncStatus(
                state=SyncState.FAILED,
                message=f"Sync failed: {exc} (retrying automatically in {retry_seconds} seconds)",
                error_kind=getattr(exc, "kind", "sync"),
            ))

        self.cancel_retry()
        stamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        return self._emit(SyncStatus(
            state=SyncState.SUCCEEDED,
            message=f"Sync complete: created {result.created}, updated {result.updated} ({stamp})",
            result=result,
        ))

    def schedule_retry(self, delay: Optional[float] = None) -> None:
        """Schedule the next auto_sync, replacing any pending one."""
        self.retry_timer.schedule(
            self.auto_retry_delay if delay is None else delay,
            self.auto_sync,
        )

    def cancel_retry(self) -> None:
        self.retry_timer.cancel()
