"""
Review session state machine.

IDLE --start()--> ACTIVE --grade() x N--> FINISHED --(delay)--> IDLE

The queue is a snapshot taken at start(); it is never reordered or
skipped while the session runs. Each grade is applied to the stored
record with the same id and persisted before advancing.
"""

from __future__ import annotations

from datetime import date
from enum import Enum
from typing import Callable, Optional, Union

from core.config import FALLBACK_SESSION_SIZE, FINISH_DISPLAY_DELAY_SECONDS
from core.due_selector import due_records, recent_records
from core.errors import EmptyStoreError
from core.log import get_logger
from core.record_store import RecordStore
from core import srs
from core.timers import TaskScheduler

logger = get_logger(__name__)


EMPTY_STORE_MESSAGE = "No words to review yet. Make sure the Notion sync has completed."


class SessionState(str, Enum):
    IDLE = "idle"
    ACTIVE = "active"
    FINISHED = "finished"


class ReviewSession:
    """
    Drives one pass through a snapshot queue of records.
    """

    def __init__(
        self,
        store: RecordStore,
        today_provider: Callable[[], date] = srs.today_date_only,
        on_finished: Optional[Callable[[], None]] = None,
        scheduler: Optional[TaskScheduler] = None,
        finish_delay: float = FINISH_DISPLAY_DELAY_SECONDS,
        fallback_size: int = FALLBACK_SESSION_SIZE
    ):
        self.store = store
        self.today_provider = today_provider
        self.on_finished = on_finished
        self.scheduler = scheduler
        self.finish_delay = finish_delay
        self.fallback_size = fallback_size

        self.state = SessionState.IDLE
        self.queue: list[dict] = []
        self.position = 0
        self.detail_expanded = False
        self.passed = 0
        self.failed = 0

    # ---- Read-only View ----

    @property
    def current(self) -> Optional[dict]:
        if self.state is not SessionState.ACTIVE or self.position >= len(self.queue):
            return None
        return self.queue[self.position]

    @property
    def progress(self) -> float:
        """Fraction of the queue already graded (0.0 - 1.0)."""
        if not self.queue:
            return 0.0
        return min(1.0, self.position / len(self.queue))

    @property
    def graded(self) -> int:
        return self.passed + self.failed

    # ---- Transitions ----

    def start(self) -> list[dict]:
        """
        Build the queue and enter ACTIVE.

        Due records first; if none are due, the most recent records.

        Raises:
            EmptyStoreError: the store has no records at all
        """
        records = self.store.load()
        queue = due_records(records, self.today_provider())
        if not queue:
            queue = recent_records(records, self.fallback_size)
        if not queue:
            raise EmptyStoreError(EMPTY_STORE_MESSAGE)

        self.queue = list(queue)
        self.position = 0
        self.detail_expanded = False
        self.passed = 0
        self.failed = 0
        self.state = SessionState.ACTIVE
        logger.info("[SESSION] Started with %d cards", len(self.queue))
        return self.queue

    def grade(self, outcome: Union[srs.ReviewOutcome, bool]) -> dict:
        """
        Grade the current record, persist the patch and advance.

        Returns:
            The schedule patch that was applied

        Raises:
            RuntimeError: no active session
        """
        record = self.current
        if record is None:
            raise RuntimeError("No active review session")

        patch = srs.compute_schedule_patch(record, outcome, self.today_provider())
        self.store.apply_patch(record.get("id"), patch)

        if "success" in patch:
            self.passed += 1
        else:
            self.failed += 1

        self._advance()
        return patch

    def toggle_detail(self, force: Optional[bool] = None) -> bool:
        """Open/close the card's detail panel (presentation only)."""
        self.detail_expanded = (not self.detail_expanded) if force is None else bool(force)
        return self.detail_expanded

    def exit(self) -> None:
        """Abandon the session; already-applied grades stay."""
        self._reset()
        self._notify_finished()

    def _advance(self) -> None:
        self.position += 1
        self.detail_expanded = False
        if self.position < len(self.queue):
            return

        self.state = SessionState.FINISHED
        logger.info("[SESSION] Finished: %d passed, %d failed", self.passed, self.failed)
        if self.scheduler is None:
            self._close()
        else:
            self.scheduler.call_later(self.finish_delay, self._close)

    def _close(self) -> None:
        if self.state is not SessionState.FINISHED:
            return
        self._reset()
        self._notify_finished()

    def _reset(self) -> None:
        self.state = SessionState.IDLE
        self.detail_expanded = False

    def _notify_finished(self) -> None:
        if self.on_finished is not None:
            self.on_finished()
