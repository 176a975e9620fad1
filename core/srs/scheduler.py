"""
Scheduler - Box Algorithm Logic

Pure scheduling (no store access, no I/O).

Given a record and a grading outcome, compute the patch of schedule
fields to merge back into the record. The caller applies and persists it.
"""

from __future__ import annotations

from datetime import date, timedelta
from typing import Optional, Union

from core.srs.constants import (
    DEFAULT_INTERVAL_DAYS,
    FAIL_INTERVAL_DAYS,
    INTERVALS,
    MAX_BOX,
    MIN_BOX,
    ReviewOutcome,
)


def clamp_box(box: object) -> int:
    """
    Clamp a box value into [MIN_BOX, MAX_BOX].

    Missing or non-numeric values count as MIN_BOX.
    """
    try:
        value = int(box)
    except (TypeError, ValueError):
        return MIN_BOX
    return max(MIN_BOX, min(MAX_BOX, value))


def today_date_only() -> date:
    """Today's local calendar date."""
    return date.today()


def add_days(day: date, days: int) -> date:
    """Date-only arithmetic; no time component, so no timezone drift."""
    return day + timedelta(days=days)


def fmt_date(day: date) -> str:
    """Format as YYYY-MM-DD (lexicographically comparable)."""
    return day.isoformat()


def _counter(record: dict, key: str) -> int:
    try:
        return max(0, int(record.get(key) or 0))
    except (TypeError, ValueError):
        return 0


def _normalize_outcome(outcome: Union[ReviewOutcome, bool, str]) -> ReviewOutcome:
    if isinstance(outcome, ReviewOutcome):
        return outcome
    if isinstance(outcome, bool):
        return ReviewOutcome.PASS if outcome else ReviewOutcome.FAIL
    return ReviewOutcome(outcome)


def compute_schedule_patch(
    record: dict,
    outcome: Union[ReviewOutcome, bool, str],
    today: Optional[date] = None
) -> dict:
    """
    Compute updated schedule fields after a grading action.

    PASS: box moves up one (capped at MAX_BOX), due in INTERVALS[new box]
          days, success counter +1.
    FAIL: box resets to MIN_BOX, due tomorrow, fail counter +1.

    Args:
        record: Current record dict (only box/success/fail are read)
        outcome: ReviewOutcome, or a bool where True means PASS
        today: Reference date (defaults to today's local date)

    Returns:
        Patch dict with box, nextDueISO and either success or fail
    """
    if today is None:
        today = today_date_only()

    outcome = _normalize_outcome(outcome)
    current_box = clamp_box(record.get("box"))

    if outcome is ReviewOutcome.PASS:
        new_box = clamp_box(current_box + 1)
        days = INTERVALS.get(new_box, DEFAULT_INTERVAL_DAYS)
        return {
            "box": new_box,
            "nextDueISO": fmt_date(add_days(today, days)),
            "success": _counter(record, "success") + 1,
        }

    return {
        "box": MIN_BOX,
        "nextDueISO": fmt_date(add_days(today, FAIL_INTERVAL_DAYS)),
        "fail": _counter(record, "fail") + 1,
    }
