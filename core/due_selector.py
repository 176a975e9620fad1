"""
Due-set selection for review sessions.

Due = nextDueISO is today or earlier. Dates are fixed-width YYYY-MM-DD
strings, so plain string comparison orders them correctly.
"""

from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from core.config import FALLBACK_SESSION_SIZE
from core.srs import fmt_date, today_date_only


def _due_key(record: dict) -> str:
    return record.get("nextDueISO") or ""


def is_due(record: dict, today_iso: str) -> bool:
    """Records without a due date count as due."""
    return _due_key(record) <= today_iso


def due_records(records: Sequence[dict], today: Optional[date] = None) -> list[dict]:
    """
    Select all due records, oldest-overdue first.

    Ties keep their original store order (sorted() is stable).

    Args:
        records: Full store list
        today: Reference date (defaults to today's local date)

    Returns:
        New list of due records sorted ascending by nextDueISO
    """
    today_iso = fmt_date(today or today_date_only())
    due = [r for r in records if is_due(r, today_iso)]
    return sorted(due, key=_due_key)


def recent_records(records: Sequence[dict], limit: int = FALLBACK_SESSION_SIZE) -> list[dict]:
    """
    The most recently added records, regardless of due date.

    New records are prepended on sync, so store order is recency order.
    """
    return list(records[:limit])
