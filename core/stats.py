"""
Library statistics shown next to the study flow.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Optional, Sequence

from core.config import RECENT_LIST_LIMIT
from core.due_selector import is_due
from core.srs import fmt_date, today_date_only


@dataclass(frozen=True)
class LibraryStats:
    """
    Snapshot of the local word library.
    """
    total: int
    due: int
    ok: int
    bad: int
    recent: list[dict] = field(default_factory=list)


def _count(record: dict, key: str) -> int:
    try:
        return int(record.get(key) or 0)
    except (TypeError, ValueError):
        return 0


def compute_stats(
    records: Sequence[dict],
    today: Optional[date] = None,
    recent_limit: int = RECENT_LIST_LIMIT
) -> LibraryStats:
    """
    Count totals and collect the newest records.

    Args:
        records: Full store list
        today: Reference date for the due count
        recent_limit: Max number of records in `recent`

    Returns:
        LibraryStats with recent sorted by createdAtISO, newest first
    """
    today_iso = fmt_date(today or today_date_only())
    recent = sorted(
        records,
        key=lambda r: r.get("createdAtISO") or "",
        reverse=True,
    )[:recent_limit]

    return LibraryStats(
        total=len(records),
        due=sum(1 for r in records if is_due(r, today_iso)),
        ok=sum(_count(r, "success") for r in records),
        bad=sum(_count(r, "fail") for r in records),
        recent=recent,
    )


def notion_page_url(notion_id: Optional[str]) -> Optional[str]:
    """Public Notion URL for a page id, or None for local-only records."""
    if not notion_id:
        return None
    return f"https://www.notion.so/{str(notion_id).replace('-', '')}"
