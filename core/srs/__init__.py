"""
SRS - leveled box scheduler

Quick start:
    from core import srs

    patch = srs.compute_schedule_patch(record, srs.ReviewOutcome.PASS)
    store.apply_patch(record["id"], patch)
"""

from core.srs.scheduler import (
    compute_schedule_patch,
    clamp_box,
    today_date_only,
    add_days,
    fmt_date,
)

from core.srs.constants import (
    ReviewOutcome,
    MIN_BOX,
    MAX_BOX,
    INTERVALS,
)


__all__ = [
    "compute_schedule_patch",
    "clamp_box",
    "today_date_only",
    "add_days",
    "fmt_date",

    "ReviewOutcome",
    "MIN_BOX",
    "MAX_BOX",
    "INTERVALS",
]
