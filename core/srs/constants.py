"""
Leveled (box) spaced-repetition constants.

A record sits in one of five boxes; passing moves it up one box, failing
sends it back to box 1. The box decides how many days until it is due.
"""

from enum import Enum


# ---- Review Outcomes ----

class ReviewOutcome(str, Enum):
    """User grading of a single recall attempt."""
    PASS = "pass"   # Recalled
    FAIL = "fail"   # Forgot


# ---- Boxes ----

MIN_BOX = 1
MAX_BOX = 5


# ---- Interval Table ----
# Days until the next review, indexed by the box the record moves INTO

INTERVALS = {
    1: 1,
    2: 2,
    3: 4,
    4: 7,
    5: 15,
}

DEFAULT_INTERVAL_DAYS = 1
FAIL_INTERVAL_DAYS = 1
