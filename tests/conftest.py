import json
from datetime import date, datetime, timezone

import pytest

from core.blob_store import MemoryBlobStore
from core.config import STORE_KEY
from core.record_store import RecordStore


TODAY = date(2024, 3, 10)
NOW = datetime(2024, 3, 10, 9, 30, tzinfo=timezone.utc)


class ManualHandle:
    def __init__(self, delay, callback):
        self.delay = delay
        self.callback = callback
        self.cancelled = False

    def cancel(self):
        self.cancelled = True


class ManualScheduler:
    """Records call_later requests; tests fire them explicitly."""

    def __init__(self):
        self.handles: list[ManualHandle] = []

    def call_later(self, delay, callback):
        handle = ManualHandle(delay, callback)
        self.handles.append(handle)
        return handle

    @property
    def live(self) -> list[ManualHandle]:
        return [h for h in self.handles if not h.cancelled]

    def fire(self, handle: ManualHandle):
        handle.callback()


class FakeSleep:
    def __init__(self):
        self.calls: list[float] = []

    def __call__(self, seconds):
        self.calls.append(seconds)


def make_record(word, **overrides):
    record = {
        "id": f"id-{word}",
        "word": word,
        "note": "",
        "box": 1,
        "nextDueISO": TODAY.isoformat(),
        "createdAtISO": NOW.isoformat(),
        "success": 0,
        "fail": 0,
        "meta": {},
        "notionId": None,
        "notionEdited": None,
    }
    record.update(overrides)
    return record


@pytest.fixture
def today():
    return TODAY


@pytest.fixture
def blob_store():
    return MemoryBlobStore()


@pytest.fixture
def store(blob_store):
    return RecordStore(blob_store)


@pytest.fixture
def seeded_store():
    """Build a store pre-filled with the given records."""
    def _build(records):
        blob = MemoryBlobStore({STORE_KEY: json.dumps(records)})
        return RecordStore(blob)
    return _build


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def fake_sleep():
    return FakeSleep()


class SteppingClock:
    """Monotonic clock stand-in that tests advance by hand."""

    def __init__(self, start: float = 100.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return SteppingClock()
