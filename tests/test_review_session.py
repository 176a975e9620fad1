"""
Tests for the review session state machine.
"""

from datetime import date

import pytest

from conftest import make_record

from core.errors import EmptyStoreError, ImportValidationError
from core.review_session import ReviewSession, SessionState
from core.srs import ReviewOutcome

TODAY = date(2024, 3, 10)


def _session(store, **kwargs):
    return ReviewSession(store, today_provider=lambda: TODAY, **kwargs)


class TestStart:

    def test_empty_store_raises_and_stays_idle(self, store):
        session = _session(store)
        with pytest.raises(EmptyStoreError, match="No words to review"):
            session.start()
        assert session.state is SessionState.IDLE

    def test_due_records_first(self, seeded_store):
        store = seeded_store([
            make_record("later", nextDueISO="2024-03-20"),
            make_record("due", nextDueISO="2024-03-09"),
        ])
        queue = _session(store).start()
        assert [r["word"] for r in queue] == ["due"]

    def test_falls_back_to_recent_when_nothing_due(self, seeded_store):
        records = [make_record(f"w{i}", nextDueISO="2024-04-01") for i in range(25)]
        session = _session(seeded_store(records))
        queue = session.start()
        assert len(queue) == 20
        assert queue[0]["word"] == "w0"
        assert session.state is SessionState.ACTIVE


class TestGrade:

    def test_grade_applies_patch_to_store_and_advances(self, seeded_store):
        store = seeded_store([make_record("a", box=2), make_record("b")])
        session = _session(store)
        session.start()

        patch = session.grade(ReviewOutcome.PASS)

        assert patch["box"] == 3
        stored = store.get("id-a")
        assert stored["box"] == 3
        assert stored["nextDueISO"] == "2024-03-14"
        assert stored["success"] == 1
        assert session.position == 1
        assert session.current["word"] == "b"
        assert session.progress == 0.5

    def test_queue_is_a_snapshot(self, seeded_store):
        store = seeded_store([make_record("a"), make_record("b")])
        session = _session(store)
        session.start()
        session.grade(True)

        # "a" is no longer due but stays where it was in the queue
        assert [r["word"] for r in session.queue] == ["a", "b"]
        assert session.current["word"] == "b"

    def test_grade_without_session_raises(self, store):
        with pytest.raises(RuntimeError):
            _session(store).grade(True)

    def test_detail_panel_resets_on_advance(self, seeded_store):
        session = _session(seeded_store([make_record("a"), make_record("b")]))
        session.start()
        assert session.toggle_detail() is True
        session.grade(False)
        assert session.detail_expanded is False
        assert session.toggle_detail(force=False) is False


class TestFinish:

    def test_finishes_immediately_without_scheduler(self, seeded_store):
        finished = []
        session = _session(seeded_store([make_record("a")]), on_finished=lambda: finished.append(1))
        session.start()
        session.grade(False)

        assert session.state is SessionState.IDLE
        assert finished == [1]
        assert (session.passed, session.failed) == (0, 1)

    def test_finish_waits_for_display_delay(self, seeded_store, scheduler):
        finished = []
        session = _session(
            seeded_store([make_record("a"), make_record("b")]),
            on_finished=lambda: finished.append(1),
            scheduler=scheduler,
        )
        session.start()
        session.grade(True)
        session.grade(True)

        assert session.state is SessionState.FINISHED
        assert session.current is None
        assert [h.delay for h in scheduler.handles] == [0.3]
        assert finished == []

        scheduler.fire(scheduler.handles[0])
        assert session.state is SessionState.IDLE
        assert finished == [1]
        assert session.graded == 2

    def test_exit_keeps_applied_grades(self, seeded_store):
        store = seeded_store([make_record("a"), make_record("b")])
        finished = []
        session = _session(store, on_finished=lambda: finished.append(1))
        session.start()
        session.grade(False)
        session.exit()

        assert session.state is SessionState.IDLE
        assert finished == [1]
        assert store.get("id-a")["fail"] == 1
        assert store.get("id-b")["fail"] == 0


def test_rejected_import_keeps_sessions_working(seeded_store):
    store = seeded_store([make_record("a")])
    with pytest.raises(ImportValidationError):
        store.import_json("[1, 2]")

    queue = _session(store).start()
    assert [r["word"] for r in queue] == ["a"]
