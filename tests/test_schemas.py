from datetime import date, datetime, timezone

import pytest
from pydantic import ValidationError

from core.schemas import RemoteWord, WordRecord, nl_split


def test_nl_split():
    assert nl_split(" a \n\n b\n") == ["a", "b"]
    assert nl_split(["x", "y"]) == ["x", "y"]
    assert nl_split(None) == []
    assert nl_split("") == []


def test_remote_word_normalizes_fields():
    remote = RemoteWord.model_validate({
        "notionId": "",
        "word": "  apple ",
        "senses": "one\ntwo",
        "ety": None,
        "unknown": "ignored",
    })
    assert remote.notion_id is None
    assert remote.word == "apple"
    assert remote.senses == ["one", "two"]
    assert remote.ety == ""


def test_present_meta_only_carries_payload_keys():
    remote = RemoteWord.model_validate({"word": "a", "senses": ["s"], "ety": "e"})
    assert remote.present_meta() == {"senses": ["s"], "ety": "e"}
    assert set(remote.full_meta()) == {"pron", "senses", "ety", "same", "coll", "conf", "beans"}


def test_word_record_store_layout():
    remote = RemoteWord.model_validate({"notionId": "n1", "edited": "t", "word": "a"})
    record = WordRecord.from_remote(
        remote,
        today=date(2024, 3, 10),
        now=datetime(2024, 3, 10, tzinfo=timezone.utc),
        record_id="r1",
    ).to_store_dict()

    assert record == {
        "id": "r1",
        "word": "a",
        "note": "",
        "box": 1,
        "nextDueISO": "2024-03-10",
        "createdAtISO": "2024-03-10T00:00:00+00:00",
        "success": 0,
        "fail": 0,
        "meta": {"pron": [], "senses": [], "ety": "", "same": [], "coll": [], "conf": [], "beans": []},
        "notionId": "n1",
        "notionEdited": "t",
    }


@pytest.mark.parametrize("bad", [{"box": 0}, {"box": 6}, {"next_due_iso": "2024-3-1"}])
def test_word_record_rejects_invalid_schedule(bad):
    fields = {"word": "a", "next_due_iso": "2024-03-10", "created_at_iso": "x", **bad}
    with pytest.raises(ValidationError):
        WordRecord(**fields)
