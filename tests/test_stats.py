from datetime import date

from conftest import make_record

from core.stats import compute_stats, notion_page_url


def test_counts_and_recent_order():
    records = [
        make_record("a", nextDueISO="2024-03-10", success=2, fail=1, createdAtISO="2024-03-01T00:00:00+00:00"),
        make_record("b", nextDueISO="2024-03-12", success=1, createdAtISO="2024-03-05T00:00:00+00:00"),
        make_record("c", nextDueISO="2024-03-01", fail=3, createdAtISO="2024-02-01T00:00:00+00:00"),
    ]
    stats = compute_stats(records, date(2024, 3, 10), recent_limit=2)

    assert (stats.total, stats.due, stats.ok, stats.bad) == (3, 2, 3, 4)
    assert [r["word"] for r in stats.recent] == ["b", "a"]


def test_empty_library():
    stats = compute_stats([], date(2024, 3, 10))
    assert (stats.total, stats.due, stats.ok, stats.bad, stats.recent) == (0, 0, 0, 0, [])


def test_notion_page_url():
    assert notion_page_url("1234-abcd-5678") == "https://www.notion.so/1234abcd5678"
    assert notion_page_url(None) is None
