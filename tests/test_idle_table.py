"""Idle table bookkeeping."""

from tab_parker.idle_table import IdleTable


def test_upsert_zero_creates_and_resets_entries():
    table = IdleTable()
    entry = table.upsert_zero(7)
    assert entry.idle_seconds == 0

    entry.idle_seconds = 300
    again = table.upsert_zero(7)
    assert again is entry
    assert again.idle_seconds == 0
    assert len(table) == 1


def test_remove_is_total():
    table = IdleTable()
    table.upsert_zero("a")
    assert table.remove("a") is not None
    assert table.remove("a") is None
    assert table.remove("never-seen") is None
    assert "a" not in table


def test_items_snapshot_allows_removal_while_walking():
    table = IdleTable()
    for tab_id in (1, 2, 3):
        table.upsert_zero(tab_id)

    for tab_id, _entry in table.items():
        table.remove(tab_id)

    assert len(table) == 0


def test_clear_empties_table():
    table = IdleTable()
    table.upsert_zero(1)
    table.upsert_zero(2)
    table.clear()
    assert table.ids() == []
    assert table.get(1) is None
