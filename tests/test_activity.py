"""Lifecycle signals feeding the idle table."""

from tab_parker.activity import ActivitySink
from tab_parker.idle_table import IdleTable
from tab_parker.memory_host import InMemoryTabHost


def _attached_sink():
    host = InMemoryTabHost()
    table = IdleTable()
    sink = ActivitySink(host, table)
    sink.attach()
    return host, table, sink


def test_created_tab_starts_at_zero():
    host, table, _sink = _attached_sink()
    tab = host.open_tab()
    assert table.get(tab.tab_id).idle_seconds == 0


def test_activation_resets_idle_time():
    host, table, _sink = _attached_sink()
    tab = host.open_tab()
    table.get(tab.tab_id).idle_seconds = 540

    host.activate_tab(tab.tab_id)

    assert table.get(tab.tab_id).idle_seconds == 0


def test_removed_tab_is_dropped_regardless_of_idle_time():
    host, table, _sink = _attached_sink()
    tab = host.open_tab()
    table.get(tab.tab_id).idle_seconds = 840

    host.close_tab(tab.tab_id)

    assert tab.tab_id not in table


def test_detached_sink_ignores_signals():
    host, table, sink = _attached_sink()
    kept = host.open_tab()
    sink.detach()

    host.open_tab()
    host.close_tab(kept.tab_id)

    assert table.ids() == [kept.tab_id]
    assert sink.attached is False


def test_attach_is_idempotent():
    host, table, sink = _attached_sink()
    sink.attach()
    sink.detach()

    host.open_tab()

    assert len(table) == 0
