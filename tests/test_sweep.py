"""Timer behaviour of the sweep scheduler."""

import pytest

from tab_parker.eviction import EvictionPolicy
from tab_parker.idle_table import IdleTable
from tab_parker.memory_host import InMemoryTabHost
from tab_parker.sweep import SweepScheduler

# One configured second lasts 10 ms in these tests.
FAST = 10


def _scheduler(settings_manager, host=None):
    host = host or InMemoryTabHost()
    table = IdleTable()
    policy = EvictionPolicy(host, table)
    scheduler = SweepScheduler(host, policy, settings_manager, ms_per_second=FAST)
    reports = []
    scheduler.sweepFinished.connect(reports.append)
    return scheduler, host, table, reports


@pytest.fixture
def fast_settings(settings_manager):
    settings_manager.write_values(timeout_seconds=3, tick_seconds=1)
    return settings_manager


def test_scheduler_rearms_and_parks(qtbot, fast_settings):
    scheduler, host, table, reports = _scheduler(fast_settings)
    tab = host.open_tab()
    table.upsert_zero(tab.tab_id)

    scheduler.start(1)
    qtbot.waitUntil(lambda: len(reports) >= 3, timeout=2000)
    scheduler.stop()

    assert host.discard_calls == [tab.tab_id]
    assert tab.tab_id not in table


def test_stop_cancels_pending_firing(qtbot, fast_settings):
    scheduler, host, _table, reports = _scheduler(fast_settings)

    scheduler.start(1)
    scheduler.stop()
    qtbot.wait(100)

    assert reports == []
    assert host.query_count == 0
    assert scheduler.running is False


def test_rearm_does_not_wait_for_slow_queries(qtbot, fast_settings):
    host = InMemoryTabHost(latency_ms=5000)
    scheduler, host, _table, reports = _scheduler(fast_settings, host=host)

    scheduler.start(1)
    qtbot.waitUntil(lambda: host.query_count >= 3, timeout=2000)
    scheduler.stop()

    assert reports == []


def test_results_of_cancelled_sweeps_are_dropped(qtbot, fast_settings):
    host = InMemoryTabHost(latency_ms=50)
    scheduler, host, table, reports = _scheduler(fast_settings, host=host)
    tab = host.open_tab()
    table.upsert_zero(tab.tab_id)

    scheduler.start(1)
    qtbot.waitUntil(lambda: host.query_count >= 1, timeout=2000)
    scheduler.stop()
    qtbot.wait(150)

    assert reports == []
    assert table.get(tab.tab_id).idle_seconds == 0


def test_interval_change_applies_from_next_firing(qtbot, fast_settings):
    scheduler, _host, _table, reports = _scheduler(fast_settings)

    scheduler.start(1)
    fast_settings.write_values(tick_seconds=100)
    qtbot.waitUntil(lambda: len(reports) >= 1, timeout=2000)

    assert scheduler.remaining_ms() > 500
    scheduler.stop()


def test_query_errors_skip_the_sweep(qtbot, fast_settings):
    scheduler, host, table, reports = _scheduler(fast_settings)
    tab = host.open_tab()
    table.upsert_zero(tab.tab_id)
    host.fail_queries = True

    scheduler.start(1)
    qtbot.waitUntil(lambda: host.query_count >= 2, timeout=2000)
    scheduler.stop()

    assert reports == []
    assert table.get(tab.tab_id).idle_seconds == 0
    assert scheduler.running is False


class _ExplodingPolicy(EvictionPolicy):
    def sweep(self, tabs, settings):
        raise RuntimeError("boom")


def test_failing_sweep_is_logged_and_schedule_continues(qtbot, fast_settings):
    host = InMemoryTabHost(latency_ms=1)
    table = IdleTable()
    scheduler = SweepScheduler(host, _ExplodingPolicy(host, table), fast_settings, ms_per_second=FAST)
    reports = []
    scheduler.sweepFinished.connect(reports.append)

    scheduler.start(1)
    qtbot.waitUntil(lambda: host.query_count >= 3, timeout=2000)
    scheduler.stop()

    assert reports == []
