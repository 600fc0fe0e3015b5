"""
Idle ageing and parking decisions for a single sweep.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Hashable, Iterable, List, Optional, Set

from tab_parker import logger as app_logger
from tab_parker.host import HostError, TabHost, TabInfo
from tab_parker.idle_table import IdleTable
from tab_parker.settings import ParkerSettings


@dataclass(slots=True)
class SweepReport:
    exempted: List[Hashable] = field(default_factory=list)
    aged: List[Hashable] = field(default_factory=list)
    parked: List[Hashable] = field(default_factory=list)
    skipped: List[Hashable] = field(default_factory=list)


def exempt_tab_ids(tabs: Iterable[TabInfo], *, skip_pinned: bool) -> Set[Hashable]:
    """Ids that must not age this sweep: the focused tab and, optionally, pinned ones."""
    return {tab.tab_id for tab in tabs if tab.active or (skip_pinned and tab.pinned)}


class EvictionPolicy:
    """
    Ages idle entries by one tick and parks the ones that timed out.

    Parking removes the entry before the host is asked to discard, so two
    interleaved sweeps can never park the same tab twice. Whatever the
    host answers, the entry stays gone.
    """

    def __init__(self, host: TabHost, table: IdleTable) -> None:
        self._host = host
        self._table = table
        self._logger = app_logger.get_logger()

    def sweep(self, tabs: List[TabInfo], settings: ParkerSettings) -> SweepReport:
        report = SweepReport()
        exempt = exempt_tab_ids(tabs, skip_pinned=settings.skip_pinned)
        listed = {tab.tab_id for tab in tabs}

        for tab_id, entry in self._table.items():
            if tab_id in exempt:
                entry.idle_seconds = 0
                report.exempted.append(tab_id)
                continue

            if tab_id not in listed:
                report.skipped.append(tab_id)
                continue

            entry.idle_seconds += settings.tick_seconds
            report.aged.append(tab_id)
            if entry.idle_seconds >= settings.timeout_seconds:
                self.park(tab_id)
                report.parked.append(tab_id)

        self._logger.debug(
            "Sweep done: exempted={}, aged={}, parked={}, skipped={}",
            len(report.exempted),
            len(report.aged),
            len(report.parked),
            len(report.skipped),
        )
        return report

    def park(self, tab_id: Hashable) -> None:
        if self._table.remove(tab_id) is None:
            return
        self._logger.info("Parking idle tab {}", tab_id)
        try:
            self._host.discard(tab_id, lambda tab, error: self._on_discarded(tab_id, tab, error))
        except Exception as exc:  # host bindings may raise instead of reporting
            self._logger.error("Tab discard error for {}: {}", tab_id, exc)

    def _on_discarded(self, tab_id: Hashable, tab: Optional[TabInfo], error: Optional[HostError]) -> None:
        try:
            self._report_discard(tab_id, tab, error)
        except Exception:
            self._logger.exception("Failed to handle discard result for tab {}", tab_id)

    def _report_discard(self, tab_id: Hashable, tab: Optional[TabInfo], error: Optional[HostError]) -> None:
        if error is not None:
            self._logger.warning("Tab discard error for {}: {}", tab_id, error)
            return
        if tab is None:
            self._logger.info("Tab was not discarded: {}", tab_id)
            return
        self._logger.info("Tab discarded: {}", tab_id)
