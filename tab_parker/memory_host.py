"""
In-process tab host.

Keeps a tab model in memory and answers host calls from it. Used by the
default launcher and by the tests; ``latency_ms`` pushes callbacks through
the event loop so that interleaved sweeps can be exercised.
"""

from __future__ import annotations

import itertools
from typing import Callable, Dict, Hashable, List, Optional, Set

from PySide6.QtCore import QTimer

from tab_parker.host import (
    DiscardCallback,
    HostCallError,
    QueryCallback,
    TabHost,
    TabInfo,
    TabQuery,
)


class InMemoryTabHost(TabHost):
    def __init__(self, *, latency_ms: Optional[int] = None) -> None:
        super().__init__()
        self.latency_ms = latency_ms
        self._tabs: Dict[Hashable, TabInfo] = {}
        self._ids = itertools.count(1)
        self.discard_calls: List[Hashable] = []
        self.query_count = 0
        self.fail_queries = False
        self._failing_discards: Set[Hashable] = set()

    # -- tab model -----------------------------------------------------
    def open_tab(self, *, title: str = "", pinned: bool = False, active: bool = False,
                 auto_discardable: bool = True, tab_id: Optional[Hashable] = None) -> TabInfo:
        new_id = tab_id if tab_id is not None else next(self._ids)
        tab = TabInfo(
            tab_id=new_id,
            pinned=pinned,
            auto_discardable=auto_discardable,
            title=title,
        )
        self._tabs[new_id] = tab
        self.tabCreated.emit(new_id)
        if active:
            self.activate_tab(new_id)
        return self._tabs[new_id]

    def close_tab(self, tab_id: Hashable) -> None:
        if self._tabs.pop(tab_id, None) is not None:
            self.tabRemoved.emit(tab_id)

    def activate_tab(self, tab_id: Hashable) -> None:
        """Focus ``tab_id``; activating a parked tab reloads it."""
        for other_id, tab in list(self._tabs.items()):
            if tab.active and other_id != tab_id:
                self._tabs[other_id] = tab.with_changes(active=False)
        self._tabs[tab_id] = self._tabs[tab_id].with_changes(active=True, discarded=False)
        self.tabActivated.emit(tab_id)

    def set_pinned(self, tab_id: Hashable, pinned: bool = True) -> None:
        self._tabs[tab_id] = self._tabs[tab_id].with_changes(pinned=pinned)

    def fail_discard(self, tab_id: Hashable) -> None:
        self._failing_discards.add(tab_id)

    def tab(self, tab_id: Hashable) -> Optional[TabInfo]:
        return self._tabs.get(tab_id)

    def tabs(self) -> List[TabInfo]:
        return list(self._tabs.values())

    # -- host calls ----------------------------------------------------
    def query_tabs(self, query: TabQuery, callback: QueryCallback) -> None:
        self.query_count += 1
        if self.fail_queries:
            self._dispatch(lambda: callback([], HostCallError("Tab query failed")))
            return
        matching = [tab for tab in self._tabs.values() if query.matches(tab)]
        self._dispatch(lambda: callback(matching, None))

    def discard(self, tab_id: Hashable, callback: DiscardCallback) -> None:
        self.discard_calls.append(tab_id)
        if tab_id in self._failing_discards:
            self._dispatch(lambda: callback(None, HostCallError(f"No tab with id: {tab_id}.")))
            return

        tab = self._tabs.get(tab_id)
        if tab is None or tab.discarded or tab.active or not tab.auto_discardable:
            self._dispatch(lambda: callback(None, None))
            return

        parked = tab.with_changes(discarded=True)
        self._tabs[tab_id] = parked
        self._dispatch(lambda: callback(parked, None))

    def _dispatch(self, call: Callable[[], None]) -> None:
        if self.latency_ms is None:
            call()
            return
        QTimer.singleShot(self.latency_ms, call)
