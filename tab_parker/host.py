"""
Host-side tab primitives consumed by the parker.

A host exposes tab lifecycle signals plus two callback-style calls:
enumerating eligible tabs and discarding a tab. Callbacks run on the Qt
event loop, possibly long after the call returned.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Callable, Hashable, List, Optional, Union

from PySide6.QtCore import QObject, Signal


@dataclass(frozen=True, slots=True)
class TabInfo:
    tab_id: Hashable
    active: bool = False
    pinned: bool = False
    discarded: bool = False
    auto_discardable: bool = True
    title: str = ""

    def with_changes(self, **changes) -> "TabInfo":
        return replace(self, **changes)


@dataclass(frozen=True, slots=True)
class TabQuery:
    """Filter applied when enumerating tabs; ``None`` fields match anything."""

    discarded: Optional[bool] = None
    auto_discardable: Optional[bool] = None

    def matches(self, tab: TabInfo) -> bool:
        if self.discarded is not None and tab.discarded != self.discarded:
            return False
        if self.auto_discardable is not None and tab.auto_discardable != self.auto_discardable:
            return False
        return True


# Tabs that are still loaded and that the host allows us to discard.
PARKABLE_TABS = TabQuery(discarded=False, auto_discardable=True)

HostError = Union[Exception, str]
QueryCallback = Callable[[List[TabInfo], Optional[HostError]], None]
DiscardCallback = Callable[[Optional[TabInfo], Optional[HostError]], None]


class HostCallError(RuntimeError):
    """Reported by hosts that cannot service a call."""


class TabHost(QObject):
    """Base class for tab hosts. Subclasses implement the two calls."""

    tabCreated = Signal(object)
    tabRemoved = Signal(object)
    tabActivated = Signal(object)

    def query_tabs(self, query: TabQuery, callback: QueryCallback) -> None:
        raise NotImplementedError

    def discard(self, tab_id: Hashable, callback: DiscardCallback) -> None:
        raise NotImplementedError
