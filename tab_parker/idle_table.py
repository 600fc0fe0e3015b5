"""
In-memory idle accounting for tracked tabs.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Hashable, Iterator, List, Optional, Tuple

TabId = Hashable


@dataclass(slots=True)
class IdleEntry:
    tab_id: TabId
    idle_seconds: int = 0


class IdleTable:
    """
    Mapping of tab id to accumulated idle time.

    Pure state: no timers, no host calls. Every operation is total, so
    removing an unknown id or resetting a missing one never raises.
    """

    def __init__(self) -> None:
        self._entries: Dict[TabId, IdleEntry] = {}

    def upsert_zero(self, tab_id: TabId) -> IdleEntry:
        """Create the entry for ``tab_id`` or reset its idle time to zero."""
        entry = self._entries.get(tab_id)
        if entry is None:
            entry = IdleEntry(tab_id=tab_id)
            self._entries[tab_id] = entry
        else:
            entry.idle_seconds = 0
        return entry

    def remove(self, tab_id: TabId) -> Optional[IdleEntry]:
        return self._entries.pop(tab_id, None)

    def get(self, tab_id: TabId) -> Optional[IdleEntry]:
        return self._entries.get(tab_id)

    def items(self) -> List[Tuple[TabId, IdleEntry]]:
        # Snapshot so callers may remove entries while walking the result.
        return list(self._entries.items())

    def ids(self) -> List[TabId]:
        return list(self._entries)

    def clear(self) -> None:
        self._entries.clear()

    def __contains__(self, tab_id: object) -> bool:
        return tab_id in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[TabId]:
        return iter(self.ids())
