"""
Translates host tab lifecycle signals into idle table updates.
"""

from __future__ import annotations

from typing import Hashable, Optional

from tab_parker import logger as app_logger
from tab_parker.host import TabHost
from tab_parker.idle_table import IdleTable


class ActivitySink:
    """
    Resets or drops idle entries as tabs are created, closed or focused.

    The sink only listens while attached. A detached sink ignores every
    signal, so nothing repopulates the table while parking is disabled.
    """

    def __init__(self, host: TabHost, table: IdleTable) -> None:
        self._host = host
        self._table = table
        self._attached = False
        self._logger = app_logger.get_logger()

    @property
    def attached(self) -> bool:
        return self._attached

    def attach(self) -> None:
        if self._attached:
            return
        self._host.tabCreated.connect(self.on_tab_created)
        self._host.tabRemoved.connect(self.on_tab_removed)
        self._host.tabActivated.connect(self.on_tab_activated)
        self._attached = True

    def detach(self) -> None:
        if not self._attached:
            return
        self._attached = False
        self._host.tabCreated.disconnect(self.on_tab_created)
        self._host.tabRemoved.disconnect(self.on_tab_removed)
        self._host.tabActivated.disconnect(self.on_tab_activated)

    def on_tab_created(self, tab_id: Hashable) -> None:
        if not self._attached:
            return
        self._logger.debug("Tab created: {}", tab_id)
        self._table.upsert_zero(tab_id)

    def on_tab_removed(self, tab_id: Hashable) -> None:
        if not self._attached:
            return
        self._logger.debug("Tab removed: {}", tab_id)
        self._table.remove(tab_id)

    def on_tab_activated(self, tab_id: Optional[Hashable]) -> None:
        if not self._attached or tab_id is None:
            return
        self._logger.debug("Tab activated: {}", tab_id)
        self._table.upsert_zero(tab_id)
