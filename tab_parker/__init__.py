"""
Tab Parker: discards the memory of browser tabs left idle for too long.
"""

from .idle_table import IdleEntry, IdleTable  # noqa: F401
from .host import PARKABLE_TABS, TabHost, TabInfo, TabQuery  # noqa: F401
from .settings import ParkerSettings, ParkerSettingsManager  # noqa: F401
