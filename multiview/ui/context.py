from __future__ import annotations

import threading
from dataclasses import dataclass, field

from multiview.config.model import GlobalConfig
from multiview.core.multiview import MultiView
from multiview.core.scheduler import PollingScheduler


@dataclass
class AppContext:
    """
    Holds what the Dash layer needs: the loaded config, the explorer it
    drives and the scheduler its interval tick polls. Passed into layout and
    callback registration instead of module-level globals.

    The explorer is single-threaded; every callback touching it holds 'lock'.
    """
    global_config: GlobalConfig
    explorer: MultiView
    scheduler: PollingScheduler
    lock: threading.RLock = field(default_factory=threading.RLock)
