"""
Host adapters that drive the build hooks from the command line.
"""

from .session import WatchSession, run_build
from .signal_handler import SignalHandler
from .watcher import PollingWatcher

__all__ = [
    "PollingWatcher",
    "SignalHandler",
    "WatchSession",
    "run_build",
]
