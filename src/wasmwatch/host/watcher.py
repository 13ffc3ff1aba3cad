"""
Polling file watcher for the command line watch host.

Every poll takes a snapshot of (mtime, size) for the files below the watch
root and compares it with the previous one. Each changed, added or removed
path is reported once per poll, in sorted order.
"""

import asyncio
import logging
import os
from pathlib import Path
from typing import AsyncIterator, Dict, Iterable, List, Optional, Tuple

from ..models.config import DEFAULT_IGNORE_DIRS, WatchConfig

logger = logging.getLogger(__name__)

Snapshot = Dict[Path, Tuple[int, int]]


class PollingWatcher:
    """Reports file-system changes below a root directory."""

    def __init__(self, root: Path, poll_interval: float = 0.5,
                 ignore_dirs: Optional[Iterable[str]] = None):
        self.root = Path(root)
        self.poll_interval = poll_interval
        self.ignore_dirs = set(DEFAULT_IGNORE_DIRS if ignore_dirs is None else ignore_dirs)
        self._snapshot: Optional[Snapshot] = None

    @classmethod
    def from_config(cls, watch: WatchConfig) -> "PollingWatcher":
        return cls(watch.root, watch.poll_interval, watch.ignore_dirs)

    def snapshot(self) -> Snapshot:
        """Stat every file below the root, skipping ignored directories."""
        entries: Snapshot = {}
        for dirpath, dirnames, filenames in os.walk(self.root):
            dirnames[:] = sorted(d for d in dirnames if d not in self.ignore_dirs)
            for filename in filenames:
                path = Path(dirpath) / filename
                try:
                    st = path.stat()
                except FileNotFoundError:
                    # Removed between listing and stat
                    continue
                entries[path] = (st.st_mtime_ns, st.st_size)
        return entries

    @staticmethod
    def diff(old: Snapshot, new: Snapshot) -> List[Path]:
        """Paths added, removed or modified between two snapshots."""
        changed = {p for p, sig in new.items() if old.get(p) != sig}
        changed.update(p for p in old if p not in new)
        return sorted(changed)

    def prime(self) -> None:
        """Take the baseline snapshot that the first poll is compared against."""
        self._snapshot = self.snapshot()
        logger.debug(f"Watching {len(self._snapshot)} files below {self.root}")

    def poll(self) -> List[Path]:
        """Return the paths changed since the previous poll."""
        if self._snapshot is None:
            self.prime()
            return []
        current = self.snapshot()
        changed = self.diff(self._snapshot, current)
        self._snapshot = current
        return changed

    async def changes(self, stop_event: Optional[asyncio.Event] = None) -> AsyncIterator[Path]:
        """
        Yield changed paths until `stop_event` is set.

        The next poll happens only after the consumer has finished with the
        previously yielded path, so changes made during a rebuild are picked
        up by the following poll. Directory walks run in the default executor
        so a large tree does not stall the event loop.
        """
        loop = asyncio.get_running_loop()
        if self._snapshot is None:
            await loop.run_in_executor(None, self.prime)
        while stop_event is None or not stop_event.is_set():
            await asyncio.sleep(self.poll_interval)
            changed = await loop.run_in_executor(None, self.poll)
            for path in changed:
                yield path
