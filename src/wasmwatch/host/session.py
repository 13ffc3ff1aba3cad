"""
Command line hosts driving the build hooks.

run_build() is the one-shot host: it calls on_build_start() and refuses to
continue if the toolchain failed. WatchSession is the watch-mode host: after
the initial build it forwards every file change to on_watched_file_changed(),
reports failed rebuilds and keeps watching.
"""

import asyncio
import contextlib
import logging
from pathlib import Path
from typing import Optional

from ..models.config import AppConfig, ArtifactPaths
from ..models.invocation import InvocationOutcome
from ..orchestration import BuildHooks, BuildOrchestrator, ProcessManager
from ..validation import BuildAbortedError, ToolchainSpawnError
from .signal_handler import SignalHandler
from .watcher import PollingWatcher

logger = logging.getLogger(__name__)


async def run_build(hooks: BuildHooks,
                    artifacts: Optional[ArtifactPaths] = None) -> InvocationOutcome:
    """
    Perform the build-start step a bundler would run before reading assets.

    Returns:
        The successful outcome.

    Raises:
        BuildAbortedError: If the toolchain failed or could not be launched
    """
    try:
        outcome = await hooks.on_build_start()
    except ToolchainSpawnError as e:
        raise BuildAbortedError(f"Build aborted, toolchain not started: {e}", outcome=e.outcome) from e

    if not outcome.ok:
        raise BuildAbortedError(f"Build aborted: {outcome.summary()}", outcome=outcome)

    if artifacts is not None:
        logger.info(f"Artifact ready: {artifacts.module}")
    return outcome


class WatchSession:
    """
    Watch-mode host.

    The initial build must succeed for the session to start watching. After
    that a failed or unlaunchable rebuild leaves the previous artifact in
    place, is reported, and the session waits for the next change.
    """

    def __init__(self, orchestrator: BuildOrchestrator, watcher: PollingWatcher,
                 artifacts: Optional[ArtifactPaths] = None):
        self.orchestrator = orchestrator
        self.watcher = watcher
        self.artifacts = artifacts
        self.stop_event = asyncio.Event()
        self.signal_handler = SignalHandler(self.stop_event)
        self.process_manager = ProcessManager(orchestrator.state)

        self.rebuilds = 0
        self.failed_rebuilds = 0
        self.ignored_changes = 0

    @classmethod
    def from_config(cls, orchestrator: BuildOrchestrator, app_config: AppConfig) -> "WatchSession":
        return cls(orchestrator, PollingWatcher.from_config(app_config.watch), app_config.artifacts)

    async def run(self) -> None:
        """
        Run until stopped by a signal or by stop().

        Raises:
            BuildAbortedError: If the initial build fails
        """
        self.signal_handler.setup_signal_handlers()
        loop_task = asyncio.create_task(self._watch_loop(), name="wasmwatch-loop")
        stop_task = asyncio.create_task(self.stop_event.wait(), name="wasmwatch-stop")
        try:
            done, _ = await asyncio.wait(
                {loop_task, stop_task}, return_when=asyncio.FIRST_COMPLETED
            )
            if loop_task in done:
                loop_task.result()
            else:
                logger.info("Stopping watch session...")
                loop_task.cancel()
                with contextlib.suppress(asyncio.CancelledError):
                    await loop_task
        finally:
            stop_task.cancel()
            await self.teardown()

    def stop(self) -> None:
        self.stop_event.set()

    async def teardown(self) -> None:
        """
        Terminate a toolchain run abandoned by shutdown and restore signals.

        Process-tree termination waits on the child between escalation
        phases, so it runs in the default executor.
        """
        loop = asyncio.get_running_loop()
        try:
            if await loop.run_in_executor(None, self.process_manager.terminate_in_flight):
                logger.warning("Terminated in-flight toolchain run; artifact may be incomplete")
        finally:
            self.signal_handler.cleanup_signal_handlers()
        logger.info(
            f"Watch session ended: {self.rebuilds} rebuilds, "
            f"{self.failed_rebuilds} failed, {self.ignored_changes} ignored changes"
        )

    async def _watch_loop(self) -> None:
        await run_build(self.orchestrator, self.artifacts)
        logger.info(f"Watching {self.watcher.root} for '*{self.orchestrator.watch_filter.extension}' changes")
        async for path in self.watcher.changes(self.stop_event):
            await self.handle_change(path)

    async def handle_change(self, path: Path) -> Optional[InvocationOutcome]:
        """Forward one change event to the orchestrator and report the result."""
        try:
            outcome = await self.orchestrator.on_watched_file_changed(path)
        except ToolchainSpawnError as e:
            self.failed_rebuilds += 1
            logger.error(f"Rebuild for {path} not started: {e}")
            self._report_stale()
            return e.outcome

        if outcome is None:
            self.ignored_changes += 1
            return None

        if outcome.ok:
            self.rebuilds += 1
            logger.info(f"Rebuilt after change to {path}")
        else:
            self.failed_rebuilds += 1
            logger.error(f"Rebuild failed after change to {path} (exit code {outcome.returncode})")
            self._report_stale()
        return outcome

    def _report_stale(self) -> None:
        if self.artifacts is not None:
            logger.warning(f"Previous artifact left in place: {self.artifacts.module}")
