"""
Build orchestrator bridging host lifecycle hooks to the native toolchain.

Every accepted hook call becomes one InvocationRequest that resolves to
exactly one InvocationOutcome. Requests are serialized: a request that
arrives while another toolchain process is running waits for it to finish,
then starts its own run. Change events are never coalesced.
"""

import asyncio
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

from ..models.config import AppConfig, ToolchainConfig
from ..models.invocation import InvocationOutcome, InvocationRequest, OutcomeStatus
from ..validation import ToolchainSpawnError
from .hooks import BuildHooks
from .shared_state import RuntimeState
from .toolchain import ToolchainRunner
from .watch_filter import WatchFilterRule

logger = logging.getLogger(__name__)


class BuildOrchestrator(BuildHooks):
    """
    Decides when the toolchain runs and reports each run's outcome.

    Failure semantics:
        - Non-zero exit: the hook resolves with a FAILURE outcome and the
          host decides whether to halt.
        - Spawn error: the hook raises ToolchainSpawnError with the
          SPAWN_ERROR outcome attached as ``.outcome``.
        Nothing is retried or recovered locally.
    """

    def __init__(
        self,
        toolchain: ToolchainConfig,
        watch_filter: Optional[WatchFilterRule] = None,
        runner: Optional[ToolchainRunner] = None,
        state: Optional[RuntimeState] = None,
    ):
        if state is None:
            state = runner.state if runner is not None else RuntimeState()
        self.state = state
        self.toolchain = toolchain
        self.watch_filter = watch_filter or WatchFilterRule()
        self.runner = runner or ToolchainRunner(toolchain, self.state)
        self._lock = asyncio.Lock()

    @classmethod
    def from_config(cls, app_config: AppConfig) -> "BuildOrchestrator":
        return cls(
            toolchain=app_config.toolchain,
            watch_filter=WatchFilterRule(app_config.watch.extension),
        )

    async def on_build_start(self) -> InvocationOutcome:
        """Run the toolchain unconditionally, once."""
        return await self.invoke(InvocationRequest.initial_build())

    async def on_watched_file_changed(
        self, path: Union[str, Path]
    ) -> Optional[InvocationOutcome]:
        """
        Run the toolchain if `path` passes the watch filter.

        Returns:
            The invocation outcome, or None when the path was ignored.
        """
        if not self.watch_filter.matches(path):
            logger.debug(f"Ignoring change to {path}")
            return None
        return await self.invoke(InvocationRequest.file_change(path))

    async def invoke(self, request: InvocationRequest) -> InvocationOutcome:
        """
        Resolve one request, waiting for any in-flight invocation first.

        Raises:
            ToolchainSpawnError: If the toolchain could not be launched
        """
        if self._lock.locked():
            in_flight = self.state.in_flight.describe() if self.state.in_flight else "unknown"
            logger.info(f"Request {request.describe()} queued behind in-flight {in_flight}")

        async with self._lock:
            self.state.in_flight = request
            self.state.invocations_started += 1
            try:
                outcome = await self.runner.run(request)
            finally:
                self.state.in_flight = None
            self.state.record(outcome)

        if outcome.status is OutcomeStatus.SPAWN_ERROR:
            raise ToolchainSpawnError(
                f"Could not launch '{self.toolchain.executable}': {outcome.error}",
                outcome=outcome,
            ) from outcome.error
        return outcome

    @property
    def busy(self) -> bool:
        return self._lock.locked()

    def get_status(self) -> Dict[str, Any]:
        """Get a summary of invocations handled so far."""
        last = self.state.last_outcome
        return {
            "busy": self.busy,
            "in_flight": self.state.in_flight.describe() if self.state.in_flight else None,
            "invocations_started": self.state.invocations_started,
            "invocations_completed": self.state.invocations_completed,
            "succeeded": self.state.invocations_succeeded,
            "failed": self.state.invocations_failed,
            "spawn_errors": self.state.spawn_errors,
            "last_status": last.status.value if last else None,
        }
