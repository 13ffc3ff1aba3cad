"""
Toolchain process execution.

This module spawns the native compiler toolchain for one invocation and turns
the way the child terminated into an InvocationOutcome. The child's stderr is
inherited so diagnostics reach the operator's console unmodified; stdin and
stdout are attached to the null device.
"""

import asyncio
import logging
import shlex
import shutil
import time
from typing import Optional

from ..models.config import ToolchainConfig
from ..models.invocation import InvocationOutcome, InvocationRequest
from ..validation import ErrorSeverity, handle_toolchain_error
from .shared_state import RuntimeState

logger = logging.getLogger(__name__)


def check_toolchain_installed(executable: str = "wasm-pack") -> bool:
    """Check if the toolchain executable can be found on PATH.

    Returns:
        True if the executable resolves, False otherwise.

    Note:
        A missing toolchain is not fatal here; the next invocation reports it
        as a spawn error.
    """
    return shutil.which(executable) is not None


class ToolchainRunner:
    """
    Runs the toolchain once per call to run().

    The runner does not serialize calls; BuildOrchestrator does.
    """

    def __init__(self, config: ToolchainConfig, state: Optional[RuntimeState] = None):
        self.config = config
        self.state = state if state is not None else RuntimeState()

    @property
    def command_line(self) -> str:
        return shlex.join(self.config.command())

    async def run(self, request: InvocationRequest) -> InvocationOutcome:
        """
        Spawn the toolchain and wait for it to exit.

        Args:
            request: The invocation being resolved

        Returns:
            SUCCESS or FAILURE outcome carrying the exit code, or a SPAWN_ERROR
            outcome if the executable could not be launched.
        """
        argv = self.config.command()
        logger.info(f"Invoking toolchain for {request.describe()}: {self.command_line}")
        start = time.monotonic()

        try:
            process = await asyncio.create_subprocess_exec(
                *argv,
                cwd=str(self.config.crate_dir),
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.DEVNULL,
                stderr=None,
            )
        except OSError as e:
            handle_toolchain_error(
                error=e,
                command=self.command_line,
                severity=ErrorSeverity.ERROR,
                reraise=False,
                logger=logger,
            )
            return InvocationOutcome.from_spawn_error(
                request, e, duration=time.monotonic() - start
            )

        self.state.current_process = process
        logger.debug(f"Toolchain started with PID: {process.pid}")

        returncode = await process.wait()
        self.state.current_process = None

        outcome = InvocationOutcome.from_returncode(
            request, returncode, duration=time.monotonic() - start, pid=process.pid
        )
        if outcome.ok:
            logger.info(f"Toolchain finished: {outcome.summary()}")
        else:
            logger.error(f"Toolchain failed: {outcome.summary()}")
        return outcome
