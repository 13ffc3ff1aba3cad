"""
Shared data structures for the orchestration module.

This module defines the runtime state shared between the orchestrator, the
toolchain runner and the host adapters, plus the timing constants they use.
"""

import asyncio
from collections import deque
from dataclasses import dataclass, field
from typing import Deque, Optional

from ..models.invocation import InvocationOutcome, InvocationRequest, OutcomeStatus


@dataclass
class RuntimeState:
    """
    Runtime state of one orchestrator.

    `current_process` is set while a toolchain child is alive and cleared when
    it has been reaped; if the waiting task is cancelled it stays set so the
    host can terminate the child during teardown.
    """
    current_process: Optional[asyncio.subprocess.Process] = None
    in_flight: Optional[InvocationRequest] = None
    last_outcome: Optional[InvocationOutcome] = None
    history: Deque[InvocationOutcome] = field(
        default_factory=lambda: deque(maxlen=TimeoutConstants.HISTORY_SIZE)
    )

    invocations_started: int = 0
    invocations_succeeded: int = 0
    invocations_failed: int = 0
    spawn_errors: int = 0

    def record(self, outcome: InvocationOutcome) -> None:
        """Record the terminal outcome of one invocation."""
        self.last_outcome = outcome
        self.history.append(outcome)
        if outcome.status is OutcomeStatus.SUCCESS:
            self.invocations_succeeded += 1
        elif outcome.status is OutcomeStatus.FAILURE:
            self.invocations_failed += 1
        else:
            self.spawn_errors += 1

    @property
    def invocations_completed(self) -> int:
        return self.invocations_succeeded + self.invocations_failed + self.spawn_errors


class TimeoutConstants:
    """
    Centralized timing configuration.

    None of these bound a toolchain run; they only apply to host teardown.
    """
    # Process termination timeouts used when the host shuts down
    TERMINATION_GRACEFUL_TIMEOUT = 3
    TERMINATION_INTERRUPT_TIMEOUT = 2
    TERMINATION_FORCE_TIMEOUT = 2

    # Number of outcomes kept in RuntimeState.history
    HISTORY_SIZE = 50
