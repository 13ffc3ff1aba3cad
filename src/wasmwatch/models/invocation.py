"""
Invocation data models.

An InvocationRequest is created when a host hook fires and lives for exactly
one toolchain run; it is resolved by exactly one InvocationOutcome.
"""

import itertools
import time
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional

from ..validation import ToolchainFailedError, ToolchainSpawnError

_sequence = itertools.count(1)


class TriggerReason(Enum):
    """Why the toolchain is being invoked."""
    INITIAL_BUILD = "initial_build"
    FILE_CHANGE = "file_change"


class OutcomeStatus(Enum):
    """Terminal status of one invocation."""
    SUCCESS = "success"
    FAILURE = "failure"
    SPAWN_ERROR = "spawn_error"


@dataclass(frozen=True)
class InvocationRequest:
    """An intent to run the toolchain once."""

    reason: TriggerReason
    path: Optional[Path] = None
    sequence: int = field(default_factory=lambda: next(_sequence))
    created_at: float = field(default_factory=time.time)

    @classmethod
    def initial_build(cls) -> "InvocationRequest":
        return cls(reason=TriggerReason.INITIAL_BUILD)

    @classmethod
    def file_change(cls, path) -> "InvocationRequest":
        return cls(reason=TriggerReason.FILE_CHANGE, path=Path(path))

    def describe(self) -> str:
        if self.path is not None:
            return f"#{self.sequence} {self.reason.value} ({self.path})"
        return f"#{self.sequence} {self.reason.value}"


@dataclass(frozen=True)
class InvocationOutcome:
    """
    Result of a completed toolchain run.

    The status is a pure function of how the child terminated: exit code 0 is
    SUCCESS, any other code is FAILURE, and a launch failure is SPAWN_ERROR.
    """

    request: InvocationRequest
    status: OutcomeStatus
    returncode: Optional[int] = None
    error: Optional[BaseException] = None
    duration: float = 0.0
    pid: Optional[int] = None

    @classmethod
    def from_returncode(cls, request: InvocationRequest, returncode: int,
                        duration: float = 0.0, pid: Optional[int] = None) -> "InvocationOutcome":
        status = OutcomeStatus.SUCCESS if returncode == 0 else OutcomeStatus.FAILURE
        return cls(request=request, status=status, returncode=returncode,
                   duration=duration, pid=pid)

    @classmethod
    def from_spawn_error(cls, request: InvocationRequest, error: BaseException,
                         duration: float = 0.0) -> "InvocationOutcome":
        return cls(request=request, status=OutcomeStatus.SPAWN_ERROR, error=error,
                   duration=duration)

    @property
    def ok(self) -> bool:
        return self.status is OutcomeStatus.SUCCESS

    def summary(self) -> str:
        if self.status is OutcomeStatus.SPAWN_ERROR:
            return f"{self.request.describe()}: spawn error: {self.error}"
        return (f"{self.request.describe()}: {self.status.value} "
                f"(exit code {self.returncode}, {self.duration:.2f}s)")

    def raise_for_status(self) -> "InvocationOutcome":
        """Return self on success, otherwise raise the matching ToolchainError."""
        if self.status is OutcomeStatus.SPAWN_ERROR:
            raise ToolchainSpawnError(self.summary(), outcome=self)
        if self.status is OutcomeStatus.FAILURE:
            raise ToolchainFailedError(self.summary(), outcome=self)
        return self
