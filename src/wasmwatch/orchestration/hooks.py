"""
The interface a host build system calls into.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional, Union

from ..models.invocation import InvocationOutcome


class BuildHooks(ABC):
    """
    Lifecycle hooks invoked by a host bundler.

    Host adapters depend only on this interface, so the orchestrator can be
    driven by the bundled command line hosts or by any other integration.
    """

    @abstractmethod
    async def on_build_start(self) -> InvocationOutcome:
        """Called once per build before the host reads the artifact."""

    @abstractmethod
    async def on_watched_file_changed(
        self, path: Union[str, Path]
    ) -> Optional[InvocationOutcome]:
        """Called once per detected file change in watch mode."""
