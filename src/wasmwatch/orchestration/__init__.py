"""
Orchestration module for toolchain invocations.

Components:
- BuildOrchestrator: hook implementation, serialization and outcome reporting
- BuildHooks: interface host adapters call into
- ToolchainRunner: spawns one toolchain process per invocation
- WatchFilterRule: decides which file changes are relevant
- ProcessManager: process tree teardown on host shutdown
"""

from .hooks import BuildHooks
from .orchestrator import BuildOrchestrator
from .process_manager import ProcessManager
from .shared_state import RuntimeState, TimeoutConstants
from .toolchain import ToolchainRunner, check_toolchain_installed
from .watch_filter import WatchFilterRule

__all__ = [
    "BuildHooks",
    "BuildOrchestrator",
    "ProcessManager",
    "RuntimeState",
    "TimeoutConstants",
    "ToolchainRunner",
    "WatchFilterRule",
    "check_toolchain_installed",
]
