"""
Data models for the wasmwatch package.
"""

from .config import DEFAULT_IGNORE_DIRS, AppConfig, ArtifactPaths, ToolchainConfig, WatchConfig
from .invocation import InvocationOutcome, InvocationRequest, OutcomeStatus, TriggerReason

__all__ = [
    # Configuration models
    "AppConfig",
    "ArtifactPaths",
    "DEFAULT_IGNORE_DIRS",
    "ToolchainConfig",
    "WatchConfig",
    # Invocation models
    "InvocationOutcome",
    "InvocationRequest",
    "OutcomeStatus",
    "TriggerReason",
]
