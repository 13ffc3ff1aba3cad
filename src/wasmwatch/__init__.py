"""
wasmwatch: WebAssembly toolchain orchestration for bundler builds.

This package runs the native compiler toolchain (wasm-pack) at the points of a
bundler's lifecycle where a fresh artifact is required: once when a build
starts, and again whenever a relevant source file changes in watch mode.
Invocations are serialized and each one reports exactly one outcome back to
the host.

The package is organized into specialized modules:
- config: Configuration loading and validation
- models: Configuration and invocation data structures
- validation: Exceptions, error handling and value validation
- orchestration: The build orchestrator and toolchain process management
- host: Command line hosts (one-shot build and watch session)
- cli: Command-line interface

Usage:
    From command line:
        wasmwatch build
        wasmwatch watch --crate-dir path/to/crate

    Programmatically:
        from wasmwatch import BuildOrchestrator, get_config
        orchestrator = BuildOrchestrator.from_config(get_config())
        outcome = await orchestrator.on_build_start()
"""

# Main interfaces
from .config import clear_config_cache, get_config, set_config_path
from .orchestration import BuildHooks, BuildOrchestrator, WatchFilterRule
from .host import WatchSession, run_build
from .cli import main_cli

# Model classes for external use
from .models import (
    AppConfig,
    ArtifactPaths,
    InvocationOutcome,
    InvocationRequest,
    OutcomeStatus,
    ToolchainConfig,
    TriggerReason,
    WatchConfig,
)

# Errors
from .validation import (
    BuildAbortedError,
    ToolchainError,
    ToolchainFailedError,
    ToolchainSpawnError,
    ValidationError,
    WasmwatchError,
)

__version__ = "1.0.0"

__all__ = [
    # Main interfaces
    "get_config",
    "clear_config_cache",
    "set_config_path",
    "BuildHooks",
    "BuildOrchestrator",
    "WatchFilterRule",
    "WatchSession",
    "run_build",
    "main_cli",
    # Models
    "AppConfig",
    "ArtifactPaths",
    "InvocationOutcome",
    "InvocationRequest",
    "OutcomeStatus",
    "ToolchainConfig",
    "TriggerReason",
    "WatchConfig",
    # Errors
    "WasmwatchError",
    "ValidationError",
    "ToolchainError",
    "ToolchainFailedError",
    "ToolchainSpawnError",
    "BuildAbortedError",
]
