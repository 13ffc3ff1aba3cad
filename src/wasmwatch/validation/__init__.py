"""
Validation and error handling for the wasmwatch package.

This module provides configuration value validation and the exception
hierarchy with consistent error reporting across the application.
"""

from .exceptions import (
    BuildAbortedError,
    ErrorSeverity,
    ToolchainError,
    ToolchainFailedError,
    ToolchainSpawnError,
    ValidationError,
    WasmwatchError,
    handle_cli_error,
    handle_config_error,
    handle_error,
    handle_toolchain_error,
)
from .validators import (
    VALID_TARGETS,
    validate_enum_choice,
    validate_file_extension,
    validate_log_level,
    validate_name_list,
    validate_out_name,
    validate_positive_float,
    validate_relative_dir,
    validate_simple_command,
)

__all__ = [
    # Exceptions
    "WasmwatchError",
    "ValidationError",
    "ToolchainError",
    "ToolchainSpawnError",
    "ToolchainFailedError",
    "BuildAbortedError",
    # Error handling
    "ErrorSeverity",
    "handle_error",
    "handle_config_error",
    "handle_toolchain_error",
    "handle_cli_error",
    # Validators
    "VALID_TARGETS",
    "validate_enum_choice",
    "validate_file_extension",
    "validate_log_level",
    "validate_name_list",
    "validate_out_name",
    "validate_positive_float",
    "validate_relative_dir",
    "validate_simple_command",
]
