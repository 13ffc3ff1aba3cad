"""
Exception types and error handling helpers.

This module provides the exception hierarchy used by the orchestrator and its
host adapters, plus a small set of helpers that log errors consistently and
optionally re-raise them.
"""

import logging
import sys
from enum import Enum
from typing import TYPE_CHECKING, Any, Optional, Union

if TYPE_CHECKING:
    from ..models.invocation import InvocationOutcome

logger = logging.getLogger(__name__)


class ErrorSeverity(Enum):
    """Severity levels for error handling."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class WasmwatchError(Exception):
    """Base class for all errors raised by wasmwatch."""


class ValidationError(WasmwatchError):
    """
    Exception raised when validation fails.

    This is the exception type raised for any invalid configuration value.
    """

    def __init__(self, message: str, field_name: Optional[str] = None,
                 value: Any = None, severity: ErrorSeverity = ErrorSeverity.ERROR):
        super().__init__(message)
        self.field_name = field_name
        self.value = value
        self.severity = severity


class ToolchainError(WasmwatchError):
    """A toolchain invocation did not succeed."""

    def __init__(self, message: str, outcome: Optional["InvocationOutcome"] = None):
        super().__init__(message)
        self.outcome = outcome


class ToolchainSpawnError(ToolchainError):
    """The toolchain executable could not be started at all."""


class ToolchainFailedError(ToolchainError):
    """The toolchain ran and exited with a non-zero status."""


class BuildAbortedError(WasmwatchError):
    """The host must not proceed to bundling because the initial build failed."""

    def __init__(self, message: str, outcome: Optional["InvocationOutcome"] = None):
        super().__init__(message)
        self.outcome = outcome


def handle_error(
    error: Exception,
    context: str,
    severity: Union[ErrorSeverity, str] = ErrorSeverity.ERROR,
    reraise: bool = True,
    logger: Optional[logging.Logger] = None
) -> None:
    """
    Handle errors with consistent logging and optional re-raising.

    Args:
        error: The exception that occurred
        context: Context description of where the error occurred
        severity: Severity level for logging
        reraise: Whether to re-raise the exception after logging
        logger: Logger instance to use (defaults to module logger)
    """
    effective_logger = logger or globals()['logger']

    error_msg = f"Error in {context}: {error}"

    # Handle both enum and string severity values
    if isinstance(severity, str):
        severity_str = severity.lower()
    else:
        severity_str = severity.value

    if severity_str == "debug":
        effective_logger.debug(error_msg, exc_info=True)
    elif severity_str == "info":
        effective_logger.info(error_msg)
    elif severity_str == "warning":
        effective_logger.warning(error_msg)
    elif severity_str == "error":
        effective_logger.error(error_msg)
    elif severity_str == "critical":
        effective_logger.critical(error_msg, exc_info=True)

    if reraise:
        raise error


def handle_config_error(error: Exception, context: str, **kwargs) -> None:
    """Handle configuration-related errors."""
    handle_error(error, f"config {context}", **kwargs)


def handle_toolchain_error(error: Exception, command: str, **kwargs) -> None:
    """Handle errors raised while spawning or waiting on the toolchain."""
    handle_error(error, f"toolchain command '{command}'", **kwargs)


def handle_cli_error(error: Exception, context: str, **kwargs) -> None:
    """Log a CLI-level error and exit the process."""
    exit_code = kwargs.pop('exit_code', 1)
    severity = kwargs.pop('severity', ErrorSeverity.ERROR)

    handle_error(error, f"CLI {context}", severity=severity, reraise=False, **kwargs)

    sys.exit(exit_code)
