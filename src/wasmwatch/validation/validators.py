"""
Validation functions for configuration values.

Each validator returns the normalised value or raises ValidationError naming
the offending field.
"""

import re
from pathlib import Path
from typing import Any, List, Optional, Union

from .exceptions import ValidationError

# Toolchain target profiles accepted by wasm-pack
VALID_TARGETS = ["web", "bundler", "nodejs", "no-modules", "deno"]

_EXTENSION_RE = re.compile(r"^\.[A-Za-z0-9_+-]+$")
_OUT_NAME_RE = re.compile(r"^[A-Za-z0-9_][A-Za-z0-9_.-]*$")
_SHELL_OPERATORS = (";", "&", "|", ">", "<", "`", "$(", "\"", "'", "\n", "\r")


def validate_positive_float(
    value: Any,
    min_value: float = 0.0,
    max_value: Optional[float] = None,
    field_name: str = "value"
) -> float:
    """
    Validate that a value is a number within the given bounds.

    Args:
        value: Value to validate
        min_value: Minimum allowed value (inclusive)
        max_value: Maximum allowed value (inclusive), None for no limit
        field_name: Name of the field being validated

    Returns:
        Validated float value

    Raises:
        ValidationError: If validation fails
    """
    if isinstance(value, bool):
        raise ValidationError(
            f"{field_name} must be a valid number, got {value}",
            field_name=field_name,
            value=value
        )
    try:
        float_value = float(value)
    except (ValueError, TypeError):
        raise ValidationError(
            f"{field_name} must be a valid number, got {value}",
            field_name=field_name,
            value=value
        )
    if float_value < min_value:
        raise ValidationError(
            f"{field_name} must be >= {min_value}, got {float_value}",
            field_name=field_name,
            value=value
        )
    if max_value is not None and float_value > max_value:
        raise ValidationError(
            f"{field_name} must be <= {max_value}, got {float_value}",
            field_name=field_name,
            value=value
        )
    return float_value


def validate_enum_choice(
    value: Any,
    valid_choices: List[str],
    field_name: str = "value",
    case_sensitive: bool = True
) -> str:
    """
    Validate that a value is one of the allowed choices.

    Returns:
        The matching choice as spelled in valid_choices

    Raises:
        ValidationError: If the value is not a valid choice
    """
    if not isinstance(value, str):
        raise ValidationError(
            f"{field_name} must be a string, got {type(value).__name__}",
            field_name=field_name,
            value=value
        )

    for choice in valid_choices:
        if value == choice or (not case_sensitive and value.lower() == choice.lower()):
            return choice

    raise ValidationError(
        f"{field_name} must be one of {valid_choices}, got '{value}'",
        field_name=field_name,
        value=value
    )


def validate_simple_command(command: Any, field_name: str = "command") -> str:
    """
    Validate an executable name or path used to launch a tool.

    The value is passed to the OS as a single argv entry, never through a
    shell, so it is returned as written (minus surrounding whitespace).
    Paths containing spaces or backslashes are kept intact; shell operators,
    quotes and line breaks are rejected.

    Examples:
        >>> validate_simple_command(r"C:\\tools\\wasm-pack.exe")
        'C:\\\\tools\\\\wasm-pack.exe'
    """
    if not isinstance(command, str) or not command.strip():
        raise ValidationError(
            f"{field_name} must be a non-empty string",
            field_name=field_name,
            value=command
        )

    command = command.strip()
    if any(op in command for op in _SHELL_OPERATORS):
        raise ValidationError(
            f"{field_name} must name a single executable, got '{command}'",
            field_name=field_name,
            value=command
        )
    return command


def validate_file_extension(value: Any, field_name: str = "extension") -> str:
    """
    Validate a file extension and normalise it to a leading-dot form.

    Examples:
        >>> validate_file_extension("rs")
        '.rs'
    """
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(
            f"{field_name} must be a non-empty string",
            field_name=field_name,
            value=value
        )

    ext = value.strip()
    if not ext.startswith("."):
        ext = "." + ext
    if not _EXTENSION_RE.match(ext):
        raise ValidationError(
            f"{field_name} is not a valid file extension: '{value}'",
            field_name=field_name,
            value=value
        )
    return ext


def validate_out_name(value: Any, field_name: str = "out_name") -> str:
    """Validate an artifact base name (no path separators)."""
    if not isinstance(value, str) or not _OUT_NAME_RE.match(value):
        raise ValidationError(
            f"{field_name} must be a plain file name, got '{value}'",
            field_name=field_name,
            value=value
        )
    return value


def validate_relative_dir(value: Any, field_name: str = "directory") -> Path:
    """Validate a directory setting, returned as a Path (existence is not checked)."""
    if not isinstance(value, (str, Path)) or not str(value).strip():
        raise ValidationError(
            f"{field_name} must be a non-empty path",
            field_name=field_name,
            value=value
        )
    return Path(value)


def validate_name_list(value: Any, field_name: str = "names") -> List[str]:
    """Validate a list of plain directory names."""
    if not isinstance(value, list):
        raise ValidationError(
            f"{field_name} must be a list of strings",
            field_name=field_name,
            value=value
        )
    names = []
    for item in value:
        if not isinstance(item, str) or not item.strip() or "/" in item or "\\" in item:
            raise ValidationError(
                f"{field_name} entries must be plain directory names, got {item!r}",
                field_name=field_name,
                value=value
            )
        names.append(item.strip())
    return names


def validate_log_level(value: Union[str, Any], field_name: str = "log_level") -> str:
    """Validate a logging level name."""
    return validate_enum_choice(
        value,
        valid_choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        field_name=field_name,
        case_sensitive=False,
    )
