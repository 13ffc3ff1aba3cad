"""
Configuration validation utilities.

This module turns the raw tables of config.toml into validated configuration
dataclasses. Missing keys fall back to the dataclass defaults.
"""

import logging
from pathlib import Path
from typing import Any, Dict, Optional

from ..models.config import DEFAULT_IGNORE_DIRS, AppConfig, ToolchainConfig, WatchConfig
from ..validation import (
    VALID_TARGETS,
    ValidationError,
    validate_enum_choice,
    validate_file_extension,
    validate_log_level,
    validate_name_list,
    validate_out_name,
    validate_positive_float,
    validate_relative_dir,
    validate_simple_command,
)
from .loader import resolve_config_dir

logger = logging.getLogger(__name__)


def _require_table(data: Any, name: str) -> Dict[str, Any]:
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError(f"[{name}] must be a table", field_name=name, value=data)
    return data


def validate_toolchain_config(
    toolchain_data: Dict[str, Any], config_dir: Optional[Path] = None
) -> ToolchainConfig:
    """
    Validate and create a ToolchainConfig from the raw `[toolchain]` table.

    Args:
        toolchain_data: Raw toolchain table from TOML
        config_dir: Directory used to resolve a relative crate_dir

    Returns:
        Validated ToolchainConfig instance

    Raises:
        ValidationError: If validation fails
    """
    toolchain_data = _require_table(toolchain_data, "toolchain")

    executable = validate_simple_command(
        toolchain_data.get("executable", "wasm-pack"),
        field_name="toolchain.executable",
    )
    out_name = validate_out_name(
        toolchain_data.get("out_name", "index"), field_name="toolchain.out_name"
    )
    out_dir = validate_relative_dir(
        toolchain_data.get("out_dir", "pkg"), field_name="toolchain.out_dir"
    )
    target = validate_enum_choice(
        toolchain_data.get("target", "web"),
        valid_choices=VALID_TARGETS,
        field_name="toolchain.target",
    )
    crate_dir = validate_relative_dir(
        toolchain_data.get("crate_dir", "."), field_name="toolchain.crate_dir"
    )
    if config_dir is not None:
        crate_dir = resolve_config_dir(crate_dir, config_dir)

    return ToolchainConfig(
        executable=executable,
        crate_dir=crate_dir,
        out_name=out_name,
        out_dir=out_dir,
        target=target,
    )


def validate_watch_config(
    watch_data: Dict[str, Any], config_dir: Optional[Path] = None
) -> WatchConfig:
    """
    Validate and create a WatchConfig from the raw `[watch]` table.

    Raises:
        ValidationError: If validation fails
    """
    watch_data = _require_table(watch_data, "watch")

    extension = validate_file_extension(
        watch_data.get("extension", ".rs"), field_name="watch.extension"
    )
    poll_interval = validate_positive_float(
        watch_data.get("poll_interval", 0.5),
        min_value=0.05,  # 50ms minimum
        max_value=60.0,
        field_name="watch.poll_interval",
    )
    ignore_dirs = validate_name_list(
        watch_data.get("ignore_dirs", list(DEFAULT_IGNORE_DIRS)),
        field_name="watch.ignore_dirs",
    )
    root = validate_relative_dir(watch_data.get("root", "."), field_name="watch.root")
    if config_dir is not None:
        root = resolve_config_dir(root, config_dir)

    return WatchConfig(
        extension=extension,
        root=root,
        poll_interval=poll_interval,
        ignore_dirs=ignore_dirs,
    )


def validate_app_config(data: Dict[str, Any], config_dir: Optional[Path] = None) -> AppConfig:
    """Validate the whole parsed config.toml document."""
    logging_data = _require_table(data.get("logging"), "logging")

    app_config = AppConfig(
        toolchain=validate_toolchain_config(data.get("toolchain"), config_dir),
        watch=validate_watch_config(data.get("watch"), config_dir),
        log_level=validate_log_level(
            logging_data.get("level", "INFO"), field_name="logging.level"
        ),
    )
    logger.debug(f"Validated configuration: {app_config}")
    return app_config
