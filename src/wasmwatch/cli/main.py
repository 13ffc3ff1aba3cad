"""
Command-line interface for wasmwatch.

This module provides the CLI entry point: `build` runs the toolchain once the
way a bundler's build-start step would, `watch` additionally rebuilds on every
relevant source change until interrupted.
"""

import argparse
import asyncio
import dataclasses
import logging
import sys
import tomllib
from pathlib import Path
from typing import List, Optional

from ..config import get_config, get_config_info, set_config_path
from ..host import WatchSession, run_build
from ..models.config import AppConfig
from ..orchestration import BuildOrchestrator, check_toolchain_installed
from ..validation import (
    BuildAbortedError,
    ValidationError,
    handle_cli_error,
    validate_log_level,
)

# --- Logging Setup ---
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)-5.5s] %(name)s:%(filename)s:%(lineno)d\t %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
    stream=sys.stdout,
)
logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="wasmwatch",
        description="Run the WebAssembly toolchain for a bundler build, once or in watch mode.",
    )
    parser.add_argument(
        "command",
        choices=["build", "watch"],
        help="'build' runs the toolchain once; 'watch' also rebuilds on source changes.",
    )
    parser.add_argument(
        "-c",
        "--config",
        type=Path,
        help="Path to config.toml. Built-in defaults are used if omitted and no default file exists.",
    )
    parser.add_argument(
        "--crate-dir",
        type=Path,
        help="Crate directory to build and watch, overriding the configuration.",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        help="Logging level (DEBUG, INFO, WARNING, ERROR).",
    )
    return parser


def load_app_config(config_path: Optional[Path]) -> AppConfig:
    """Load the configuration file, or fall back to defaults when none is present."""
    if config_path is not None:
        set_config_path(config_path)
    elif not Path(get_config_info()["config_path"]).exists():
        logger.info("No configuration file found, using built-in defaults")
        return AppConfig()
    return get_config()


def apply_overrides(app_config: AppConfig, args: argparse.Namespace) -> AppConfig:
    if args.crate_dir is not None:
        crate_dir = args.crate_dir.resolve()
        app_config = dataclasses.replace(
            app_config,
            toolchain=dataclasses.replace(app_config.toolchain, crate_dir=crate_dir),
            watch=dataclasses.replace(app_config.watch, root=crate_dir),
        )
    if args.log_level is not None:
        app_config = dataclasses.replace(
            app_config, log_level=validate_log_level(args.log_level, field_name="--log-level")
        )
    return app_config


def main_cli(argv: Optional[List[str]] = None) -> None:
    """
    Main command-line interface for wasmwatch.

    Raises:
        SystemExit: 0 on success or a clean watch shutdown, 1 on configuration
            errors or an aborted build.
    """
    args = build_parser().parse_args(argv)

    try:
        app_config = apply_overrides(load_app_config(args.config), args)
    except (FileNotFoundError, tomllib.TOMLDecodeError, ValidationError) as e:
        handle_cli_error(error=e, context="configuration loading", exit_code=1, logger=logger)

    logging.getLogger().setLevel(app_config.log_level)

    executable = app_config.toolchain.executable
    if not check_toolchain_installed(executable):
        logger.warning(
            f"'{executable}' was not found on PATH. Install it (e.g. 'cargo install wasm-pack') "
            "or set toolchain.executable in config.toml."
        )

    orchestrator = BuildOrchestrator.from_config(app_config)

    try:
        if args.command == "build":
            asyncio.run(run_build(orchestrator, app_config.artifacts))
            logger.info("Build completed successfully.")
        else:
            session = WatchSession.from_config(orchestrator, app_config)
            asyncio.run(session.run())
    except BuildAbortedError as e:
        handle_cli_error(error=e, context=f"'{args.command}'", exit_code=1, logger=logger)

    sys.exit(0)


if __name__ == "__main__":
    main_cli()
