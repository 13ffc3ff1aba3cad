"""
Configuration data models.

This module contains the configuration data structures for the toolchain
invocation, the watch filter and application-wide settings.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Tuple

DEFAULT_IGNORE_DIRS = ["target", "pkg", "node_modules", ".git"]


@dataclass
class ToolchainConfig:
    """
    How the native toolchain is launched, loaded from the `[toolchain]` table.
    """

    # Executable name or path, looked up on PATH when not absolute.
    executable: str = "wasm-pack"
    # Crate directory; the toolchain runs with this as its working directory.
    crate_dir: Path = field(default_factory=lambda: Path("."))
    # Base name of the generated module (`--out-name`).
    out_name: str = "index"
    # Output directory produced by the toolchain, relative to crate_dir; may be nested.
    out_dir: Path = field(default_factory=lambda: Path("pkg"))
    # Target profile (`--target`); "web" loads in the browser without a bundler step.
    target: str = "web"

    def build_args(self) -> List[str]:
        """Return the fixed argument list passed after the executable."""
        return [
            "build",
            "--no-pack",
            f"--out-name={self.out_name}",
            f"--target={self.target}",
        ]

    def command(self) -> List[str]:
        """Return the complete argv for one toolchain invocation."""
        return [self.executable] + self.build_args()


@dataclass
class WatchConfig:
    """
    Which file changes trigger a rebuild, loaded from the `[watch]` table.
    """

    # Source extension that makes a change relevant; matched case-insensitively.
    extension: str = ".rs"
    # Directory tree polled in watch mode.
    root: Path = field(default_factory=lambda: Path("."))
    # Seconds between two polls of the watch root.
    poll_interval: float = 0.5
    # Directory names never descended into while polling.
    ignore_dirs: List[str] = field(default_factory=lambda: list(DEFAULT_IGNORE_DIRS))


@dataclass(frozen=True)
class ArtifactPaths:
    """Files the toolchain writes for one build."""

    directory: Path
    module: Path
    wasm: Path

    @classmethod
    def for_toolchain(cls, toolchain: ToolchainConfig) -> "ArtifactPaths":
        directory = Path(toolchain.crate_dir) / toolchain.out_dir
        return cls(
            directory=directory,
            module=directory / f"{toolchain.out_name}.js",
            wasm=directory / f"{toolchain.out_name}_bg.wasm",
        )

    def all(self) -> Tuple[Path, Path]:
        return (self.module, self.wasm)


@dataclass
class AppConfig:
    """
    The root configuration object that aggregates all loaded settings.
    """

    toolchain: ToolchainConfig = field(default_factory=ToolchainConfig)
    watch: WatchConfig = field(default_factory=WatchConfig)
    log_level: str = "INFO"

    @property
    def artifacts(self) -> ArtifactPaths:
        return ArtifactPaths.for_toolchain(self.toolchain)
