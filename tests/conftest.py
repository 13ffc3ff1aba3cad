"""
Pytest configuration and shared fixtures for the wasmwatch test suite.

This module provides common fixtures, stand-ins for toolchain processes and
runners, and configuration for all test modules.
"""

import shutil
import stat
import sys
import tempfile
from pathlib import Path
from typing import List, Optional, Sequence
from unittest.mock import AsyncMock, patch

import pytest

# Add src to Python path for testing
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from wasmwatch.models import InvocationOutcome, InvocationRequest, ToolchainConfig  # noqa: E402
from wasmwatch.orchestration import RuntimeState  # noqa: E402


# ============================================================================
# Test Configuration
# ============================================================================


def pytest_configure(config):
    """Configure pytest with custom markers and settings."""
    config.addinivalue_line("markers", "unit: mark test as a unit test")
    config.addinivalue_line("markers", "integration: mark test as an integration test")
    config.addinivalue_line("markers", "slow: mark test as slow running")


# ============================================================================
# Toolchain stand-ins
# ============================================================================


class FakeProcess:
    """Minimal stand-in for asyncio.subprocess.Process."""

    def __init__(self, returncode: int = 0, pid: int = 4242):
        self.pid = pid
        self.returncode = None
        self._exit_code = returncode

    async def wait(self) -> int:
        self.returncode = self._exit_code
        return self._exit_code


class StubRunner:
    """ToolchainRunner replacement that resolves requests without spawning."""

    def __init__(self, returncodes: Sequence[int] = (0,), spawn_error: Optional[OSError] = None):
        self.state = RuntimeState()
        self.returncodes = list(returncodes)
        self.spawn_error = spawn_error
        self.calls: List[InvocationRequest] = []

    async def run(self, request: InvocationRequest) -> InvocationOutcome:
        self.calls.append(request)
        if self.spawn_error is not None:
            return InvocationOutcome.from_spawn_error(request, self.spawn_error)
        index = min(len(self.calls), len(self.returncodes)) - 1
        return InvocationOutcome.from_returncode(request, self.returncodes[index])


# ============================================================================
# Core Fixtures
# ============================================================================


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    temp_path = tempfile.mkdtemp()
    yield Path(temp_path)
    shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def toolchain_config(temp_dir):
    """Default toolchain configuration rooted in a temporary crate directory."""
    return ToolchainConfig(crate_dir=temp_dir)


@pytest.fixture
def fake_process():
    """Factory for FakeProcess instances."""
    return FakeProcess


@pytest.fixture
def stub_runner():
    """Factory for StubRunner instances."""
    return StubRunner


@pytest.fixture
def spawn_mock():
    """Patch process creation; every spawn returns a process exiting with 0."""
    with patch("asyncio.create_subprocess_exec", new_callable=AsyncMock) as mock_exec:
        mock_exec.return_value = FakeProcess(0)
        yield mock_exec


@pytest.fixture
def fake_toolchain(temp_dir):
    """
    Write an executable script standing in for wasm-pack.

    The script appends its arguments to `invocations.txt` in its working
    directory, writes one line to stdout and one to stderr, and exits with the
    code stored in `exit_code.txt` (0 when absent).
    """
    if sys.platform == "win32":
        pytest.skip("shebang scripts are not executable on Windows")

    script = temp_dir / "fake-wasm-pack"
    script.write_text(
        f"#!{sys.executable}\n"
        "import pathlib, sys\n"
        "with open('invocations.txt', 'a') as f:\n"
        "    f.write(' '.join(sys.argv[1:]) + '\\n')\n"
        "print('stdout-noise')\n"
        "sys.stderr.write('fake-toolchain: compiling crate\\n')\n"
        "code_file = pathlib.Path('exit_code.txt')\n"
        "sys.exit(int(code_file.read_text()) if code_file.exists() else 0)\n"
    )
    script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return script


@pytest.fixture
def sample_config_text():
    """A complete config.toml document."""
    return (
        "[toolchain]\n"
        'executable = "wasm-pack"\n'
        'crate_dir = "crate"\n'
        'out_name = "index"\n'
        'out_dir = "pkg"\n'
        'target = "web"\n'
        "\n"
        "[watch]\n"
        'extension = ".rs"\n'
        'root = "crate/src"\n'
        "poll_interval = 0.25\n"
        'ignore_dirs = ["target", "pkg"]\n'
        "\n"
        "[logging]\n"
        'level = "debug"\n'
    )


@pytest.fixture
def reset_config(monkeypatch, tmp_path):
    """Isolate tests from the cached configuration singleton."""
    monkeypatch.setattr("wasmwatch.config.manager._CONFIG", None)
    monkeypatch.setattr("wasmwatch.config.manager._CONFIG_FILE_PATH", tmp_path / "missing.toml")
    yield
    monkeypatch.setattr("wasmwatch.config.manager._CONFIG", None)
