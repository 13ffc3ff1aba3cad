"""
Integration tests running a real executable in place of wasm-pack.
"""

import pytest

from wasmwatch.models import OutcomeStatus, ToolchainConfig
from wasmwatch.orchestration import BuildOrchestrator
from wasmwatch.validation import ToolchainSpawnError

pytestmark = pytest.mark.integration

EXPECTED_ARGS = "build --no-pack --out-name=index --target=web"


@pytest.fixture
def orchestrator(fake_toolchain, temp_dir):
    return BuildOrchestrator(ToolchainConfig(executable=str(fake_toolchain), crate_dir=temp_dir))


def read_invocations(temp_dir):
    path = temp_dir / "invocations.txt"
    return path.read_text().splitlines() if path.exists() else []


@pytest.mark.asyncio
async def test_build_start_success(orchestrator, temp_dir):
    """Scenario A: initial build exits 0."""
    outcome = await orchestrator.on_build_start()

    assert outcome.status is OutcomeStatus.SUCCESS
    assert outcome.returncode == 0
    assert outcome.pid is not None
    assert read_invocations(temp_dir) == [EXPECTED_ARGS]


@pytest.mark.asyncio
async def test_rust_change_with_compile_error(orchestrator, temp_dir, capfd):
    """Scenario B: matching change, toolchain exits 1, diagnostics already on stderr."""
    (temp_dir / "exit_code.txt").write_text("1")

    outcome = await orchestrator.on_watched_file_changed("src/foo.rs")

    assert outcome.status is OutcomeStatus.FAILURE
    assert outcome.returncode == 1
    assert read_invocations(temp_dir) == [EXPECTED_ARGS]
    captured = capfd.readouterr()
    assert "fake-toolchain: compiling crate" in captured.err
    assert "stdout-noise" not in captured.out


@pytest.mark.asyncio
async def test_non_rust_change_spawns_nothing(orchestrator, temp_dir):
    """Scenario C: non-matching change resolves immediately without a process."""
    assert await orchestrator.on_watched_file_changed("src/Main.vue") is None
    assert read_invocations(temp_dir) == []


@pytest.mark.asyncio
async def test_missing_toolchain(temp_dir):
    """Scenario D: executable absent from PATH, no process ever runs."""
    orchestrator = BuildOrchestrator(
        ToolchainConfig(executable="wasmwatch-test-missing-toolchain", crate_dir=temp_dir)
    )

    with pytest.raises(ToolchainSpawnError) as exc_info:
        await orchestrator.on_build_start()

    assert exc_info.value.outcome.status is OutcomeStatus.SPAWN_ERROR
    assert isinstance(exc_info.value.outcome.error, FileNotFoundError)
    assert orchestrator.state.current_process is None


@pytest.mark.asyncio
async def test_back_to_back_invocations_both_run(orchestrator, temp_dir):
    first = await orchestrator.on_build_start()
    second = await orchestrator.on_build_start()

    assert first.ok and second.ok
    assert first.request.sequence < second.request.sequence
    assert read_invocations(temp_dir) == [EXPECTED_ARGS, EXPECTED_ARGS]


@pytest.mark.asyncio
async def test_missing_crate_dir_is_spawn_error(fake_toolchain, temp_dir):
    orchestrator = BuildOrchestrator(
        ToolchainConfig(executable=str(fake_toolchain), crate_dir=temp_dir / "no-such-crate")
    )

    with pytest.raises(ToolchainSpawnError):
        await orchestrator.on_build_start()
