"""
Toolchain process teardown.

When the host process shuts down while a toolchain child is still running,
the child and everything it spawned (cargo, rustc, wasm-bindgen) are stopped
so nothing keeps writing to the artifact directory after the host is gone.
Invocations themselves are never cancelled by the orchestrator.
"""

import logging
import signal
from typing import List, Optional

import psutil

from .shared_state import RuntimeState, TimeoutConstants

logger = logging.getLogger(__name__)


class ProcessManager:
    """Stops orphaned toolchain process trees during host teardown."""

    # (phase name, signal, seconds to wait after signalling)
    PHASES = [
        ("graceful", signal.SIGTERM, TimeoutConstants.TERMINATION_GRACEFUL_TIMEOUT),
        ("interrupt", signal.SIGINT, TimeoutConstants.TERMINATION_INTERRUPT_TIMEOUT),
        ("force_kill", None, TimeoutConstants.TERMINATION_FORCE_TIMEOUT),
    ]

    def __init__(self, state: RuntimeState):
        self.state = state

    def terminate_in_flight(self) -> bool:
        """
        Terminate the toolchain child recorded in the runtime state, if any.

        Returns:
            True if a live process tree was found and signalled.
        """
        process = self.state.current_process
        if process is None or process.returncode is not None:
            return False

        self.terminate_process_tree(process.pid, "toolchain")
        self.state.current_process = None
        return True

    def terminate_process_tree(self, pid: int, name: str) -> None:
        """
        Stop a process and all of its descendants with escalating signals.

        Children are re-enumerated before every phase since build tools keep
        spawning new workers while they shut down.
        """
        if pid <= 0:
            logger.warning(f"Invalid PID {pid} for {name}, skipping termination")
            return

        try:
            parent = psutil.Process(pid)
        except psutil.NoSuchProcess:
            logger.info(f"{name} (PID: {pid}) already exited")
            return
        except psutil.AccessDenied:
            logger.warning(f"Access denied to {name} (PID: {pid})")
            return

        logger.info(f"Terminating {name} (PID: {pid}) and its children")

        for phase_name, sig, timeout in self.PHASES:
            if not self._is_process_alive(parent):
                break

            targets = [parent] + self._get_process_children(parent)
            signalled = self._signal_all(targets, sig, phase_name)
            remaining = self._wait_for_termination(signalled, timeout)

            if not remaining:
                logger.info(f"{name} tree terminated during phase '{phase_name}'")
                return
            logger.warning(f"Phase '{phase_name}': {len(remaining)} processes still alive")

        if self._is_process_alive(parent):
            logger.error(f"Failed to terminate {name} (PID: {pid})")

    def _is_process_alive(self, process: psutil.Process) -> bool:
        try:
            if not process.is_running():
                return False
            return process.status() not in (psutil.STATUS_ZOMBIE, psutil.STATUS_DEAD)
        except (psutil.NoSuchProcess, psutil.AccessDenied):
            return False

    def _get_process_children(self, parent: psutil.Process) -> List[psutil.Process]:
        try:
            return [c for c in parent.children(recursive=True) if self._is_process_alive(c)]
        except (psutil.NoSuchProcess, psutil.AccessDenied):
            return []

    def _signal_all(self, processes: List[psutil.Process], sig: Optional[int],
                    phase_name: str) -> List[psutil.Process]:
        """Send `sig` (or SIGKILL when None) to each live process."""
        signalled = []
        for process in processes:
            try:
                if sig is None:
                    process.kill()
                else:
                    process.send_signal(sig)
                signalled.append(process)
                logger.debug(f"Phase '{phase_name}': signalled PID {process.pid}")
            except psutil.NoSuchProcess:
                continue
            except psutil.AccessDenied:
                logger.warning(f"Access denied signalling PID {process.pid}")
        return signalled

    def _wait_for_termination(self, processes: List[psutil.Process],
                              timeout: float) -> List[psutil.Process]:
        if not processes:
            return []
        _, still_alive = psutil.wait_procs(processes, timeout=timeout)
        return [p for p in still_alive if self._is_process_alive(p)]
