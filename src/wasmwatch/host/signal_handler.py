"""
Signal handling for the watch host.

SIGINT and SIGTERM set the session's stop event; the original handlers are
restored when the session ends.
"""

import asyncio
import logging
import signal
from typing import Any, Dict

logger = logging.getLogger(__name__)

HANDLED_SIGNALS = (signal.SIGINT, signal.SIGTERM)


class SignalHandler:
    """Routes termination signals to an asyncio stop event."""

    def __init__(self, stop_event: asyncio.Event):
        self.stop_event = stop_event
        self._loop = None
        self._uses_loop_handlers = False
        self._original_handlers: Dict[int, Any] = {}
        self._signal_handlers_set = False

    def setup_signal_handlers(self) -> None:
        """Install handlers on the running event loop."""
        self._loop = asyncio.get_running_loop()
        try:
            for sig in HANDLED_SIGNALS:
                self._loop.add_signal_handler(sig, self._request_stop, sig)
            self._uses_loop_handlers = True
        except NotImplementedError:
            # Event loops without add_signal_handler (Windows)
            for sig in HANDLED_SIGNALS:
                self._original_handlers[sig] = signal.signal(sig, self._threadsafe_handler)
        except RuntimeError as e:
            # Not running in the main thread
            logger.warning(f"Failed to set up signal handlers: {e}")
            return
        self._signal_handlers_set = True
        logger.debug("Signal handlers set up for watch session")

    def cleanup_signal_handlers(self) -> None:
        """Restore the handlers that were active before setup."""
        if not self._signal_handlers_set:
            return
        try:
            if self._uses_loop_handlers:
                for sig in HANDLED_SIGNALS:
                    self._loop.remove_signal_handler(sig)
            else:
                for sig, handler in self._original_handlers.items():
                    signal.signal(sig, handler)
            logger.debug("Signal handlers restored")
        finally:
            self._signal_handlers_set = False
            self._uses_loop_handlers = False
            self._original_handlers.clear()

    def _request_stop(self, signum: int) -> None:
        if self.stop_event.is_set():
            logger.warning("Shutdown already in progress.")
            return
        logger.info(f"Signal {signal.Signals(signum).name} received. Stopping watch session...")
        self.stop_event.set()

    def _threadsafe_handler(self, signum: int, frame: Any) -> None:
        self._loop.call_soon_threadsafe(self._request_stop, signum)
