"""Turn SIGINT/SIGTERM into a kill of the sampling timer.

A signal handler must not take the timer's lock: Python runs handlers in
the main thread between bytecodes, possibly while that thread already
holds the condition. The handler therefore only sets a plain flag, and a
poller thread turns the flag into ``timer.kill()`` from a normal context.
"""

from __future__ import annotations

import logging
import signal
import threading
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .timer import KillableTimer

log = logging.getLogger(__name__)

# How often the poller looks at the flag
DEFAULT_POLL_INTERVAL_S = 1.0

SHUTDOWN_SIGNALS = (signal.SIGINT, signal.SIGTERM)


class ShutdownBridge:
    """Relay termination requests to a :class:`KillableTimer`."""

    def __init__(
        self,
        timer: KillableTimer,
        poll_interval: float = DEFAULT_POLL_INTERVAL_S,
    ) -> None:
        self._timer = timer
        self._poll_interval = poll_interval

        # Written by the signal handler, read by the poller. No lock.
        self._requested = False

        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None
        self._previous: dict[int, Any] = {}

    @property
    def requested(self) -> bool:
        """Whether termination has been requested."""
        return self._requested

    def _signal_handler(self, signum: int, frame: object) -> None:
        """Handle SIGTERM/SIGINT by raising the flag only."""
        self._requested = True

    def request(self) -> None:
        """Request termination as if a signal had arrived."""
        self._requested = True

    def install(self) -> None:
        """Register the signal handlers and start the poller thread.

        Must be called from the main thread.
        """
        for signum in SHUTDOWN_SIGNALS:
            self._previous[signum] = signal.signal(signum, self._signal_handler)
        self.start()

    def uninstall(self) -> None:
        """Stop the poller and restore the previous signal handlers."""
        self.stop()
        for signum, handler in self._previous.items():
            signal.signal(signum, handler)
        self._previous.clear()

    def start(self) -> None:
        """Start the poller thread without touching signal handlers."""
        if self._thread is not None:
            return
        self._thread = threading.Thread(
            target=self._poll_loop,
            name="shutdown-bridge",
            daemon=True,
        )
        self._thread.start()

    def stop(self) -> None:
        """Stop the poller thread."""
        self._stop_event.set()
        if self._thread is not None and self._thread.is_alive():
            self._thread.join(timeout=5.0)

    def _poll_loop(self) -> None:
        while not self._stop_event.is_set():
            if self._requested:
                log.info("Termination requested, stopping sampling loop")
                self._timer.kill()
                return
            self._stop_event.wait(timeout=self._poll_interval)
