"""Fixed-interval sampling loop with signal handling.

Orchestrates discovery, opens the log, and runs the sampling loop in its
own thread until SIGTERM/SIGINT arrives.
"""

from __future__ import annotations

import enum
import logging
import sys
import threading
import time
from collections.abc import Sequence
from typing import TYPE_CHECKING

from .discovery import discover_inventory
from .shutdown import DEFAULT_POLL_INTERVAL_S, ShutdownBridge
from .timer import KillableTimer
from .writer import LogWriter, format_timestamp

if TYPE_CHECKING:
    from .config import LoggerConfig
    from .discovery import Device

log = logging.getLogger(__name__)


class LoopState(enum.Enum):
    """Lifecycle of a :class:`SamplingLoop`."""

    RUNNING = "running"
    STOPPING = "stopping"
    STOPPED = "stopped"


class SamplingLoop:
    """Sample every device and log one record each, once per interval.

    The loop runs in a dedicated thread and owns *writer*: it is closed
    when the loop is joined. Killing *timer* ends the loop after the tick
    in progress.
    """

    def __init__(
        self,
        devices: Sequence[Device],
        writer: LogWriter,
        timer: KillableTimer,
        interval: float,
        timestamps: str = "utc",
    ) -> None:
        self._devices = tuple(devices)
        self._writer = writer
        self._timer = timer
        self._interval = interval
        self._timestamps = timestamps

        self._state = LoopState.RUNNING
        self._tick_count = 0
        self._error: BaseException | None = None
        self._thread: threading.Thread | None = None

    @property
    def state(self) -> LoopState:
        """Current lifecycle state."""
        return self._state

    @property
    def tick_count(self) -> int:
        """Number of completed ticks."""
        return self._tick_count

    def tick(self) -> None:
        """Sample all devices, then write one record per device."""
        for device in self._devices:
            device.sample_all()

        timestamp = format_timestamp(self._timestamps)
        for device in self._devices:
            self._writer.write_record(device.record_fields(timestamp))

        self._tick_count += 1

    def run(self) -> None:
        """Tick until the timer is killed."""
        while True:
            self.tick()
            if not self._timer.wait_for(self._interval):
                break
        self._state = LoopState.STOPPING
        log.debug("Sampling loop stopping after %d ticks", self._tick_count)

    def _run_guarded(self) -> None:
        try:
            self.run()
        except BaseException as e:  # re-raised by join()
            self._error = e
            self._state = LoopState.STOPPING

    def start(self) -> None:
        """Start the loop thread."""
        if self._thread is not None:
            raise RuntimeError("SamplingLoop already started")
        self._thread = threading.Thread(
            target=self._run_guarded,
            name="sampling-loop",
        )
        self._thread.start()

    def join(self) -> None:
        """Wait for the loop thread, then close the log.

        Re-raises any exception that ended the loop.
        """
        if self._thread is not None:
            # Short joins keep the main thread responsive to signals.
            while self._thread.is_alive():
                self._thread.join(timeout=0.5)
        self._writer.close()
        self._state = LoopState.STOPPED
        if self._error is not None:
            raise self._error


def run_logger(
    config: LoggerConfig,
    poll_interval: float = DEFAULT_POLL_INTERVAL_S,
) -> SamplingLoop:
    """Discover devices and log them until a termination signal arrives.

    Must be called from the main thread, which owns signal handling.

    Raises:
        ConfigError: On any fatal startup condition.
    """
    config.validate()

    print("Discovering devices...", file=sys.stderr)
    inventory = discover_inventory(config)
    devices = inventory.devices

    writer = LogWriter(config.log_file)
    print(f"Log file: {writer.path}", file=sys.stderr)
    writer.open()

    timer = KillableTimer()
    bridge = ShutdownBridge(timer, poll_interval=poll_interval)
    loop = SamplingLoop(
        devices,
        writer,
        timer,
        interval=config.interval,
        timestamps=config.timestamps,
    )

    print(
        f"  Devices: {len(inventory.batteries)} battery, "
        f"{len(inventory.backlights)} backlight",
        file=sys.stderr,
    )
    print(f"  Interval: {config.interval}s", file=sys.stderr)

    start_mono = time.monotonic()
    try:
        bridge.install()
        loop.start()
        loop.join()
    finally:
        bridge.uninstall()
        writer.close()

        total_elapsed = time.monotonic() - start_mono
        print("Shutting down batterylogd ...", file=sys.stderr)
        print(
            f"Done. {writer.record_count} records in {total_elapsed:.1f}s "
            f"({writer.path})",
            file=sys.stderr,
        )

    return loop
