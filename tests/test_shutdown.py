"""Tests for the signal-to-timer shutdown bridge."""

from __future__ import annotations

import os
import signal
import time

from batterylogd.shutdown import ShutdownBridge
from batterylogd.timer import KillableTimer


def _wait_until_killed(timer: KillableTimer, timeout: float = 5.0) -> bool:
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if timer.killed:
            return True
        time.sleep(0.01)
    return False


class TestShutdownBridge:
    """Tests for ShutdownBridge."""

    def test_request_kills_timer(self) -> None:
        timer = KillableTimer()
        bridge = ShutdownBridge(timer, poll_interval=0.02)
        bridge.start()
        try:
            bridge.request()
            assert _wait_until_killed(timer)
        finally:
            bridge.stop()

    def test_no_request_leaves_timer_alone(self) -> None:
        timer = KillableTimer()
        bridge = ShutdownBridge(timer, poll_interval=0.02)
        bridge.start()
        time.sleep(0.1)
        bridge.stop()
        assert timer.killed is False
        assert bridge.requested is False

    def test_signal_handler_only_sets_flag(self) -> None:
        timer = KillableTimer()
        bridge = ShutdownBridge(timer)
        bridge._signal_handler(signal.SIGTERM, None)
        assert bridge.requested is True
        # The poller was never started, so nothing has killed the timer.
        assert timer.killed is False

    def test_sigterm_kills_timer(self) -> None:
        timer = KillableTimer()
        bridge = ShutdownBridge(timer, poll_interval=0.02)
        bridge.install()
        try:
            os.kill(os.getpid(), signal.SIGTERM)
            assert _wait_until_killed(timer)
            assert bridge.requested is True
        finally:
            bridge.uninstall()

    def test_sigint_kills_timer(self) -> None:
        timer = KillableTimer()
        bridge = ShutdownBridge(timer, poll_interval=0.02)
        bridge.install()
        try:
            os.kill(os.getpid(), signal.SIGINT)
            assert _wait_until_killed(timer)
        finally:
            bridge.uninstall()

    def test_uninstall_restores_handlers(self) -> None:
        before = signal.getsignal(signal.SIGTERM)
        bridge = ShutdownBridge(KillableTimer(), poll_interval=0.02)
        bridge.install()
        assert signal.getsignal(signal.SIGTERM) != before
        bridge.uninstall()
        assert signal.getsignal(signal.SIGTERM) == before

    def test_poll_latency_bounded(self) -> None:
        timer = KillableTimer()
        bridge = ShutdownBridge(timer, poll_interval=0.2)
        bridge.start()
        try:
            start = time.monotonic()
            bridge.request()
            assert timer.wait_for(5.0) is False
            assert time.monotonic() - start < 1.0
        finally:
            bridge.stop()
