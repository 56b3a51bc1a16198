"""An interval wait that another thread can cut short."""

from __future__ import annotations

import threading


class KillableTimer:
    """A timer whose waits return early once :meth:`kill` is called.

    The kill is sticky: every wait after it returns immediately.
    """

    def __init__(self) -> None:
        self._cond = threading.Condition()
        self._terminate = False

    @property
    def killed(self) -> bool:
        """Whether :meth:`kill` has been called."""
        with self._cond:
            return self._terminate

    def wait_for(self, timeout: float) -> bool:
        """Block for *timeout* seconds.

        Returns:
            True if the full timeout elapsed, False if the timer was killed.
        """
        with self._cond:
            return not self._cond.wait_for(lambda: self._terminate, timeout=timeout)

    def kill(self) -> None:
        """Wake all waiters and make future waits return at once."""
        with self._cond:
            self._terminate = True
            self._cond.notify_all()
