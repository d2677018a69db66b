"""
ModWatch Refresh Timer.

Periodically requests a refresh of a mod search directory.
Requires Python 3.11+.
"""

import threading
from collections.abc import Callable
from typing import Any

from utils.logger import LoggerMixin


class RefreshTimer(LoggerMixin):
    """
    Calls a callback at a fixed interval on a daemon thread.

    The callback is expected to be cheap (``ModSearchDirectory.refresh``
    only sets a flag), so the interval is measured between the end of
    one call and the start of the next.
    """

    def __init__(self, interval_ms: int, callback: Callable[[], Any]) -> None:
        """
        Initialize the timer.

        Args:
            interval_ms: Delay in milliseconds between calls
            callback: Function to call on every tick
        """
        if interval_ms <= 0:
            raise ValueError("interval_ms must be positive")

        self._interval = interval_ms / 1000.0
        self._callback = callback
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None
        self._lock = threading.Lock()

    def start(self) -> None:
        """Start ticking. Calling start on a running timer does nothing."""
        with self._lock:
            if self._thread is not None:
                return

            self._stop.clear()
            self._thread = threading.Thread(
                target=self._run,
                name="ModWatchRefreshTimer",
                daemon=True,
            )
            self._thread.start()

        self.log.debug("refresh_timer_started", interval_ms=int(self._interval * 1000))

    def stop(self) -> None:
        """Stop ticking and wait for the timer thread to exit."""
        with self._lock:
            thread = self._thread
            self._thread = None
            self._stop.set()

        if thread is None:
            return

        if thread is not threading.current_thread():
            thread.join()
        self.log.debug("refresh_timer_stopped")

    def _run(self) -> None:
        while not self._stop.wait(self._interval):
            try:
                self._callback()
            except Exception as e:
                self.log.error("refresh_timer_callback_failed", error=str(e))

    @property
    def is_running(self) -> bool:
        """Check if the timer thread is alive."""
        thread = self._thread
        return thread is not None and thread.is_alive()
