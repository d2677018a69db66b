"""
ModWatch Signals.

Thread-safe listener registries for watcher notifications.
Requires Python 3.11+.
"""

import threading
from collections.abc import Callable
from typing import Any

from utils.logger import LoggerMixin


Handler = Callable[..., Any]


class Signal(LoggerMixin):
    """
    A named notification channel.

    Handlers are called synchronously, in connection order, on the
    thread that emits. The handler list is copied under a lock before
    each emit, so handlers may connect, disconnect or clear from any
    thread, including from inside a handler.
    """

    def __init__(self, name: str) -> None:
        """
        Initialize the signal.

        Args:
            name: Channel name used in log entries
        """
        self.name = name
        self._handlers: list[Handler] = []
        self._lock = threading.Lock()

    def connect(self, handler: Handler) -> Handler:
        """Register a handler. Returns it so this works as a decorator."""
        with self._lock:
            self._handlers.append(handler)
        return handler

    def disconnect(self, handler: Handler) -> bool:
        """Remove a handler. Returns False if it was not connected."""
        with self._lock:
            try:
                self._handlers.remove(handler)
            except ValueError:
                return False
        return True

    def clear(self) -> None:
        """Remove every handler."""
        with self._lock:
            self._handlers.clear()

    def emit(self, *args: Any) -> int:
        """
        Call every connected handler with ``args``.

        A failing handler is logged and skipped so the remaining
        handlers still run.

        Returns:
            Number of handlers that were called
        """
        with self._lock:
            handlers = list(self._handlers)

        for handler in handlers:
            try:
                handler(*args)
            except Exception as e:
                self.log.error(
                    "signal_handler_failed",
                    signal=self.name,
                    handler=getattr(handler, "__qualname__", repr(handler)),
                    error=str(e),
                )
        return len(handlers)

    def __len__(self) -> int:
        with self._lock:
            return len(self._handlers)

    def __repr__(self) -> str:
        return f"Signal({self.name!r}, handlers={len(self)})"
