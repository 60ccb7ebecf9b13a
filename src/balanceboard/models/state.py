"""Session run flag."""

from __future__ import annotations

import logging
import threading

_LOGGER = logging.getLogger(__name__)


class RunState:
    """Running flag shared by the session loop and the input listener.

    The flag only ever goes from running to stopped. Any thread may call
    stop(); the first reason recorded wins.
    """

    def __init__(self) -> None:
        self._stopped = threading.Event()
        self._reason: str | None = None
        self._lock = threading.Lock()

    @property
    def running(self) -> bool:
        return not self._stopped.is_set()

    @property
    def reason(self) -> str | None:
        """Why the session stopped, or None while running."""
        return self._reason

    def stop(self, reason: str) -> None:
        with self._lock:
            if self._stopped.is_set():
                return
            self._reason = reason
            self._stopped.set()
        _LOGGER.debug("Stopping: %s", reason)

    def wait(self, timeout: float | None = None) -> bool:
        """Block until stopped. Returns False on timeout."""
        return self._stopped.wait(timeout)
