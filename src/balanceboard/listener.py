"""Stop the session when Enter is pressed."""

from __future__ import annotations

import logging
import sys
import threading
from typing import TextIO

from .models.state import RunState

_LOGGER = logging.getLogger(__name__)


def wait_for_enter(run_state: RunState, stream: TextIO | None = None) -> None:
    """Block on stream until a bare newline, then stop run_state.

    Lines with other content are ignored. End of input ends the wait
    without stopping the session.
    """
    stream = stream if stream is not None else sys.stdin
    for line in stream:
        if not run_state.running:
            return
        if line in ("\n", "\r\n"):
            run_state.stop("enter pressed")
            return
    _LOGGER.debug("Input closed, listener exiting")


def start_enter_listener(run_state: RunState, stream: TextIO | None = None) -> threading.Thread:
    """Run wait_for_enter on a daemon thread.

    The thread only ever stops run_state. It is a daemon because a blocked
    read on stdin cannot be interrupted when the session ends on its own.
    """
    thread = threading.Thread(
        target=wait_for_enter,
        args=(run_state, stream),
        name="balanceboard-enter-listener",
        daemon=True,
    )
    thread.start()
    return thread
