"""Setup command sequencing."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from .commands import ACTIVATE, CALIBRATION, LED_ON, STATUS, STREAM_START, Command

if TYPE_CHECKING:
    from ..transport import Port

_LOGGER = logging.getLogger(__name__)


@dataclass
class HandshakeState:
    """Setup flags that bring the board from connected to streaming.

    Each flag is cleared exactly once, right after its command was sent, and
    never set again. ``led_on`` is inverted: False means the LED command is
    still pending.
    """

    need_status: bool = True
    need_calibration: bool = True
    led_on: bool = False
    need_activation: bool = True
    need_stream_start: bool = True

    def pending_commands(self) -> list[Command]:
        """Commands still to be sent, in priority order."""
        pending = []
        if self.need_status:
            pending.append(STATUS)
        if self.need_calibration:
            pending.append(CALIBRATION)
        if not self.led_on:
            pending.append(LED_ON)
        if self.need_activation:
            pending.append(ACTIVATE)
        if self.need_stream_start:
            pending.append(STREAM_START)
        return pending

    @property
    def is_complete(self) -> bool:
        """True once every setup command has been sent."""
        return not self.pending_commands()

    def mark_sent(self, command: Command) -> None:
        if command is STATUS:
            self.need_status = False
        elif command is CALIBRATION:
            self.need_calibration = False
        elif command is LED_ON:
            self.led_on = True
        elif command is ACTIVATE:
            self.need_activation = False
        elif command is STREAM_START:
            self.need_stream_start = False
        else:
            raise ValueError(f"Not a handshake command: {command.name}")

    async def step(self, port: Port) -> list[Command]:
        """Send every pending command on the control port.

        Sending is fire-and-forget: no acknowledgement is awaited. A flag is
        cleared only after its send succeeded, so a TransportError from the
        port leaves that command pending.

        Returns:
            Commands sent during this step
        """
        sent = []
        for command in self.pending_commands():
            _LOGGER.debug("Sending %s command: %s", command.name, command.payload.hex())
            await port.send(command.payload)
            self.mark_sent(command)
            sent.append(command)

        if sent and self.is_complete:
            _LOGGER.info("Handshake complete, board is streaming")
        return sent
