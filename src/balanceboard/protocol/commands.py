"""Output report commands for the balance board."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Final


class OutputReport(IntEnum):
    """Output report identifiers (second byte of every command)."""

    LED = 0x11                # Player LED bits
    REPORTING_MODE = 0x12     # Select data reporting mode
    ACTIVATE = 0x13           # Enable extension reporting
    STATUS_REQUEST = 0x15     # Request status / start report stream
    READ_MEMORY = 0x17        # Read memory or registers


# Protocol constants
SET_REPORT_OUTPUT = 0x52  # HID transaction header: SET_REPORT, output
CONTROL_PSM = 0x11
DATA_PSM = 0x13
REPORT_BUFFER_SIZE = 24   # Largest report this peripheral sends

DEVICE_NAME = "Nintendo RVL-WBC-01"
DEFAULT_ADDRESS = "00:23:CC:43:DC:C2"


@dataclass(frozen=True, slots=True)
class Command:
    """One fixed command sequence sent on the control channel."""

    name: str
    payload: bytes

    def __bytes__(self) -> bytes:
        return self.payload

    @property
    def report(self) -> OutputReport:
        """Output report identifier of this command."""
        return OutputReport(self.payload[1])


# Parameter bytes are kept exactly as captured from working sessions.
STATUS: Final = Command("status", bytes([SET_REPORT_OUTPUT, OutputReport.REPORTING_MODE, 0x00, 0x32]))
ACTIVATE: Final = Command("activate", bytes([SET_REPORT_OUTPUT, OutputReport.ACTIVATE, 0x04]))
CALIBRATION: Final = Command(
    "calibration",
    bytes([SET_REPORT_OUTPUT, OutputReport.READ_MEMORY, 0x04, 0xA4, 0x00, 0x24, 0x00, 0x18]),
)
LED_ON: Final = Command("led_on", bytes([SET_REPORT_OUTPUT, OutputReport.LED, 0x10]))
STREAM_START: Final = Command(
    "stream_start",
    bytes([SET_REPORT_OUTPUT, OutputReport.STATUS_REQUEST, 0x00, 0x32]),
)

# Order in which the handshake sends its setup commands
HANDSHAKE_SEQUENCE: Final[tuple[Command, ...]] = (
    STATUS,
    CALIBRATION,
    LED_ON,
    ACTIVATE,
    STREAM_START,
)
