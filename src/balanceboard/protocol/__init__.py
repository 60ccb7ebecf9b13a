"""Balance board report protocol implementation."""

from .commands import (
    ACTIVATE,
    CALIBRATION,
    CONTROL_PSM,
    DATA_PSM,
    DEFAULT_ADDRESS,
    DEVICE_NAME,
    HANDSHAKE_SEQUENCE,
    LED_ON,
    REPORT_BUFFER_SIZE,
    STATUS,
    STREAM_START,
    Command,
    OutputReport,
)
from .dispatcher import ReportDispatcher
from .handshake import HandshakeState
from .reports import (
    CalibrationReport,
    Report,
    SensorReport,
    StatusReport,
    UnknownReport,
    parse_report,
    read_uint16_be,
)

__all__ = [
    "Command",
    "OutputReport",
    "STATUS",
    "ACTIVATE",
    "CALIBRATION",
    "LED_ON",
    "STREAM_START",
    "HANDSHAKE_SEQUENCE",
    "CONTROL_PSM",
    "DATA_PSM",
    "REPORT_BUFFER_SIZE",
    "DEVICE_NAME",
    "DEFAULT_ADDRESS",
    "HandshakeState",
    "ReportDispatcher",
    "Report",
    "StatusReport",
    "CalibrationReport",
    "SensorReport",
    "UnknownReport",
    "parse_report",
    "read_uint16_be",
]
