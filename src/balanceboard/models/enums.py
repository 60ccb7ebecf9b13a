from __future__ import annotations

from enum import Enum, IntEnum
from typing import Final


class ReportType(IntEnum):
    """Input report subtypes (byte 1 of every received buffer)."""
    STATUS = 0x20
    CALIBRATION = 0x21
    SENSOR = 0x32


class SensorPosition(IntEnum):
    """Sensor corners in the order they appear in a sensor report."""
    TOP_RIGHT = 0
    BOTTOM_RIGHT = 1
    TOP_LEFT = 2
    BOTTOM_LEFT = 3


SENSOR_COUNT: Final = len(SensorPosition)


class OutputMode(str, Enum):
    """How received reports are presented.

    RAW dumps report bytes and never builds a calibration store.
    DECODE and DEBUG convert sensor values to mass.
    """
    RAW = "raw"
    DECODE = "decode"
    DEBUG = "debug"


REPORT_LABELS: Final[dict[ReportType, str]] = {
    ReportType.SENSOR: "Sensor",
    ReportType.CALIBRATION: "Calibration",
    ReportType.STATUS: "Status",
}

SENSOR_LABELS: Final[dict[SensorPosition, str]] = {
    SensorPosition.TOP_RIGHT: "top right",
    SensorPosition.BOTTOM_RIGHT: "bottom right",
    SensorPosition.TOP_LEFT: "top left",
    SensorPosition.BOTTOM_LEFT: "bottom left",
}


def get_report_label(report_type: int) -> str:
    """Get a display label for a report subtype byte."""
    try:
        return REPORT_LABELS[ReportType(report_type)]
    except ValueError:
        return f"Report 0x{report_type:02x}"
