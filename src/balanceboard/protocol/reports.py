"""Input report decoding.

Every buffer received from the board starts with the HID transaction
header (0xA1) followed by the report subtype byte. Each supported subtype is
decoded once into a small dataclass so consumers never index raw buffers.

Status report (0x20):
    [0] header  [1] 0x20  [2-3] buttons/flags  [4-6] reserved  [7] battery

Calibration report (0x21), a memory read reply split over two fragments:
    [7-14]   four big-endian uint16 pairs (row 0, or row 2 in fragment two)
    [15-22]  four big-endian uint16 pairs (row 1, fragment one only)
    [15]     zero in the second fragment

Sensor report (0x32):
    [3]      0x08 when the board is powered off
    [4-11]   four big-endian uint16 raw sensor values
"""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from typing import Union

from ..exceptions import InvalidReportError
from ..models.enums import SENSOR_COUNT, ReportType

REPORT_TYPE_OFFSET = 1

STATUS_BATTERY_OFFSET = 7
STATUS_FLAGS_OFFSET = 3
STATUS_EXTENSION_BIT = 0x02

CALIBRATION_MARKER_OFFSET = 15
CALIBRATION_FIRST_ROW_OFFSET = 7
CALIBRATION_SECOND_ROW_OFFSET = 15

SENSOR_STATE_OFFSET = 3
SENSOR_POWER_OFF = 0x08
SENSOR_VALUES_OFFSET = 4


def read_uint16_be(data: bytes, offset: int) -> int:
    """Read one big-endian uint16 pair.

    Args:
        data: Report buffer
        offset: Offset of the high byte

    Returns:
        (high_byte << 8) | low_byte

    Raises:
        InvalidReportError: If the pair runs past the end of the buffer
    """
    if offset < 0 or offset + 2 > len(data):
        raise InvalidReportError(
            f"Cannot read uint16 at offset {offset}: report is {len(data)} bytes"
        )
    return struct.unpack_from(">H", data, offset)[0]


def _read_pairs(data: bytes, offset: int) -> tuple[int, ...]:
    return tuple(read_uint16_be(data, offset + 2 * i) for i in range(SENSOR_COUNT))


@dataclass(frozen=True)
class StatusReport:
    """Battery and extension status."""

    battery_level: int
    extension_connected: bool
    raw: bytes = field(repr=False, default=b"")

    report_type = ReportType.STATUS


@dataclass(frozen=True)
class CalibrationReport:
    """One fragment of the calibration memory read.

    The first fragment carries rows 0 and 1, the second carries row 2.
    """

    second_fragment: bool
    rows: tuple[tuple[int, ...], ...]
    raw: bytes = field(repr=False, default=b"")

    report_type = ReportType.CALIBRATION

    @property
    def first_fragment(self) -> bool:
        return not self.second_fragment


@dataclass(frozen=True)
class SensorReport:
    """Raw strain-gauge values for the four corners."""

    raw_values: tuple[int, ...] | None
    powered_off: bool
    raw: bytes = field(repr=False, default=b"")

    report_type = ReportType.SENSOR


@dataclass(frozen=True)
class UnknownReport:
    """Any subtype the engine does not interpret."""

    report_type: int
    raw: bytes = field(repr=False, default=b"")


Report = Union[StatusReport, CalibrationReport, SensorReport, UnknownReport]


def parse_status_report(data: bytes) -> StatusReport:
    """Decode a status report (0x20).

    Raises:
        InvalidReportError: If the battery byte is missing
    """
    if len(data) <= STATUS_BATTERY_OFFSET:
        raise InvalidReportError(
            f"Status report too short: {len(data)} bytes (need {STATUS_BATTERY_OFFSET + 1})"
        )
    return StatusReport(
        battery_level=data[STATUS_BATTERY_OFFSET],
        extension_connected=bool(data[STATUS_FLAGS_OFFSET] & STATUS_EXTENSION_BIT),
        raw=bytes(data),
    )


def parse_calibration_report(data: bytes) -> CalibrationReport:
    """Decode one calibration fragment (0x21).

    A zero marker byte at offset 15 identifies the second fragment, whose
    only row is stored at offset 7. Otherwise rows 0 and 1 sit at offsets
    7 and 15.

    Raises:
        InvalidReportError: If the fragment is too short for its rows
    """
    if len(data) <= CALIBRATION_MARKER_OFFSET:
        raise InvalidReportError(
            f"Calibration report too short: {len(data)} bytes "
            f"(need at least {CALIBRATION_MARKER_OFFSET + 1})"
        )

    second_fragment = data[CALIBRATION_MARKER_OFFSET] == 0x00
    if second_fragment:
        rows = (_read_pairs(data, CALIBRATION_FIRST_ROW_OFFSET),)
    else:
        rows = (
            _read_pairs(data, CALIBRATION_FIRST_ROW_OFFSET),
            _read_pairs(data, CALIBRATION_SECOND_ROW_OFFSET),
        )

    return CalibrationReport(second_fragment=second_fragment, rows=rows, raw=bytes(data))


def parse_sensor_report(data: bytes) -> SensorReport:
    """Decode a sensor report (0x32).

    Power-off detection only needs byte 3, so a report too short to carry
    sensor values still yields a SensorReport with raw_values None.
    """
    powered_off = len(data) > SENSOR_STATE_OFFSET and data[SENSOR_STATE_OFFSET] == SENSOR_POWER_OFF

    raw_values: tuple[int, ...] | None = None
    if len(data) >= SENSOR_VALUES_OFFSET + 2 * SENSOR_COUNT:
        raw_values = _read_pairs(data, SENSOR_VALUES_OFFSET)

    return SensorReport(raw_values=raw_values, powered_off=powered_off, raw=bytes(data))


_PARSERS = {
    ReportType.STATUS: parse_status_report,
    ReportType.CALIBRATION: parse_calibration_report,
    ReportType.SENSOR: parse_sensor_report,
}


def get_report_type(data: bytes) -> int | None:
    """Return the subtype byte, or None if the buffer is too short."""
    if len(data) <= REPORT_TYPE_OFFSET:
        return None
    return data[REPORT_TYPE_OFFSET]


def parse_report(data: bytes) -> Report:
    """Decode a received buffer into its tagged report structure.

    Args:
        data: Received buffer (at least 2 bytes)

    Returns:
        StatusReport, CalibrationReport, SensorReport or UnknownReport

    Raises:
        InvalidReportError: If the buffer is too short for its subtype
    """
    report_type = get_report_type(data)
    if report_type is None:
        raise InvalidReportError(f"Report too short: {len(data)} bytes (need at least 2)")

    try:
        parser = _PARSERS[ReportType(report_type)]
    except ValueError:
        return UnknownReport(report_type=report_type, raw=bytes(data))

    return parser(data)
