"""Shared report fixtures built from captured balance board traffic."""

from __future__ import annotations

import struct

import pytest


def _pairs(values) -> bytes:
    return b"".join(struct.pack(">H", v) for v in values)


def build_sensor_report(values=(0, 0, 0, 0), state: int = 0x00) -> bytes:
    # [header][0x32][buttons][buttons/state][4 x uint16 BE]
    return bytes([0xA1, 0x32, 0x00, state]) + _pairs(values)


def build_calibration_report(first_row, second_row=None) -> bytes:
    # [header][0x21][buttons:2][size/error][address:2][pairs...]
    header = bytes([0xA1, 0x21, 0x00, 0x00, 0xF0, 0x00, 0x24])
    body = _pairs(first_row)
    if second_row is None:
        body += b"\x00" * 8
    else:
        body += _pairs(second_row)
    return header + body + b"\x00"


@pytest.fixture
def status_report() -> bytes:
    """Status report: extension connected, battery 0x64."""
    return bytes([0xA1, 0x20, 0x00, 0x02, 0x00, 0x00, 0x00, 0x64])


@pytest.fixture
def first_calibration_report() -> bytes:
    """First calibration fragment: row 0 = 100, row 1 = 2000."""
    return build_calibration_report((100, 100, 100, 100), (2000, 2000, 2000, 2000))


@pytest.fixture
def second_calibration_report() -> bytes:
    """Second calibration fragment (marker byte zero): row 2 = 4000."""
    return build_calibration_report((4000, 4000, 4000, 4000))


@pytest.fixture
def sensor_report():
    """Factory for sensor reports."""
    return build_sensor_report


@pytest.fixture
def power_off_report() -> bytes:
    return build_sensor_report(state=0x08)
