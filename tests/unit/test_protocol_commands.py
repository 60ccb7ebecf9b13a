"""Test the fixed command catalog."""

import pytest

from balanceboard.protocol.commands import (
    ACTIVATE,
    CALIBRATION,
    HANDSHAKE_SEQUENCE,
    LED_ON,
    SET_REPORT_OUTPUT,
    STATUS,
    STREAM_START,
    Command,
    OutputReport,
)


class TestCommandCatalog:
    """Test command bytes against captured traffic."""

    def test_status_command(self):
        assert bytes(STATUS) == b'\x52\x12\x00\x32'

    def test_activate_command(self):
        assert bytes(ACTIVATE) == b'\x52\x13\x04'

    def test_calibration_command(self):
        assert bytes(CALIBRATION) == b'\x52\x17\x04\xa4\x00\x24\x00\x18'

    def test_led_on_command(self):
        assert bytes(LED_ON) == b'\x52\x11\x10'

    def test_stream_start_command(self):
        assert bytes(STREAM_START) == b'\x52\x15\x00\x32'

    def test_all_commands_use_output_header(self):
        for command in HANDSHAKE_SEQUENCE:
            assert command.payload[0] == SET_REPORT_OUTPUT == 0x52

    def test_report_identifiers(self):
        assert LED_ON.report == OutputReport.LED
        assert CALIBRATION.report == OutputReport.READ_MEMORY
        assert len(CALIBRATION.payload) == 8


class TestHandshakeSequence:
    """Test handshake order."""

    def test_priority_order(self):
        assert [c.name for c in HANDSHAKE_SEQUENCE] == [
            "status",
            "calibration",
            "led_on",
            "activate",
            "stream_start",
        ]

    def test_commands_are_immutable(self):
        with pytest.raises(AttributeError):
            STATUS.payload = b'\x00'  # type: ignore[misc]

    def test_command_equality_by_value(self):
        assert Command("status", b'\x52\x12\x00\x32') == STATUS
