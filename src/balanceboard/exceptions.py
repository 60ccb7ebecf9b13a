"""Exceptions raised by the balance board protocol engine."""

from __future__ import annotations


class BalanceBoardError(Exception):
    """Base exception for all balance board errors."""


class TransportError(BalanceBoardError):
    """L2CAP channel could not be opened, written or read."""


class TransportTimeoutError(TransportError):
    """Transport operation did not complete in time."""


class ShortReadError(TransportError):
    """Receive returned no usable report (peer disconnected)."""


class ProtocolError(BalanceBoardError):
    """Peripheral sent something the protocol does not allow."""


class InvalidReportError(ProtocolError):
    """Report is too short or malformed for its subtype."""


class CalibrationError(BalanceBoardError):
    """Calibration references cannot be used for conversion."""


class InvalidAddressError(BalanceBoardError, ValueError):
    """Bluetooth address is not in XX:XX:XX:XX:XX:XX format."""
