"""Board address validation and discovery."""

from __future__ import annotations

import logging
import re

from bleak import BleakScanner

from .exceptions import InvalidAddressError
from .protocol.commands import DEVICE_NAME

_LOGGER = logging.getLogger(__name__)

_ADDRESS_RE = re.compile(r"[0-9A-Fa-f]{2}(?::[0-9A-Fa-f]{2}){5}")


def is_valid_address(address: str) -> bool:
    """Check for the XX:XX:XX:XX:XX:XX format (hex pairs, colon separated)."""
    return _ADDRESS_RE.fullmatch(address) is not None


def validate_address(address: str) -> str:
    """Return address unchanged if valid.

    Raises:
        InvalidAddressError: If address is not XX:XX:XX:XX:XX:XX
    """
    if len(address) != 17:
        raise InvalidAddressError(
            f"Address must be exactly 17 characters, got {len(address)}: {address!r}"
        )
    if not is_valid_address(address):
        raise InvalidAddressError(
            f"Invalid address {address!r}, expected format XX:XX:XX:XX:XX:XX"
        )
    return address


async def discover_board(timeout: float = 8.0, name: str = DEVICE_NAME) -> str | None:
    """Scan for a balance board and return its address.

    The board is a classic (BR/EDR) device, so on BlueZ the discovery filter
    is widened from LE-only. It only shows up while in pairing mode (red
    sync button pressed).

    Args:
        timeout: Scan duration in seconds (default: 8)
        name: Advertised device name to match

    Returns:
        Address of the first device named ``name``, or None if none found
    """
    _LOGGER.info("Scanning for %s (%.0fs)...", name, timeout)

    devices = await BleakScanner.discover(
        timeout=timeout,
        bluez={"filters": {"Transport": "auto"}},
    )

    for device in devices:
        _LOGGER.debug("Found device: %s (%s)", device.address, device.name or "[unknown]")
        if device.name == name:
            _LOGGER.info("Found balance board: %s", device.address)
            return device.address

    _LOGGER.info("No balance board found")
    return None
