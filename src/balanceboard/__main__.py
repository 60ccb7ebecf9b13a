"""Read a Wii Balance Board from the command line.

Usage:
    balanceboard                      # discover the board, dump raw reports
    balanceboard 00:23:CC:43:DC:C2 --mode debug
    python -m balanceboard --mode decode -v

Press Enter (or the board's power button) to stop.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys

from bleak.exc import BleakError

from .config import SessionConfig
from .discovery import discover_board, is_valid_address, validate_address
from .exceptions import InvalidAddressError, TransportError
from .listener import start_enter_listener
from .models.enums import OutputMode
from .protocol.commands import DEFAULT_ADDRESS
from .session import BalanceBoardSession

_LOGGER = logging.getLogger("balanceboard")

PROG = "balanceboard"


async def resolve_address(argument: str | None, scan_timeout: float) -> str:
    """Pick the board address: valid argument, then discovery, then the default."""
    if argument is not None:
        try:
            return validate_address(argument)
        except InvalidAddressError as err:
            _LOGGER.warning("%s; falling back to discovery", err)

    try:
        found = await discover_board(timeout=scan_timeout)
    except (BleakError, OSError) as err:
        _LOGGER.warning("Discovery failed: %s", err)
        found = None

    if found is not None and not is_valid_address(found):
        # Non-BlueZ backends report platform identifiers instead of addresses
        _LOGGER.warning("Discovered board has no usable address (%s)", found)
        found = None

    if found is None:
        _LOGGER.info("Using default address %s", DEFAULT_ADDRESS)
        return DEFAULT_ADDRESS
    return found


async def run(args: argparse.Namespace) -> int:
    """Resolve the address, run one session and return the exit status."""
    address = await resolve_address(args.address, args.scan_timeout)

    config = SessionConfig(
        address=address,
        output_mode=OutputMode(args.mode),
        receive_timeout=args.receive_timeout,
        connect_timeout=args.connect_timeout,
    )
    session = BalanceBoardSession(config)
    start_enter_listener(session.run_state)
    _LOGGER.info("Press Enter to stop")

    try:
        async with session:
            await session.run()
    except TransportError as err:
        _LOGGER.error("Balance board session failed: %s", err)
        return 1

    print()
    print(f'YOU MAY USE "{PROG} {address}" FOR IMMEDIATE CONNECTION')
    return 0


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog=PROG,
        description="Connect to a Wii Balance Board over L2CAP and print its reports.",
    )
    parser.add_argument(
        "address",
        nargs="?",
        help="Board address XX:XX:XX:XX:XX:XX (default: discover, then built-in address)",
    )
    parser.add_argument(
        "--mode",
        choices=[mode.value for mode in OutputMode],
        default=OutputMode.RAW.value,
        help="raw: dump report bytes; decode: grams per sensor and kg sum; "
             "debug: kg per corner plus status/calibration dumps. Default: raw",
    )
    parser.add_argument(
        "--scan-timeout",
        type=float,
        default=8.0,
        help="Discovery duration in seconds. Default: 8",
    )
    parser.add_argument(
        "--receive-timeout",
        type=float,
        default=1.0,
        help="Longest wait for one report before re-checking for stop, in seconds. Default: 1",
    )
    parser.add_argument(
        "--connect-timeout",
        type=float,
        default=10.0,
        help="Timeout for opening each L2CAP channel, in seconds. Default: 10",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging.",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        status = asyncio.run(run(args))
    except KeyboardInterrupt:
        status = 0
    sys.exit(status)


if __name__ == "__main__":
    main()
