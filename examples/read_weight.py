"""Print timestamped total weight from a Wii Balance Board.

Usage:
    python examples/read_weight.py 00:23:CC:43:DC:C2 --duration 30
    python examples/read_weight.py 00:23:CC:43:DC:C2 --changes-only
"""

from __future__ import annotations

import argparse
import asyncio
from datetime import datetime

from balanceboard import (
    BalanceBoardSession,
    ReportInterpreter,
    SensorReport,
    SessionConfig,
    StatusReport,
    WeightReading,
)


def _timestamp() -> str:
    return datetime.now().strftime("%H:%M:%S")


class TotalWeightPrinter(ReportInterpreter):
    """Print the whole-kg total of every converted sensor report."""

    uses_calibration = True

    def __init__(self, changes_only: bool) -> None:
        super().__init__(print)
        self.changes_only = changes_only
        self.last_kg: int | None = None
        self.readings = 0

    def on_status(self, report: StatusReport) -> None:
        print(f"[{_timestamp()}] battery={report.battery_level}")

    def on_sensor(self, report: SensorReport, reading: WeightReading | None) -> None:
        if reading is None or not reading.is_complete:
            return
        self.readings += 1
        if self.changes_only and reading.total_kg == self.last_kg:
            return
        self.last_kg = reading.total_kg
        print(f"[{_timestamp()}] {reading.total_kg} kg (raw={reading.raw_values})")


async def read_weight(address: str, duration: float, changes_only: bool) -> None:
    """Run one session for duration seconds (0 = until power off)."""
    printer = TotalWeightPrinter(changes_only)
    config = SessionConfig(address)
    session = BalanceBoardSession(config, interpreter=printer)

    async with session:
        if duration > 0:
            asyncio.get_running_loop().call_later(duration, session.stop, "duration elapsed")
        await session.run()

    print("\nSummary:")
    print(f"  readings={printer.readings}")
    print(f"  last_kg={printer.last_kg}")
    print(f"  stopped={session.run_state.reason}")


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Print calibrated total weight from a Wii Balance Board."
    )
    parser.add_argument("address", help="Board address XX:XX:XX:XX:XX:XX")
    parser.add_argument(
        "--duration",
        type=float,
        default=30.0,
        help="Read duration in seconds (0 = until the board powers off). Default: 30",
    )
    parser.add_argument(
        "--changes-only",
        action="store_true",
        help="Print only when the whole-kg total changes.",
    )
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    try:
        asyncio.run(read_weight(args.address, args.duration, args.changes_only))
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    main()
