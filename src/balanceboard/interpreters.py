"""Report interpreters: how decoded reports are presented.

An interpreter is picked once, when the session is built, from the
configured OutputMode. RAW dumps report bytes; DECODE and DEBUG present
calibrated masses and make the session keep a calibration store.
"""

from __future__ import annotations

import sys
from typing import Callable

from .models.calibration import CalibrationStore
from .models.enums import SENSOR_LABELS, OutputMode, SensorPosition, get_report_label
from .models.weight import WeightReading
from .protocol.reports import CalibrationReport, SensorReport, StatusReport

Writer = Callable[[str], None]


def write_stdout(text: str) -> None:
    sys.stdout.write(text)
    sys.stdout.flush()


def format_report_bytes(data: bytes) -> str:
    """Format a buffer as ``index:hex`` pairs, e.g. ``0:a1 1:32``."""
    return " ".join(f"{i}:{b:02x}" for i, b in enumerate(data))


def format_dump(report_type: int, data: bytes) -> str:
    label = f"{get_report_label(report_type)}:"
    return f"{label:<13}{format_report_bytes(data)}\n"


class ReportInterpreter:
    """Base interpreter; ignores everything."""

    mode: OutputMode = OutputMode.RAW
    uses_calibration = False

    def __init__(self, writer: Writer = write_stdout):
        self.writer = writer

    def on_status(self, report: StatusReport) -> None:
        pass

    def on_calibration(self, report: CalibrationReport, store: CalibrationStore | None) -> None:
        pass

    def on_sensor(self, report: SensorReport, reading: WeightReading | None) -> None:
        pass


class RawDumpInterpreter(ReportInterpreter):
    """Dump status, calibration and sensor reports byte by byte."""

    mode = OutputMode.RAW

    def on_status(self, report: StatusReport) -> None:
        self.writer(format_dump(report.report_type, report.raw))

    def on_calibration(self, report: CalibrationReport, store: CalibrationStore | None) -> None:
        self.writer(format_dump(report.report_type, report.raw))

    def on_sensor(self, report: SensorReport, reading: WeightReading | None) -> None:
        self.writer(format_dump(report.report_type, report.raw))


class DecodeInterpreter(ReportInterpreter):
    """One self-overwriting line per sensor report: grams per sensor, then kg sum."""

    mode = OutputMode.DECODE
    uses_calibration = True

    def on_sensor(self, report: SensorReport, reading: WeightReading | None) -> None:
        if reading is None:
            return
        values = [_format_grams(g) for g in reading.grams]
        values.append(str(reading.total_kg))
        self.writer(",".join(values) + "       \r")


class DebugInterpreter(RawDumpInterpreter):
    """Per-corner kilograms, with status and calibration dumps."""

    mode = OutputMode.DEBUG
    uses_calibration = True

    def on_calibration(self, report: CalibrationReport, store: CalibrationStore | None) -> None:
        super().on_calibration(report, store)
        if store is not None and store.is_complete:
            self.writer("Calibration:\n" + store.format_table() + "\n")

    def on_sensor(self, report: SensorReport, reading: WeightReading | None) -> None:
        if reading is None:
            return
        parts = [
            f"{SENSOR_LABELS[position]} {_format_kg(reading.corner(position))}"
            for position in SensorPosition
        ]
        self.writer(", ".join(parts) + "\n")


def _format_grams(grams: float | None) -> str:
    return "-" if grams is None else str(int(grams))


def _format_kg(grams: float | None) -> str:
    return "n/a" if grams is None else f"{grams / 1000:.2f}"


_INTERPRETERS: dict[OutputMode, type[ReportInterpreter]] = {
    OutputMode.RAW: RawDumpInterpreter,
    OutputMode.DECODE: DecodeInterpreter,
    OutputMode.DEBUG: DebugInterpreter,
}


def create_interpreter(mode: OutputMode, writer: Writer = write_stdout) -> ReportInterpreter:
    """Build the interpreter for an output mode."""
    return _INTERPRETERS[OutputMode(mode)](writer)
