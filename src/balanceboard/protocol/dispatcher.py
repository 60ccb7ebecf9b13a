"""Route received reports to their handlers."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ..exceptions import InvalidReportError, ShortReadError
from ..models.weight import WeightConverter
from .reports import (
    CalibrationReport,
    Report,
    SensorReport,
    StatusReport,
    UnknownReport,
    parse_report,
)

if TYPE_CHECKING:
    from ..interpreters import ReportInterpreter
    from ..models.calibration import CalibrationStore
    from ..models.state import RunState

_LOGGER = logging.getLogger(__name__)


class ReportDispatcher:
    """Classify each received buffer by subtype and handle it.

    - status (0x20): diagnostics only
    - calibration (0x21): stored when a calibration store is present
    - sensor (0x32): converted for display once calibration is complete;
      power-off stops the session
    - anything else: ignored
    """

    def __init__(
            self,
            run_state: RunState,
            interpreter: ReportInterpreter,
            calibration: CalibrationStore | None = None,
    ):
        self.run_state = run_state
        self.interpreter = interpreter
        self.calibration = calibration
        self._converter = WeightConverter(calibration) if calibration is not None else None

    def dispatch(self, data: bytes) -> Report | None:
        """Handle one received buffer.

        Args:
            data: Bytes returned by one receive

        Returns:
            The decoded report, or None if it was malformed and skipped

        Raises:
            ShortReadError: If the buffer holds one byte or less. The run
                state is stopped before raising.
        """
        if len(data) <= 1:
            _LOGGER.error("Receive returned %d bytes, connection lost", len(data))
            self.run_state.stop("short read")
            raise ShortReadError(f"Receive returned {len(data)} bytes")

        try:
            report = parse_report(data)
        except InvalidReportError as e:
            _LOGGER.warning("Ignoring malformed report %s: %s", data.hex(), e)
            return None

        if isinstance(report, SensorReport):
            self._handle_sensor(report)
        elif isinstance(report, CalibrationReport):
            self._handle_calibration(report)
        elif isinstance(report, StatusReport):
            self._handle_status(report)
        elif isinstance(report, UnknownReport):
            _LOGGER.debug("Ignoring report type 0x%02x", report.report_type)

        return report

    def _handle_status(self, report: StatusReport) -> None:
        _LOGGER.debug(
            "Status: battery=%d extension=%s",
            report.battery_level,
            "connected" if report.extension_connected else "not connected",
        )
        self.interpreter.on_status(report)

    def _handle_calibration(self, report: CalibrationReport) -> None:
        if self.calibration is not None:
            self.calibration.update(report)
            _LOGGER.debug(
                "Stored calibration fragment %d: %s",
                2 if report.second_fragment else 1,
                report.rows,
            )
        self.interpreter.on_calibration(report, self.calibration)

    def _handle_sensor(self, report: SensorReport) -> None:
        reading = None
        if report.raw_values is not None and self._calibration_ready():
            reading = self._converter.convert_all(report.raw_values)
        self.interpreter.on_sensor(report, reading)

        if report.powered_off:
            _LOGGER.info("Board powered off")
            self.run_state.stop("powered off")

    def _calibration_ready(self) -> bool:
        # Both fragments must be stored before any row is used as a reference.
        return (
            self._converter is not None
            and self.calibration is not None
            and self.calibration.is_complete
        )
