"""Data models for the balance board."""

from .calibration import REFERENCE_MASSES, CalibrationStore
from .enums import (
    SENSOR_COUNT,
    OutputMode,
    ReportType,
    SensorPosition,
    get_report_label,
)
from .state import RunState
from .weight import WeightConverter, WeightReading

__all__ = [
    "CalibrationStore",
    "REFERENCE_MASSES",
    "OutputMode",
    "ReportType",
    "RunState",
    "SENSOR_COUNT",
    "SensorPosition",
    "WeightConverter",
    "WeightReading",
    "get_report_label",
]
