"""Raw sensor value to mass conversion."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from ..exceptions import CalibrationError
from .calibration import REFERENCE_MASSES, CalibrationStore
from .enums import SENSOR_COUNT, SensorPosition

_LOGGER = logging.getLogger(__name__)

_, MID_MASS, FULL_MASS = REFERENCE_MASSES
INTERVAL_MASS = FULL_MASS - MID_MASS  # 17000 g between adjacent references


@dataclass(frozen=True)
class WeightReading:
    """Converted masses for one sensor report.

    Attributes:
        grams: Mass per sensor in grams, None where conversion failed
        raw_values: Raw sensor values the masses were computed from
    """

    grams: tuple[float | None, ...]
    raw_values: tuple[int, ...]

    def corner(self, position: SensorPosition) -> float | None:
        return self.grams[position]

    @property
    def top_right(self) -> float | None:
        return self.grams[SensorPosition.TOP_RIGHT]

    @property
    def bottom_right(self) -> float | None:
        return self.grams[SensorPosition.BOTTOM_RIGHT]

    @property
    def top_left(self) -> float | None:
        return self.grams[SensorPosition.TOP_LEFT]

    @property
    def bottom_left(self) -> float | None:
        return self.grams[SensorPosition.BOTTOM_LEFT]

    @property
    def is_complete(self) -> bool:
        """True if every sensor converted."""
        return all(g is not None for g in self.grams)

    @property
    def total_grams(self) -> float:
        """Sum of all sensors that converted."""
        return sum(g for g in self.grams if g is not None)

    @property
    def total_kg(self) -> int:
        """Sum in whole kilograms; each sensor is truncated to kg before adding."""
        return sum(int(g / 1000) for g in self.grams if g is not None)


class WeightConverter:
    """Piecewise linear conversion against the three calibration rows.

    Below row 0 the mass is clamped to 0 g. Between rows the mass is
    interpolated to 17 kg and 34 kg. Above row 2 it is extrapolated with the
    slope of the row 1 to row 2 interval.
    """

    def __init__(self, calibration: CalibrationStore):
        self.calibration = calibration

    def convert(self, raw: int, sensor: int) -> float:
        """Convert one raw value to grams.

        Args:
            raw: Raw 16-bit sensor value
            sensor: Sensor index (0-3)

        Returns:
            Mass in grams

        Raises:
            CalibrationError: If the interval raw falls in has zero width
        """
        row0, row1, row2 = self.calibration.references(sensor)

        if raw < row0:
            return 0.0

        if raw < row1:
            return MID_MASS * (raw - row0) / _span(row0, row1, sensor)

        span = _span(row1, row2, sensor)
        if raw < row2:
            return MID_MASS + INTERVAL_MASS * (raw - row1) / span

        return FULL_MASS + INTERVAL_MASS * (raw - row2) / span

    def convert_all(self, raw_values: tuple[int, ...]) -> WeightReading:
        """Convert the four raw values of one sensor report.

        A sensor whose calibration is degenerate yields None instead of a
        mass; the other sensors are still converted.
        """
        if len(raw_values) != SENSOR_COUNT:
            raise ValueError(f"Expected {SENSOR_COUNT} raw values, got {len(raw_values)}")

        grams: list[float | None] = []
        for sensor, raw in enumerate(raw_values):
            try:
                grams.append(self.convert(raw, sensor))
            except CalibrationError as e:
                _LOGGER.debug("Sensor %d not converted: %s", sensor, e)
                grams.append(None)

        return WeightReading(grams=tuple(grams), raw_values=tuple(raw_values))


def _span(low: int, high: int, sensor: int) -> int:
    if high == low:
        raise CalibrationError(
            f"Sensor {sensor}: calibration references are equal ({low}), cannot interpolate"
        )
    return high - low
