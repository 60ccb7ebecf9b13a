"""Calibration reference store."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .enums import SENSOR_COUNT

if TYPE_CHECKING:
    from ..protocol.reports import CalibrationReport

ROW_COUNT = 3

# Reference load of each calibration row, in grams
REFERENCE_MASSES = (0, 17000, 34000)


class CalibrationStore:
    """Three reference rows (0 kg, 17 kg, 34 kg) of raw values per sensor.

    Rows are filled from the two calibration fragments. The store does not
    enforce row0 < row1 < row2; the converter guards degenerate intervals.
    """

    def __init__(self, rows: list[list[int]] | None = None) -> None:
        explicit = rows is not None
        if rows is None:
            rows = [[0] * SENSOR_COUNT for _ in range(ROW_COUNT)]
        if len(rows) != ROW_COUNT or any(len(row) != SENSOR_COUNT for row in rows):
            raise ValueError(
                f"Calibration must be {ROW_COUNT} rows of {SENSOR_COUNT} values"
            )
        self._rows = [list(row) for row in rows]
        # Store built from explicit rows counts as fully received
        self._have_first = self._have_second = explicit

    @property
    def rows(self) -> tuple[tuple[int, ...], ...]:
        """Snapshot of all three rows."""
        return tuple(tuple(row) for row in self._rows)

    def row(self, index: int) -> tuple[int, ...]:
        return tuple(self._rows[index])

    def references(self, sensor: int) -> tuple[int, int, int]:
        """Get (row0, row1, row2) for one sensor column."""
        if not 0 <= sensor < SENSOR_COUNT:
            raise IndexError(f"sensor index out of range: {sensor}")
        return self._rows[0][sensor], self._rows[1][sensor], self._rows[2][sensor]

    @property
    def has_first_fragment(self) -> bool:
        return self._have_first

    @property
    def has_second_fragment(self) -> bool:
        return self._have_second

    @property
    def is_complete(self) -> bool:
        """True once both calibration fragments have been stored."""
        return self._have_first and self._have_second

    def update(self, report: CalibrationReport) -> None:
        """Store the rows carried by one calibration fragment.

        The second fragment fills row 2; the first fills rows 0 and 1.
        Applying the same fragment again leaves the store unchanged.
        """
        if report.second_fragment:
            self._rows[2] = list(report.rows[0])
            self._have_second = True
        else:
            self._rows[0] = list(report.rows[0])
            self._rows[1] = list(report.rows[1])
            self._have_first = True

    def format_table(self) -> str:
        """Render the rows as a small text table."""
        lines = []
        for index, row in enumerate(self._rows):
            values = "\t".join(f"{sensor}: {value}" for sensor, value in enumerate(row))
            lines.append(f"Row {index} ({REFERENCE_MASSES[index] // 1000} kg): {values}")
        return "\n".join(lines)
